#!/usr/bin/env python3
"""did-credentials quickstart -- one selective disclosure exchange.

Demonstrates the core workflow:

1. Configure a requester (an app) and a responder (a user's wallet).
2. The requester creates a signed disclosure request.
3. The responder answers with its own attributes and push capability.
4. The requester verifies the response and reads the profile.
5. The requester pushes an encrypted follow-up to the responder's device.

The push relay is replaced by an in-process mock so the example runs
offline.

Run:
    python examples/quickstart.py
"""
from __future__ import annotations

import asyncio
import base64
import json

import httpx
from nacl.public import PrivateKey

from did_credentials import Credentials, InMemoryKeyResolver, decrypt_message
from did_credentials.tokens.codec import generate_private_key

APP_KEY = "74894f8853f90e6e3d6dfdd343eb0eb70cca06e552ed8af80adadcc573b35da3"
APP_ADDRESS = "0xbc3ae59bc76f894822622cdef7a2018dbe353840"
WALLET_DID = "did:ethr:0x00000000000000000000000000000000000000aa"


async def main() -> None:
    # -- Step 1: Configure both parties --------------------------------------
    wallet_key = generate_private_key()
    device_key = PrivateKey.generate()
    keys = InMemoryKeyResolver()

    delivered: list[httpx.Request] = []

    def relay(request: httpx.Request) -> httpx.Response:
        delivered.append(request)
        return httpx.Response(200, json={"status": "success"})

    app = Credentials(
        {"address": APP_ADDRESS, "privateKey": APP_KEY},
        key_resolver=keys,
        transport=httpx.MockTransport(relay),
    )
    wallet = Credentials({"did": WALLET_DID}, signing_key=wallet_key, key_resolver=keys)
    keys.register(app.did, app.identity.signing_key.public_key())
    keys.register(WALLET_DID, wallet_key.public_key())
    print(f"[1] App DID: {app.did}")

    # -- Step 2: Request name and phone --------------------------------------
    request = await app.create_request(
        {"requested": ["name", "phone"], "notifications": True}
    )
    print(f"[2] Request token: {request[:40]}...")

    # -- Step 3: The wallet answers ------------------------------------------
    response = await wallet.create_disclosure_response(
        req=request,
        own={"name": "Davie", "phone": "+1-555-0100"},
        capabilities=["DEVICE-PUSH-TOKEN"],
        box_pub=base64.b64encode(bytes(device_key.public_key)).decode(),
    )
    print(f"[3] Response token: {response[:40]}...")

    # -- Step 4: Verify and read the profile ---------------------------------
    profile = await app.receive(response)
    print(f"[4] Profile from {profile['did']}: name={profile['name']}")
    print(f"    Requested fields: {profile.challenge.requested}")

    # -- Step 5: Encrypted push ----------------------------------------------
    await app.push_encrypted(
        profile["pushToken"], profile["publicEncKey"], {"url": "me.uport:me"}
    )
    sealed = json.loads(json.loads(delivered[0].content)["message"])
    print(f"[5] Device decrypted: {decrypt_message(sealed, device_key)}")


if __name__ == "__main__":
    asyncio.run(main())
