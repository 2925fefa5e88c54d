#!/usr/bin/env python3
"""did-credentials attestation example.

Demonstrates:
1. An issuer signing an ES256K attestation about a user.
2. The user embedding that attestation in a disclosure response.
3. The verifier accepting the response and merging the attested claim.
4. A forged attestation failing the whole response.

Run:
    python examples/attestation_example.py
"""
from __future__ import annotations

import asyncio

from did_credentials import Credentials, InMemoryKeyResolver, VerificationError
from did_credentials.tokens.codec import generate_private_key

ISSUER_DID = "did:ethr:0x00000000000000000000000000000000000000bb"
USER_DID = "did:ethr:0x00000000000000000000000000000000000000aa"
VERIFIER_DID = "did:ethr:0x00000000000000000000000000000000000000cc"

DIVIDER = "-" * 60


async def main() -> None:
    keys = InMemoryKeyResolver()
    parties = {}
    for did in (ISSUER_DID, USER_DID, VERIFIER_DID):
        signing_key = generate_private_key()
        keys.register(did, signing_key.public_key())
        parties[did] = Credentials({"did": did}, signing_key=signing_key, key_resolver=keys)
    issuer, user, verifier = parties[ISSUER_DID], parties[USER_DID], parties[VERIFIER_DID]

    # ================================================================
    # Step 1: Issue an attestation
    # ================================================================
    print(DIVIDER)
    print("Step 1: Issuer attests the user's email")
    print(DIVIDER)

    attestation = await issuer.attest(
        {"sub": USER_DID, "claim": {"email": "davie@example.com"}}
    )
    print(f"  Attestation: {attestation[:40]}...")

    # ================================================================
    # Step 2: Disclose it
    # ================================================================
    print(f"\n{DIVIDER}")
    print("Step 2: User answers a request for a verified email")
    print(DIVIDER)

    request = await verifier.create_request({"verified": ["email"]})
    response = await user.create_disclosure_response(req=request, verified=[attestation])
    print(f"  Response: {response[:40]}...")

    # ================================================================
    # Step 3: Verify
    # ================================================================
    print(f"\n{DIVIDER}")
    print("Step 3: Verifier reads the profile")
    print(DIVIDER)

    profile = await verifier.receive(response)
    print(f"  email={profile['email']} (attested by {profile['verified'][0]['iss']})")

    # ================================================================
    # Step 4: A self-signed "attestation" under the issuer's DID
    # ================================================================
    print(f"\n{DIVIDER}")
    print("Step 4: Forged attestation")
    print(DIVIDER)

    forger = Credentials({"did": ISSUER_DID}, signing_key=generate_private_key())
    forged = await forger.attest({"sub": USER_DID, "claim": {"email": "admin@example.com"}})
    response = await user.create_disclosure_response(req=request, verified=[forged])
    try:
        await verifier.receive(response)
    except VerificationError as exc:
        print(f"  Rejected [{exc.code}]: {exc.message}")


if __name__ == "__main__":
    asyncio.run(main())
