"""Shared fixtures for did-credentials conformance tests.

Provides a requester and a responder that trust each other's keys, a
third-party attestation issuer, and a mock push relay.
"""
from __future__ import annotations

import base64
from dataclasses import dataclass, field

import httpx
import pytest
from nacl.public import PrivateKey

from did_credentials import Credentials
from did_credentials.core.interfaces import InMemoryKeyResolver
from did_credentials.tokens.codec import generate_private_key, load_private_key

# ---------------------------------------------------------------------------
# Common identities used across tests
# ---------------------------------------------------------------------------
REQUESTER_KEY = "74894f8853f90e6e3d6dfdd343eb0eb70cca06e552ed8af80adadcc573b35da3"
REQUESTER_ADDRESS = "0xbc3ae59bc76f894822622cdef7a2018dbe353840"
REQUESTER_DID = f"did:ethr:{REQUESTER_ADDRESS}"
RESPONDER_DID = "did:ethr:0x00000000000000000000000000000000000000aa"
ISSUER_DID = "did:ethr:0x00000000000000000000000000000000000000bb"
MNID = "2nQtiQG6Cgm1GYTBaaKAgr76uY7iSexUkqX"

NOW = 1485321133
PUSH_TOKEN = "SECRETPUSHTOKEN"
RELAY_URL = "https://relay.conformance.test"


def fixed_clock() -> int:
    return NOW


# ---------------------------------------------------------------------------
# Parties
# ---------------------------------------------------------------------------
@pytest.fixture()
def keys():
    """Signing keys by DID."""
    return {
        REQUESTER_DID: load_private_key(REQUESTER_KEY),
        RESPONDER_DID: generate_private_key(),
        ISSUER_DID: generate_private_key(),
    }


@pytest.fixture()
def key_resolver(keys) -> InMemoryKeyResolver:
    resolver = InMemoryKeyResolver()
    for did, key in keys.items():
        resolver.register(did, key.public_key())
    return resolver


def make_party(did: str, keys, key_resolver: InMemoryKeyResolver, **kwargs) -> Credentials:
    return Credentials(
        {"did": did},
        signing_key=keys[did],
        key_resolver=key_resolver,
        clock=fixed_clock,
        **kwargs,
    )


@pytest.fixture()
def requester(keys, key_resolver: InMemoryKeyResolver) -> Credentials:
    return make_party(REQUESTER_DID, keys, key_resolver)


@pytest.fixture()
def responder(keys, key_resolver: InMemoryKeyResolver) -> Credentials:
    return make_party(RESPONDER_DID, keys, key_resolver)


@pytest.fixture()
def issuer(keys, key_resolver: InMemoryKeyResolver) -> Credentials:
    return make_party(ISSUER_DID, keys, key_resolver)


# ---------------------------------------------------------------------------
# Push relay
# ---------------------------------------------------------------------------
@dataclass
class MockRelay:
    """Records requests and answers with a fixed status and body."""

    status: int = 200
    text: str = '{"status": "success"}'
    requests: list[httpx.Request] = field(default_factory=list)

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text=self.text)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture()
def relay() -> MockRelay:
    return MockRelay()


@pytest.fixture()
def pusher(relay: MockRelay) -> Credentials:
    return Credentials(
        {"did": REQUESTER_DID, "privateKey": REQUESTER_KEY, "push_url": RELAY_URL},
        transport=relay.transport,
    )


@pytest.fixture()
def device_key() -> PrivateKey:
    """The recipient device's X25519 secret key."""
    return PrivateKey.generate()


@pytest.fixture()
def device_public_key(device_key: PrivateKey) -> str:
    return base64.b64encode(bytes(device_key.public_key)).decode()
