"""Shared fixtures for the unit tests.

All tests run against a fixed clock so that ``iat``/``exp`` values are
predictable.
"""
from __future__ import annotations

import pytest

from did_credentials.core.interfaces import InMemoryKeyResolver, InMemoryProfileRegistry
from did_credentials.core.types import Identity
from did_credentials.credentials import Credentials
from did_credentials.tokens.codec import JWTCodec, generate_private_key, load_private_key

# ---------------------------------------------------------------------------
# Identities used across tests
# ---------------------------------------------------------------------------
PRIVATE_KEY = "74894f8853f90e6e3d6dfdd343eb0eb70cca06e552ed8af80adadcc573b35da3"
ADDRESS = "0xbc3ae59bc76f894822622cdef7a2018dbe353840"
DID = f"did:ethr:{ADDRESS}"
MNID = "2nQtiQG6Cgm1GYTBaaKAgr76uY7iSexUkqX"

ISSUER_DID = "did:ethr:0x112233445566778899aabbccddeeff0011223344"

NOW = 1485321133


def fixed_clock() -> int:
    return NOW


# ---------------------------------------------------------------------------
# Key and codec fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def signing_key():
    return load_private_key(PRIVATE_KEY)


@pytest.fixture()
def issuer_key():
    """Signing key of a third-party attestation issuer."""
    return generate_private_key()


@pytest.fixture()
def key_resolver(signing_key, issuer_key) -> InMemoryKeyResolver:
    resolver = InMemoryKeyResolver()
    resolver.register(DID, signing_key.public_key())
    resolver.register(ISSUER_DID, issuer_key.public_key())
    return resolver


@pytest.fixture()
def codec(key_resolver: InMemoryKeyResolver) -> JWTCodec:
    return JWTCodec(key_resolver)


@pytest.fixture()
def identity(signing_key) -> Identity:
    return Identity(did=DID, signing_key=signing_key)


@pytest.fixture()
def issuer_identity(issuer_key) -> Identity:
    return Identity(did=ISSUER_DID, signing_key=issuer_key)


@pytest.fixture()
def registry() -> InMemoryProfileRegistry:
    return InMemoryProfileRegistry()


@pytest.fixture()
def credentials(key_resolver: InMemoryKeyResolver) -> Credentials:
    """Credentials configured with DID and private key on the fixed clock."""
    return Credentials(
        {"did": DID, "privateKey": PRIVATE_KEY},
        key_resolver=key_resolver,
        clock=fixed_clock,
    )
