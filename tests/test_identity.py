"""Tests for identity resolution and attestation issuance.

Covers:
1. DID derivation from ``did`` / ``address`` configuration.
2. Private key loading and signing-identity checks.
3. Attestation token claims, defaults and argument validation.
"""
from __future__ import annotations

import pytest

from did_credentials.core.config import CredentialsConfig
from did_credentials.core.errors import (
    ConfigurationError,
    MissingIdentityError,
    ValidationError,
)
from did_credentials.core.types import Identity
from did_credentials.identity.attestation import DEFAULT_ATTESTATION_TTL, AttestationBuilder
from did_credentials.identity.resolver import (
    address_to_did,
    require_signing_identity,
    resolve_identity,
)
from did_credentials.tokens.codec import JWTCodec

from .conftest import ADDRESS, DID, MNID, NOW, PRIVATE_KEY, fixed_clock


def _resolve(**options) -> Identity:
    return resolve_identity(CredentialsConfig.from_options(options))


# ======================================================================
# 1. DID derivation
# ======================================================================


class TestDIDDerivation:
    def test_explicit_did_passes_through(self) -> None:
        assert _resolve(did=DID).did == DID

    def test_ethereum_address(self) -> None:
        assert _resolve(address=ADDRESS).did == DID

    def test_mnid_address(self) -> None:
        assert _resolve(address=MNID).did == f"did:uport:{MNID}"

    def test_short_hex_is_not_an_ethereum_address(self) -> None:
        assert address_to_did("0x1234") == "did:uport:0x1234"

    def test_empty_address_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            address_to_did("")

    def test_anonymous(self) -> None:
        identity = _resolve()
        assert identity.did is None
        assert not identity.can_sign

    def test_did_and_address_conflict(self) -> None:
        with pytest.raises(ConfigurationError):
            _resolve(did=DID, address=ADDRESS)

    def test_malformed_did(self) -> None:
        with pytest.raises(ConfigurationError):
            _resolve(did="ethr:0x1234")


# ======================================================================
# 2. Signing keys
# ======================================================================


class TestSigningKey:
    def test_private_key_loaded(self) -> None:
        identity = _resolve(did=DID, privateKey=PRIVATE_KEY)
        assert identity.can_sign
        assert require_signing_identity(identity) == DID

    def test_private_key_with_0x_prefix(self) -> None:
        identity = _resolve(did=DID, privateKey=f"0x{PRIVATE_KEY}")
        assert identity.can_sign

    def test_invalid_private_key(self) -> None:
        with pytest.raises(ConfigurationError):
            _resolve(did=DID, privateKey="not-a-key")

    def test_signing_key_and_private_key_conflict(self, signing_key) -> None:
        config = CredentialsConfig.from_options({"did": DID, "privateKey": PRIVATE_KEY})
        with pytest.raises(ConfigurationError):
            resolve_identity(config, signing_key)

    def test_repr_hides_key(self, identity: Identity) -> None:
        assert PRIVATE_KEY not in repr(identity)
        assert "<key>" in repr(identity)

    def test_no_did_cannot_sign(self, signing_key) -> None:
        with pytest.raises(MissingIdentityError):
            require_signing_identity(Identity(signing_key=signing_key))

    def test_no_key_cannot_sign(self) -> None:
        with pytest.raises(MissingIdentityError):
            require_signing_identity(Identity(did=DID))


# ======================================================================
# 3. Attestations
# ======================================================================


@pytest.fixture()
def attestations(identity: Identity, codec: JWTCodec) -> AttestationBuilder:
    return AttestationBuilder(identity, codec, clock=fixed_clock)


class TestAttestationBuilder:
    def test_claims(self, attestations: AttestationBuilder, codec: JWTCodec) -> None:
        token = attestations.attest(
            {"sub": "0x112233", "claim": {"email": "bingbangbung@email.com"}, "exp": NOW + 1}
        )
        payload = codec.verify(token, now=NOW)
        assert payload == {
            "sub": "0x112233",
            "claim": {"email": "bingbangbung@email.com"},
            "iat": NOW,
            "exp": NOW + 1,
            "iss": DID,
        }

    def test_default_expiry(self, attestations: AttestationBuilder, codec: JWTCodec) -> None:
        token = attestations.attest({"sub": "0x112233", "claim": {"name": "Davie"}})
        assert codec.decode(token)["exp"] == NOW + DEFAULT_ATTESTATION_TTL

    def test_custom_ttl(self, identity: Identity, codec: JWTCodec) -> None:
        builder = AttestationBuilder(identity, codec, clock=fixed_clock, ttl=60)
        token = builder.attest({"sub": "0x112233", "claim": {"name": "Davie"}})
        assert codec.decode(token)["exp"] == NOW + 60

    def test_requires_sub(self, attestations: AttestationBuilder) -> None:
        with pytest.raises(ValidationError, match="sub"):
            attestations.attest({"claim": {"name": "Davie"}})

    def test_requires_claim(self, attestations: AttestationBuilder) -> None:
        with pytest.raises(ValidationError, match="claim"):
            attestations.attest({"sub": "0x112233"})

    def test_claim_must_be_a_mapping(self, attestations: AttestationBuilder) -> None:
        with pytest.raises(ValidationError, match="claim"):
            attestations.attest({"sub": "0x112233", "claim": "name=Davie"})

    def test_anonymous_identity_cannot_attest(self, codec: JWTCodec) -> None:
        builder = AttestationBuilder(Identity(), codec, clock=fixed_clock)
        with pytest.raises(MissingIdentityError):
            builder.attest({"sub": "0x112233", "claim": {"name": "Davie"}})
