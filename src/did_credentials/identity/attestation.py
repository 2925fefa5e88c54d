"""Signed attestations.

An attestation is a signed claim about a subject issued by this identity,
e.g. ``{"sub": "did:ethr:0x...", "claim": {"email": "a@b.c"}}``.  Recipients
embed attestations in the ``verified`` list of a disclosure response.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from did_credentials.core.errors import ValidationError
from did_credentials.core.types import Clock, Identity, system_clock
from did_credentials.identity.resolver import require_signing_identity

if TYPE_CHECKING:
    from did_credentials.core.interfaces import TokenCodec

DEFAULT_ATTESTATION_TTL = 3600


class AttestationBuilder:
    """Creates signed attestation tokens.

    Usage
    -----
    ::

        builder = AttestationBuilder(identity, codec)
        token = builder.attest({"sub": subject_did, "claim": {"name": "Davie"}})

    Parameters
    ----------
    identity:
        The issuing identity.  Must be able to sign.
    codec:
        Token codec used for signing.
    clock:
        Source of the ``iat`` timestamp.
    ttl:
        Lifetime in seconds applied when the caller gives no ``exp``.
    """

    def __init__(
        self,
        identity: Identity,
        codec: TokenCodec,
        *,
        clock: Clock = system_clock,
        ttl: int = DEFAULT_ATTESTATION_TTL,
    ) -> None:
        self._identity = identity
        self._codec = codec
        self._clock = clock
        self._ttl = ttl

    def attest(self, attestation: Mapping[str, Any]) -> str:
        """Sign *attestation* and return the compact token.

        Parameters
        ----------
        attestation:
            Mapping with ``sub`` (subject identifier), ``claim`` (mapping of
            attested attributes) and optional ``exp`` (UNIX seconds).

        Raises
        ------
        ValidationError
            If ``sub`` or ``claim`` is missing.
        MissingIdentityError
            If this identity cannot sign.
        """
        sub = attestation.get("sub")
        claim = attestation.get("claim")
        if not sub:
            raise ValidationError("Attestation requires a sub")
        if not claim or not isinstance(claim, Mapping):
            raise ValidationError("Attestation requires a claim")

        issuer = require_signing_identity(self._identity)
        iat = self._clock()
        exp = attestation.get("exp")
        payload: dict[str, Any] = {
            "sub": sub,
            "claim": dict(claim),
            "iat": iat,
            "exp": exp if exp is not None else iat + self._ttl,
        }
        return self._codec.sign(payload, issuer=issuer, signing_key=self._identity.signing_key)
