"""Disclosure request construction.

A disclosure request (``type: "shareReq"``) asks the recipient to share
profile attributes, optionally as verified attestations, and tells it where
to send the answer.  Unknown option keys are dropped so that callers can
pass option sets written for newer versions of the protocol.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from did_credentials.core.errors import ValidationError
from did_credentials.core.types import Clock, Identity, RequestClaims, system_clock
from did_credentials.identity.resolver import require_signing_identity

if TYPE_CHECKING:
    from did_credentials.core.interfaces import TokenCodec

DEFAULT_REQUEST_TTL = 600


class RequestBuilder:
    """Creates signed disclosure request tokens.

    Parameters
    ----------
    identity:
        The requesting identity.  Must be able to sign.
    codec:
        Token codec used for signing.
    clock:
        Source of the ``iat`` timestamp.
    ttl:
        Lifetime in seconds applied when the options carry no ``exp``.
    default_network:
        Network selector used when the options carry no ``network_id``.
    """

    def __init__(
        self,
        identity: Identity,
        codec: TokenCodec,
        *,
        clock: Clock = system_clock,
        ttl: int = DEFAULT_REQUEST_TTL,
        default_network: str | None = None,
    ) -> None:
        self._identity = identity
        self._codec = codec
        self._clock = clock
        self._ttl = ttl
        self._default_network = default_network

    def build_claims(self, options: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Return the unsigned claim set for *options*.

        Recognised options: ``requested``, ``verified``, ``network_id``,
        ``accountType``, ``callbackUrl``, ``notifications``, ``exp``.

        Raises
        ------
        ValidationError
            If a recognised option has the wrong type.
        """
        try:
            request = RequestClaims.model_validate(dict(options or {}))
        except PydanticValidationError as exc:
            raise ValidationError(
                f"Invalid request options: {exc.errors()[0]['msg']}",
                details={"errors": exc.errors(include_url=False, include_input=False)},
            ) from exc

        if request.network_id is None and self._default_network:
            request = request.model_copy(update={"network_id": self._default_network})

        iat = self._clock()
        claims = request.to_claims()
        claims["iat"] = iat
        claims.setdefault("exp", iat + self._ttl)
        return claims

    def create_request(self, options: Mapping[str, Any] | None = None) -> str:
        """Sign a disclosure request built from *options*.

        Raises
        ------
        MissingIdentityError
            If this identity cannot sign.
        ValidationError
            If a recognised option has the wrong type.
        """
        issuer = require_signing_identity(self._identity)
        claims = self.build_claims(options)
        return self._codec.sign(claims, issuer=issuer, signing_key=self._identity.signing_key)
