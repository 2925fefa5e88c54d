"""Disclosure response parsing (and construction for the responding side).

A disclosure response (``type: "shareResp"``) is signed by the responder and
may carry:

* ``req`` -- the originating request token (the "challenge"),
* ``own`` -- self-asserted attributes,
* ``verified`` -- attestation tokens issued by third parties,
* ``nad`` -- network-specific address, ``dad`` -- device key,
* ``capabilities`` -- a single push token, ``boxPub`` -- public
  encryption key for push delivery.

Trust boundaries
----------------
The outer token and every ``verified`` attestation are *verified*; any
failure is raised.  The ``req`` challenge is only *decoded*: a missing or
unparseable challenge is dropped, and an expired one is merely flagged,
since responses legitimately arrive late over asynchronous channels.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from did_credentials.core.errors import InvalidTokenError, VerificationError
from did_credentials.core.types import (
    SHARE_REQUEST,
    SHARE_RESPONSE,
    Clock,
    Identity,
    Profile,
    RequestClaims,
    system_clock,
)
from did_credentials.identity.resolver import require_signing_identity

if TYPE_CHECKING:
    from did_credentials.core.interfaces import ProfileRegistry, TokenCodec

logger = logging.getLogger(__name__)

DEFAULT_RESPONSE_TTL = 600

# wire claim -> profile field
_DERIVED_FIELDS: tuple[tuple[str, str], ...] = (
    ("nad", "networkAddress"),
    ("dad", "deviceKey"),
    ("boxPub", "publicEncKey"),
)


class ResponseParser:
    """Turns a disclosure response token into a flattened :class:`Profile`.

    Parameters
    ----------
    codec:
        Token codec used to verify the response and its attestations.
    registry:
        Optional source of public profile attributes for the responder.
    clock:
        Source of the current time for expiry checks.
    """

    def __init__(
        self,
        codec: TokenCodec,
        *,
        registry: ProfileRegistry | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self._codec = codec
        self._registry = registry
        self._clock = clock

    async def receive(self, token: str) -> Profile:
        """Verify *token* and return the responder's profile.

        Raises
        ------
        InvalidTokenError
            If the response token itself does not verify or is not a
            ``shareResp``.
        VerificationError
            If any embedded verified attestation does not verify.
        """
        now = self._clock()
        claims = self._codec.verify(token, now=now)
        if claims.get("type") != SHARE_RESPONSE:
            raise InvalidTokenError(
                f"Expected a {SHARE_RESPONSE} token, got type: {claims.get('type')!r}",
                details={"type": claims.get("type")},
            )

        issuer: str = claims["iss"]
        challenge = self._decode_challenge(claims.get("req"))
        challenge_expired = False
        if challenge is not None and challenge.exp is not None:
            challenge_expired = challenge.exp < claims.get("iat", now)
            if challenge_expired:
                logger.debug("Response from %s answers an expired request", issuer)

        profile = Profile(challenge=challenge, challenge_expired=challenge_expired)

        if self._registry is not None:
            public = await self._registry.lookup(issuer)
            if public:
                profile.update(public)

        own = claims.get("own")
        if isinstance(own, Mapping):
            profile.update(own)

        attestations = self._verify_attestations(claims.get("verified"), now)
        for attestation in attestations:
            profile.update(attestation["claim"])

        for claim_name, field_name in _DERIVED_FIELDS:
            if claims.get(claim_name):
                profile[field_name] = claims[claim_name]

        capabilities = claims.get("capabilities")
        if isinstance(capabilities, list) and len(capabilities) == 1:
            profile["pushToken"] = capabilities[0]

        if attestations:
            profile["verified"] = attestations
        profile["did"] = issuer
        return profile

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _decode_challenge(self, req: Any) -> RequestClaims | None:
        """Decode the originating request, or ``None`` if absent or unusable."""
        if not req:
            return None
        try:
            request_claims = self._codec.decode(req)
            if request_claims.get("type") != SHARE_REQUEST:
                logger.debug("Ignoring challenge of type %r", request_claims.get("type"))
                return None
            return RequestClaims.from_claims(request_claims)
        except (InvalidTokenError, PydanticValidationError, TypeError) as exc:
            logger.debug("Ignoring undecodable challenge: %s", exc)
            return None

    def _verify_attestations(self, verified: Any, now: int) -> list[dict[str, Any]]:
        """Verify every attestation token; a single failure fails them all."""
        if verified is None:
            return []
        if not isinstance(verified, list):
            raise VerificationError("verified must be a list of attestation tokens")

        attestations: list[dict[str, Any]] = []
        for index, attestation_token in enumerate(verified):
            try:
                attestation = self._codec.verify(attestation_token, now=now)
            except InvalidTokenError as exc:
                raise VerificationError(
                    f"Verified attestation {index} failed verification: {exc.message}",
                    details={"index": index},
                ) from exc
            if not isinstance(attestation.get("claim"), Mapping):
                raise VerificationError(
                    f"Verified attestation {index} has no claim",
                    details={"index": index},
                )
            attestations.append(attestation)
        return attestations


class ResponseBuilder:
    """Creates signed disclosure responses on behalf of the responder.

    Parameters
    ----------
    identity:
        The responding identity.  Must be able to sign.
    codec:
        Token codec used for signing.
    clock:
        Source of the ``iat`` timestamp.
    ttl:
        Lifetime in seconds applied when no ``exp`` is given.
    """

    def __init__(
        self,
        identity: Identity,
        codec: TokenCodec,
        *,
        clock: Clock = system_clock,
        ttl: int = DEFAULT_RESPONSE_TTL,
    ) -> None:
        self._identity = identity
        self._codec = codec
        self._clock = clock
        self._ttl = ttl

    def create_response(
        self,
        *,
        req: str | None = None,
        own: Mapping[str, Any] | None = None,
        verified: Sequence[str] | None = None,
        nad: str | None = None,
        dad: str | None = None,
        capabilities: Sequence[str] | None = None,
        box_pub: str | None = None,
        exp: int | None = None,
    ) -> str:
        """Sign a ``shareResp`` token with the given optional fields.

        When *req* decodes, its issuer becomes the ``aud`` of the response.
        """
        issuer = require_signing_identity(self._identity)
        iat = self._clock()
        claims: dict[str, Any] = {"type": SHARE_RESPONSE, "iat": iat}
        claims["exp"] = exp if exp is not None else iat + self._ttl
        if req:
            claims["req"] = req
            try:
                requester = self._codec.decode(req).get("iss")
            except InvalidTokenError:
                requester = None
            if requester:
                claims["aud"] = requester
        if own:
            claims["own"] = dict(own)
        if verified:
            claims["verified"] = list(verified)
        if nad:
            claims["nad"] = nad
        if dad:
            claims["dad"] = dad
        if capabilities:
            claims["capabilities"] = list(capabilities)
        if box_pub:
            claims["boxPub"] = box_pub
        return self._codec.sign(claims, issuer=issuer, signing_key=self._identity.signing_key)
