"""Shared domain types for the credential protocol.

Key design decisions:
* ``Identity`` is a frozen dataclass rather than a Pydantic model because it
  carries an opaque signing key object.
* Claim sets travel as plain ``dict[str, Any]`` once encoded; Pydantic models
  are used only where caller input needs normalising (request options).
* ``Profile`` is a ``dict`` subclass so it serialises like any mapping while
  still exposing challenge correlation as attributes.
* Enums use *string* values so they serialise cleanly to JSON.
"""
from __future__ import annotations

import enum
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Claim type markers
# ---------------------------------------------------------------------------

SHARE_REQUEST: Final = "shareReq"
SHARE_RESPONSE: Final = "shareResp"

NOTIFICATIONS_PERMISSION: Final = "notifications"


# ---------------------------------------------------------------------------
# Clock
# ---------------------------------------------------------------------------

Clock = Callable[[], int]
"""Returns the current time as integer UNIX seconds."""


def system_clock() -> int:
    return int(time.time())


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Identity:
    """The configured actor.

    ``did`` is ``None`` in anonymous (read-only) mode.  ``signing_key`` is an
    opaque private key object understood by the configured token codec.
    """

    did: str | None = None
    signing_key: Any = None

    @property
    def can_sign(self) -> bool:
        return self.did is not None and self.signing_key is not None

    def __repr__(self) -> str:
        # never render key material
        signer = "<key>" if self.signing_key is not None else None
        return f"Identity(did={self.did!r}, signing_key={signer})"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class AccountType(enum.StrEnum):
    """Account types a disclosure request may ask the responder to use."""

    GENERAL = "general"
    SEGREGATED = "segregated"
    KEYPAIR = "keypair"
    DEVICEKEY = "devicekey"
    NONE = "none"


# ---------------------------------------------------------------------------
# Request options
# ---------------------------------------------------------------------------

class RequestClaims(BaseModel):
    """Caller options for a disclosure request.

    Unknown keys are dropped.  ``accountType`` is not restricted to
    :class:`AccountType`; unrecognised values pass through as given.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    requested: list[str] | None = None
    verified: list[str] | None = None
    network_id: str | None = None
    account_type: str | None = Field(default=None, alias="accountType")
    callback_url: str | None = Field(default=None, alias="callbackUrl")
    notifications: bool = False
    exp: int | None = None

    def to_claims(self) -> dict[str, Any]:
        """Encode as wire claims (without ``iat``/``iss``)."""
        claims: dict[str, Any] = {"type": SHARE_REQUEST}
        if self.requested:
            claims["requested"] = list(dict.fromkeys(self.requested))
        if self.verified:
            claims["verified"] = list(dict.fromkeys(self.verified))
        if self.notifications:
            claims["permissions"] = [NOTIFICATIONS_PERMISSION]
        if self.callback_url:
            claims["callback"] = self.callback_url
        if self.network_id:
            claims["net"] = self.network_id
        if self.account_type:
            claims["act"] = self.account_type
        if self.exp is not None:
            claims["exp"] = self.exp
        return claims

    @classmethod
    def from_claims(cls, claims: dict[str, Any]) -> RequestClaims:
        """Decode wire claims of a ``shareReq`` token back into options.

        Raises
        ------
        TypeError
            If ``permissions`` is present but not a list.
        pydantic.ValidationError
            If any other claim has the wrong type.
        """
        permissions = claims.get("permissions") or []
        if not isinstance(permissions, list):
            raise TypeError(f"permissions must be a list, got {type(permissions).__name__}")
        return cls(
            requested=claims.get("requested"),
            verified=claims.get("verified"),
            network_id=claims.get("net"),
            accountType=claims.get("act"),
            callbackUrl=claims.get("callback"),
            notifications=NOTIFICATIONS_PERMISSION in permissions,
            exp=claims.get("exp"),
        )


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class Profile(dict[str, Any]):
    """Flattened view of a disclosure response.

    Precedence, lowest first: public registry attributes, self-asserted
    ``own`` attributes, verified attestation claims, derived fields
    (``networkAddress``, ``deviceKey``, ``pushToken``, ``publicEncKey``,
    ``did``, ``verified``).

    Attributes
    ----------
    challenge:
        The originating request decoded from ``req``, or ``None`` when the
        response carried no decodable request.
    challenge_expired:
        ``True`` when the originating request expired before the response
        was issued.  Informational only.
    """

    def __init__(
        self,
        *args: Any,
        challenge: RequestClaims | None = None,
        challenge_expired: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.challenge = challenge
        self.challenge_expired = challenge_expired
