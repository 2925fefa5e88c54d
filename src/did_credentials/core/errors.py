"""Credential protocol error hierarchy.

Hierarchy
---------
::

    CredentialsError
    +-- ConfigurationError        (CRED-E100)
    +-- MissingIdentityError      (CRED-E101)
    +-- ValidationError           (CRED-E200)
    +-- TokenError                (CRED-E3xx)
    |   +-- InvalidTokenError     (CRED-E300)
    |   |   +-- ExpiredTokenError (CRED-E301)
    |   +-- VerificationError     (CRED-E302)
    +-- DeliveryError             (CRED-E400)

Usage
-----
Raise concrete subclasses directly::

    raise ValidationError("Missing push notification token")

Catch by category::

    try:
        ...
    except TokenError:
        # handles InvalidTokenError, ExpiredTokenError, VerificationError
        ...

``str(error)`` is always the human-readable message, which callers may
match exactly.
"""
from __future__ import annotations

from typing import Any

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------

class CredentialsError(Exception):
    """Base exception for all credential protocol errors.

    Attributes
    ----------
    code : str
        Error code, e.g. ``"CRED-E100"``.
    message : str
        Human-readable description (MUST NOT contain key material).
    details : dict[str, Any]
        Machine-readable context specific to the error instance.
    """

    code: str = "CRED-E000"
    message: str = "Unknown credentials error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.details: dict[str, Any] = details or {}
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the error into a JSON-friendly mapping."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            payload["detail"] = self.details
        return {"error": payload}

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


# ===================================================================
# Configuration & identity
# ===================================================================

class ConfigurationError(CredentialsError):
    """CRED-E100 -- Invalid configuration supplied at construction time."""

    code = "CRED-E100"
    message = "Invalid credentials configuration"


class MissingIdentityError(CredentialsError):
    """CRED-E101 -- Issuance attempted without a DID and signing key."""

    code = "CRED-E101"
    message = "No signing identity configured"


# ===================================================================
# Call arguments
# ===================================================================

class ValidationError(CredentialsError):
    """CRED-E200 -- A required call argument is missing or malformed."""

    code = "CRED-E200"
    message = "Invalid arguments"


# ===================================================================
# Tokens
# ===================================================================

class TokenError(CredentialsError):
    """CRED-E3xx -- Signed token errors."""

    code = "CRED-E3XX"


class InvalidTokenError(TokenError):
    """CRED-E300 -- Token is malformed or its signature does not verify."""

    code = "CRED-E300"
    message = "Invalid token"


class ExpiredTokenError(InvalidTokenError):
    """CRED-E301 -- Token ``exp`` is in the past."""

    code = "CRED-E301"
    message = "Token has expired"


class VerificationError(TokenError):
    """CRED-E302 -- A nested verified attestation failed verification."""

    code = "CRED-E302"
    message = "Verified attestation could not be verified"


# ===================================================================
# Push delivery
# ===================================================================

class DeliveryError(CredentialsError):
    """CRED-E400 -- Push notification could not be delivered.

    ``status_code`` is the upstream HTTP status, or ``None`` when the
    request never produced a response.
    """

    code = "CRED-E400"
    message = "Error sending push notification to user"

    def __init__(
        self,
        message: str | None = None,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details=details)

