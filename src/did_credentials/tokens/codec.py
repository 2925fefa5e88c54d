"""ES256K compact JWT codec.

Implements the :class:`~did_credentials.core.interfaces.TokenCodec`
interface with PyJWT over secp256k1 keys from ``cryptography``.  Issuer
public keys are looked up through a
:class:`~did_credentials.core.interfaces.KeyResolver`.

Expiry is checked against an explicit ``now`` supplied by the caller, not by
PyJWT, so that callers control the clock.
"""
from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from did_credentials.core.errors import ExpiredTokenError, InvalidTokenError

if TYPE_CHECKING:
    from did_credentials.core.interfaces import KeyResolver

DEFAULT_ALGORITHM = "ES256K"

_SKIP_REGISTERED_CLAIMS: dict[str, bool] = {
    "verify_exp": False,
    "verify_iat": False,
    "verify_nbf": False,
    "verify_aud": False,
}


def _is_timestamp(value: Any) -> bool:
    # bool is an int subclass
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def load_private_key(private_key: str) -> ec.EllipticCurvePrivateKey:
    """Load a hex-encoded secp256k1 private key.

    Raises
    ------
    ValueError
        If *private_key* is not a valid 32-byte hex scalar.
    """
    raw = private_key[2:] if private_key.startswith("0x") else private_key
    if len(raw) != 64:
        raise ValueError("private key must be 32 bytes of hex")
    return ec.derive_private_key(int(raw, 16), ec.SECP256K1())


def generate_private_key() -> ec.EllipticCurvePrivateKey:
    """Generate a fresh secp256k1 signing key."""
    return ec.generate_private_key(ec.SECP256K1())


class JWTCodec:
    """Signs and verifies ES256K JWTs.

    Parameters
    ----------
    key_resolver:
        Resolves the ``iss`` claim of a token to its verification key.
    algorithm:
        JWS algorithm used for signing and the only one accepted on
        verification.
    leeway:
        Seconds of clock skew tolerated on ``exp``.
    """

    def __init__(
        self,
        key_resolver: KeyResolver,
        *,
        algorithm: str = DEFAULT_ALGORITHM,
        leeway: int = 0,
    ) -> None:
        self._key_resolver = key_resolver
        self._algorithm = algorithm
        self._leeway = leeway

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def sign(self, claims: dict[str, Any], *, issuer: str, signing_key: Any) -> str:
        """Sign *claims* as *issuer* and return the compact JWT."""
        payload = {**claims, "iss": issuer}
        try:
            token: str = jwt.encode(payload, signing_key, algorithm=self._algorithm)
        except (jwt.PyJWTError, TypeError, ValueError) as exc:
            raise InvalidTokenError(f"Unable to sign token: {exc}") from exc
        return token

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def decode(self, token: str) -> dict[str, Any]:
        """Return the claims of *token* without checking its signature."""
        if not isinstance(token, str) or not token:
            raise InvalidTokenError("Token must be a non-empty string")
        try:
            payload: dict[str, Any] = jwt.decode(
                token, options={"verify_signature": False}
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(f"Incorrect format JWT: {exc}") from exc
        return payload

    def verify(self, token: str, *, now: int | None = None) -> dict[str, Any]:
        """Verify signature and expiry of *token* and return its claims.

        Raises
        ------
        InvalidTokenError
            If the token is malformed, has no issuer, the issuer has no
            known key, or the signature does not match.
        ExpiredTokenError
            If ``exp`` is not after *now* (minus leeway).
        """
        unverified = self.decode(token)
        issuer = unverified.get("iss")
        if not issuer:
            raise InvalidTokenError("JWT has no issuer")

        public_key = self._key_resolver.public_key_for(issuer)
        if public_key is None:
            raise InvalidTokenError(
                f"No public key found for issuer: {issuer}",
                details={"issuer": issuer},
            )

        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                public_key,
                algorithms=[self._algorithm],
                options=_SKIP_REGISTERED_CLAIMS,
            )
        except jwt.PyJWTError as exc:
            raise InvalidTokenError(
                f"Signature invalid for JWT: {exc}",
                details={"issuer": issuer},
            ) from exc

        for claim in ("iat", "exp"):
            value = payload.get(claim)
            if value is not None and not _is_timestamp(value):
                raise InvalidTokenError(
                    f"JWT {claim} must be a numeric timestamp",
                    details={"issuer": issuer, "claim": claim},
                )

        current = now if now is not None else int(time.time())
        exp = payload.get("exp")
        if exp is not None and exp <= current - self._leeway:
            raise ExpiredTokenError(
                f"JWT has expired: exp: {exp} < now: {current}",
                details={"exp": exp, "now": current},
            )
        return payload
