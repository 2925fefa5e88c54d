"""Abstract collaborator interfaces and in-memory implementations.

This module defines the *structural* interfaces (``typing.Protocol``) for
the external collaborators consumed by the credential engine, plus
lightweight in-memory implementations suitable for testing and local
development.

Every Protocol class is decorated with ``@runtime_checkable`` so that
``isinstance`` checks work at run-time in addition to static analysis.

In-memory implementations are **not** thread-safe.
"""
from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable

# ===================================================================
# Protocol (interface) definitions
# ===================================================================

@runtime_checkable
class TokenCodec(Protocol):
    """Signs claim sets into compact tokens and reads them back."""

    def sign(self, claims: dict[str, Any], *, issuer: str, signing_key: Any) -> str:
        """Sign *claims* with *signing_key*, setting ``iss`` to *issuer*."""
        ...

    def decode(self, token: str) -> dict[str, Any]:
        """Structurally decode *token* without asserting trust.

        Raises :class:`InvalidTokenError` if *token* is not well formed.
        """
        ...

    def verify(self, token: str, *, now: int | None = None) -> dict[str, Any]:
        """Decode *token* and check its signature and expiry.

        Raises :class:`InvalidTokenError` (or :class:`ExpiredTokenError`)
        on any failure.
        """
        ...


@runtime_checkable
class KeyResolver(Protocol):
    """Maps an issuer DID to the public key that verifies its tokens."""

    def public_key_for(self, did: str) -> Any | None:
        """Return the public key for *did*, or ``None`` if unknown."""
        ...


@runtime_checkable
class ProfileRegistry(Protocol):
    """Source of public profile attributes for an identifier."""

    async def lookup(self, address: str) -> dict[str, Any] | None:
        """Return the public profile for *address*, or ``None``."""
        ...


# ===================================================================
# In-memory implementations (testing / development)
# ===================================================================

class InMemoryKeyResolver:
    """In-memory DID -> public key table."""

    def __init__(self) -> None:
        self._keys: dict[str, Any] = {}

    # -- mutation helpers (not part of the Protocol) --------------------

    def register(self, did: str, public_key: Any) -> None:
        """Register *public_key* as the verification key of *did*."""
        self._keys[did] = public_key

    # -- Protocol implementation ---------------------------------------

    def public_key_for(self, did: str) -> Any | None:
        return self._keys.get(did)


class InMemoryProfileRegistry:
    """In-memory public profile registry.

    Profiles are keyed by whatever identifier the caller looks up (DID or
    bare address).  Returned profiles are copies.
    """

    def __init__(self) -> None:
        self._profiles: dict[str, dict[str, Any]] = {}

    def put(self, address: str, profile: dict[str, Any]) -> None:
        """Store a public profile (test helper -- not part of the Protocol)."""
        self._profiles[address] = copy.deepcopy(profile)

    async def lookup(self, address: str) -> dict[str, Any] | None:
        """Return a copy of the profile for *address*, or ``None``."""
        profile = self._profiles.get(address)
        if profile is None:
            return None
        return copy.deepcopy(profile)
