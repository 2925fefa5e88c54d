"""Compact signed token codec (ES256K JWT)."""
from __future__ import annotations

from did_credentials.tokens.codec import (
    DEFAULT_ALGORITHM,
    JWTCodec,
    generate_private_key,
    load_private_key,
)

__all__ = [
    "DEFAULT_ALGORITHM",
    "JWTCodec",
    "generate_private_key",
    "load_private_key",
]
