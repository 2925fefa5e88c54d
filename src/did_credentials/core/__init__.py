"""Core types, errors, configuration and collaborator interfaces."""
from __future__ import annotations

from did_credentials.core.config import CredentialsConfig, NetworkConfig
from did_credentials.core.errors import (
    ConfigurationError,
    CredentialsError,
    DeliveryError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingIdentityError,
    TokenError,
    ValidationError,
    VerificationError,
)
from did_credentials.core.types import AccountType, Identity, Profile, RequestClaims

__all__ = [
    "AccountType",
    "ConfigurationError",
    "CredentialsConfig",
    "CredentialsError",
    "DeliveryError",
    "ExpiredTokenError",
    "Identity",
    "InvalidTokenError",
    "MissingIdentityError",
    "NetworkConfig",
    "Profile",
    "RequestClaims",
    "TokenError",
    "ValidationError",
    "VerificationError",
]
