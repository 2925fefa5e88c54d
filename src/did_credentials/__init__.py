"""did-credentials -- DID credential protocol engine.

Selective disclosure requests, attestations and disclosure responses
between DID-identified parties, plus encrypted push delivery of requests.

Modules
-------
* :mod:`did_credentials.identity` -- DID resolution, attestations.
* :mod:`did_credentials.disclosure` -- requests and responses.
* :mod:`did_credentials.tokens` -- ES256K JWT codec.
* :mod:`did_credentials.push` -- encrypted push delivery.
"""
from __future__ import annotations

__version__ = "0.1.0a1"

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
from did_credentials.core.interfaces import (
    InMemoryKeyResolver,
    InMemoryProfileRegistry,
    KeyResolver,
    ProfileRegistry,
    TokenCodec,
)
from did_credentials.core.types import AccountType, Identity, Profile, RequestClaims
from did_credentials.credentials import Credentials
from did_credentials.disclosure import RequestBuilder, ResponseBuilder, ResponseParser
from did_credentials.identity import AttestationBuilder, address_to_did, resolve_identity
from did_credentials.push import PushDelivery, decrypt_message, encrypt_message
from did_credentials.tokens import JWTCodec, generate_private_key, load_private_key

__all__ = [
    # Meta
    "__version__",
    # Entry point
    "Credentials",
    # Config
    "CredentialsConfig",
    "NetworkConfig",
    # Types
    "AccountType",
    "Identity",
    "Profile",
    "RequestClaims",
    # Error hierarchy
    "CredentialsError",
    "ConfigurationError",
    "MissingIdentityError",
    "ValidationError",
    "TokenError",
    "InvalidTokenError",
    "ExpiredTokenError",
    "VerificationError",
    "DeliveryError",
    # Interfaces
    "TokenCodec",
    "KeyResolver",
    "ProfileRegistry",
    "InMemoryKeyResolver",
    "InMemoryProfileRegistry",
    # Components
    "AttestationBuilder",
    "RequestBuilder",
    "ResponseBuilder",
    "ResponseParser",
    "PushDelivery",
    "JWTCodec",
    # Helpers
    "address_to_did",
    "resolve_identity",
    "encrypt_message",
    "decrypt_message",
    "generate_private_key",
    "load_private_key",
]
