"""Identity resolution.

Normalises a configured identity (explicit DID, bare Ethereum address or
network-qualified identifier) into a canonical DID and loads the signing
key.  Runs once at configuration time; the resulting
:class:`~did_credentials.core.types.Identity` is immutable.
"""
from __future__ import annotations

import re
from typing import Any

from did_credentials.core.config import ADDRESS_PATTERN, CredentialsConfig
from did_credentials.core.errors import ConfigurationError, MissingIdentityError
from did_credentials.core.types import Identity
from did_credentials.tokens.codec import load_private_key

# ---------------------------------------------------------------------------
# DID validation
# ---------------------------------------------------------------------------

# did:<method>:<method-specific-id>, method is lowercase alphanumerics
_DID_RE: re.Pattern[str] = re.compile(r"^did:[a-z0-9]+:\S+$")

ETHR_METHOD = "ethr"
UPORT_METHOD = "uport"


def address_to_did(address: str) -> str:
    """Map an address to its canonical DID.

    A ``0x`` + 40 hex character address maps to the ``ethr`` method; any
    other non-empty identifier (e.g. an MNID) maps to the ``uport`` method.

    Raises
    ------
    ConfigurationError
        If *address* is empty.
    """
    if not address:
        raise ConfigurationError("address must be a non-empty string")
    if ADDRESS_PATTERN.match(address):
        return f"did:{ETHR_METHOD}:{address}"
    return f"did:{UPORT_METHOD}:{address}"


def resolve_identity(config: CredentialsConfig, signing_key: Any = None) -> Identity:
    """Build the :class:`Identity` described by *config*.

    Parameters
    ----------
    config:
        Validated configuration.  At most one of ``did`` and ``address``
        may be set.
    signing_key:
        A ready signing key object.  Takes the place of
        ``config.private_key`` and may not be combined with it.

    Raises
    ------
    ConfigurationError
        If both ``did`` and ``address`` are given, the DID is malformed,
        or the private key cannot be loaded.
    """
    if config.did and config.address:
        raise ConfigurationError(
            "Configure either did or address, not both",
            details={"did": config.did, "address": config.address},
        )
    if signing_key is not None and config.private_key is not None:
        raise ConfigurationError("Configure either privateKey or a signing key, not both")

    did: str | None = None
    if config.did:
        if not _DID_RE.match(config.did):
            raise ConfigurationError(
                f"Invalid DID: {config.did}",
                details={"did": config.did},
            )
        did = config.did
    elif config.address:
        did = address_to_did(config.address)

    key = signing_key
    if config.private_key is not None:
        try:
            key = load_private_key(config.private_key.get_secret_value())
        except ValueError as exc:
            raise ConfigurationError("privateKey is not a valid secp256k1 key") from exc

    return Identity(did=did, signing_key=key)


def require_signing_identity(identity: Identity) -> str:
    """Return the issuer DID of *identity*, or fail if it cannot sign.

    Raises
    ------
    MissingIdentityError
        If *identity* has no DID or no signing key.
    """
    if identity.did is None:
        raise MissingIdentityError("No did or address configured; cannot issue tokens")
    if identity.signing_key is None:
        raise MissingIdentityError(
            f"No signing key configured for {identity.did}; cannot issue tokens",
            details={"did": identity.did},
        )
    return identity.did
