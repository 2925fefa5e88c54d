"""Identity resolution and attestation issuance.

* **resolve_identity** -- DID derivation from ``did``/``address`` config.
* **AttestationBuilder** -- signed claims about a subject.
"""
from __future__ import annotations

from did_credentials.identity.attestation import AttestationBuilder
from did_credentials.identity.resolver import (
    address_to_did,
    require_signing_identity,
    resolve_identity,
)

__all__ = [
    "AttestationBuilder",
    "address_to_did",
    "require_signing_identity",
    "resolve_identity",
]
