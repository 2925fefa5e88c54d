"""Encrypted out-of-band push delivery.

* **PushDelivery** -- relay client with encrypted and legacy plaintext paths.
* **encrypt_message** / **decrypt_message** -- NaCl box sealing of payloads.
"""
from __future__ import annotations

from did_credentials.push.delivery import (
    ENCRYPTED_PATH,
    LEGACY_PATH,
    PushDelivery,
)
from did_credentials.push.encryption import (
    EncryptedMessage,
    decrypt_message,
    encrypt_message,
)

__all__ = [
    "ENCRYPTED_PATH",
    "LEGACY_PATH",
    "EncryptedMessage",
    "PushDelivery",
    "decrypt_message",
    "encrypt_message",
]
