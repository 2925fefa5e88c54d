"""End-to-end encryption of push payloads.

Payloads are sealed with a NaCl box (X25519 key agreement,
XSalsa20-Poly1305) from a fresh ephemeral key pair to the recipient's
public encryption key.  Before sealing, the JSON text is padded with
spaces to a multiple of :data:`PAD_BLOCK_SIZE` bytes to hide its exact
length; JSON parsers ignore trailing whitespace.

All binary fields are standard base64.
"""
from __future__ import annotations

import base64
import binascii
import json
from typing import Any

import nacl.utils
from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from did_credentials.core.errors import ValidationError

PAD_BLOCK_SIZE = 64
"""Plaintext is padded to a multiple of this many bytes."""


class EncryptedMessage(BaseModel):
    """Sealed push payload as carried in the ``message`` field."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender_public_key: str = Field(alias="from")
    nonce: str
    ciphertext: str

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64decode(value: str) -> bytes:
    return base64.b64decode(value, validate=True)


def pad_message(message: str, block_size: int = PAD_BLOCK_SIZE) -> bytes:
    """Encode *message* as UTF-8 and right-pad it with spaces."""
    data = message.encode("utf-8")
    remainder = len(data) % block_size
    if remainder:
        data += b" " * (block_size - remainder)
    return data


def decode_public_key(public_key: str) -> PublicKey:
    """Parse a base64 X25519 public key.

    Raises
    ------
    ValidationError
        If *public_key* is not base64 of exactly 32 bytes.
    """
    if not isinstance(public_key, str) or not public_key:
        raise ValidationError("Missing public encryption key")
    try:
        raw = _b64decode(public_key)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Public encryption key is not valid base64") from exc
    if len(raw) != PublicKey.SIZE:
        raise ValidationError(
            f"Public encryption key must be {PublicKey.SIZE} bytes, got {len(raw)}"
        )
    return PublicKey(raw)


def encrypt_message(payload: Any, public_key: str) -> EncryptedMessage:
    """Seal the JSON form of *payload* to *public_key*.

    A new ephemeral sender key pair is generated for every call and
    discarded afterwards.
    """
    recipient = decode_public_key(public_key)
    ephemeral = PrivateKey.generate()
    nonce = nacl.utils.random(Box.NONCE_SIZE)
    sealed = Box(ephemeral, recipient).encrypt(pad_message(json.dumps(payload)), nonce)
    return EncryptedMessage(
        sender_public_key=_b64encode(bytes(ephemeral.public_key)),
        nonce=_b64encode(sealed.nonce),
        ciphertext=_b64encode(sealed.ciphertext),
    )


def decrypt_message(message: EncryptedMessage | dict[str, str], secret_key: PrivateKey) -> Any:
    """Open a sealed payload with the recipient's *secret_key*.

    Raises
    ------
    ValidationError
        If the message is malformed or does not authenticate under
        *secret_key*.
    """
    try:
        if not isinstance(message, EncryptedMessage):
            message = EncryptedMessage.model_validate(message)
        sender = PublicKey(_b64decode(message.sender_public_key))
        plaintext = Box(secret_key, sender).decrypt(
            _b64decode(message.ciphertext), _b64decode(message.nonce)
        )
    except (binascii.Error, ValueError, CryptoError, PydanticValidationError) as exc:
        raise ValidationError("Unable to decrypt push message") from exc
    return json.loads(plaintext.decode("utf-8"))
