"""Out-of-band push delivery through a notification relay.

Two explicit entry points replace the older call shape in which the
second argument was either a key or the payload:

* :meth:`PushDelivery.push_encrypted` -- payload sealed to the recipient's
  public encryption key, sent to ``POST /api/v2/sns``.
* :meth:`PushDelivery.push_plain` -- deprecated plaintext delivery to
  ``POST /api/v1/sns``.

Both authenticate with ``Authorization: Bearer <push token>``.  A single
attempt is made; retry policy belongs to the caller.
"""
from __future__ import annotations

import json
import logging
import warnings
from collections.abc import Mapping
from typing import Any

import httpx

from did_credentials.core.config import DEFAULT_PUSH_URL
from did_credentials.core.errors import DeliveryError, ValidationError
from did_credentials.push.encryption import encrypt_message

logger = logging.getLogger(__name__)

ENCRYPTED_PATH = "/api/v2/sns"
LEGACY_PATH = "/api/v1/sns"

ERROR_PREFIX = "Error sending push notification to user"
MISSING_TOKEN = "Missing push notification token"
MISSING_URL = "Missing payload url for sending to users device"
PLAINTEXT_DEPRECATED = "Calling push without a public encryption key is deprecated"


class PushDelivery:
    """Async client for the push notification relay.

    Parameters
    ----------
    base_url:
        Base URL of the relay.
    timeout:
        Request timeout in seconds.
    transport:
        Optional httpx transport, e.g. :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_PUSH_URL,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def push_encrypted(
        self,
        token: str,
        public_encryption_key: str,
        payload: Mapping[str, Any],
    ) -> Any:
        """Encrypt *payload* to *public_encryption_key* and deliver it.

        Returns
        -------
        Any
            The relay's parsed JSON response.

        Raises
        ------
        ValidationError
            If *token* is missing, *payload* has no ``url``, or the key is
            not a base64 32-byte X25519 key.
        DeliveryError
            If the relay rejects the request or cannot be reached.
        """
        self._check_arguments(token, payload)
        sealed = encrypt_message(dict(payload), public_encryption_key)
        body = {"message": json.dumps(sealed.to_wire())}
        return await self._post(ENCRYPTED_PATH, token, body)

    async def push_plain(self, token: str, payload: Mapping[str, Any]) -> Any:
        """Deliver *payload* unencrypted through the legacy endpoint.

        Deprecated: emits a :class:`DeprecationWarning` on every call.
        """
        warnings.warn(PLAINTEXT_DEPRECATED, DeprecationWarning, stacklevel=2)
        self._check_arguments(token, payload)
        return await self._post(LEGACY_PATH, token, dict(payload))

    async def push(
        self,
        token: str,
        payload: Mapping[str, Any],
        *,
        public_encryption_key: str | None = None,
    ) -> Any:
        """Deliver *payload*, encrypted when *public_encryption_key* is given."""
        if public_encryption_key is None:
            return await self.push_plain(token, payload)
        return await self.push_encrypted(token, public_encryption_key, payload)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _check_arguments(token: str, payload: Mapping[str, Any]) -> None:
        if not token:
            raise ValidationError(MISSING_TOKEN)
        if not isinstance(payload, Mapping) or not payload.get("url"):
            raise ValidationError(MISSING_URL)

    async def _post(self, path: str, token: str, body: dict[str, Any]) -> Any:
        url = f"{self._base_url}{path}"
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.post(url, json=body, headers=headers)
        except httpx.HTTPError as exc:
            raise DeliveryError(
                f"{ERROR_PREFIX}: {str(exc) or type(exc).__name__}",
                details={"path": path},
            ) from exc

        logger.debug("Push relay answered %s on %s", response.status_code, path)

        if response.status_code == 403:
            raise DeliveryError(f"{ERROR_PREFIX}: Invalid Token", status_code=403)
        if not response.is_success:
            reason = response.text or response.reason_phrase
            raise DeliveryError(
                f"{ERROR_PREFIX}: {response.status_code} {reason}",
                status_code=response.status_code,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as exc:
            raise DeliveryError(
                f"{ERROR_PREFIX}: invalid JSON in relay response",
                status_code=response.status_code,
            ) from exc
