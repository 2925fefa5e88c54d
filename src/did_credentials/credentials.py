"""Credentials -- the main entry point.

This module implements the :class:`Credentials` class, which composes the
identity resolver, request/attestation/response builders, response parser
and push delivery behind one configured object.

Usage
-----
::

    from did_credentials import Credentials

    credentials = Credentials({"did": "did:ethr:0x...", "privateKey": "74894f..."})

    request = await credentials.create_request({"requested": ["name", "phone"]})
    profile = await credentials.receive(response_token)
    await credentials.push_encrypted(profile["pushToken"], profile["publicEncKey"],
                                     {"url": "me.uport:me"})

A ``Credentials`` instance is read-only after construction and may be
shared by concurrent tasks.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from did_credentials.core.config import CredentialsConfig
from did_credentials.core.interfaces import InMemoryKeyResolver
from did_credentials.core.types import Clock, Identity, Profile, system_clock
from did_credentials.disclosure.request import RequestBuilder
from did_credentials.disclosure.response import ResponseBuilder, ResponseParser
from did_credentials.identity.attestation import AttestationBuilder
from did_credentials.identity.resolver import resolve_identity
from did_credentials.push.delivery import PushDelivery
from did_credentials.tokens.codec import JWTCodec

if TYPE_CHECKING:
    import httpx

    from did_credentials.core.interfaces import KeyResolver, ProfileRegistry, TokenCodec

logger = logging.getLogger(__name__)


class Credentials:
    """Issues requests and attestations, reads responses, pushes requests.

    Parameters
    ----------
    config:
        A :class:`CredentialsConfig` or a mapping of options (``did``,
        ``address``, ``privateKey``, ``networks``, ``network``, ...).
    signing_key:
        A ready signing key, used instead of ``privateKey``.
    codec:
        Token codec.  Defaults to an ES256K :class:`JWTCodec` over
        *key_resolver*.
    key_resolver:
        Issuer key lookup for the default codec.  When omitted an
        :class:`InMemoryKeyResolver` is created that knows this identity's
        own key.
    registry:
        Optional public profile registry used by :meth:`lookup` and
        :meth:`receive`.
    clock:
        Current time in UNIX seconds; injected for deterministic expiry.
    transport:
        Optional httpx transport for push delivery.

    Raises
    ------
    ConfigurationError
        If the configuration is invalid.
    """

    def __init__(
        self,
        config: CredentialsConfig | Mapping[str, Any] | None = None,
        *,
        signing_key: Any = None,
        codec: TokenCodec | None = None,
        key_resolver: KeyResolver | None = None,
        registry: ProfileRegistry | None = None,
        clock: Clock = system_clock,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not isinstance(config, CredentialsConfig):
            config = CredentialsConfig.from_options(config)
        self._config = config
        self._identity = resolve_identity(config, signing_key)
        self._registry = registry

        if codec is None:
            if key_resolver is None:
                own_keys = InMemoryKeyResolver()
                if self._identity.can_sign:
                    own_keys.register(self._identity.did, self._identity.signing_key.public_key())
                key_resolver = own_keys
            codec = JWTCodec(key_resolver)
        self._codec = codec

        self._requests = RequestBuilder(
            self._identity,
            codec,
            clock=clock,
            ttl=config.request_ttl,
            default_network=config.network,
        )
        self._attestations = AttestationBuilder(
            self._identity, codec, clock=clock, ttl=config.attestation_ttl
        )
        self._responses = ResponseBuilder(self._identity, codec, clock=clock)
        self._parser = ResponseParser(codec, registry=registry, clock=clock)
        self._push = PushDelivery(
            config.push_url, timeout=config.push_timeout, transport=transport
        )
        logger.debug("Credentials configured for %s", self._identity.did or "anonymous")

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def did(self) -> str | None:
        return self._identity.did

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def config(self) -> CredentialsConfig:
        return self._config

    @property
    def codec(self) -> TokenCodec:
        return self._codec

    # ------------------------------------------------------------------
    # Issuance
    # ------------------------------------------------------------------

    async def create_request(self, options: Mapping[str, Any] | None = None) -> str:
        """Create a signed selective disclosure request.

        See :meth:`RequestBuilder.build_claims` for recognised options;
        anything else is ignored.
        """
        return self._requests.create_request(options)

    async def attest(self, attestation: Mapping[str, Any]) -> str:
        """Create a signed attestation ``{"sub", "claim", "exp"?}``."""
        return self._attestations.attest(attestation)

    async def create_disclosure_response(
        self,
        *,
        req: str | None = None,
        own: Mapping[str, Any] | None = None,
        verified: Sequence[str] | None = None,
        nad: str | None = None,
        dad: str | None = None,
        capabilities: Sequence[str] | None = None,
        box_pub: str | None = None,
        exp: int | None = None,
    ) -> str:
        """Answer a disclosure request as this identity."""
        return self._responses.create_response(
            req=req,
            own=own,
            verified=verified,
            nad=nad,
            dad=dad,
            capabilities=capabilities,
            box_pub=box_pub,
            exp=exp,
        )

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------

    async def receive(self, token: str) -> Profile:
        """Verify a disclosure response and return the flattened profile."""
        return await self._parser.receive(token)

    async def lookup(self, address: str) -> dict[str, Any] | None:
        """Return the public profile of *address*, or ``None``.

        Always ``None`` when no registry is configured.
        """
        if self._registry is None:
            return None
        return await self._registry.lookup(address)

    # ------------------------------------------------------------------
    # Push
    # ------------------------------------------------------------------

    async def push_encrypted(
        self,
        token: str,
        public_encryption_key: str,
        payload: Mapping[str, Any],
    ) -> Any:
        """Send *payload* encrypted to the device behind *token*."""
        return await self._push.push_encrypted(token, public_encryption_key, payload)

    async def push_plain(self, token: str, payload: Mapping[str, Any]) -> Any:
        """Send *payload* unencrypted (deprecated)."""
        return await self._push.push_plain(token, payload)

    async def push(
        self,
        token: str,
        payload: Mapping[str, Any],
        *,
        public_encryption_key: str | None = None,
    ) -> Any:
        """Send *payload*, encrypting it when a key is given."""
        return await self._push.push(
            token, payload, public_encryption_key=public_encryption_key
        )
