"""Credentials configuration.

Defines the validated configuration model consumed by
:class:`~did_credentials.credentials.Credentials`.  Option names follow the
camelCase keys used on the wire by other implementations of the protocol
(``privateKey``, ``rpcUrl``); the snake_case field names are accepted too.
"""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic import ValidationError as PydanticValidationError

from did_credentials.core.errors import ConfigurationError

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
"""A bare ``0x``-prefixed 20-byte address."""

DEFAULT_PUSH_URL = "https://pututu.uport.space"


class NetworkConfig(BaseModel):
    """RPC endpoint and identity registry for one chain."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rpc_url: str = Field(alias="rpcUrl", min_length=1)
    registry: str = Field(pattern=ADDRESS_PATTERN.pattern)


class CredentialsConfig(BaseModel):
    """Configuration for a :class:`Credentials` instance.

    A minimal configuration is empty (anonymous, read-only mode).  Issuing
    requests or attestations additionally needs ``did`` or ``address`` and a
    ``private_key``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    did: str | None = Field(
        default=None,
        description="Explicit DID of this actor.",
    )
    address: str | None = Field(
        default=None,
        description="Bare 0x address or network-qualified identifier (MNID).",
    )
    private_key: SecretStr | None = Field(
        default=None,
        alias="privateKey",
        description="Hex-encoded secp256k1 private key used for signing.",
    )
    networks: dict[str, NetworkConfig] = Field(
        default_factory=dict,
        description="Chain-id selector -> network settings.",
    )
    network: str | None = Field(
        default=None,
        description="Default network selector placed in outgoing requests.",
    )
    push_url: str = Field(
        default=DEFAULT_PUSH_URL,
        description="Base URL of the push notification relay.",
    )
    push_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Push request timeout in seconds.",
    )
    request_ttl: int = Field(
        default=600,
        ge=1,
        description="Lifetime in seconds of a disclosure request without explicit exp.",
    )
    attestation_ttl: int = Field(
        default=3600,
        ge=1,
        description="Lifetime in seconds of an attestation without explicit exp.",
    )

    @field_validator("networks", mode="before")
    @classmethod
    def _check_networks(cls, value: Any) -> Any:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise ConfigurationError("networks must be a mapping of network id to settings")
        for network_id, settings in value.items():
            if isinstance(settings, NetworkConfig):
                continue
            if not isinstance(settings, Mapping):
                raise ConfigurationError(
                    f"Network configuration object required for network: {network_id}",
                    details={"network": network_id},
                )
            if not (settings.get("rpcUrl") or settings.get("rpc_url")):
                raise ConfigurationError(
                    f"rpcUrl is required for network: {network_id}",
                    details={"network": network_id},
                )
            registry = settings.get("registry")
            if not registry:
                raise ConfigurationError(
                    f"registry address is required for network: {network_id}",
                    details={"network": network_id},
                )
            if not isinstance(registry, str) or not ADDRESS_PATTERN.match(registry):
                raise ConfigurationError(
                    f"registry must be a 20 byte hex address for network: {network_id}",
                    details={"network": network_id},
                )
        return value

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> CredentialsConfig:
        """Build a config from loose keyword options.

        Any schema violation is reported as :class:`ConfigurationError`.
        """
        try:
            return cls.model_validate(dict(options or {}))
        except PydanticValidationError as exc:
            raise ConfigurationError(
                f"Invalid credentials configuration: {exc.errors()[0]['msg']}",
                details={"errors": exc.errors(include_url=False, include_input=False)},
            ) from exc
