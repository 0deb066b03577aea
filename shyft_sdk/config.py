"""
Client configuration for the Shyft SDK.

The configuration is built once and never mutated; every request reads the
same network, commitment and retry bounds from it.
"""
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

from . import constants
from .exceptions import ConfigError


class Network(str, Enum):
    """Solana cluster the API should answer for."""
    MAINNET_BETA = "mainnet-beta"
    DEVNET = "devnet"
    TESTNET = "testnet"


class Commitment(str, Enum):
    """How settled a transaction must be before the API reports it."""
    CONFIRMED = "confirmed"
    FINALIZED = "finalized"


def _coerce_enum(enum_cls, value: Union[str, Enum], label: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ConfigError(f"Unknown {label} '{value}'. Expected one of: {allowed}")


def validate_header_value(value: str) -> None:
    """
    Check that a credential can be sent as an HTTP header value.

    Args:
        value: The credential to check

    Raises:
        ConfigError: If the value is empty or contains non-printable/non-ASCII characters
    """
    if not isinstance(value, str) or not value:
        raise ConfigError("API key must be a non-empty string")
    for ch in value:
        code = ord(ch)
        if ch != "\t" and (code < 0x20 or code > 0x7E):
            # Do not echo the key itself
            raise ConfigError(
                f"API key contains a character that cannot be sent in an HTTP header (code point {code})"
            )


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable settings shared by every call made through one client.

    Intervals and timeout are in seconds.
    """
    api_key: str = field(repr=False)
    network: Network = Network.MAINNET_BETA
    commitment: Commitment = Commitment.CONFIRMED
    min_retry_interval: float = constants.MIN_RETRY_INTERVAL
    max_retry_interval: float = constants.MAX_RETRY_INTERVAL
    max_retries: int = constants.MAX_RETRIES
    timeout: float = constants.REQUEST_TIMEOUT
    base_url: str = constants.BASE_URL

    def __post_init__(self):
        validate_header_value(self.api_key)

        # frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "network", _coerce_enum(Network, self.network, "network"))
        object.__setattr__(self, "commitment", _coerce_enum(Commitment, self.commitment, "commitment"))

        for name in ("min_retry_interval", "max_retry_interval", "timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number of seconds (got: {value!r})")

        if self.min_retry_interval < 0 or self.max_retry_interval < 0:
            raise ConfigError("Retry intervals must be non-negative")
        if self.min_retry_interval > self.max_retry_interval:
            raise ConfigError(
                f"min_retry_interval ({self.min_retry_interval}) must not exceed "
                f"max_retry_interval ({self.max_retry_interval})"
            )
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int) or self.max_retries < 0:
            raise ConfigError(f"max_retries must be a non-negative integer (got: {self.max_retries!r})")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive (got: {self.timeout})")
        if not self.base_url.startswith(("https://", "http://")):
            raise ConfigError(f"base_url must be an http(s) URL (got: {self.base_url})")
        if not self.base_url.endswith("/"):
            object.__setattr__(self, "base_url", self.base_url + "/")

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides: Any) -> "ClientConfig":
        """
        Build a configuration from SHYFT_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ
            **overrides: Explicit values that win over the environment

        Returns:
            ClientConfig instance

        Raises:
            ConfigError: If SHYFT_API_KEY is missing or a value is invalid
        """
        env = os.environ if environ is None else environ
        values: Dict[str, Any] = {}

        api_key = env.get(constants.ENV_API_KEY)
        if api_key:
            values["api_key"] = api_key
        if env.get(constants.ENV_NETWORK):
            values["network"] = env[constants.ENV_NETWORK]
        if env.get(constants.ENV_COMMITMENT):
            values["commitment"] = env[constants.ENV_COMMITMENT]
        if env.get(constants.ENV_BASE_URL):
            values["base_url"] = env[constants.ENV_BASE_URL]

        values.update({k: v for k, v in overrides.items() if v is not None})
        if "api_key" not in values:
            raise ConfigError(f"{constants.ENV_API_KEY} must be set")
        return cls(**values)

    def default_params(self) -> Tuple[Tuple[str, str], ...]:
        """Client-wide query parameters sent with every request."""
        return (
            ("network", self.network.value),
            ("commitment", self.commitment.value),
        )
