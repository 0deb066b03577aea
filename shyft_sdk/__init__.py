"""
Shyft SDK - async Python client for the Shyft Solana transaction API.
"""
from .client import ShyftClient
from .config import ClientConfig, Commitment, Network
from .exceptions import (
    ConfigError,
    DecodeError,
    ShyftError,
    StatusError,
    TransportError,
    UnsuccessfulResponseError,
)
from .models import (
    Action,
    HistoryOptions,
    ParsedTransactionDetails,
    ParseSelectedOptions,
    ProtocolInfo,
    Response,
)
from .retry import RetryPolicy, is_retryable_status
from .version import __version__

__all__ = [
    "ShyftClient",
    "ClientConfig",
    "Network",
    "Commitment",
    "RetryPolicy",
    "is_retryable_status",
    "ParsedTransactionDetails",
    "Action",
    "ProtocolInfo",
    "Response",
    "HistoryOptions",
    "ParseSelectedOptions",
    "ShyftError",
    "ConfigError",
    "TransportError",
    "StatusError",
    "UnsuccessfulResponseError",
    "DecodeError",
    "__version__",
]
