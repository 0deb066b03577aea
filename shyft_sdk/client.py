"""
ShyftClient - Main client for the Shyft transaction API.
"""
import logging
from typing import Any, List, Optional, Sequence, Union

import httpx

from .config import ClientConfig, Commitment, Network
from .models import HistoryOptions, ParsedTransactionDetails, ParseSelectedOptions
from .request import (
    RequestDescriptor,
    history_request,
    parse_selected_request,
    parsed_request,
)
from .response import map_response
from .retry import RetryPolicy
from .transport import HttpTransport


class ShyftClient:
    """
    Async client for the Shyft transaction endpoints.

    This client handles:
    1. Building authenticated requests with the client-wide network and commitment
    2. Retrying transient failures (timeouts, 408, 429, 5xx) with jittered backoff
    3. Decoding the response envelope into typed records

    Every operation either returns the full typed payload or raises a
    ShyftError subclass. The client holds no per-call state, so one instance
    can serve many concurrent operations.

    Example:
        async with ShyftClient("your_api_key") as client:
            history = await client.get_transaction_history("account", tx_num=10)
    """

    def __init__(
        self,
        api_key: str,
        min_retry_interval: Optional[float] = None,
        max_retry_interval: Optional[float] = None,
        max_retries: Optional[int] = None,
        network: Optional[Union[Network, str]] = None,
        commitment: Optional[Union[Commitment, str]] = None,
        *,
        timeout: Optional[float] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_policy: Optional[RetryPolicy] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the ShyftClient

        Args:
            api_key: Shyft API key, sent in the x-api-key header
            min_retry_interval: Minimum delay between retries in seconds (default 0.5)
            max_retry_interval: Maximum delay between retries in seconds (default 1.0)
            max_retries: Maximum number of retries after the first attempt (default 3)
            network: Solana cluster (default mainnet-beta)
            commitment: Commitment level (default confirmed)
            timeout: Per-attempt request timeout in seconds (default 10)
            base_url: API base URL (default https://api.shyft.to/sol/v1/)
            transport: Optional httpx transport, e.g. httpx.MockTransport for tests
            retry_policy: Optional policy replacing the one built from the intervals
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ConfigError: If the API key cannot be sent as a header, a setting is
                invalid, or the HTTP client cannot be built
        """
        overrides = {
            "min_retry_interval": min_retry_interval,
            "max_retry_interval": max_retry_interval,
            "max_retries": max_retries,
            "network": network,
            "commitment": commitment,
            "timeout": timeout,
            "base_url": base_url,
        }
        config = ClientConfig(api_key=api_key, **{k: v for k, v in overrides.items() if v is not None})
        self._setup(config, transport, retry_policy, logger)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_policy: Optional[RetryPolicy] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "ShyftClient":
        """Create a client from an existing ClientConfig (e.g. ClientConfig.from_env())."""
        client = cls.__new__(cls)
        client._setup(config, transport, retry_policy, logger)
        return client

    def _setup(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport],
        retry_policy: Optional[RetryPolicy],
        logger: Optional[logging.Logger],
    ) -> None:
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._defaults = config.default_params()
        self.retry_policy = retry_policy or RetryPolicy(
            min_interval=config.min_retry_interval,
            max_interval=config.max_retry_interval,
            max_retries=config.max_retries,
            logger=self.logger,
        )
        self.transport = HttpTransport(config, transport=transport)

    def __repr__(self) -> str:
        return (
            f"ShyftClient(network={self.config.network.value!r}, "
            f"commitment={self.config.commitment.value!r}, base_url={self.config.base_url!r})"
        )

    async def __aenter__(self) -> "ShyftClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying connection pool."""
        await self.transport.aclose()

    async def _call(self, request: RequestDescriptor, payload_type: Any) -> Any:
        description = f"{request.method} {request.path}"
        self.logger.debug(f"Sending {description} params={self._sanitize_params(request)}")

        async def _send() -> httpx.Response:
            return await self.transport.send(request)

        response = await self.retry_policy.execute(_send, description=description)
        return map_response(response, payload_type)

    @staticmethod
    def _sanitize_params(request: RequestDescriptor) -> Any:
        """
        Summarize request parameters for logging.

        Signature lists in bulk requests are collapsed to a count.
        """
        if request.json is None:
            return dict(request.params)
        safe = dict(request.json)
        sigs = safe.get("transaction_signatures")
        if isinstance(sigs, list):
            safe["transaction_signatures"] = f"[{len(sigs)} signatures]"
        return safe

    async def get_transaction_history(
        self,
        account: str,
        options: Optional[HistoryOptions] = None,
        **option_kwargs: Any,
    ) -> List[ParsedTransactionDetails]:
        """
        Fetch the transaction history of an account (GET /transaction/history).

        Args:
            account: Account address; its format is not checked here
            options: HistoryOptions value; alternatively pass the same fields as
                keyword arguments (tx_num, before_tx_signature,
                until_tx_signature, enable_raw, enable_events)

        Returns:
            Parsed transactions, newest first as returned by the API. An empty
            list means the account has no matching transactions.

        Raises:
            ValueError: If account is empty or the options are invalid
            TransportError: If the final attempt got no response
            StatusError: If the final response status is not 2xx
            DecodeError: If the response does not match the expected shape
        """
        options = self._merge_options(HistoryOptions, options, option_kwargs)
        request = history_request(self._defaults, account, options)
        records = await self._call(request, List[ParsedTransactionDetails])
        self.logger.info(f"Fetched {len(records)} transaction(s) for account {account}")
        return records

    async def get_transaction_parsed(self, tx_signature: str) -> ParsedTransactionDetails:
        """
        Fetch one parsed transaction (GET /transaction/parsed).

        Args:
            tx_signature: Transaction signature

        Returns:
            The parsed transaction

        Raises:
            ValueError: If tx_signature is empty
            TransportError: If the final attempt got no response
            StatusError: If the final response status is not 2xx, including an
                unknown signature
            DecodeError: If the response does not match the expected shape
        """
        request = parsed_request(self._defaults, tx_signature)
        return await self._call(request, ParsedTransactionDetails)

    async def get_transaction_parse_selected(
        self,
        signatures: Sequence[str],
        options: Optional[ParseSelectedOptions] = None,
        **option_kwargs: Any,
    ) -> List[ParsedTransactionDetails]:
        """
        Fetch several parsed transactions in one call (POST /transaction/parse_selected).

        The API may leave out signatures it cannot resolve, so the result is
        not guaranteed to line up positionally with ``signatures``.

        Args:
            signatures: Non-empty sequence of transaction signatures
            options: ParseSelectedOptions value; alternatively pass enable_raw /
                enable_events as keyword arguments

        Returns:
            Parsed transactions

        Raises:
            ValueError: If signatures is empty; no request is sent in that case
            TransportError: If the final attempt got no response
            StatusError: If the final response status is not 2xx
            DecodeError: If the response does not match the expected shape
        """
        options = self._merge_options(ParseSelectedOptions, options, option_kwargs)
        request = parse_selected_request(self._defaults, signatures, options)
        records = await self._call(request, List[ParsedTransactionDetails])
        self.logger.info(f"Parsed {len(records)} of {len(request.json['transaction_signatures'])} requested transaction(s)")
        return records

    @staticmethod
    def _merge_options(model, options, option_kwargs):
        if options is not None and option_kwargs:
            raise TypeError("Pass either an options object or keyword options, not both")
        if options is not None:
            return options
        return model(**option_kwargs)
