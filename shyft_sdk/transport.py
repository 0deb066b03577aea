"""
HTTP transport for the Shyft SDK.

Owns the httpx.AsyncClient (connection pool, TLS, timeout, API key header).
One call to send() is one attempt; retrying is left to RetryPolicy.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from . import constants
from .config import ClientConfig
from .exceptions import ConfigError, TransportError
from .request import RequestDescriptor
from .version import user_agent

logger = logging.getLogger(__name__)


class HttpTransport:
    """Thin wrapper around httpx.AsyncClient bound to one ClientConfig"""

    def __init__(
        self,
        config: ClientConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Build the underlying HTTP client.

        Args:
            config: Client configuration (base URL, timeout, credential)
            transport: Optional httpx transport, e.g. httpx.MockTransport in tests

        Raises:
            ConfigError: If the HTTP client cannot be built
        """
        headers = {
            constants.API_KEY_HEADER: config.api_key,
            "User-Agent": user_agent(),
        }
        try:
            self._client = httpx.AsyncClient(
                base_url=config.base_url,
                headers=headers,
                timeout=httpx.Timeout(config.timeout),
                transport=transport,
            )
        except (TypeError, ValueError, httpx.HTTPError) as exc:
            # UnicodeEncodeError is a ValueError; keep the key out of the message
            raise ConfigError(f"Failed to build HTTP client: {type(exc).__name__}") from exc

    async def send(self, request: RequestDescriptor) -> httpx.Response:
        """
        Issue one attempt and read the full response body.

        Raises:
            TransportError: If no response was received
        """
        kwargs: Dict[str, Any] = {"params": list(request.params)}
        if request.json is not None:
            kwargs["json"] = dict(request.json)
        try:
            response = await self._client.request(request.method, request.path, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(f"{request.method} {request.path} failed: {type(exc).__name__}: {exc}") from exc
        logger.debug(f"{request.method} {request.path} -> {response.status_code}")
        return response

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        await self._client.aclose()
