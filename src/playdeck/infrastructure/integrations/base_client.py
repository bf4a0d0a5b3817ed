"""Shared httpx plumbing for the catalog and player clients."""

import logging
from typing import Any, ClassVar

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from playdeck.domain.exceptions import (
    ConfigurationError,
    MalformedResponseError,
    ServiceUnavailableError,
    UnexpectedStatusError,
)

logger = logging.getLogger(__name__)


class BaseHttpClient:
    """Lazily created httpx.AsyncClient plus error mapping.

    Every call is attempted exactly once - no retries at this layer. Failures
    surface as ExternalServiceError subclasses:
    - ServiceUnavailableError: connect error, timeout, other transport issues
    - UnexpectedStatusError: anything that isn't 2xx
    - MalformedResponseError: body isn't JSON or doesn't have the expected shape
    """

    SERVICE_NAME: ClassVar[str] = "collaborator"

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Server root URL (trailing slash is stripped)
            timeout: Per-call timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)

        Raises:
            ConfigurationError: If base_url is empty
        """
        if not base_url or not base_url.strip():
            raise ConfigurationError(f"{self.SERVICE_NAME} base URL not configured")
        self.base_url = base_url.strip().rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    # Hey future me, the timeout applies to EVERY call (connect, read, write, pool). Without
    # it a hung server would stall a bulk add's fan-out forever.
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Accept": "application/json"},
                timeout=httpx.Timeout(self.timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseHttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """
        Send one request and map failures to domain exceptions.

        Args:
            method: HTTP method
            url: Path relative to base_url (may carry its own query string)
            **kwargs: Passed through to httpx

        Returns:
            The successful response

        Raises:
            ServiceUnavailableError: On transport failure or timeout
            UnexpectedStatusError: On non-2xx status
        """
        client = await self._get_client()
        try:
            response = await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise ServiceUnavailableError(
                f"{method} {url} timed out after {self.timeout}s", self.SERVICE_NAME
            ) from e
        except httpx.TransportError as e:
            raise ServiceUnavailableError(
                f"{method} {url} failed: {e}", self.SERVICE_NAME
            ) from e

        if not response.is_success:
            raise UnexpectedStatusError(
                f"{method} {url} returned HTTP {response.status_code}",
                self.SERVICE_NAME,
                response.status_code,
            )

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def _decode(self, response: httpx.Response, adapter: TypeAdapter[Any]) -> Any:
        """Parse a JSON body through a pydantic TypeAdapter."""
        try:
            return adapter.validate_json(response.content)
        except PydanticValidationError as e:
            raise MalformedResponseError(
                f"unexpected body from {response.request.url.path}: "
                f"{e.error_count()} validation error(s)",
                self.SERVICE_NAME,
            ) from e
