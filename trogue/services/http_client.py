"""HTTP client service wrapping a shared httpx.AsyncClient."""

from typing import Any

import httpx
import structlog

from ..constants import PROGRAM_NAME, VERSION

log = structlog.stdlib.get_logger()


class HttpClientService:
    """HTTP client service issuing single-attempt GET requests."""

    def __init__(
        self,
        base_url: str = "",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client service.

        Args:
            base_url: Prefix for relative request URLs
            timeout: Request timeout in seconds (None waits indefinitely)
            transport: Optional transport override (used by tests)
        """
        self.base_url = base_url
        self.timeout = timeout

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
            headers={
                "User-Agent": f"{PROGRAM_NAME}/{VERSION}"
            },
            follow_redirects=True,
            transport=transport,
        )

        log.debug("HTTP client service initialized", base_url=base_url, timeout=timeout)

    async def get(
        self,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Make a GET request.

        Args:
            url: The URL to request, absolute or relative to ``base_url``
            params: Optional query parameters

        Returns:
            HTTP response object with a success status

        Raises:
            httpx.HTTPStatusError: If the server answered with a non-success status
            httpx.RequestError: If the request could not be completed
        """
        log.debug("Making HTTP GET request", url=url)

        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            log.warning(
                "HTTP GET request failed",
                url=url,
                error=str(e),
                error_type=type(e).__name__
            )
            raise

        log.info(
            "HTTP GET request successful",
            url=url,
            status_code=response.status_code,
            content_length=len(response.content)
        )
        return response

    async def close(self) -> None:
        """Close the HTTP client and clean up resources."""
        await self._client.aclose()
        log.debug("HTTP client closed")

    async def __aenter__(self) -> "HttpClientService":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: type[Exception] | None, exc_val: Exception | None, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()
