"""
Async HTTP client for the organization API using aiohttp.
Provides retry/backoff for transient failures of reads.
"""

import asyncio
from typing import Optional, Dict, Any
import aiohttp

from educard.core.exceptions import UpstreamAPIError
from educard.core.logging import get_logger

logger = get_logger(__name__)

RETRYABLE_STATUSES = {429, 500, 502, 503, 504}


class HttpClient:
    """
    Async HTTP client wrapper using aiohttp.
    Provides get/post/put/patch/delete methods with retry/backoff support.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: int = 30,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Optional base URL for all requests
            token: Bearer token sent with every request
            timeout: Request timeout in seconds
            max_retries: Maximum number of attempts for transient failures
            retry_delay: Initial delay between retries in seconds
        """
        self.base_url = base_url
        self.token = token
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._session: Optional[aiohttp.ClientSession] = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _build_url(self, endpoint: str) -> str:
        """Build full URL from endpoint."""
        if self.base_url:
            return f"{self.base_url.rstrip('/')}/{endpoint.lstrip('/')}"
        return endpoint

    def _build_headers(self, headers: Optional[Dict[str, str]]) -> Dict[str, str]:
        merged = {"Accept": "application/json"}
        if self.token:
            merged["Authorization"] = f"Bearer {self.token}"
        if headers:
            merged.update(headers)
        return merged

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Any:
        text = await response.text()
        if not text:
            return None
        try:
            return await response.json(content_type=None)
        except ValueError:
            return text

    async def _request_with_retry(
        self,
        method: str,
        url: str,
        retry: bool = False,
        **kwargs: Any,
    ) -> Any:
        """
        Make HTTP request with retry logic.

        With ``retry``, connection errors, timeouts and 429/5xx answers are
        retried with exponential backoff. Writes are attempted once. Other
        error statuses raise immediately.

        Args:
            method: HTTP method
            url: Request URL
            retry: Whether transient failures are retried
            **kwargs: Additional arguments for aiohttp request

        Returns:
            Decoded JSON body, raw text, or None for an empty body
        """
        session = await self._get_session()
        last_error: Optional[UpstreamAPIError] = None
        attempts = self.max_retries if retry else 1

        for attempt in range(attempts):
            try:
                async with session.request(method, url, **kwargs) as response:
                    body = await self._read_body(response)
                    if response.status < 400:
                        return body
                    error = UpstreamAPIError(response.status, body)
                    if response.status not in RETRYABLE_STATUSES:
                        logger.warning(
                            f"{method} {url} failed with status {response.status}",
                            extra={"status_code": response.status},
                        )
                        raise error
                    last_error = error
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = UpstreamAPIError(None)
                last_error.__cause__ = e

            if attempt < attempts - 1:
                delay = self.retry_delay * (2 ** attempt)  # Exponential backoff
                logger.warning(
                    f"Request {method} {url} failed (attempt {attempt + 1}/{attempts}). "
                    f"Retrying in {delay}s..."
                )
                await asyncio.sleep(delay)

        logger.error(f"Request {method} {url} failed after {attempts} attempt(s)")
        raise last_error

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make GET request.

        Args:
            endpoint: API endpoint
            params: Query parameters
            headers: Request headers

        Returns:
            JSON response
        """
        url = self._build_url(endpoint)
        return await self._request_with_retry(
            "GET", url, retry=True, params=params, headers=self._build_headers(headers)
        )

    async def post(
        self,
        endpoint: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make POST request.

        Args:
            endpoint: API endpoint
            json: JSON data
            headers: Request headers

        Returns:
            JSON response
        """
        url = self._build_url(endpoint)
        return await self._request_with_retry(
            "POST", url, json=json, headers=self._build_headers(headers)
        )

    async def put(
        self,
        endpoint: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make PUT request."""
        url = self._build_url(endpoint)
        return await self._request_with_retry(
            "PUT", url, json=json, headers=self._build_headers(headers)
        )

    async def patch(
        self,
        endpoint: str,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Make PATCH request."""
        url = self._build_url(endpoint)
        return await self._request_with_retry(
            "PATCH", url, json=json, headers=self._build_headers(headers)
        )

    async def delete(
        self,
        endpoint: str,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """
        Make DELETE request.

        Returns:
            JSON response, or None when the API answers 204
        """
        url = self._build_url(endpoint)
        return await self._request_with_retry(
            "DELETE", url, headers=self._build_headers(headers)
        )
