import asyncio
from typing import Dict, Any, Optional

import httpx
from httpx import TimeoutException, HTTPStatusError

from app.core.exceptions import APIClientError, APITimeoutError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class BaseLLMClient:
    """Base client for LLM API interactions.

    Handles the HTTP round trip, bounded retries, timeout management and
    error logging. Authentication is supplied by the caller as headers so the
    same client serves key-header (Azure) and bearer-token endpoints.
    """

    def __init__(
        self,
        base_url: str,
        auth_headers: Dict[str, str],
        timeout: int = 60,
        max_retries: int = 1,
        retry_delay: int = 2,
    ):
        """Initialize the LLM client.

        Args:
            base_url: Base URL for the API
            auth_headers: Headers that authenticate every request
            timeout: Request timeout in seconds
            max_retries: Total attempts per call; 1 means no retry
            retry_delay: Base delay for exponential backoff
        """
        self.base_url = base_url.rstrip("/")
        self.auth_headers = auth_headers
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self.logger = LOGGER

    async def call_api(
        self,
        endpoint: str = "",
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
    ) -> Dict[str, Any]:
        """POST a JSON payload and return the parsed JSON response.

        Args:
            endpoint: Path appended to base_url
            payload: JSON payload
            params: Query string parameters

        Returns:
            Parsed JSON response

        Raises:
            APIClientError: If the API call fails after all attempts
            APITimeoutError: If the last attempt times out
        """
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json", **self.auth_headers}

        self.logger.debug(
            f"Calling LLM API: {url}",
            extra={"timeout": self.timeout, "max_retries": self.max_retries},
        )

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for attempt in range(self.max_retries):
                try:
                    response = await client.post(url, headers=headers, params=params, json=payload)
                    response.raise_for_status()
                    return response.json()

                except HTTPStatusError as e:
                    await self._handle_http_error(e, attempt, url)

                except TimeoutException as e:
                    await self._handle_timeout_error(e, attempt, url)

                except httpx.RequestError as e:
                    await self._handle_request_error(e, attempt, url)

        raise APIClientError(f"Failed to call API {url} after {self.max_retries} attempts")

    async def _handle_http_error(self, error: HTTPStatusError, attempt: int, url: str):
        """Handle HTTP status errors."""
        status_code = error.response.status_code
        error_body = error.response.text

        self.logger.warning(
            f"API HTTP error (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": url, "status_code": status_code, "error_body": error_body[:500]},
        )

        # Client errors other than rate limiting are never retried
        if 400 <= status_code < 500 and status_code != 429:
            raise APIClientError(f"API Client Error {status_code}: {error_body}", original_error=error) from error

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APIClientError(f"API HTTP Error {status_code}", original_error=error) from error

    async def _handle_timeout_error(self, error: TimeoutException, attempt: int, url: str):
        """Handle timeout errors."""
        self.logger.warning(
            f"API Timeout (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": url},
        )

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APITimeoutError(f"API Timeout after {self.max_retries} attempts", original_error=error) from error

    async def _handle_request_error(self, error: httpx.RequestError, attempt: int, url: str):
        """Handle connection-level errors."""
        self.logger.warning(
            f"API Request Error (Attempt {attempt + 1}/{self.max_retries})",
            extra={"url": url, "error": str(error)},
        )

        if attempt < self.max_retries - 1:
            await self._wait_before_retry(attempt)
        else:
            raise APIClientError(f"API Error: {str(error)}", original_error=error) from error

    async def _wait_before_retry(self, attempt: int):
        """Exponential backoff wait."""
        await asyncio.sleep(self.retry_delay * (2 ** attempt))
