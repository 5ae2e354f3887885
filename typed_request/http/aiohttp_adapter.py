"""
Aiohttp-based HTTP adapter (asynchronous).
"""

import asyncio
import logging
import time
from typing import Any, Optional

import aiohttp

from ..exceptions import NetworkError, TimeoutError as RequestTimeoutError
from ..models import NetworkResponse
from ..request import TypedRequest

logger = logging.getLogger("typed_request.http.aiohttp")


class AiohttpAdapter:
    """
    Asynchronous HTTP adapter using aiohttp library.

    Features:
    - Non-blocking requests for async applications
    - Connection pooling
    - Per-request timeout and retry count from the request's retry policy
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize aiohttp adapter.

        Args:
            session: Optional aiohttp.ClientSession instance
            user_agent: User-Agent header to send
        """
        self._external_session = session is not None
        self.session = session
        self.user_agent = user_agent

    async def __aenter__(self) -> "AiohttpAdapter":
        """Context manager entry."""
        if self.session is None:
            self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        await self.close()

    async def perform(self, request: TypedRequest) -> NetworkResponse:
        """
        Send the request using aiohttp library.

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
        """
        if self.session is None:
            raise RuntimeError("Session not initialized. Use 'async with' context.")

        policy = request.retry_policy
        timeout_obj = aiohttp.ClientTimeout(total=policy.timeout_seconds)
        headers = request.get_headers()
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        attempts = policy.max_retries + 1
        for attempt in range(attempts):
            start = time.time()
            try:
                async with self.session.request(
                    method=request.method.value,
                    url=request.url,
                    headers=headers,
                    data=request.body,
                    timeout=timeout_obj,
                ) as response:
                    data = await response.read()
                    return NetworkResponse(
                        status_code=response.status,
                        headers=dict(response.headers),
                        data=data,
                        not_modified=response.status == 304,
                        network_time_ms=int((time.time() - start) * 1000),
                    )

            except asyncio.TimeoutError as e:
                if attempt == attempts - 1:
                    raise RequestTimeoutError(f"Request timed out: {e}") from e
                logger.debug("Retrying %s %s after timeout", request.method.value, request.url)
                await asyncio.sleep(policy.backoff_multiplier * 0.5 * (2**attempt))

            except aiohttp.ClientError as e:
                if attempt == attempts - 1:
                    raise NetworkError(f"Network request failed: {e}") from e
                logger.debug("Retrying %s %s after %s", request.method.value, request.url, e)
                await asyncio.sleep(policy.backoff_multiplier * 0.5 * (2**attempt))

        raise NetworkError("Max retries exceeded")

    async def close(self) -> None:
        """Close the session."""
        if not self._external_session and self.session:
            await self.session.close()
