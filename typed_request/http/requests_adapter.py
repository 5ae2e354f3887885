"""
Requests-based HTTP adapter (synchronous).
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

import requests

from .adapter import HTTPAdapter
from ..exceptions import NetworkError, TimeoutError as RequestTimeoutError
from ..models import NetworkResponse, RetryPolicy
from ..request import TypedRequest
from ..utils import requests_session_with_retries, sanitize_for_logging

logger = logging.getLogger("typed_request.http.requests")

SessionFactory = Callable[[RetryPolicy], requests.Session]


def _default_session_factory(policy: RetryPolicy) -> requests.Session:
    return requests_session_with_retries(
        total=policy.max_retries, backoff_factor=policy.backoff_multiplier
    )


class RequestsAdapter(HTTPAdapter):
    """
    Synchronous HTTP adapter using requests library.

    Features:
    - Retries per request retry policy via urllib3
    - Connection pooling via one session per retry count and backoff
    - Optional streaming of response bodies
    """

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        stream: bool = False,
        user_agent: Optional[str] = None,
    ):
        """
        Initialize requests adapter.

        Args:
            session_factory: Builds a session for a retry policy
            stream: Hand bodies over as a stream instead of bytes
            user_agent: User-Agent header to send
        """
        self.session_factory = session_factory or _default_session_factory
        self.stream = stream
        self.user_agent = user_agent
        self._sessions: Dict[Tuple[int, float], requests.Session] = {}
        self._lock = threading.Lock()

    def _session_for(self, policy: RetryPolicy) -> requests.Session:
        # timeouts go with each call, so only retry settings need their own session
        key = (policy.max_retries, policy.backoff_multiplier)
        with self._lock:
            session = self._sessions.get(key)
            if session is None:
                session = self.session_factory(policy)
                self._sessions[key] = session
            return session

    def perform(self, request: TypedRequest) -> NetworkResponse:
        """
        Send the request using requests library.

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
        """
        headers = request.get_headers()
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%s %s headers=%s", request.method.value, request.url, sanitize_for_logging(headers))

        session = self._session_for(request.retry_policy)
        start = time.time()

        try:
            response = session.request(
                method=request.method.value,
                url=request.url,
                headers=headers,
                data=request.body,
                timeout=request.retry_policy.timeout_seconds,
                stream=self.stream,
            )
        except requests.exceptions.Timeout as e:
            raise RequestTimeoutError(f"Request timed out: {e}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network request failed: {e}") from e

        network_time_ms = int((time.time() - start) * 1000)

        if self.stream:
            response.raw.decode_content = True
            return NetworkResponse(
                status_code=response.status_code,
                headers=response.headers,
                stream=response.raw,
                not_modified=response.status_code == 304,
                network_time_ms=network_time_ms,
            )

        return NetworkResponse(
            status_code=response.status_code,
            headers=response.headers,
            data=response.content,
            not_modified=response.status_code == 304,
            network_time_ms=network_time_ms,
        )

    def close(self) -> None:
        with self._lock:
            for session in self._sessions.values():
                session.close()
            self._sessions.clear()
