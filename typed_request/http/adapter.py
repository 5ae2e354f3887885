"""
Base HTTP adapter interface.
"""

from abc import ABC, abstractmethod

from ..models import NetworkResponse
from ..request import TypedRequest


class HTTPAdapter(ABC):
    """
    Abstract base class for synchronous HTTP adapters.

    An adapter owns transport, connection pooling and retries. It reads
    method, URL, headers, body, timeout and retry policy from the request.
    """

    @abstractmethod
    def perform(self, request: TypedRequest) -> NetworkResponse:
        """
        Execute the request.

        Args:
            request: Request to execute

        Returns:
            The raw network response, whatever its status code

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release pooled connections"""
