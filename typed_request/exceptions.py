"""
Typed Request Exceptions
"""

from typing import Optional

from typed_request.models import NetworkResponse


class TypedRequestError(Exception):
    """Base exception for typed requests"""

    def __init__(
        self,
        message: str = "",
        network_response: Optional[NetworkResponse] = None,
    ):
        super().__init__(message)
        self.network_response = network_response

    @property
    def status_code(self) -> int:
        """Status code of the attached response, 0 when nothing was received"""
        if self.network_response is None:
            return 0
        return self.network_response.status_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(message={str(self)!r}, status_code={self.status_code})"


class SerializationError(TypedRequestError):
    """Request entity could not be encoded as JSON"""

    pass


class ParseError(TypedRequestError):
    """
    Response body could not be decoded into the requested type.

    The original response is attached for diagnostics.
    """

    pass


class NetworkError(TypedRequestError):
    """Network/connectivity error, no response was received"""

    pass


class TimeoutError(TypedRequestError):
    """Request timed out after all retry attempts"""

    pass


class HTTPStatusError(TypedRequestError):
    """Response status code is not in the request's accepted list"""

    def __init__(self, network_response: NetworkResponse):
        super().__init__(
            f"Unexpected status code {network_response.status_code}",
            network_response=network_response,
        )


class ConfigurationError(TypedRequestError):
    """Library configuration error"""

    pass
