"""
Response listeners.

A listener receives exactly one terminal callback per request:
``on_success`` with the decoded value, or ``on_error`` with the error and
status code.
"""

from abc import ABC, abstractmethod
from typing import Callable, Generic, Optional, TypeVar

from typed_request.exceptions import TypedRequestError
from typed_request.models import Outcome

T = TypeVar("T")


class ResponseListener(ABC, Generic[T]):
    """Base class for request listeners"""

    def on_response(self, response: Optional[T], status_code: int, error: Optional[TypedRequestError]) -> None:
        """
        Called when the request finished, before ``on_success``/``on_error``.

        Deprecated: override ``on_success`` and ``on_error`` instead.

        Args:
            response: The decoded response, or None if an error occurred
            status_code: The status code of the response
            error: The error that occurred, or None if successful
        """

    @abstractmethod
    def on_success(self, response: Optional[T]) -> None:
        """
        Called with the decoded response.

        Args:
            response: The decoded response (None when no type was requested)
        """
        raise NotImplementedError

    @abstractmethod
    def on_error(self, error: TypedRequestError, status_code: int) -> None:
        """
        Called when the request failed.

        Args:
            error: The error that occurred
            status_code: The status code of the response, 0 if none was received
        """
        raise NotImplementedError

    def on_parse_response_complete(self, outcome: Outcome) -> Outcome:
        """
        Optional hook called on the parsing thread to further process the
        outcome before it is delivered. The returned outcome is delivered.
        """
        return outcome


class CallbackListener(ResponseListener[T]):
    """
    Listener composed from plain functions.

    Example:
        >>> listener = CallbackListener(
        ...     on_success=lambda spot: print(spot.id),
        ...     on_error=lambda error, code: print(code, error),
        ... )
    """

    def __init__(
        self,
        on_success: Callable[[Optional[T]], None],
        on_error: Callable[[TypedRequestError, int], None],
        transform: Optional[Callable[[Outcome], Outcome]] = None,
    ):
        self._on_success = on_success
        self._on_error = on_error
        self._transform = transform

    def on_success(self, response: Optional[T]) -> None:
        self._on_success(response)

    def on_error(self, error: TypedRequestError, status_code: int) -> None:
        self._on_error(error, status_code)

    def on_parse_response_complete(self, outcome: Outcome) -> Outcome:
        if self._transform is None:
            return outcome
        return self._transform(outcome)
