"""
Typed Request

An HTTP request whose payload is encoded to JSON and whose response body
is decoded into a caller-specified type. Behaviour:
    - GET parameters are passed through the URL, with no body content.
    - POST/PUT bodies are JSON encoded entities.
    - The same codec is used for serialization and deserialization.
"""

import logging
import threading
from typing import Any, Dict, Generic, Iterable, List, Mapping, Optional, TypeVar, Union

from typed_request.cache import parse_cache_headers
from typed_request.codec import JsonCodec, get_default_codec
from typed_request.exceptions import ParseError, SerializationError, TypedRequestError
from typed_request.listener import ResponseListener
from typed_request.models import Failure, Method, NetworkResponse, Outcome, RetryPolicy, Success
from typed_request.type_providers import TypeProvider, type_provider as as_type_provider
from typed_request.url import build_url

logger = logging.getLogger("typed_request.request")

T = TypeVar("T")

DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 1
DEFAULT_BACKOFF_MULTIPLIER = 1.0
DEFAULT_ACCEPTED_STATUS_CODES = (200, 201, 202, 204, 206)

JSON_CONTENT_TYPE = "application/json"


class TypedRequest(Generic[T]):
    """
    A single HTTP request bound to a response type and a listener.

    Example:
        >>> request = TypedRequest(
        ...     Method.GET,
        ...     "https://api.example.com/spots",
        ...     listener=SpotListener(),
        ...     response_type=list[Spot],
        ...     params={"city": "chicago"},
        ... )
        >>> queue.add(request)
    """

    def __init__(
        self,
        method: Union[Method, str],
        url: str,
        listener: ResponseListener[T],
        type_provider: Optional[TypeProvider] = None,
        params: Optional[Mapping[str, Optional[str]]] = None,
        entity: Any = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        codec: Optional[JsonCodec] = None,
        response_type: Any = None,
    ):
        """
        Initialize a typed request

        Args:
            method: HTTP method
            url: Base URL; GET params are appended to it
            listener: Receives the terminal outcome
            type_provider: Supplies the response decode type
            params: Query parameters (GET only)
            entity: Object encoded as the JSON body (POST/PUT only)
            timeout_ms: Socket timeout handed to the transport
            codec: Codec to use instead of the process-wide default
            response_type: Shortcut for a static ``type_provider``
        """
        self.method = Method(method)
        self.url = build_url(self.method, url, params)
        self.listener = listener
        self.type_provider = type_provider if type_provider is not None else as_type_provider(response_type)
        self.codec = codec or get_default_codec()
        self.retry_policy = RetryPolicy(
            timeout_ms=timeout_ms,
            max_retries=DEFAULT_MAX_RETRIES,
            backoff_multiplier=DEFAULT_BACKOFF_MULTIPLIER,
        )
        self.should_cache = False

        self._params: Optional[Dict[str, Optional[str]]] = None
        self._body: Optional[bytes] = None

        if self.method is Method.GET:
            self._params = dict(params) if params is not None else None
        elif self.method in (Method.POST, Method.PUT) and entity is not None:
            try:
                self._body = self.serialize_entity(entity)
            except SerializationError:
                logger.exception("An error occurred while serializing the request body")

        self._accepted_status_codes: List[int] = list(DEFAULT_ACCEPTED_STATUS_CODES)
        self._delivered = False
        self._delivery_lock = threading.Lock()

    def serialize_entity(self, entity: Any) -> bytes:
        """
        Encode the request entity. Override to customize serialization.

        Raises:
            SerializationError: If the entity cannot be encoded
        """
        return self.codec.encode(entity)

    def add_accepted_status_codes(self, status_codes: Iterable[int]) -> None:
        """
        Add status codes (besides the default 2xx set) whose responses are parsed.

        Args:
            status_codes: Additional status codes to parse network responses for
        """
        self._accepted_status_codes.extend(status_codes)

    def get_accepted_status_codes(self) -> List[int]:
        """Get all status codes that will be parsed as successful"""
        return self._accepted_status_codes

    @property
    def params(self) -> Optional[Dict[str, Optional[str]]]:
        """Query parameters for GET requests"""
        return self._params

    @property
    def body(self) -> Optional[bytes]:
        """Request body for PUT and POST requests"""
        return self._body

    @property
    def body_content_type(self) -> Optional[str]:
        if self.method in (Method.POST, Method.PUT):
            return JSON_CONTENT_TYPE
        return None

    def get_headers(self) -> Dict[str, str]:
        headers = {"Accept": JSON_CONTENT_TYPE}
        if self._body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    def parse_network_response(self, response: NetworkResponse) -> Outcome:
        """
        Decode a network response into an outcome.

        Runs on the worker thread. Decoding failures are returned as a
        Failure carrying a ParseError, never raised.

        Args:
            response: Network response accepted by the transport

        Returns:
            The outcome returned by the listener's post-parse hook
        """
        return_type = self.type_provider.get_return_type()
        value = None
        if return_type is not None:
            try:
                if response.data is not None:
                    value = self.codec.decode(response.data, return_type)
                elif response.stream is not None:
                    value = self.codec.decode_stream(response.stream, return_type)
            except Exception as e:
                logger.exception("An error occurred while parsing network response")
                return Failure(ParseError(f"Could not decode response: {e}", network_response=response))

        return self.listener.on_parse_response_complete(
            Success(value, parse_cache_headers(response))
        )

    def deliver(self, outcome: Outcome) -> None:
        """Deliver a terminal outcome to the listener"""
        if isinstance(outcome, Failure):
            self.deliver_error(outcome.error)
        else:
            self.deliver_response(outcome.value)

    def deliver_response(self, response: Optional[T]) -> None:
        if not self._mark_delivered():
            return
        self.listener.on_response(response, 200, None)
        self.listener.on_success(response)

    def deliver_error(self, error: TypedRequestError) -> None:
        if not self._mark_delivered():
            return
        status_code = error.status_code if error is not None else 0
        self.listener.on_response(None, status_code, error)
        self.listener.on_error(error, status_code)

    @property
    def delivered(self) -> bool:
        return self._delivered

    def _mark_delivered(self) -> bool:
        with self._delivery_lock:
            if self._delivered:
                logger.warning("Ignoring duplicate delivery for %s %s", self.method.value, self.url)
                return False
            self._delivered = True
            return True

    def __repr__(self) -> str:
        return f"TypedRequest(method={self.method.value}, url={self.url!r})"
