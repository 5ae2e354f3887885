"""
Typed JSON requests.

HTTP requests whose bodies are encoded to JSON and whose responses are
decoded into caller-specified types, delivered to a listener.
"""

from typed_request.codec import CodecSettings, JsonCodec, configure_default_codec, get_default_codec
from typed_request.config import QueueConfig
from typed_request.exceptions import (
    ConfigurationError,
    HTTPStatusError,
    NetworkError,
    ParseError,
    SerializationError,
    TimeoutError,
    TypedRequestError,
)
from typed_request.listener import CallbackListener, ResponseListener
from typed_request.models import CacheEntry, Failure, Method, NetworkResponse, Outcome, RetryPolicy, Success
from typed_request.queue import AsyncRequestQueue, RequestQueue
from typed_request.request import DEFAULT_ACCEPTED_STATUS_CODES, DEFAULT_TIMEOUT_MS, TypedRequest
from typed_request.type_providers import CallableTypeProvider, StaticTypeProvider, TypeProvider, type_provider
from typed_request.url import build_url
from typed_request.__version__ import __version__

__all__ = [
    "TypedRequest",
    "ResponseListener",
    "CallbackListener",
    "TypeProvider",
    "StaticTypeProvider",
    "CallableTypeProvider",
    "type_provider",
    "JsonCodec",
    "CodecSettings",
    "configure_default_codec",
    "get_default_codec",
    "RequestQueue",
    "AsyncRequestQueue",
    "QueueConfig",
    "Method",
    "NetworkResponse",
    "CacheEntry",
    "RetryPolicy",
    "Success",
    "Failure",
    "Outcome",
    "build_url",
    "DEFAULT_ACCEPTED_STATUS_CODES",
    "DEFAULT_TIMEOUT_MS",
    "TypedRequestError",
    "SerializationError",
    "ParseError",
    "NetworkError",
    "TimeoutError",
    "HTTPStatusError",
    "ConfigurationError",
    "__version__",
]
