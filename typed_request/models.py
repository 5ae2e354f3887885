"""
Typed Request Data Models
"""

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import TYPE_CHECKING, Any, BinaryIO, Dict, Generic, Optional, TypeVar, Union

from requests.structures import CaseInsensitiveDict

if TYPE_CHECKING:
    from typed_request.exceptions import TypedRequestError

T = TypeVar("T")


@unique
class Method(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


@dataclass(frozen=True)
class RetryPolicy:
    """Timeout and retry parameters handed to the transport"""

    timeout_ms: int
    max_retries: int = 1
    backoff_multiplier: float = 1.0

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0


@dataclass
class NetworkResponse:
    """
    Raw response handed back by the transport.

    Either ``data`` holds the materialized body or, for streaming
    transports, ``stream`` holds a readable binary file object.
    """

    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    data: Optional[bytes] = None
    stream: Optional[BinaryIO] = None
    not_modified: bool = False
    network_time_ms: int = 0

    def __post_init__(self):
        if not isinstance(self.headers, CaseInsensitiveDict):
            self.headers = CaseInsensitiveDict(self.headers)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup"""
        return self.headers.get(name)


@dataclass(frozen=True)
class CacheEntry:
    """Cache metadata parsed from response headers, in epoch milliseconds"""

    data: Optional[bytes]
    etag: Optional[str] = None
    server_date: int = 0
    last_modified: int = 0
    ttl: int = 0
    soft_ttl: int = 0
    response_headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Success(Generic[T]):
    value: Optional[T]
    cache_entry: Optional[CacheEntry] = None

    @property
    def is_success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    error: "TypedRequestError"

    @property
    def is_success(self) -> bool:
        return False

    @property
    def status_code(self) -> int:
        return self.error.status_code


Outcome = Union[Success[Any], Failure]
