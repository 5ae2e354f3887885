"""
Pytest configuration and fixtures
"""

import threading
from typing import Any, List, Optional, Tuple

import pytest

from typed_request import ResponseListener
from typed_request.codec import reset_default_codec
from typed_request.http.adapter import HTTPAdapter
from typed_request.models import NetworkResponse


class RecordingListener(ResponseListener):
    """Listener that records every callback it receives"""

    def __init__(self):
        self.successes: List[Any] = []
        self.errors: List[Tuple[Exception, int]] = []
        self.responses: List[Tuple[Any, int, Optional[Exception]]] = []
        self.threads: List[str] = []
        self.delivered = threading.Event()

    def on_response(self, response, status_code, error):
        self.responses.append((response, status_code, error))

    def on_success(self, response):
        self.threads.append(threading.current_thread().name)
        self.successes.append(response)
        self.delivered.set()

    def on_error(self, error, status_code):
        self.threads.append(threading.current_thread().name)
        self.errors.append((error, status_code))
        self.delivered.set()

    @property
    def callback_count(self) -> int:
        return len(self.successes) + len(self.errors)


class DummyAdapter(HTTPAdapter):
    """Mock HTTP adapter for testing."""

    def __init__(self, response: Optional[NetworkResponse] = None, error: Optional[Exception] = None):
        self.requests = []
        self.response = response or NetworkResponse(status_code=200, data=b'{"a": 1}')
        self.error = error
        self.closed = False

    def perform(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def fresh_default_codec():
    """Every test starts without a default codec"""
    reset_default_codec()
    yield
    reset_default_codec()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def listener_factory():
    return RecordingListener


@pytest.fixture
def dummy_adapter():
    return DummyAdapter()


@pytest.fixture
def adapter_factory():
    return DummyAdapter
