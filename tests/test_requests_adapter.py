"""
Tests for the requests-based adapter
"""

import pytest
import requests
from requests_mock import Mocker

from typed_request import Method, NetworkError, RetryPolicy, TimeoutError, TypedRequest
from typed_request.http import RequestsAdapter
from typed_request.type_providers import NO_CONTENT

URL = "https://api.example.com/spots"


@pytest.fixture
def adapter():
    return RequestsAdapter(user_agent="typed-request-tests")


def test_get_sends_query_and_accept_header(adapter, listener):
    request = TypedRequest(Method.GET, URL, listener, params={"city": "chicago"}, type_provider=NO_CONTENT)

    with Mocker() as m:
        m.get(URL, json=[{"id": 1}], status_code=200, headers={"ETag": "v2"})
        response = adapter.perform(request)

        sent = m.last_request
        assert sent.qs == {"city": ["chicago"]}
        assert sent.headers["Accept"] == "application/json"
        assert sent.headers["User-Agent"] == "typed-request-tests"
        assert "Content-Type" not in sent.headers

    assert response.status_code == 200
    assert response.data == b'[{"id": 1}]'
    assert response.header("etag") == "v2"


def test_post_sends_json_body(adapter, listener):
    request = TypedRequest(Method.POST, URL, listener, entity={"title": "Garage"})

    with Mocker() as m:
        m.post(URL, status_code=201, json={"id": 9})
        response = adapter.perform(request)

        sent = m.last_request
        assert sent.body == b'{"title":"Garage"}'
        assert sent.headers["Content-Type"] == "application/json"

    assert response.status_code == 201


def test_error_status_is_returned_not_raised(adapter, listener):
    request = TypedRequest(Method.GET, URL, listener)

    with Mocker() as m:
        m.get(URL, status_code=500, text="boom")
        response = adapter.perform(request)

    assert response.status_code == 500


def test_timeout_raises_timeout_error(adapter, listener):
    request = TypedRequest(Method.GET, URL, listener)

    with Mocker() as m:
        m.get(URL, exc=requests.exceptions.ConnectTimeout)
        with pytest.raises(TimeoutError):
            adapter.perform(request)


def test_connection_error_raises_network_error(adapter, listener):
    request = TypedRequest(Method.GET, URL, listener)

    with Mocker() as m:
        m.get(URL, exc=requests.exceptions.ConnectionError)
        with pytest.raises(NetworkError) as exc_info:
            adapter.perform(request)

    assert exc_info.value.status_code == 0


def test_sessions_are_shared_per_retry_settings(adapter, listener):
    """Test timeouts share a session while retry settings do not"""
    first = TypedRequest(Method.GET, URL, listener)
    slow = TypedRequest(Method.GET, URL, listener, timeout_ms=60000)
    no_retry = RetryPolicy(timeout_ms=30000, max_retries=0)

    assert adapter._session_for(first.retry_policy) is adapter._session_for(slow.retry_policy)
    assert adapter._session_for(first.retry_policy) is not adapter._session_for(no_retry)
    assert len(adapter._sessions) == 2

    adapter.close()
    assert adapter._sessions == {}


def test_streaming_response_is_decoded(listener):
    adapter = RequestsAdapter(stream=True)
    request = TypedRequest(Method.GET, URL, listener, response_type=list)

    with Mocker() as m:
        m.get(URL, content=b'[1, 2, 3]', status_code=200)
        response = adapter.perform(request)

    assert response.data is None
    assert response.stream is not None
    assert request.parse_network_response(response).value == [1, 2, 3]
