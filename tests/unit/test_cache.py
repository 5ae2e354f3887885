"""
Unit Tests for cache header parsing
"""

from typed_request.cache import parse_cache_headers, parse_date_ms
from typed_request.models import NetworkResponse

NOW = 1_700_000_000_000


def test_max_age_and_stale_while_revalidate():
    response = NetworkResponse(
        status_code=200,
        headers={"Cache-Control": "public, max-age=60, stale-while-revalidate=30", "ETag": '"abc"'},
        data=b"{}",
    )

    entry = parse_cache_headers(response, now_ms=NOW)

    assert entry.soft_ttl == NOW + 60_000
    assert entry.ttl == NOW + 90_000
    assert entry.etag == '"abc"'
    assert entry.data == b"{}"


def test_must_revalidate_ignores_stale_window():
    response = NetworkResponse(
        status_code=200,
        headers={"cache-control": "max-age=10, stale-while-revalidate=30, must-revalidate"},
    )

    entry = parse_cache_headers(response, now_ms=NOW)

    assert entry.ttl == entry.soft_ttl == NOW + 10_000


def test_no_store_returns_none():
    response = NetworkResponse(status_code=200, headers={"Cache-Control": "no-store"})

    assert parse_cache_headers(response, now_ms=NOW) is None


def test_expires_relative_to_server_date():
    response = NetworkResponse(
        status_code=200,
        headers={
            "Date": "Tue, 14 Nov 2023 22:13:20 GMT",
            "Expires": "Tue, 14 Nov 2023 22:15:20 GMT",
        },
    )

    entry = parse_cache_headers(response, now_ms=NOW)

    assert entry.server_date == 1_700_000_000_000
    assert entry.soft_ttl == entry.ttl == NOW + 120_000


def test_no_cache_headers():
    entry = parse_cache_headers(NetworkResponse(status_code=200), now_ms=NOW)

    assert entry.ttl == 0
    assert entry.etag is None


def test_invalid_date_is_zero():
    assert parse_date_ms("not a date") == 0
    assert parse_date_ms(None) == 0


def test_response_headers_are_case_insensitive():
    response = NetworkResponse(status_code=200, headers={"ETag": "v1", "cache-control": "max-age=5"})

    assert response.header("etag") == "v1"
    assert response.headers["Cache-Control"] == "max-age=5"
    assert parse_cache_headers(response, now_ms=NOW).response_headers == {
        "ETag": "v1",
        "cache-control": "max-age=5",
    }
