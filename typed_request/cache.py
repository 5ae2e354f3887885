"""
Cache header parsing.

Extracts cache metadata from response headers so a caching layer can
reuse it. Nothing in this package interprets the result.
"""

import time
from email.utils import parsedate_to_datetime
from typing import Optional

from typed_request.models import CacheEntry, NetworkResponse


def parse_date_ms(value: Optional[str]) -> int:
    """Parse an RFC 1123 date header into epoch milliseconds, 0 if invalid"""
    if not value:
        return 0
    try:
        return int(parsedate_to_datetime(value).timestamp() * 1000)
    except (TypeError, ValueError):
        return 0


def parse_cache_headers(response: NetworkResponse, now_ms: Optional[int] = None) -> Optional[CacheEntry]:
    """
    Build a CacheEntry from the response headers.

    Args:
        response: Network response
        now_ms: Current time in epoch milliseconds (defaults to wall clock)

    Returns:
        CacheEntry, or None when Cache-Control forbids caching
    """
    now = now_ms if now_ms is not None else int(time.time() * 1000)

    server_date = parse_date_ms(response.header("Date"))
    last_modified = parse_date_ms(response.header("Last-Modified"))
    server_expires = parse_date_ms(response.header("Expires"))
    etag = response.header("ETag")

    max_age = 0
    stale_while_revalidate = 0
    has_cache_control = False
    must_revalidate = False

    cache_control = response.header("Cache-Control")
    if cache_control is not None:
        has_cache_control = True
        for token in cache_control.split(","):
            token = token.strip().lower()
            if token in ("no-cache", "no-store"):
                return None
            if token.startswith("max-age="):
                max_age = _seconds(token[len("max-age="):])
            elif token.startswith("stale-while-revalidate="):
                stale_while_revalidate = _seconds(token[len("stale-while-revalidate="):])
            elif token in ("must-revalidate", "proxy-revalidate"):
                must_revalidate = True

    soft_expire = 0
    final_expire = 0
    if has_cache_control:
        soft_expire = now + max_age * 1000
        final_expire = soft_expire if must_revalidate else soft_expire + stale_while_revalidate * 1000
    elif server_date > 0 and server_expires >= server_date:
        # Expires is relative to the server clock
        soft_expire = now + (server_expires - server_date)
        final_expire = soft_expire

    return CacheEntry(
        data=response.data,
        etag=etag,
        server_date=server_date,
        last_modified=last_modified,
        ttl=final_expire,
        soft_ttl=soft_expire,
        response_headers=dict(response.headers),
    )


def _seconds(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0
