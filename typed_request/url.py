"""
URL construction for typed requests.
"""

import logging
from typing import Mapping, Optional, Union
from urllib.parse import quote_plus

from typed_request.models import Method

logger = logging.getLogger("typed_request.url")


def encode_query_pair(key: str, value: Optional[str]) -> Optional[str]:
    """
    Form-encode one ``key=value`` pair as UTF-8, leaving only letters,
    digits and ``.-*_`` unescaped.

    A value of None or the literal string ``"null"`` is encoded as an
    empty string.

    Returns:
        The encoded pair, or None if the text is not encodable as UTF-8
    """
    if value is None or value == "null":
        value = ""
    try:
        return f"{_form_encode(key)}={_form_encode(value)}"
    except UnicodeEncodeError:
        return None


def _form_encode(text: str) -> str:
    # application/x-www-form-urlencoded: "*" stays literal, "~" is escaped
    return quote_plus(text, safe="*", encoding="utf-8").replace("~", "%7E")


def build_url(
    method: Union[Method, str],
    base_url: str,
    params: Optional[Mapping[str, Optional[str]]] = None,
) -> str:
    """
    Convert a base URL and parameters into a full URL.

    Parameters are only appended for GET requests. Pairs that cannot be
    encoded are skipped.

    Args:
        method: Request method
        base_url: The base URL
        params: Query parameters

    Returns:
        The full URL

    Example:
        >>> build_url(Method.GET, "https://api.example.com/spots", {"q": "a b"})
        'https://api.example.com/spots?q=a+b'
    """
    if Method(method) is not Method.GET or not params:
        return base_url

    pairs = []
    for key, value in params.items():
        pair = encode_query_pair(key, value)
        if pair is None:
            logger.debug("Skipping query parameter %r: not encodable as UTF-8", key)
            continue
        pairs.append(pair)

    if not pairs:
        return base_url
    return f"{base_url}?{'&'.join(pairs)}"
