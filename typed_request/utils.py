"""
Typed Request Utilities
"""

import logging
from typing import Dict, Iterable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

logger = logging.getLogger("typed_request")


def requests_session_with_retries(
    total: int = 1,
    backoff_factor: float = 1.0,
    status_forcelist: Iterable[int] = (),
) -> requests.Session:
    """
    Create a requests session with automatic retries

    Args:
        total: Maximum number of retries
        backoff_factor: Backoff factor between attempts
        status_forcelist: HTTP status codes to retry on

    Returns:
        Configured requests session
    """
    session = requests.Session()

    retries = Retry(
        total=total,
        backoff_factor=backoff_factor,
        status_forcelist=status_forcelist,
        allowed_methods=None,
        raise_on_status=False,
        respect_retry_after_header=True,
    )

    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)

    return session


def setup_logging(debug: bool = False) -> None:
    """
    Setup plain-text logging for the library

    Args:
        debug: Enable debug level logging
    """
    level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def sanitize_for_logging(headers: Dict[str, str]) -> Dict[str, str]:
    """
    Redact credential-bearing headers before logging

    Args:
        headers: Headers to sanitize

    Returns:
        Sanitized copy
    """
    sensitive_keys = {"authorization", "cookie", "token", "secret", "api-key", "api_key"}
    sanitized = {}

    for key, value in headers.items():
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value

    return sanitized
