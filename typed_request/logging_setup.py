"""
Structured JSON Logging

Provides a JSON formatter for structured logging output.
"""

import json
import logging
import sys
from typing import Any, Dict


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for attr in ("method", "url", "status_code"):
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for the library.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> from typed_request.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    library_logger = logging.getLogger("typed_request")
    library_logger.setLevel(level)
    library_logger.handlers = [handler]
    library_logger.propagate = False
