"""
Configuration for request queues.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from typed_request.__version__ import __version__


class QueueConfig(BaseModel):
    """
    Request queue configuration.

    Supports environment variables:
    - TYPED_REQUEST_NETWORK_THREADS: Number of network worker threads (default: 4)
    - TYPED_REQUEST_STREAM_RESPONSES: Hand response bodies over as streams (default: false)
    - TYPED_REQUEST_DEBUG: Enable debug logging (default: false)
    """

    network_threads: int = Field(4, description="Number of network worker threads")
    stream_responses: bool = Field(False, description="Decode bodies from the response stream")
    user_agent: str = Field(
        f"typed-request-python/{__version__}", description="User-Agent header sent by the adapters"
    )
    debug: bool = Field(False, description="Enable debug logging")

    @field_validator("network_threads")
    @classmethod
    def validate_network_threads(cls, v):
        if v < 1:
            raise ValueError("network_threads must be at least 1")
        return v

    @classmethod
    def from_env(cls, **overrides) -> "QueueConfig":
        """
        Build configuration from environment variables.

        Keyword arguments take precedence over the environment.
        """
        values = {}
        threads = os.getenv("TYPED_REQUEST_NETWORK_THREADS")
        if threads:
            values["network_threads"] = int(threads)
        stream = _env_flag("TYPED_REQUEST_STREAM_RESPONSES")
        if stream is not None:
            values["stream_responses"] = stream
        debug = _env_flag("TYPED_REQUEST_DEBUG")
        if debug is not None:
            values["debug"] = debug
        values.update(overrides)
        return cls(**values)


def _env_flag(name: str) -> Optional[bool]:
    value = os.getenv(name)
    if value is None or value == "":
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")
