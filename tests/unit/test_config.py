"""
Unit Tests for queue configuration
"""

import pytest
from pydantic import ValidationError

from typed_request import QueueConfig, __version__


def test_defaults():
    config = QueueConfig()

    assert config.network_threads == 4
    assert config.stream_responses is False
    assert config.user_agent == f"typed-request-python/{__version__}"


def test_from_env(monkeypatch):
    monkeypatch.setenv("TYPED_REQUEST_NETWORK_THREADS", "8")
    monkeypatch.setenv("TYPED_REQUEST_STREAM_RESPONSES", "true")
    monkeypatch.setenv("TYPED_REQUEST_DEBUG", "0")

    config = QueueConfig.from_env()

    assert config.network_threads == 8
    assert config.stream_responses is True
    assert config.debug is False


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("TYPED_REQUEST_NETWORK_THREADS", "8")

    assert QueueConfig.from_env(network_threads=2).network_threads == 2


def test_invalid_thread_count():
    with pytest.raises(ValidationError) as exc_info:
        QueueConfig(network_threads=0)

    assert "network_threads must be at least 1" in str(exc_info.value)
