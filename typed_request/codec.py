"""
JSON Codec

Serializes request entities and deserializes response bodies into
caller-specified types using pydantic. A single default codec is shared
by every request that is not given one explicitly.
"""

import logging
import threading
from functools import lru_cache
from typing import Any, BinaryIO, Callable, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic_core import to_json, to_jsonable_python

from typed_request.exceptions import ConfigurationError, SerializationError

logger = logging.getLogger("typed_request.codec")


class CodecSettings(BaseModel):
    """Codec configuration, fixed once the codec is built"""

    model_config = ConfigDict(frozen=True)

    by_alias: bool = Field(False, description="Serialize model fields by alias")
    exclude_none: bool = Field(False, description="Drop None-valued fields from payloads")
    strict: bool = Field(False, description="Disable type coercion when decoding")


CodecConfigurator = Callable[[CodecSettings], CodecSettings]


@lru_cache(maxsize=256)
def _type_adapter(return_type: Any) -> TypeAdapter:
    return TypeAdapter(return_type)


class JsonCodec:
    """
    JSON encoder/decoder.

    Holds no mutable state after construction, so one instance may be used
    from any number of worker threads at once.

    Example:
        >>> codec = JsonCodec()
        >>> codec.encode({"a": 1})
        b'{"a":1}'
        >>> codec.decode(b"[1, 2]", list[int])
        [1, 2]
    """

    def __init__(self, settings: Optional[CodecSettings] = None):
        self.settings = settings or CodecSettings()

    def encode(self, entity: Any) -> bytes:
        """
        Serialize an entity to JSON bytes.

        Args:
            entity: dict, list, pydantic model, dataclass or any value
                pydantic knows how to dump

        Returns:
            UTF-8 JSON bytes

        Raises:
            SerializationError: If the entity cannot be serialized
        """
        try:
            payload = to_jsonable_python(
                entity,
                by_alias=self.settings.by_alias,
                exclude_none=self.settings.exclude_none,
            )
            if self.settings.exclude_none:
                payload = _drop_none(payload)
            return to_json(payload)
        except Exception as e:
            raise SerializationError(f"Could not serialize {type(entity).__name__}: {e}") from e

    def decode(self, data: bytes, return_type: Any) -> Any:
        """
        Deserialize JSON bytes into ``return_type``.

        Raises:
            pydantic.ValidationError: On malformed JSON or type mismatch
        """
        return _adapter_for(return_type).validate_json(data, strict=self.settings.strict)

    def decode_stream(self, stream: BinaryIO, return_type: Any) -> Any:
        """Deserialize a readable binary stream into ``return_type``"""
        return self.decode(stream.read(), return_type)

    def __repr__(self) -> str:
        return f"JsonCodec(settings={self.settings!r})"


def _drop_none(value: Any) -> Any:
    # pydantic only drops None fields of models and dataclasses, not plain dict keys
    if isinstance(value, dict):
        return {key: _drop_none(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_drop_none(item) for item in value]
    return value


def _adapter_for(return_type: Any) -> TypeAdapter:
    try:
        return _type_adapter(return_type)
    except TypeError:
        # unhashable type hints bypass the cache
        return TypeAdapter(return_type)


_default_codec: Optional[JsonCodec] = None
_default_configurator: Optional[CodecConfigurator] = None
_default_lock = threading.Lock()


def configure_default_codec(configurator: CodecConfigurator) -> None:
    """
    Register the one-time configuration applied to the default codec.

    Must be called at process start, before any request touches the
    default codec.

    Args:
        configurator: Receives the default settings and returns the
            settings to build the codec with

    Raises:
        ConfigurationError: If the default codec already exists

    Example:
        >>> configure_default_codec(
        ...     lambda s: s.model_copy(update={"exclude_none": True})
        ... )
    """
    global _default_configurator

    with _default_lock:
        if _default_codec is not None:
            raise ConfigurationError("Default codec is already initialized")
        _default_configurator = configurator


def get_default_codec() -> JsonCodec:
    """
    Get the process-wide default codec, creating it on first access.

    Concurrent first callers all receive the same instance and the
    registered configurator runs exactly once.
    """
    global _default_codec

    codec = _default_codec
    if codec is not None:
        return codec

    with _default_lock:
        if _default_codec is None:
            settings = CodecSettings()
            if _default_configurator is not None:
                settings = _default_configurator(settings)
            _default_codec = JsonCodec(settings)
            logger.debug("Default codec created: %r", _default_codec)
        return _default_codec


def reset_default_codec() -> None:
    """Drop the default codec and its configurator (used by tests)"""
    global _default_codec, _default_configurator

    with _default_lock:
        _default_codec = None
        _default_configurator = None
