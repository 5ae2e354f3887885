"""
Response type providers.

A type provider tells a request which type its response body is decoded
into. Any type hint pydantic accepts works: a model class, ``list[Foo]``,
``dict[str, int]``. ``None`` means the body is not decoded.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union


class TypeProvider(ABC):
    """Supplies the response decode type for a request"""

    @abstractmethod
    def get_return_type(self) -> Optional[Any]:
        """
        Get the type the network response should be decoded into.

        Returns:
            A type hint, or None to skip decoding
        """
        raise NotImplementedError


class StaticTypeProvider(TypeProvider):
    """Provider that always returns the same type"""

    def __init__(self, return_type: Optional[Any]):
        self.return_type = return_type

    def get_return_type(self) -> Optional[Any]:
        return self.return_type

    def __repr__(self) -> str:
        return f"StaticTypeProvider({self.return_type!r})"


class CallableTypeProvider(TypeProvider):
    """Provider backed by a zero-argument function"""

    def __init__(self, func: Callable[[], Optional[Any]]):
        self.func = func

    def get_return_type(self) -> Optional[Any]:
        return self.func()


NO_CONTENT = StaticTypeProvider(None)


def type_provider(source: Union[TypeProvider, Any, None]) -> TypeProvider:
    """
    Coerce a type hint or a provider into a provider.

    Anything that is not a provider is the decode type itself, never a
    factory: ``NewType`` and other callable hints are types to pydantic.
    Wrap factories in ``CallableTypeProvider`` explicitly.
    """
    if isinstance(source, TypeProvider):
        return source
    if source is None:
        return NO_CONTENT
    return StaticTypeProvider(source)
