"""Generic dataclass <-> wire dict mapper.

Field types are resolved once per class. Every field whose type has a codec in
the registry is encoded/decoded through it, however deeply it is nested.
"""

from __future__ import annotations

import dataclasses
import functools
import types
import typing
from enum import Enum
from typing import Any, TypeVar

from .codecs import DEFAULT_REGISTRY, CodecRegistry
from .exceptions import MalformedWireValueError

T = TypeVar("T")


@functools.cache
def _field_types(cls: type) -> tuple[tuple[str, Any], ...]:
    hints = typing.get_type_hints(cls)
    return tuple((f.name, hints[f.name]) for f in dataclasses.fields(cls))


def _unwrap_optional(tp: Any) -> Any:
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


class Mapper:
    """Decodes API responses into model dataclasses and back."""

    def __init__(self, registry: CodecRegistry | None = None) -> None:
        self._registry = registry if registry is not None else DEFAULT_REGISTRY

    @property
    def registry(self) -> CodecRegistry:
        return self._registry

    def decode(self, cls: type[T], data: Any) -> T:
        if not isinstance(data, dict):
            raise MalformedWireValueError(
                f"{cls.__name__} must be a JSON object, got {type(data).__name__}", data
            )
        kwargs: dict[str, Any] = {}
        for name, tp in _field_types(cls):
            if name in data:
                kwargs[name] = self._decode_value(tp, data[name])
        try:
            return cls(**kwargs)
        except TypeError as e:
            raise MalformedWireValueError(f"cannot build {cls.__name__}: {e}", data) from e

    def decode_list(self, cls: type[T], data: Any) -> list[T]:
        if not isinstance(data, list):
            raise MalformedWireValueError(
                f"expected a JSON array of {cls.__name__}, got {type(data).__name__}", data
            )
        return [self.decode(cls, item) for item in data]

    def _decode_value(self, tp: Any, wire: Any) -> Any:
        tp = _unwrap_optional(tp)
        codec = self._registry.lookup(tp)
        if codec is not None:
            return codec.decode(wire)
        if wire is None:
            return None
        if isinstance(tp, type) and dataclasses.is_dataclass(tp):
            return self.decode(tp, wire)
        if typing.get_origin(tp) is list:
            if not isinstance(wire, list):
                raise MalformedWireValueError(f"expected a JSON array, got {type(wire).__name__}", wire)
            args = typing.get_args(tp)
            item_tp = args[0] if args else Any
            return [self._decode_value(item_tp, item) for item in wire]
        return wire

    def encode(self, obj: Any) -> dict[str, Any]:
        """Encode a model instance. Fields that are ``None`` are left out."""
        out: dict[str, Any] = {}
        for name, tp in _field_types(type(obj)):
            value = self._encode_value(tp, getattr(obj, name))
            if value is not None:
                out[name] = value
        return out

    def _encode_value(self, tp: Any, value: Any) -> Any:
        if value is None:
            return None
        tp = _unwrap_optional(tp)
        codec = self._registry.lookup(tp)
        if codec is not None:
            return codec.encode(value)
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self.encode(value)
        if isinstance(value, list):
            args = typing.get_args(tp)
            item_tp = args[0] if args else Any
            return [self._encode_value(item_tp, item) for item in value]
        if isinstance(value, Enum):
            return value.value
        return value
