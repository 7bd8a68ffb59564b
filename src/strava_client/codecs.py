"""Compact wire codecs and the type-keyed codec registry."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Protocol, TypeVar

from .exceptions import CodecRegistrationError, MalformedWireValueError
from .models import LeaderboardDateRange, MapPoint

T = TypeVar("T")


class Codec(Protocol[T]):
    """Encode/decode pair for one domain type.

    ``None`` maps to ``None`` in both directions.
    """

    def encode(self, value: T | None) -> Any: ...

    def decode(self, wire: Any) -> T | None: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class MapPointCodec:
    """``MapPoint`` <-> ``[latitude, longitude]``."""

    def encode(self, value: MapPoint | None) -> list[float] | None:
        if value is None:
            return None
        return [value.latitude, value.longitude]

    def decode(self, wire: Any) -> MapPoint | None:
        if wire is None:
            return None
        if not isinstance(wire, (list, tuple)):
            raise MalformedWireValueError(f"map point must be an array, got {type(wire).__name__}", wire)
        if len(wire) < 2:
            raise MalformedWireValueError(f"map point needs 2 elements, got {len(wire)}", wire)
        latitude, longitude = wire[0], wire[1]
        if not (_is_number(latitude) and _is_number(longitude)):
            raise MalformedWireValueError("map point elements must be numeric", wire)
        try:
            return MapPoint(latitude=float(latitude), longitude=float(longitude))
        except OverflowError as e:
            raise MalformedWireValueError("map point element out of float range", wire) from e


class LeaderboardDateRangeCodec:
    """``LeaderboardDateRange`` <-> its string token."""

    def encode(self, value: LeaderboardDateRange | None) -> str | None:
        if value is None:
            return None
        return value.token

    def decode(self, wire: Any) -> LeaderboardDateRange | None:
        if wire is None:
            return None
        if not isinstance(wire, str):
            raise MalformedWireValueError(f"date range must be a string, got {type(wire).__name__}", wire)
        return LeaderboardDateRange.from_token(wire)


class DateTimeCodec:
    """Aware ``datetime`` <-> ISO-8601 string in UTC (``2015-01-01T10:00:00Z``)."""

    def encode(self, value: datetime | None) -> str | None:
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")

    def decode(self, wire: Any) -> datetime | None:
        if wire is None:
            return None
        if not isinstance(wire, str):
            raise MalformedWireValueError(f"timestamp must be a string, got {type(wire).__name__}", wire)
        text = wire[:-1] + "+00:00" if wire.endswith("Z") else wire
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError as e:
            raise MalformedWireValueError(f"invalid timestamp: {wire!r}", wire) from e
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class CodecRegistry:
    """Maps a domain type to the codec used for every field of that type.

    Entries are registered once at start-up; after ``freeze()`` the registry is
    read-only and safe to share between concurrent requests.
    """

    def __init__(self) -> None:
        self._codecs: dict[type, Codec[Any]] = {}
        self._frozen = False

    def register(self, type_: type, codec: Codec[Any]) -> None:
        if self._frozen:
            raise CodecRegistrationError(f"registry is frozen; cannot register {type_.__name__}")
        if type_ in self._codecs:
            raise CodecRegistrationError(f"codec already registered for {type_.__name__}")
        self._codecs[type_] = codec

    def freeze(self) -> CodecRegistry:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, type_: Any) -> Codec[Any] | None:
        return self._codecs.get(type_)

    def __contains__(self, type_: object) -> bool:
        return type_ in self._codecs

    def encode(self, value: Any) -> Any:
        """Encode ``value`` with the codec registered for its exact type."""
        if value is None:
            return None
        codec = self.lookup(type(value))
        if codec is None:
            return value
        return codec.encode(value)


def build_default_registry() -> CodecRegistry:
    registry = CodecRegistry()
    registry.register(MapPoint, MapPointCodec())
    registry.register(LeaderboardDateRange, LeaderboardDateRangeCodec())
    registry.register(datetime, DateTimeCodec())
    return registry.freeze()


DEFAULT_REGISTRY = build_default_registry()
