"""codec unit tests."""

from datetime import datetime, timedelta, timezone

import pytest

from strava_client import (
    DEFAULT_REGISTRY,
    CodecRegistrationError,
    CodecRegistry,
    DateRangeKind,
    DateTimeCodec,
    LeaderboardDateRange,
    LeaderboardDateRangeCodec,
    MalformedWireValueError,
    MapPoint,
    MapPointCodec,
)


@pytest.mark.parametrize(
    ("latitude", "longitude"),
    [(0.0, 0.0), (37.7749, -122.4194), (-33.8688, 151.2093), (90.0, 180.0), (-90.0, -180.0)],
)
def test_map_point_roundtrip(latitude: float, longitude: float) -> None:
    codec = MapPointCodec()
    point = MapPoint(latitude, longitude)
    wire = codec.encode(point)
    assert wire == [latitude, longitude]
    assert codec.decode(wire) == point


def test_map_point_accepts_ints_and_extra_elements() -> None:
    codec = MapPointCodec()
    assert codec.decode([51, -1, 99.0]) == MapPoint(51.0, -1.0)


@pytest.mark.parametrize("wire", [[1.0], [], "not-an-array", {"lat": 1, "lng": 2}, 42])
def test_map_point_malformed(wire: object) -> None:
    with pytest.raises(MalformedWireValueError):
        MapPointCodec().decode(wire)


@pytest.mark.parametrize(
    "wire", [[1.0, "2.0"], [None, 2.0], [True, 1.0], [10**400, 1.0], [1.0, -(10**400)]]
)
def test_map_point_non_numeric(wire: list) -> None:
    with pytest.raises(MalformedWireValueError):
        MapPointCodec().decode(wire)


def test_map_point_none() -> None:
    codec = MapPointCodec()
    assert codec.encode(None) is None
    assert codec.decode(None) is None


@pytest.mark.parametrize("kind", [k for k in DateRangeKind if k is not DateRangeKind.UNKNOWN])
def test_date_range_roundtrip(kind: DateRangeKind) -> None:
    codec = LeaderboardDateRangeCodec()
    value = LeaderboardDateRange(kind)
    assert codec.encode(value) == kind.value
    assert codec.decode(codec.encode(value)) == value


def test_date_range_unknown_token_preserved() -> None:
    codec = LeaderboardDateRangeCodec()
    value = codec.decode("xyz")
    assert value is not None
    assert value.kind is DateRangeKind.UNKNOWN
    assert value.raw == "xyz"
    assert not value.is_known
    assert codec.encode(value) == "xyz"


def test_date_range_token_named_unknown() -> None:
    value = LeaderboardDateRangeCodec().decode("unknown")
    assert value == LeaderboardDateRange(DateRangeKind.UNKNOWN, raw="unknown")


@pytest.mark.parametrize("wire", [1, ["this_year"], {"token": "today"}])
def test_date_range_non_string(wire: object) -> None:
    with pytest.raises(MalformedWireValueError):
        LeaderboardDateRangeCodec().decode(wire)


def test_date_range_none() -> None:
    codec = LeaderboardDateRangeCodec()
    assert codec.encode(None) is None
    assert codec.decode(None) is None


def test_unknown_date_range_requires_raw() -> None:
    with pytest.raises(ValueError):
        LeaderboardDateRange(DateRangeKind.UNKNOWN)


def test_datetime_decode_z_suffix() -> None:
    value = DateTimeCodec().decode("2015-01-01T10:00:00Z")
    assert value == datetime(2015, 1, 1, 10, 0, tzinfo=timezone.utc)


def test_datetime_encode_converts_to_utc() -> None:
    tz = timezone(timedelta(hours=9))
    value = datetime(2015, 1, 1, 19, 0, tzinfo=tz)
    assert DateTimeCodec().encode(value) == "2015-01-01T10:00:00Z"


def test_datetime_naive_treated_as_utc() -> None:
    codec = DateTimeCodec()
    assert codec.encode(datetime(2020, 5, 1, 8, 30)) == "2020-05-01T08:30:00Z"
    assert codec.decode("2020-05-01T08:30:00").tzinfo == timezone.utc


@pytest.mark.parametrize("wire", ["yesterday", 1420106400, ["2015-01-01"]])
def test_datetime_malformed(wire: object) -> None:
    with pytest.raises(MalformedWireValueError):
        DateTimeCodec().decode(wire)


def test_registry_duplicate_registration() -> None:
    registry = CodecRegistry()
    registry.register(MapPoint, MapPointCodec())
    with pytest.raises(CodecRegistrationError):
        registry.register(MapPoint, MapPointCodec())


def test_registry_frozen_rejects_registration() -> None:
    registry = CodecRegistry()
    registry.freeze()
    assert registry.frozen
    with pytest.raises(CodecRegistrationError):
        registry.register(MapPoint, MapPointCodec())


def test_default_registry() -> None:
    assert DEFAULT_REGISTRY.frozen
    assert MapPoint in DEFAULT_REGISTRY
    assert LeaderboardDateRange in DEFAULT_REGISTRY
    assert isinstance(DEFAULT_REGISTRY.lookup(datetime), DateTimeCodec)
    assert DEFAULT_REGISTRY.lookup(str) is None


def test_registry_encode_by_value_type() -> None:
    assert DEFAULT_REGISTRY.encode(MapPoint(1.5, 2.5)) == [1.5, 2.5]
    assert DEFAULT_REGISTRY.encode(LeaderboardDateRange(DateRangeKind.TODAY)) == "today"
    assert DEFAULT_REGISTRY.encode("plain") == "plain"
    assert DEFAULT_REGISTRY.encode(None) is None
