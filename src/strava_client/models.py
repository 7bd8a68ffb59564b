"""Strava API v3 data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class MapPoint:
    """Geographic coordinate. On the wire: ``[latitude, longitude]``."""

    latitude: float
    longitude: float


class DateRangeKind(str, Enum):
    """Leaderboard date range variants."""

    THIS_YEAR = "this_year"
    THIS_MONTH = "this_month"
    THIS_WEEK = "this_week"
    TODAY = "today"
    UNKNOWN = "unknown"


_KNOWN_DATE_RANGE_TOKENS = {k.value: k for k in DateRangeKind if k is not DateRangeKind.UNKNOWN}


@dataclass(frozen=True)
class LeaderboardDateRange:
    """Leaderboard date range, round-tripped through its string token.

    Tokens the client does not know yet are kept as ``UNKNOWN`` with the raw
    token, so re-encoding reproduces exactly what the server sent.
    """

    kind: DateRangeKind
    raw: str | None = None

    def __post_init__(self) -> None:
        if self.kind is DateRangeKind.UNKNOWN and self.raw is None:
            raise ValueError("UNKNOWN date range requires the raw token")

    @classmethod
    def from_token(cls, token: str) -> LeaderboardDateRange:
        kind = _KNOWN_DATE_RANGE_TOKENS.get(token)
        if kind is None:
            return cls(DateRangeKind.UNKNOWN, raw=token)
        return cls(kind)

    @property
    def token(self) -> str:
        if self.kind is DateRangeKind.UNKNOWN and self.raw is not None:
            return self.raw
        return self.kind.value

    @property
    def is_known(self) -> bool:
        return self.kind is not DateRangeKind.UNKNOWN


@dataclass
class PolylineMap:
    """Encoded route polyline attached to an activity or segment."""

    id: str | None = None
    polyline: str | None = None
    summary_polyline: str | None = None
    resource_state: int | None = None


@dataclass
class Athlete:
    """Athlete (summary or detailed representation)."""

    id: int
    resource_state: int | None = None
    firstname: str | None = None
    lastname: str | None = None
    profile_medium: str | None = None
    profile: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    sex: str | None = None
    friend: str | None = None
    follower: str | None = None
    premium: bool | None = None
    weight: float | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass
class Club:
    """Club (summary or detailed representation)."""

    id: int
    resource_state: int | None = None
    name: str | None = None
    profile_medium: str | None = None
    profile: str | None = None
    description: str | None = None
    club_type: str | None = None
    sport_type: str | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    private: bool | None = None
    member_count: int | None = None


@dataclass
class Activity:
    id: int
    resource_state: int | None = None
    external_id: str | None = None
    athlete: Athlete | None = None
    name: str | None = None
    distance: float | None = None
    moving_time: int | None = None
    elapsed_time: int | None = None
    total_elevation_gain: float | None = None
    type: str | None = None
    start_date: datetime | None = None
    start_date_local: datetime | None = None
    timezone: str | None = None
    start_latlng: MapPoint | None = None
    end_latlng: MapPoint | None = None
    map: PolylineMap | None = None
    kudos_count: int | None = None
    comment_count: int | None = None
    private: bool | None = None


@dataclass
class Segment:
    id: int
    resource_state: int | None = None
    name: str | None = None
    activity_type: str | None = None
    distance: float | None = None
    average_grade: float | None = None
    maximum_grade: float | None = None
    elevation_high: float | None = None
    elevation_low: float | None = None
    start_latlng: MapPoint | None = None
    end_latlng: MapPoint | None = None
    climb_category: int | None = None
    city: str | None = None
    state: str | None = None
    country: str | None = None
    private: bool | None = None
    starred: bool | None = None


@dataclass
class SegmentEffort:
    """An athlete's attempt at a segment; KOM listings are made of these."""

    id: int
    resource_state: int | None = None
    name: str | None = None
    activity: dict[str, Any] | None = None
    athlete: Athlete | None = None
    elapsed_time: int | None = None
    moving_time: int | None = None
    start_date: datetime | None = None
    start_date_local: datetime | None = None
    distance: float | None = None
    start_index: int | None = None
    end_index: int | None = None
    segment: Segment | None = None
    kom_rank: int | None = None
    pr_rank: int | None = None


@dataclass
class LeaderboardEntry:
    athlete_name: str | None = None
    athlete_id: int | None = None
    athlete_gender: str | None = None
    average_hr: float | None = None
    average_watts: float | None = None
    distance: float | None = None
    elapsed_time: int | None = None
    moving_time: int | None = None
    start_date: datetime | None = None
    start_date_local: datetime | None = None
    activity_id: int | None = None
    effort_id: int | None = None
    rank: int | None = None
    athlete_profile: str | None = None


@dataclass
class Leaderboard:
    """One page of a segment leaderboard."""

    entry_count: int | None = None
    effort_count: int | None = None
    entries: list[LeaderboardEntry] = field(default_factory=list)


@dataclass
class SimilarActivitiesTrend:
    """Speed trend across an athlete's similar activities.

    ``current_activity_index`` points into ``speeds``. ``direction`` is
    1 (improving), 0 (steady) or -1 (declining).
    """

    speeds: list[float] = field(default_factory=list)
    current_activity_index: int | None = None
    min_speed: float | None = None
    mid_speed: float | None = None
    max_speed: float | None = None
    direction: int | None = None
