"""Strava API v3 list client."""

from .client import StravaClient
from .codecs import (
    DEFAULT_REGISTRY,
    Codec,
    CodecRegistry,
    DateTimeCodec,
    LeaderboardDateRangeCodec,
    MapPointCodec,
    build_default_registry,
)
from .config import ConfigError, ConfigErrorCodes, StravaClientConfig, load
from .exceptions import (
    CodecRegistrationError,
    InvalidPageBoundsError,
    InvalidPageSizeError,
    MalformedWireValueError,
    NotFoundError,
    OperationCancelledError,
    RetryError,
    StravaClientError,
    StravaClientErrorCodes,
    TransportError,
    UnauthorizedError,
)
from .http_client import HttpTransport
from .logger import new_logger
from .mapper import Mapper
from .models import (
    Activity,
    Athlete,
    Club,
    DateRangeKind,
    Leaderboard,
    LeaderboardDateRange,
    LeaderboardEntry,
    MapPoint,
    PolylineMap,
    Segment,
    SegmentEffort,
    SimilarActivitiesTrend,
)
from .paging import (
    DEFAULT_MAX_PER_PAGE,
    FETCH_ALL,
    MIN_PER_PAGE,
    PageFetcher,
    PageRequest,
    PaginationOutcome,
    PagingConstraints,
    StopReason,
    fetch_all,
)
from .retry import RetryConfig, with_retry
from .services import ActivityService, AthleteService, ClubService, SegmentService

__all__ = [
    "Activity",
    "ActivityService",
    "Athlete",
    "AthleteService",
    "Club",
    "ClubService",
    "Codec",
    "CodecRegistrationError",
    "CodecRegistry",
    "ConfigError",
    "ConfigErrorCodes",
    "DEFAULT_MAX_PER_PAGE",
    "DEFAULT_REGISTRY",
    "DateRangeKind",
    "DateTimeCodec",
    "FETCH_ALL",
    "HttpTransport",
    "InvalidPageBoundsError",
    "InvalidPageSizeError",
    "Leaderboard",
    "LeaderboardDateRange",
    "LeaderboardDateRangeCodec",
    "LeaderboardEntry",
    "MIN_PER_PAGE",
    "MalformedWireValueError",
    "MapPoint",
    "MapPointCodec",
    "Mapper",
    "NotFoundError",
    "OperationCancelledError",
    "PageFetcher",
    "PageRequest",
    "PaginationOutcome",
    "PagingConstraints",
    "PolylineMap",
    "RetryConfig",
    "RetryError",
    "Segment",
    "SegmentEffort",
    "SegmentService",
    "SimilarActivitiesTrend",
    "StopReason",
    "StravaClient",
    "StravaClientConfig",
    "StravaClientError",
    "StravaClientErrorCodes",
    "TransportError",
    "UnauthorizedError",
    "build_default_registry",
    "fetch_all",
    "load",
    "new_logger",
    "with_retry",
]
