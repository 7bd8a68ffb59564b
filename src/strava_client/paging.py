"""Page-based pagination over capped list endpoints."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Generic, Literal, Protocol, TypeVar

import structlog

from .exceptions import (
    InvalidPageBoundsError,
    InvalidPageSizeError,
    OperationCancelledError,
)

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)

logger = structlog.stdlib.get_logger(__name__)

MIN_PER_PAGE = 1
DEFAULT_MAX_PER_PAGE = 200

FETCH_ALL: Final = "all"


def _require_positive(name: str, value: int) -> int:
    if value < MIN_PER_PAGE:
        raise InvalidPageBoundsError(name, value)
    return value


@dataclass(frozen=True)
class PageRequest:
    """Page request with 1-based page number.

    Validated at construction so a bad page size never reaches the network.
    """

    page: int = 1
    per_page: int = DEFAULT_MAX_PER_PAGE
    max_per_page: int = field(default=DEFAULT_MAX_PER_PAGE, compare=False, repr=False)

    def __post_init__(self) -> None:
        _require_positive("page", self.page)
        _require_positive("per_page", self.per_page)
        if self.per_page > self.max_per_page:
            raise InvalidPageSizeError(self.per_page, self.max_per_page)

    def next(self) -> PageRequest:
        """Return the request for the following page."""
        return PageRequest(
            page=self.page + 1,
            per_page=self.per_page,
            max_per_page=self.max_per_page,
        )

    @property
    def offset(self) -> int:
        """Number of items that precede this page in the collection."""
        return (self.page - 1) * self.per_page

    def to_params(self) -> dict[str, int]:
        return {"page": self.page, "per_page": self.per_page}


@dataclass(frozen=True)
class PagingConstraints:
    """Per-endpoint paging limits.

    ``max_total_results`` of ``None`` means fetch until a short page.
    """

    max_page_size: int = DEFAULT_MAX_PER_PAGE
    max_total_results: int | None = None

    def __post_init__(self) -> None:
        _require_positive("max_page_size", self.max_page_size)
        if self.max_total_results is not None:
            _require_positive("max_total_results", self.max_total_results)


class StopReason(str, Enum):
    """Why assembly stopped."""

    SINGLE_PAGE = "single_page"
    EXHAUSTED = "exhausted"
    TOTAL_CAP_REACHED = "total_cap_reached"


@dataclass(frozen=True)
class PaginationOutcome(Generic[T]):
    """Items assembled across one or more page fetches."""

    items: list[T]
    stop_reason: StopReason
    pages_fetched: int

    @property
    def exhausted(self) -> bool:
        return self.stop_reason is StopReason.EXHAUSTED

    @property
    def capped(self) -> bool:
        return self.stop_reason is StopReason.TOTAL_CAP_REACHED


class PageFetcher(Protocol[T_co]):
    """Fetches exactly one page of results for an endpoint."""

    async def __call__(self, request: PageRequest) -> Sequence[T_co]: ...


async def fetch_all(
    fetcher: PageFetcher[T],
    requested: PageRequest | Literal["all"],
    constraints: PagingConstraints | None = None,
    *,
    cancel_event: asyncio.Event | None = None,
) -> PaginationOutcome[T]:
    """Fetch a single page, or every page when ``requested`` is ``FETCH_ALL``.

    Pages are fetched sequentially. Any failure raised by ``fetcher`` aborts the
    whole call and propagates unchanged; nothing already fetched is returned.
    Duplicates across pages (the remote collection may change mid-assembly) are
    passed through as they arrive.
    """
    constraints = constraints or PagingConstraints()
    if requested == FETCH_ALL:
        return await _fetch_every_page(fetcher, constraints, cancel_event)
    if not isinstance(requested, PageRequest):
        raise TypeError(f"expected PageRequest or {FETCH_ALL!r}, got {requested!r}")
    return await _fetch_single_page(fetcher, requested, constraints, cancel_event)


def _check_cancelled(cancel_event: asyncio.Event | None, pages_fetched: int) -> None:
    if cancel_event is not None and cancel_event.is_set():
        raise OperationCancelledError(pages_fetched)


async def _fetch_single_page(
    fetcher: PageFetcher[T],
    requested: PageRequest,
    constraints: PagingConstraints,
    cancel_event: asyncio.Event | None,
) -> PaginationOutcome[T]:
    per_page = min(requested.per_page, constraints.max_page_size)
    request = requested
    if per_page != requested.per_page:
        request = PageRequest(
            page=requested.page,
            per_page=per_page,
            max_per_page=constraints.max_page_size,
        )

    limit = per_page
    cap = constraints.max_total_results
    if cap is not None:
        if request.offset >= cap:
            # Page lies entirely past the endpoint's addressable window.
            return PaginationOutcome(
                items=[], stop_reason=StopReason.TOTAL_CAP_REACHED, pages_fetched=0
            )
        limit = min(limit, cap - request.offset)

    _check_cancelled(cancel_event, 0)
    page = list(await fetcher(request))
    logger.debug("page fetched", page=request.page, per_page=request.per_page, count=len(page))

    reason = StopReason.SINGLE_PAGE
    if cap is not None and request.offset + len(page) >= cap:
        reason = StopReason.TOTAL_CAP_REACHED
    return PaginationOutcome(items=page[:limit], stop_reason=reason, pages_fetched=1)


async def _fetch_every_page(
    fetcher: PageFetcher[T],
    constraints: PagingConstraints,
    cancel_event: asyncio.Event | None,
) -> PaginationOutcome[T]:
    cap = constraints.max_total_results
    request = PageRequest(
        page=1,
        per_page=constraints.max_page_size,
        max_per_page=constraints.max_page_size,
    )
    items: list[T] = []
    pages_fetched = 0

    while True:
        _check_cancelled(cancel_event, pages_fetched)
        page = list(await fetcher(request))
        pages_fetched += 1
        logger.debug("page fetched", page=request.page, per_page=request.per_page, count=len(page))
        items.extend(page)

        if cap is not None and len(items) >= cap:
            return PaginationOutcome(
                items=items[:cap],
                stop_reason=StopReason.TOTAL_CAP_REACHED,
                pages_fetched=pages_fetched,
            )
        if len(page) < request.per_page:
            return PaginationOutcome(
                items=items,
                stop_reason=StopReason.EXHAUSTED,
                pages_fetched=pages_fetched,
            )
        request = request.next()
