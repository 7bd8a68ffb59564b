"""リソース別サービス (athlete / club / segment / activity)

各一覧メソッドは 1 ページ分を取得するクロージャ (PageFetcher) を組み立て、
ページ組み立ては paging.fetch_all に委譲する。

paging を省略すると全件モード (エンドポイントの総件数上限まで)、
PageRequest を渡すと指定ページのみを取得する。
親リソース (club / athlete) が存在しない場合は例外ではなく None を返す。
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import structlog

from .exceptions import NotFoundError
from .http_client import HttpTransport
from .mapper import Mapper
from .models import (
    Activity,
    Athlete,
    Club,
    Leaderboard,
    LeaderboardDateRange,
    LeaderboardEntry,
    Segment,
    SegmentEffort,
)
from .paging import (
    DEFAULT_MAX_PER_PAGE,
    FETCH_ALL,
    PageRequest,
    PagingConstraints,
    fetch_all,
)

T = TypeVar("T")

logger = structlog.stdlib.get_logger(__name__)

# Strava は直近 200 件までしかクラブのアクティビティを返さない。
RECENT_CLUB_ACTIVITIES_CAP = 200


class _BaseService:
    def __init__(
        self,
        transport: HttpTransport,
        mapper: Mapper | None = None,
        max_page_size: int = DEFAULT_MAX_PER_PAGE,
    ) -> None:
        self._transport = transport
        self._mapper = mapper or Mapper()
        self._max_page_size = max_page_size

    async def _get(self, cls: type[T], path: str) -> T | None:
        """単一リソースを取得する。存在しなければ None。"""
        try:
            data = await self._transport.get_json(path)
        except NotFoundError:
            logger.info("resource not found", path=path)
            return None
        return self._mapper.decode(cls, data)

    async def _assemble(
        self,
        cls: type[T],
        path: str,
        paging: PageRequest | None,
        *,
        max_total_results: int | None = None,
        params: dict[str, Any] | None = None,
        decode_page: Callable[[Any], list[T]] | None = None,
    ) -> list[T]:
        decode = decode_page or (lambda data: self._mapper.decode_list(cls, data))
        extra = dict(params or {})

        async def fetch_page(request: PageRequest) -> list[T]:
            data = await self._transport.get_json(path, params={**extra, **request.to_params()})
            return decode(data)

        constraints = PagingConstraints(
            max_page_size=self._max_page_size,
            max_total_results=max_total_results,
        )
        outcome = await fetch_all(fetch_page, paging or FETCH_ALL, constraints)
        return outcome.items

    async def _list(
        self,
        cls: type[T],
        path: str,
        paging: PageRequest | None,
        **kwargs: Any,
    ) -> list[T] | None:
        """親リソース配下の一覧を取得する。親が存在しなければ None。"""
        try:
            return await self._assemble(cls, path, paging, **kwargs)
        except NotFoundError:
            logger.info("parent resource not found", path=path)
            return None


class AthleteService(_BaseService):
    """アスリート関連サービス。"""

    async def get_authenticated_athlete(self) -> Athlete:
        """認証済みアスリートの詳細を取得する。"""
        data = await self._transport.get_json("/athlete")
        return self._mapper.decode(Athlete, data)

    async def get_athlete(self, athlete_id: int) -> Athlete | None:
        return await self._get(Athlete, f"/athletes/{athlete_id}")

    async def update_authenticated_athlete(
        self,
        *,
        city: str | None = None,
        state: str | None = None,
        country: str | None = None,
        sex: str | None = None,
        weight: float | None = None,
    ) -> Athlete | None:
        """認証済みアスリートのプロフィールを更新する。write 権限が必要。

        None の項目は送信しない。更新後の詳細表現を返す。
        """
        fields = {"city": city, "state": state, "country": country, "sex": sex, "weight": weight}
        params = {key: value for key, value in fields.items() if value is not None}
        try:
            data = await self._transport.put("/athlete", params=params)
        except NotFoundError:
            logger.info("resource not found", path="/athlete")
            return None
        return self._mapper.decode(Athlete, data)

    async def list_athlete_koms(
        self, athlete_id: int, paging: PageRequest | None = None
    ) -> list[SegmentEffort] | None:
        """アスリートが保持する KOM/QOM・コースレコードを新しい順に返す。"""
        return await self._list(SegmentEffort, f"/athletes/{athlete_id}/koms", paging)

    async def list_authenticated_athlete_friends(
        self, paging: PageRequest | None = None
    ) -> list[Athlete]:
        """認証済みアスリートがフォローしているアスリートを返す。"""
        return await self._assemble(Athlete, "/athlete/friends", paging)

    async def list_athlete_friends(
        self, athlete_id: int, paging: PageRequest | None = None
    ) -> list[Athlete] | None:
        """指定アスリートのフレンド。ブロックされている場合は空リスト。"""
        return await self._list(Athlete, f"/athletes/{athlete_id}/friends", paging)

    async def list_athletes_both_following(
        self, athlete_id: int, paging: PageRequest | None = None
    ) -> list[Athlete] | None:
        """認証済みアスリートと指定アスリートの双方がフォローしているアスリート。"""
        return await self._list(Athlete, f"/athletes/{athlete_id}/both-following", paging)


class ClubService(_BaseService):
    """クラブ関連サービス。非公開クラブはメンバーのみ参照できる。"""

    async def get_club(self, club_id: int) -> Club | None:
        return await self._get(Club, f"/clubs/{club_id}")

    async def list_authenticated_athlete_clubs(self) -> list[Club]:
        data = await self._transport.get_json("/athlete/clubs")
        return self._mapper.decode_list(Club, data)

    async def list_club_members(
        self, club_id: int, paging: PageRequest | None = None
    ) -> list[Athlete] | None:
        return await self._list(Athlete, f"/clubs/{club_id}/members", paging)

    async def list_recent_club_activities(
        self, club_id: int, paging: PageRequest | None = None
    ) -> list[Activity] | None:
        """クラブメンバーの最近のアクティビティ (直近 200 件まで)。"""
        return await self._list(
            Activity,
            f"/clubs/{club_id}/activities",
            paging,
            max_total_results=RECENT_CLUB_ACTIVITIES_CAP,
        )

    async def join_club(self, club_id: int) -> None:
        """クラブに参加する。write 権限が必要。"""
        await self._transport.post(f"/clubs/{club_id}/join")

    async def leave_club(self, club_id: int) -> None:
        """クラブから脱退する。write 権限が必要。"""
        await self._transport.post(f"/clubs/{club_id}/leave")


class SegmentService(_BaseService):
    """セグメント関連サービス。"""

    async def get_segment(self, segment_id: int) -> Segment | None:
        return await self._get(Segment, f"/segments/{segment_id}")

    async def list_starred_segments(self, paging: PageRequest | None = None) -> list[Segment]:
        return await self._assemble(Segment, "/segments/starred", paging)

    async def list_segment_leaderboard(
        self,
        segment_id: int,
        *,
        date_range: LeaderboardDateRange | None = None,
        club_id: int | None = None,
        following: bool | None = None,
        paging: PageRequest | None = None,
    ) -> list[LeaderboardEntry] | None:
        """セグメントのリーダーボードを順位順に返す。"""
        params: dict[str, Any] = {}
        if date_range is not None:
            params["date_range"] = self._mapper.registry.encode(date_range)
        if club_id is not None:
            params["club_id"] = club_id
        if following is not None:
            params["following"] = str(following).lower()

        def entries(data: Any) -> list[LeaderboardEntry]:
            return self._mapper.decode(Leaderboard, data).entries

        return await self._list(
            LeaderboardEntry,
            f"/segments/{segment_id}/leaderboard",
            paging,
            params=params,
            decode_page=entries,
        )


class ActivityService(_BaseService):
    """アクティビティ関連サービス。"""

    async def get_activity(self, activity_id: int) -> Activity | None:
        return await self._get(Activity, f"/activities/{activity_id}")

    async def list_authenticated_athlete_activities(
        self, paging: PageRequest | None = None
    ) -> list[Activity]:
        return await self._assemble(Activity, "/athlete/activities", paging)
