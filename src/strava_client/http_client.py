"""Strava API HTTP トランスポート実装"""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from .config import ApiSection
from .exceptions import (
    NotFoundError,
    StravaClientError,
    TransportError,
    UnauthorizedError,
)
from .retry import RetryConfig, with_retry

logger = structlog.stdlib.get_logger(__name__)


class HttpTransport:
    """httpx を使った Strava API HTTP トランスポート。

    認証ヘッダー付与・ステータスコードのエラー変換・一時エラーのリトライを担う。
    ページングやレスポンスのデコードには関与しない。
    """

    def __init__(self, config: ApiSection, retry: RetryConfig | None = None) -> None:
        self._config = config
        self._retry = retry or RetryConfig()
        headers: dict[str, str] = {"Accept": "application/json"}
        if config.access_token:
            headers["Authorization"] = f"Bearer {config.access_token}"
        self._headers = headers

    def _make_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._headers,
            timeout=self._config.timeout_seconds,
        )

    def _handle_error(self, resp: httpx.Response, context: str) -> None:
        status = resp.status_code
        if status in (401, 403):
            raise UnauthorizedError(f"{context}: HTTP {status}: {resp.text}")
        if status == 404:
            raise NotFoundError(f"{context}: resource not found")
        if status == 429 or status >= 500:
            raise TransportError(
                f"{context}: HTTP {status}: {resp.text}",
                retryable=True,
                status_code=status,
            )
        if status >= 400:
            raise TransportError(
                f"{context}: HTTP {status}: {resp.text}",
                status_code=status,
            )

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        context = f"{method} {path}"
        try:
            async with self._make_client() as client:
                resp = await client.request(method, path, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"{context}: {e}", retryable=True, cause=e) from e
        self._handle_error(resp, context)
        return resp

    async def request_json(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """リクエストを送信し、JSON ボディを返す。ボディが空なら None。"""

        async def attempt() -> Any:
            resp = await self._send(method, path, params)
            if not resp.content:
                return None
            try:
                return resp.json()
            except ValueError as e:
                raise TransportError(f"{method} {path}: invalid JSON body", cause=e) from e

        try:
            return await with_retry(self._retry, attempt)
        except StravaClientError:
            raise
        except Exception as e:
            raise TransportError(f"{method} {path}: {e}", cause=e) from e

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request_json("GET", path, params)

    async def post(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request_json("POST", path, params)

    async def put(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request_json("PUT", path, params)
