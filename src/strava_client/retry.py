"""トランスポート層のリトライ実行エンジン"""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog

from .exceptions import RetryError, TransportError

T = TypeVar("T")

logger = structlog.stdlib.get_logger(__name__)


@dataclass
class RetryConfig:
    """リトライポリシー設定。"""

    max_attempts: int = 3
    initial_delay: float = 0.5
    max_delay: float = 30.0
    multiplier: float = 2.0
    jitter: bool = True

    def compute_delay(self, attempt: int) -> float:
        """リトライ間隔を秒単位で計算する。"""
        base = self.initial_delay * (self.multiplier**attempt)
        capped = min(base, self.max_delay)
        if self.jitter:
            return capped * (0.9 + random.random() * 0.2)
        return capped


def is_retryable(error: Exception) -> bool:
    """一時的な通信エラーのみリトライ対象とする。"""
    return isinstance(error, TransportError) and error.retryable


async def with_retry(
    config: RetryConfig,
    fn: Callable[[], Awaitable[T]],
    retry_if: Callable[[Exception], bool] = is_retryable,
) -> T:
    """非同期関数をリトライ付きで実行する。

    retry_if が False を返すエラーはそのまま送出する。
    """
    last_error: Exception | None = None
    for attempt in range(config.max_attempts):
        try:
            return await fn()
        except Exception as e:
            if not retry_if(e):
                raise
            last_error = e
            if attempt + 1 < config.max_attempts:
                delay = config.compute_delay(attempt)
                logger.warning("retrying request", attempt=attempt + 1, delay=delay, error=str(e))
                await asyncio.sleep(delay)
    raise RetryError(attempts=config.max_attempts, last_error=last_error)
