"""retry モジュールのユニットテスト"""

import pytest

from strava_client import (
    NotFoundError,
    RetryConfig,
    RetryError,
    TransportError,
    with_retry,
)


def test_default_config() -> None:
    """デフォルト設定の確認。"""
    cfg = RetryConfig()
    assert cfg.max_attempts == 3
    assert cfg.initial_delay == 0.5
    assert cfg.max_delay == 30.0
    assert cfg.multiplier == 2.0
    assert cfg.jitter is True


def test_compute_delay_no_jitter() -> None:
    """ジッターなしの遅延計算。"""
    cfg = RetryConfig(initial_delay=0.1, multiplier=2.0, max_delay=30.0, jitter=False)
    assert cfg.compute_delay(0) == pytest.approx(0.1)
    assert cfg.compute_delay(1) == pytest.approx(0.2)
    assert cfg.compute_delay(2) == pytest.approx(0.4)


def test_compute_delay_capped() -> None:
    """遅延が max_delay で頭打ちになること。"""
    cfg = RetryConfig(initial_delay=10.0, multiplier=10.0, max_delay=30.0, jitter=False)
    assert cfg.compute_delay(5) == pytest.approx(30.0)


def test_compute_delay_with_jitter() -> None:
    """ジッター付きの遅延が許容範囲内であること。"""
    cfg = RetryConfig(initial_delay=1.0, multiplier=1.0, max_delay=30.0, jitter=True)
    for _ in range(50):
        delay = cfg.compute_delay(0)
        assert 0.9 <= delay <= 1.1


async def test_with_retry_success_after_transient_failures() -> None:
    """一時エラーの後に成功する場合。"""
    call_count = 0

    async def flaky():
        nonlocal call_count
        call_count += 1
        if call_count < 3:
            raise TransportError("HTTP 503", retryable=True, status_code=503)
        return "done"

    cfg = RetryConfig(max_attempts=5, initial_delay=0.0, jitter=False)
    result = await with_retry(cfg, flaky)
    assert result == "done"
    assert call_count == 3


async def test_with_retry_exhausted() -> None:
    """全リトライ失敗で RetryError。最後のエラーを保持すること。"""
    call_count = 0

    async def always_fails():
        nonlocal call_count
        call_count += 1
        raise TransportError("timeout", retryable=True)

    cfg = RetryConfig(max_attempts=3, initial_delay=0.0, jitter=False)
    with pytest.raises(RetryError) as exc_info:
        await with_retry(cfg, always_fails)
    assert call_count == 3
    assert exc_info.value.attempts == 3
    assert isinstance(exc_info.value.last_error, TransportError)
    assert exc_info.value.__cause__ is exc_info.value.last_error


async def test_with_retry_non_retryable_raised_immediately() -> None:
    """リトライ対象外のエラーは 1 回目でそのまま送出されること。"""
    call_count = 0

    async def not_found():
        nonlocal call_count
        call_count += 1
        raise NotFoundError("missing")

    cfg = RetryConfig(max_attempts=3, initial_delay=0.0, jitter=False)
    with pytest.raises(NotFoundError):
        await with_retry(cfg, not_found)
    assert call_count == 1


async def test_with_retry_custom_predicate() -> None:
    """retry_if で任意の例外をリトライ対象にできること。"""
    call_count = 0

    async def fails_once():
        nonlocal call_count
        call_count += 1
        if call_count == 1:
            raise ValueError("once")
        return 42

    cfg = RetryConfig(max_attempts=2, initial_delay=0.0, jitter=False)
    result = await with_retry(cfg, fails_once, retry_if=lambda e: isinstance(e, ValueError))
    assert result == 42
