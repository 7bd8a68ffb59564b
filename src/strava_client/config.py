"""クライアント設定 (pydantic BaseModel) と YAML ローダー"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from .exceptions import StravaClientError
from .paging import DEFAULT_MAX_PER_PAGE
from .retry import RetryConfig


class ConfigErrorCodes:
    """ConfigError のエラーコード定数。"""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"


class ConfigError(StravaClientError):
    """設定ファイルの読み込み・検証エラー。"""


class ApiSection(BaseModel):
    """Strava API 接続設定。"""

    base_url: str = "https://www.strava.com/api/v3"
    access_token: str = ""
    timeout_seconds: float = Field(default=30.0, gt=0)
    max_page_size: int = Field(default=DEFAULT_MAX_PER_PAGE, ge=1)


class RetrySection(BaseModel):
    """トランスポート層のリトライ設定。"""

    max_attempts: int = Field(default=3, ge=1, le=10)
    initial_delay: float = Field(default=0.5, ge=0.0)
    max_delay: float = Field(default=30.0, ge=0.0)
    multiplier: float = Field(default=2.0, ge=1.0)
    jitter: bool = True

    def to_retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.max_attempts,
            initial_delay=self.initial_delay,
            max_delay=self.max_delay,
            multiplier=self.multiplier,
            jitter=self.jitter,
        )


class LogSection(BaseModel):
    """ログ設定。"""

    level: str = "INFO"
    format: Literal["json", "text"] = "json"


class StravaClientConfig(BaseModel):
    """クライアント設定全体。"""

    api: ApiSection = Field(default_factory=ApiSection)
    retry: RetrySection = Field(default_factory=RetrySection)
    log: LogSection = Field(default_factory=LogSection)


# 環境変数で上書きできる項目。トークンを YAML に書かずに済むようにする。
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "STRAVA_ACCESS_TOKEN": ("api", "access_token"),
    "STRAVA_API_BASE_URL": ("api", "base_url"),
    "STRAVA_LOG_LEVEL": ("log", "level"),
}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """override を優先して再帰的にマージした新しい辞書を返す。"""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"cannot read config file {path}",
            cause=e,
        ) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"invalid YAML in {path}",
            cause=e,
        ) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"top level of {path} must be a mapping",
        )
    return data


def _env_overlay(environ: Mapping[str, str]) -> dict[str, Any]:
    overlay: dict[str, Any] = {}
    for name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(name)
        if value:
            overlay.setdefault(section, {})[key] = value
    return overlay


def load(
    base_path: Path,
    env_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> StravaClientConfig:
    """クライアント設定を読み込む。

    優先順位は 環境変数 > env_path > base_path。
    env_path は存在しなければ無視する。environ を省略すると os.environ を参照する。
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = deep_merge(data, _read_yaml(env_path))
    data = deep_merge(data, _env_overlay(os.environ if environ is None else environ))
    try:
        return StravaClientConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"invalid client config: {e}",
            cause=e,
        ) from e
