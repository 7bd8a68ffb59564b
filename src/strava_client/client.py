"""StravaClient ファサード"""

from __future__ import annotations

from pathlib import Path

from .codecs import CodecRegistry
from .config import StravaClientConfig, load
from .http_client import HttpTransport
from .logger import new_logger
from .mapper import Mapper
from .services import ActivityService, AthleteService, ClubService, SegmentService


class StravaClient:
    """トランスポートとマッパーを共有する各サービスの入口。"""

    def __init__(
        self,
        config: StravaClientConfig | None = None,
        *,
        registry: CodecRegistry | None = None,
    ) -> None:
        self._config = config or StravaClientConfig()
        transport = HttpTransport(self._config.api, self._config.retry.to_retry_config())
        mapper = Mapper(registry)
        max_page_size = self._config.api.max_page_size
        self.athletes = AthleteService(transport, mapper, max_page_size)
        self.clubs = ClubService(transport, mapper, max_page_size)
        self.segments = SegmentService(transport, mapper, max_page_size)
        self.activities = ActivityService(transport, mapper, max_page_size)

    @property
    def config(self) -> StravaClientConfig:
        return self._config

    @classmethod
    def from_yaml(cls, base_path: Path, env_path: Path | None = None) -> StravaClient:
        """YAML 設定を読み込み、ロガーを設定してクライアントを生成する。"""
        config = load(base_path, env_path)
        new_logger(level=config.log.level, format=config.log.format)
        return cls(config)
