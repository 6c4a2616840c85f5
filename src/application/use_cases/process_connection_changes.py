"""유즈케이스: 팔로워 변화 처리.

팔로워 목록을 비교해 새로 생기거나 사라진 계정을 골라
각 프로필을 수집한 뒤 콜라주 분석까지 수행한다.
프로필 하나가 실패해도 나머지는 계속 처리하고, 결과는 프로필별로 보고한다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from src.application.use_cases.analyze_profile import AnalyzeProfileUseCase
from src.application.use_cases.diff_followers import DiffFollowersUseCase
from src.application.use_cases.scrape_profile import ScrapeProfileUseCase
from src.domain.entities import ProfileRun
from src.domain.services.follower_diff import ConnectionDiff

logger = logging.getLogger(__name__)


@dataclass
class ConnectionChangesReport:
    diff: ConnectionDiff
    runs: list[ProfileRun] = field(default_factory=list)
    analyses: list[dict[str, Any]] = field(default_factory=list)

    @property
    def succeeded(self) -> list[dict[str, Any]]:
        return [a for a in self.analyses if a.get("ok")]

    @property
    def failed(self) -> list[dict[str, Any]]:
        return [a for a in self.analyses if not a.get("ok")]


class ProcessConnectionChangesUseCase:
    def __init__(
        self,
        diff: DiffFollowersUseCase,
        scrape: ScrapeProfileUseCase,
        analyze: AnalyzeProfileUseCase,
        max_profiles: int = 3,
    ):
        self._diff = diff
        self._scrape = scrape
        self._analyze = analyze
        self._max_profiles = max_profiles

    async def execute(
        self, pre_path: str, post_path: str, system_prompt: str, limit: int | None = None
    ) -> ConnectionChangesReport:
        diff = self._diff.execute(pre_path, post_path)
        report = ConnectionChangesReport(diff=diff)

        targets = diff.changed()[: limit if limit is not None else self._max_profiles]
        logger.info(f"[changes] 처리 대상 {len(targets)}명")

        # 수집을 모두 끝낸 뒤 분석한다
        for conn in targets:
            logger.info(f"[changes] 수집: {conn.username} ({conn.url})")
            report.runs.append(await self._scrape.execute(conn.username))

        for conn in targets:
            result = await self._analyze.execute(conn.username, system_prompt)
            report.analyses.append(result)

        logger.info(
            f"[changes] 완료: 성공 {len(report.succeeded)}, 실패 {len(report.failed)}"
        )
        return report
