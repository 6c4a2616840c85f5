"""유즈케이스: 사용자 정보 조회.

저장된 분석 결과가 있으면 그대로 돌려주고, 없으면 수집 → 분석 후 저장한다.
실패 결과도 저장된다.
"""

from __future__ import annotations

import logging
from typing import Any

from src.application.use_cases.analyze_profile import AnalyzeProfileUseCase, failure_result
from src.application.use_cases.scrape_profile import ScrapeProfileUseCase
from src.domain.repositories.profile_repository import ProfileRepository

logger = logging.getLogger(__name__)


class GetUserInfoUseCase:
    def __init__(
        self,
        repo: ProfileRepository,
        scrape: ScrapeProfileUseCase,
        analyze: AnalyzeProfileUseCase,
    ):
        self._repo = repo
        self._scrape = scrape
        self._analyze = analyze

    async def execute(self, username: str, system_prompt: str) -> dict[str, Any]:
        cached = await self._repo.load_analysis(username)
        if cached is not None:
            logger.info(f"[user-info] {username}: 저장된 분석 사용")
            return cached

        run = await self._scrape.execute(username)
        if run.ok:
            result = await self._analyze.execute(username, system_prompt)
        else:
            result = failure_result(username, run.error_message or "scrape failed")

        path = await self._repo.save_analysis(username, result)
        logger.info(f"[user-info] {username}: 분석 저장 → {path}")
        return result
