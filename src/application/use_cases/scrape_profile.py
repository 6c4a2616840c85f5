"""유즈케이스: 프로필 수집.

수집기(ProfileScraper)를 실행하고 결과를 저장한다.
피드 수집 직후와 캐러셀 병합 후 두 번, 게시물 목록을 통째로 저장한다.
로그인 화면이나 수집 실패가 나도 (빈/부분) 결과는 항상 저장된다.
"""

from __future__ import annotations

import logging
from datetime import datetime

from src.domain.entities import ProfileCapture, ProfileRun
from src.domain.exceptions import LoginWallError
from src.domain.repositories.profile_repository import ProfileRepository
from src.domain.services.scraper import ProfileScraper

logger = logging.getLogger(__name__)


class ScrapeProfileUseCase:
    """프로필 한 개에 대해 수집 사이클을 실행하는 유즈케이스."""

    def __init__(self, scraper: ProfileScraper, repo: ProfileRepository):
        self._scraper = scraper
        self._repo = repo

    async def execute(self, username: str) -> ProfileRun:
        run = ProfileRun(username=username)
        persisted = False

        async def checkpoint(capture: ProfileCapture) -> None:
            nonlocal persisted
            await self._repo.save_posts(username, capture.posts)
            await self._repo.save_highlights(username, capture.highlights)
            persisted = True

        try:
            capture = await self._scraper.scrape(username, checkpoint)

            run.status = "success"
            run.posts_collected = len(capture.posts)
            run.highlights_collected = len(capture.highlights)
            run.carousels_attached = sum(1 for p in capture.posts if p.carousel)
            logger.info(
                f"[{username}] 수집 완료: 게시물 {run.posts_collected}건, "
                f"하이라이트 {run.highlights_collected}건, 캐러셀 {run.carousels_attached}건"
            )

        except LoginWallError as e:
            run.status = "failed"
            run.error_message = "login wall"
            logger.warning(f"[{username}] {e}")

        except Exception as e:
            run.status = "failed"
            run.error_message = str(e)[:500]
            logger.error(f"[{username}] 수집 실패: {e}")

        if not persisted:
            await self._repo.save_posts(username, [])

        run.completed_at = datetime.utcnow()
        return run
