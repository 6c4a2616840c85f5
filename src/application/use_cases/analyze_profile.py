"""유즈케이스: 프로필 콜라주 분석.

저장된 게시물에서 이미지 URL을 모아 내려받고, 콜라주를 만든 뒤 비전 모델로 분석한다.
실패해도 예외 대신 ok=False 결과를 돌려준다.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

from src.domain.exceptions import DomainError
from src.domain.repositories.profile_repository import ProfileRepository
from src.domain.services.analysis import CollageRenderer, ImageDownloader, VisionAnalyzer
from src.domain.services.media_urls import collect_image_urls

logger = logging.getLogger(__name__)

SCREENSHOT_FILE = "profile_screenshot.png"
COLLAGE_FILE = "profile_collage.jpg"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def failure_result(username: str, error: str) -> dict[str, Any]:
    return {"user_name": username, "ok": False, "error": error, "timestamp": _now()}


class AnalyzeProfileUseCase:
    def __init__(
        self,
        repo: ProfileRepository,
        downloader: ImageDownloader,
        renderer: CollageRenderer,
        analyzer: VisionAnalyzer,
    ):
        self._repo = repo
        self._downloader = downloader
        self._renderer = renderer
        self._analyzer = analyzer

    async def execute(self, username: str, system_prompt: str) -> dict[str, Any]:
        logger.info(f"[analyze] {username}: 분석 시작")
        user_dir = self._repo.user_dir(username)
        try:
            posts = await self._repo.load_posts(username)
            urls = collect_image_urls(posts)
            image_paths = await self._downloader.download_all(urls, self._repo.images_dir(username))
            logger.info(f"[analyze] {username}: 이미지 {len(image_paths)}/{len(urls)}장")
            if not image_paths:
                return failure_result(username, "No images found")

            screenshot = user_dir / SCREENSHOT_FILE
            collage_path = await asyncio.to_thread(
                self._renderer.render,
                username,
                image_paths,
                user_dir / COLLAGE_FILE,
                screenshot if screenshot.exists() else None,
            )

            prompt = f"{system_prompt}\n\nProfile being analyzed: @{username}"
            analysis = await self._analyzer.analyze_image(collage_path, prompt)

        except DomainError as e:
            logger.error(f"[analyze] {username}: {e}")
            return failure_result(username, str(e))
        except Exception as e:
            logger.error(f"[analyze] {username}: 예기치 않은 오류: {e}")
            return failure_result(username, str(e))

        return {
            "user_name": username,
            "ok": True,
            "collage_path": str(collage_path),
            "profile_screenshot": str(screenshot) if screenshot.exists() else None,
            "post_images_count": len(image_paths),
            "analysis": analysis,
            "timestamp": _now(),
        }
