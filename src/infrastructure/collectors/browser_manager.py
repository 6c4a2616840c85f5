"""Playwright 브라우저 세션 관리자.

프로필 수집기와 이미지 다운로더가 공유하는 브라우저 인스턴스와
persistent context(로그인 세션)를 관리한다.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import (
    APIRequestContext,
    Browser,
    BrowserContext,
    Playwright,
    async_playwright,
)

from src.infrastructure.config.settings import ScraperConfig

logger = logging.getLogger(__name__)

PLATFORM = "instagram"


class BrowserManager:
    """Playwright 브라우저 생명주기 및 세션 관리."""

    def __init__(self, config: ScraperConfig):
        self._config = config
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._profile_dir = Path(config.profile_dir)

    @property
    def storage_path(self) -> Path:
        return self._profile_dir / f"{PLATFORM}_profile" / "state.json"

    async def initialize(self, headless: Optional[bool] = None) -> None:
        """Playwright 브라우저를 시작한다. 이미 시작했으면 무시."""
        if self._browser is not None:
            return
        self._playwright = await async_playwright().start()
        self._browser = await self._playwright.chromium.launch(
            headless=self._config.headless if headless is None else headless,
            args=[
                "--disable-notifications",
                "--disable-blink-features=AutomationControlled",
                "--no-first-run",
                "--no-default-browser-check",
            ],
        )
        logger.info("Playwright 브라우저 초기화 완료")

    async def get_context(self) -> BrowserContext:
        """browser context를 가져온다. 세션이 저장되어 있으면 복원."""
        if self._context is not None:
            return self._context

        await self.initialize()
        storage_state = str(self.storage_path) if self.storage_path.exists() else None

        self._context = await self._browser.new_context(
            storage_state=storage_state,
            viewport={
                "width": self._config.viewport_width,
                "height": self._config.viewport_height,
            },
            user_agent=self._config.user_agent,
            locale=self._config.locale,
        )
        self._context.set_default_navigation_timeout(self._config.navigation_timeout_ms)

        if storage_state:
            logger.info(f"[{PLATFORM}] 기존 세션 복원됨")
        else:
            logger.info(f"[{PLATFORM}] 새 세션 (로그인 화면이 뜨면 login 명령으로 수동 로그인)")

        return self._context

    async def new_request_context(self) -> APIRequestContext:
        """이미지 다운로드용 HTTP 요청 컨텍스트."""
        await self.initialize()
        return await self._playwright.request.new_context(user_agent=self._config.user_agent)

    async def save_state(self) -> None:
        """현재 세션(쿠키, localStorage)을 파일에 저장."""
        if self._context is None:
            return

        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        await self._context.storage_state(path=str(self.storage_path))
        logger.debug(f"[{PLATFORM}] 세션 저장됨 → {self.storage_path}")

    async def manual_login(self, url: str) -> None:
        """수동 로그인을 위해 브라우저 페이지를 열고 로그인 완료를 대기.

        headed 모드에서 실행. 사용자가 로그인 후 콘솔에서 Enter를 누르면 세션 저장.
        """
        await self.initialize(headless=False)
        context = await self.get_context()
        page = await context.new_page()
        await page.goto(url)

        logger.info(f"[{PLATFORM}] 브라우저에서 수동 로그인을 진행하세요.")
        logger.info(f"[{PLATFORM}] 로그인 완료 후 이 터미널에서 Enter를 누르세요...")

        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, input)

        await self.save_state()
        await page.close()
        logger.info(f"[{PLATFORM}] 로그인 세션 저장 완료")

    async def close(self) -> None:
        """context와 브라우저를 종료."""
        if self._context is not None:
            try:
                await self.save_state()
                await self._context.close()
            except Exception as e:
                logger.warning(f"[{PLATFORM}] context 종료 중 오류: {e}")
            self._context = None

        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

        logger.info("Playwright 브라우저 종료 완료")
