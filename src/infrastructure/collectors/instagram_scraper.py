"""Instagram 프로필 수집기.

Playwright 페이지의 응답을 관찰(ResponseSniffer)하여 피드/하이라이트를 캡처하고,
게시물마다 상세 페이지를 열어 캐러셀 슬라이드를 병합한다.
인터셉트가 비면 DOM 폴백으로 슬라이드를 만든다.

게시물은 한 번에 하나씩 순차로 처리한다 (자동화 탐지 회피).
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from src.domain.entities import CarouselSlide, PostRecord, ProfileCapture
from src.domain.exceptions import LoginWallError
from src.domain.services.carousel_merge import CarouselMergeEngine
from src.domain.services.media_urls import post_url
from src.domain.services.scraper import CaptureCheckpoint
from src.domain.value_objects.topic import Topic
from src.infrastructure.collectors.browser_manager import BrowserManager
from src.infrastructure.collectors.dom_fallback import extract_dom_slides
from src.infrastructure.config.settings import ScraperConfig
from src.infrastructure.sniffer.channel import CaptureChannel
from src.infrastructure.sniffer.pipeline import ResponseSniffer

logger = logging.getLogger(__name__)

LOGIN_WALL_SELECTOR = 'input[name="username"]'

# 스니퍼가 볼 수 있도록 페이지 안에서 상세 요청을 직접 보낸다 (실패는 무시)
DETAIL_FETCH_SCRIPT = """
(shortcode) => {
  const detail = `/api/v1/media/shortcode/${shortcode}/?children=true`;
  return fetch(detail, { credentials: "include" }).then(() => true).catch(() => false);
}
"""


class InstagramProfileScraper:
    """프로필 한 개의 피드 + 하이라이트 + 게시물별 캐러셀 수집기."""

    def __init__(
        self,
        browser: BrowserManager,
        config: ScraperConfig,
        screenshot_dir: Optional[Path] = None,
    ):
        self._browser = browser
        self._config = config
        self._screenshot_dir = Path(screenshot_dir or config.output_dir)

    def profile_url(self, username: str) -> str:
        return f"{self._config.base_url.rstrip('/')}/{username}/"

    async def scrape(
        self, username: str, checkpoint: Optional[CaptureCheckpoint] = None
    ) -> ProfileCapture:
        context = await self._browser.get_context()
        page = await context.new_page()
        sniffer = ResponseSniffer(CaptureChannel())
        sniffer.attach(page)

        try:
            capture = await self._capture_profile(page, sniffer.channel, username)
            if checkpoint:
                await checkpoint(capture)

            capture.posts = await self._merge_carousels(page, sniffer.channel, capture.posts)
            if checkpoint:
                await checkpoint(capture)

            logger.info(f"[{username}] 수집 완료: 게시물 {len(capture.posts)}건")
            return capture
        finally:
            await page.close()

    # ─── 피드 단계 ───

    async def _capture_profile(
        self, page: Page, channel: CaptureChannel, username: str
    ) -> ProfileCapture:
        url = self.profile_url(username)
        logger.info(f"[{username}] 프로필 이동: {url}")
        await page.goto(url, wait_until="networkidle", timeout=self._config.navigation_timeout_ms)
        if await self._is_login_wall(page):
            raise LoginWallError(username)

        await asyncio.sleep(self._config.settle_seconds)
        screenshot_path = await self._take_screenshot(page, username)

        await page.evaluate(f"window.scrollBy(0, {int(self._config.scroll_px)})")
        await asyncio.sleep(self._config.load_delay_ms / 1000)

        interval = self._config.poll_interval
        posts = await channel.wait_for(Topic.PROFILE_POSTS, self._config.feed_timeout, interval)
        logger.info(f"[{username}] profile_posts: {len(posts or [])}건")
        highlights = await channel.wait_for(
            Topic.HIGHLIGHTS, self._config.highlights_timeout, interval
        )
        logger.info(f"[{username}] highlights: {len(highlights or [])}건")

        return ProfileCapture(
            username=username,
            posts=list(posts or []),
            highlights=list(highlights or []),
            screenshot_path=str(screenshot_path) if screenshot_path else None,
        )

    async def _take_screenshot(self, page: Page, username: str) -> Optional[Path]:
        if not self._config.take_screenshot:
            return None
        user_dir = self._screenshot_dir / username
        user_dir.mkdir(parents=True, exist_ok=True)
        path = user_dir / "profile_screenshot.png"
        try:
            await page.screenshot(path=str(path), full_page=False)
        except PlaywrightError as e:
            logger.warning(f"[{username}] 스크린샷 실패: {e}")
            return None
        logger.debug(f"[{username}] 스크린샷 저장: {path}")
        return path

    # ─── 상세(캐러셀) 단계 ───

    async def _merge_carousels(
        self, page: Page, channel: CaptureChannel, posts: list[PostRecord]
    ) -> list[PostRecord]:
        engine = CarouselMergeEngine(posts)
        targets = engine.targets()
        logger.info(f"[carousel] 대상 게시물 {len(targets)}건")

        for post in targets:
            slides = await self._capture_carousel(page, channel, post)
            if slides is None:
                continue
            engine.attach(post.shortcode, slides)
            logger.info(f"[carousel] {post.shortcode}: 슬라이드 {len(slides)}개")

        return engine.posts

    async def _capture_carousel(
        self, page: Page, channel: CaptureChannel, post: PostRecord
    ) -> Optional[list[CarouselSlide]]:
        """게시물 하나의 슬라이드. 로그인 화면/이동 실패면 None (이 게시물만 건너뜀)."""
        code = post.shortcode
        channel.reset(Topic.POST_CAROUSEL)

        target = post_url(post, self._config.base_url)
        try:
            await page.goto(
                target, wait_until="networkidle", timeout=self._config.navigation_timeout_ms
            )
        except PlaywrightError as e:
            logger.warning(f"[carousel] {code}: 이동 실패, 건너뜀 ({e})")
            return None

        await asyncio.sleep(self._config.detail_settle_seconds)
        try:
            login_wall = await self._is_login_wall(page)
        except PlaywrightError as e:
            logger.warning(f"[carousel] {code}: 페이지 확인 실패, 건너뜀 ({e})")
            return None
        if login_wall:
            logger.warning(f"[carousel] {code}: 로그인 화면, 건너뜀")
            return None

        await self._trigger_detail_fetch(page, code)

        # 채널은 페이지 이동 후에도 남으므로 이전 게시물의 늦은 응답이 섞일 수 있다
        def same_post(found: list[CarouselSlide]) -> bool:
            owner = found[0].shortcode
            if owner and owner != code:
                logger.debug(f"[carousel] {code}: 다른 게시물({owner}) 슬라이드 무시")
                return False
            return True

        slides = await channel.wait_for(
            Topic.POST_CAROUSEL,
            self._config.carousel_timeout,
            self._config.poll_interval,
            accept=same_post,
        )
        if slides:
            return list(slides)

        logger.debug(f"[carousel] {code}: 인터셉트 없음, DOM 폴백")
        return await extract_dom_slides(page)

    async def _trigger_detail_fetch(self, page: Page, shortcode: str) -> None:
        try:
            await page.evaluate(DETAIL_FETCH_SCRIPT, shortcode)
        except PlaywrightError as e:
            logger.debug(f"[carousel] {shortcode}: 상세 요청 실패 (무시): {e}")

    async def _is_login_wall(self, page: Page) -> bool:
        return await page.query_selector(LOGIN_WALL_SELECTOR) is not None
