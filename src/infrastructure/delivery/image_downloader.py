"""게시물 이미지 다운로더.

Playwright APIRequestContext로 내려받아 images/image_{n}.{jpg|png}로 저장한다.
이미 있는 파일은 다시 받지 않는다.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from playwright.async_api import Error as PlaywrightError

from src.infrastructure.collectors.browser_manager import BrowserManager

logger = logging.getLogger(__name__)


def image_filename(index: int, url: str) -> str:
    ext = ".png" if ".png" in url.lower() else ".jpg"
    return f"image_{index + 1}{ext}"


class PlaywrightImageDownloader:
    def __init__(self, browser: BrowserManager, delay: float = 0.2):
        self._browser = browser
        self._delay = delay

    async def download_all(self, urls: list[str], target_dir: Path) -> list[Path]:
        target_dir.mkdir(parents=True, exist_ok=True)
        saved: list[Path] = []
        request = await self._browser.new_request_context()
        try:
            for i, url in enumerate(urls):
                path = target_dir / image_filename(i, url)
                if path.exists():
                    logger.debug(f"[download] 이미 있음: {path.name}")
                    saved.append(path)
                    continue

                logger.info(f"[download {i + 1}/{len(urls)}] {path.name}")
                try:
                    response = await request.get(url)
                    if not response.ok:
                        logger.warning(f"[download] {response.status} {url[:120]}")
                        continue
                    path.write_bytes(await response.body())
                    saved.append(path)
                except PlaywrightError as e:
                    logger.warning(f"[download] 실패 {url[:120]}: {e}")
                await asyncio.sleep(self._delay)
        finally:
            await request.dispose()
        return saved
