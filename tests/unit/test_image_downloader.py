"""Tests for src.infrastructure.delivery.image_downloader: mocked request context."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

from playwright.async_api import Error as PlaywrightError

from src.infrastructure.delivery.image_downloader import PlaywrightImageDownloader, image_filename


def _http(ok=True, status=200, body=b"img") -> MagicMock:
    resp = MagicMock()
    resp.ok = ok
    resp.status = status
    resp.body = AsyncMock(return_value=body)
    return resp


def _browser(request) -> MagicMock:
    browser = MagicMock()
    browser.new_request_context = AsyncMock(return_value=request)
    return browser


class TestImageFilename:
    def test_extension_from_url(self):
        assert image_filename(0, "https://cdn/a.jpg?x=1") == "image_1.jpg"
        assert image_filename(2, "https://cdn/a.PNG") == "image_3.png"
        assert image_filename(1, "https://cdn/a") == "image_2.jpg"


class TestPlaywrightImageDownloader:
    def test_downloads_and_skips_failures(self, tmp_path: Path):
        request = MagicMock()
        request.get = AsyncMock(
            side_effect=[_http(body=b"one"), _http(ok=False, status=403), PlaywrightError("timeout")]
        )
        request.dispose = AsyncMock()
        downloader = PlaywrightImageDownloader(_browser(request), delay=0)

        urls = ["https://cdn/1.jpg", "https://cdn/2.jpg", "https://cdn/3.png"]
        saved = asyncio.run(downloader.download_all(urls, tmp_path / "images"))

        assert saved == [tmp_path / "images" / "image_1.jpg"]
        assert saved[0].read_bytes() == b"one"
        request.dispose.assert_awaited_once()

    def test_existing_file_is_not_downloaded_again(self, tmp_path: Path):
        images = tmp_path / "images"
        images.mkdir()
        (images / "image_1.jpg").write_bytes(b"cached")
        request = MagicMock()
        request.get = AsyncMock(return_value=_http())
        request.dispose = AsyncMock()
        downloader = PlaywrightImageDownloader(_browser(request), delay=0)

        saved = asyncio.run(downloader.download_all(["https://cdn/1.jpg"], images))

        assert saved == [images / "image_1.jpg"]
        request.get.assert_not_called()
