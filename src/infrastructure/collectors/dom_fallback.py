"""DOM 폴백 추출기.

게시물 상세 페이지에서 인터셉트 결과가 없을 때만 사용한다.
렌더링된 메타 태그(og:image/og:video), JSON-LD 블록, <video> 요소에서
후보 URL을 모아 슬라이드 하나(index 0)를 만든다. 인터셉트 결과보다 정확도가 낮다.
"""

from __future__ import annotations

import logging
from typing import Any

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from src.domain.entities import CarouselSlide, ImageCandidate, VideoCandidate
from src.infrastructure.sniffer.normalizer import best_image, coerce_int, uniq_by_url

logger = logging.getLogger(__name__)

# 페이지 컨텍스트에서 원시 후보만 모은다. 후보 정리는 파이썬 쪽에서 한다.
DOM_PROBE_SCRIPT = """
() => {
  const qs = sel => Array.from(document.querySelectorAll(sel));
  const meta = prop => {
    const el = document.querySelector(`meta[property="${prop}"]`);
    return el ? el.content : null;
  };
  const ld = qs('script[type="application/ld+json"]').flatMap(s => {
    try { return [JSON.parse(s.textContent.trim())]; } catch (e) { return []; }
  });
  const videos = qs('video').flatMap(v => {
    const own = v.currentSrc || v.src || null;
    const sources = Array.from(v.querySelectorAll('source')).map(s => s.src).filter(Boolean);
    return [own, ...sources].filter(Boolean);
  });
  return {
    pathname: location.pathname,
    og_images: qs('meta[property="og:image"]').map(m => m.content).filter(Boolean),
    og_video: meta('og:video:secure_url') || meta('og:video'),
    ld_json: ld,
    video_sources: videos,
  };
}
"""


def _ld_images(value: Any) -> list[ImageCandidate]:
    items = value if isinstance(value, list) else [value]
    out: list[ImageCandidate] = []
    for x in items:
        if isinstance(x, str):
            out.append(ImageCandidate(url=x))
        elif isinstance(x, dict) and x.get("url"):
            out.append(
                ImageCandidate(
                    url=x["url"],
                    width=coerce_int(x.get("width")),
                    height=coerce_int(x.get("height")),
                )
            )
    return out


def _ld_videos(value: Any) -> list[VideoCandidate]:
    items = value if isinstance(value, list) else [value]
    out: list[VideoCandidate] = []
    for x in items:
        if isinstance(x, str):
            out.append(VideoCandidate(url=x))
        elif isinstance(x, dict) and x.get("contentUrl"):
            out.append(VideoCandidate(url=x["contentUrl"]))
    return out


def _shortcode_from_path(pathname: str) -> str | None:
    parts = [p for p in (pathname or "").split("/") if p]
    return parts[1] if len(parts) > 1 else None


def build_dom_slides(raw: dict[str, Any]) -> list[CarouselSlide]:
    """DOM 프로브 결과로 슬라이드를 만든다. 후보가 하나도 없으면 빈 목록."""
    images: list[ImageCandidate] = [ImageCandidate(url=u) for u in raw.get("og_images") or []]
    videos: list[VideoCandidate] = []
    if raw.get("og_video"):
        videos.append(VideoCandidate(url=raw["og_video"]))

    for obj in raw.get("ld_json") or []:
        if not isinstance(obj, dict):
            continue
        if obj.get("image"):
            images += _ld_images(obj["image"])
        if obj.get("video"):
            videos += _ld_videos(obj["video"])

    videos += [VideoCandidate(url=u) for u in raw.get("video_sources") or []]

    images = uniq_by_url(images)
    videos = uniq_by_url(videos)
    if not images and not videos:
        return []

    return [
        CarouselSlide(
            index=0,
            id=None,
            shortcode=_shortcode_from_path(raw.get("pathname", "")),
            is_video=bool(videos),
            images=images,
            videos=videos,
            best_image=best_image(images),
            best_video=videos[0] if videos else None,
        )
    ]


async def extract_dom_slides(page: Page) -> list[CarouselSlide]:
    try:
        raw = await page.evaluate(DOM_PROBE_SCRIPT)
    except PlaywrightError as e:
        logger.debug(f"[dom] 프로브 실행 실패: {e}")
        return []
    if not isinstance(raw, dict):
        return []
    return build_dom_slides(raw)
