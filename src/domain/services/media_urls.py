from __future__ import annotations

from src.domain.entities import PostRecord


def collect_image_urls(posts: list[PostRecord]) -> list[str]:
    """콜라주용 이미지 URL 목록. 동영상은 제외하고 등장 순서대로 중복 제거."""
    urls: list[str] = []
    for post in posts:
        if post.display_url:
            urls.append(post.display_url)
        if post.thumbnail_url:
            urls.append(post.thumbnail_url)

        for slide in post.carousel or []:
            if slide.images:
                urls.extend(im.url for im in slide.images if im.url)
            elif slide.best_image and slide.best_image.url:
                urls.append(slide.best_image.url)

    seen: set[str] = set()
    out: list[str] = []
    for url in urls:
        if url in seen:
            continue
        seen.add(url)
        out.append(url)
    return out


def post_url(post: PostRecord, base_url: str = "https://www.instagram.com") -> str:
    """게시물 상세 페이지 URL. 릴스는 /reel/ 경로를 사용한다."""
    segment = "reel" if post.is_reel else "p"
    return f"{base_url.rstrip('/')}/{segment}/{post.shortcode}/"
