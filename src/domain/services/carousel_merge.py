"""캐러셀 병합.

피드 단계에서 수집한 게시물 목록에 게시물 상세 단계에서 얻은 슬라이드를
shortcode 기준으로 붙인다. 피드에 없던 게시물(그리드 응답에서 빠진 릴스 등)은
shortcode와 carousel만 가진 최소 레코드로 추가한다.
"""

from __future__ import annotations

import logging

from src.domain.entities import CarouselSlide, PostRecord

logger = logging.getLogger(__name__)


class CarouselMergeEngine:
    def __init__(self, posts: list[PostRecord]):
        self._posts = list(posts)
        self._by_code: dict[str, PostRecord] = {
            p.shortcode: p for p in self._posts if p.shortcode
        }

    @property
    def posts(self) -> list[PostRecord]:
        return self._posts

    def targets(self) -> list[PostRecord]:
        """상세 수집 대상 게시물 (shortcode가 있는 피드 게시물)."""
        return [p for p in self._posts if p.shortcode]

    def get(self, shortcode: str) -> PostRecord | None:
        return self._by_code.get(shortcode)

    def attach(self, shortcode: str, slides: list[CarouselSlide]) -> PostRecord:
        post = self._by_code.get(shortcode)
        if post is not None:
            post.carousel = slides
            logger.debug(f"[merge] {shortcode}: 슬라이드 {len(slides)}개 추가")
            return post

        post = PostRecord.minimal(shortcode, slides)
        self._posts.append(post)
        self._by_code[shortcode] = post
        logger.debug(f"[merge] {shortcode}: 피드에 없어 최소 레코드 생성")
        return post
