from __future__ import annotations

from enum import Enum


class Topic(str, Enum):
    """인터셉트한 응답의 의미 분류. 어떤 정규화 루틴을 적용할지 결정한다."""

    PROFILE_POSTS = "profile_posts"
    POST_CAROUSEL = "post_carousel"
    HIGHLIGHTS = "highlights"
    UNCLASSIFIED = "unclassified"
