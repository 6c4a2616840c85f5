"""응답 토픽 분류기.

GraphQL 엔드포인트 하나가 여러 쿼리를 다중화하므로 URL만으로는 구분이 안 된다.
직렬화한 응답 본문 안의 마커 문자열로 판별한다. 업스트림 필드명이 바뀌면
깨지므로, 규칙은 (이름, 조건, 토픽) 표로 두고 위에서부터 처음 맞는 것을 쓴다.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable

from src.domain.value_objects.topic import Topic
from src.infrastructure.sniffer.interception import (
    CLIPS_PATH,
    MEDIA_PATH,
    SHORTCODE_PATH,
    is_graphql,
)

logger = logging.getLogger(__name__)

TIMELINE_MARKER = "edge_owner_to_timeline_media"
POST_MARKERS = ("shortcode_media", "xdt_shortcode_media")
HIGHLIGHT_MARKERS = ("highlight_reels", "reels_media")
TRAY_FRAGMENTS = ("/highlights/", "/reels_tray", "/reels_media")


class Probe:
    """분류 대상 응답. 본문 직렬화는 필요할 때 한 번만 한다."""

    def __init__(self, url: str, body: Any):
        self.url = str(url or "")
        self.body = body

    @cached_property
    def serialized(self) -> str:
        try:
            return json.dumps(self.body, ensure_ascii=False)
        except (TypeError, ValueError):
            return ""

    @cached_property
    def graphql(self) -> bool:
        return is_graphql(self.url)

    def body_contains(self, *markers: str) -> bool:
        text = self.serialized
        return any(m in text for m in markers)


@dataclass(frozen=True)
class Rule:
    name: str
    matches: Callable[[Probe], bool]
    topic: Topic


def _has_media_payload(body: Any) -> bool:
    if not isinstance(body, dict):
        return False
    items = body.get("items")
    if isinstance(items, list) and items:
        return True
    return bool(body.get("media") or body.get("clip") or body.get("item"))


RULES: tuple[Rule, ...] = (
    Rule("profile_info", lambda p: "web_profile_info" in p.url, Topic.PROFILE_POSTS),
    Rule(
        "graphql_timeline",
        lambda p: p.graphql and p.body_contains(TIMELINE_MARKER),
        Topic.PROFILE_POSTS,
    ),
    Rule(
        "graphql_post",
        lambda p: p.graphql and p.body_contains(*POST_MARKERS),
        Topic.POST_CAROUSEL,
    ),
    Rule(
        "graphql_highlights",
        lambda p: p.graphql and p.body_contains(*HIGHLIGHT_MARKERS),
        Topic.HIGHLIGHTS,
    ),
    Rule("shortcode_lookup", lambda p: SHORTCODE_PATH in p.url, Topic.POST_CAROUSEL),
    Rule(
        "media_or_clip",
        lambda p: (MEDIA_PATH in p.url or CLIPS_PATH in p.url) and _has_media_payload(p.body),
        Topic.POST_CAROUSEL,
    ),
    Rule(
        "highlight_tray",
        lambda p: any(f in p.url for f in TRAY_FRAGMENTS),
        Topic.HIGHLIGHTS,
    ),
)


def classify(url: str, body: Any, rules: tuple[Rule, ...] = RULES) -> Topic:
    probe = Probe(url, body)
    for rule in rules:
        if rule.matches(probe):
            logger.debug(f"[classify] {rule.name} → {rule.topic.value}: {probe.url[:160]}")
            return rule.topic
    return Topic.UNCLASSIFIED
