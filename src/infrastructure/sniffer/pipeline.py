"""네트워크 응답 → 분류 → 정규화 → 캡처 저장소.

fetch/XHR을 가로채는 스크립트를 주입하지 않고, Playwright의
response 이벤트로 페이지가 받는 모든 응답을 관찰한다.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Optional

from playwright.async_api import Page, Response

from src.domain.value_objects.topic import Topic
from src.infrastructure.sniffer.channel import CaptureChannel
from src.infrastructure.sniffer.classifier import classify
from src.infrastructure.sniffer.interception import wants
from src.infrastructure.sniffer.normalizer import shape

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPES = ("application/json", "text/javascript")
_HIJACK_PREFIX = re.compile(r"^for\s*\(\s*;\s*;\s*\)\s*;?")


@dataclass(frozen=True)
class NetworkExchange:
    url: str
    content_type: str
    raw_body: bytes


def decode_body(exchange: NetworkExchange) -> Any:
    """JSON 응답 본문을 파싱한다. JSON이 아니면 None, 깨진 JSON이면 ValueError."""
    ct = (exchange.content_type or "").lower()
    if not any(t in ct for t in JSON_CONTENT_TYPES):
        return None
    text = exchange.raw_body.decode("utf-8", errors="replace")
    text = _HIJACK_PREFIX.sub("", text.lstrip(), count=1)
    return json.loads(text)


class ResponseSniffer:
    """페이지 하나에 붙는 응답 관찰자. 결과는 해당 페이지의 CaptureChannel에 쌓인다."""

    def __init__(self, channel: Optional[CaptureChannel] = None):
        self.channel = channel or CaptureChannel()

    def handle(self, exchange: NetworkExchange) -> Topic:
        """교환 한 건을 처리하고 분류된 토픽을 반환 (게시 여부와 무관)."""
        if not wants(exchange.url):
            return Topic.UNCLASSIFIED

        try:
            data = decode_body(exchange)
        except ValueError as e:
            logger.debug(f"[sniffer] JSON 파싱 실패 {exchange.url[:160]}: {e}")
            return Topic.UNCLASSIFIED
        if data is None:
            return Topic.UNCLASSIFIED

        topic = classify(exchange.url, data)
        if topic is Topic.UNCLASSIFIED:
            return topic

        shaped = shape(topic, data)
        if self.channel.publish(topic, shaped):
            logger.info(f"[sniffer] {topic.value}: {len(shaped)}건")
        return topic

    async def on_response(self, response: Response) -> None:
        url = response.url
        if not wants(url):
            return
        try:
            content_type = response.headers.get("content-type", "")
            body = await response.body()
        except Exception as e:
            # 리다이렉트/캐시 응답 등은 본문이 없다
            logger.debug(f"[sniffer] 응답 본문 읽기 실패 {url[:160]}: {e}")
            return
        self.handle(NetworkExchange(url=url, content_type=content_type, raw_body=body))

    def attach(self, page: Page) -> None:
        page.on("response", self.on_response)
        logger.debug("[sniffer] 응답 관찰 시작")
