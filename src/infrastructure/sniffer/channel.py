"""토픽별 캡처 저장소.

인터셉트 콜백(단일 작성자)이 정규화 결과를 쓰고, 바깥 드라이버가 폴링으로 읽는다.
큐가 아니라 토픽당 마지막 값만 남는다. 같은 토픽이 폴링 전에 두 번 들어오면
두 번째 값만 보인다. 새 게시물을 기다리기 전에는 reset()으로 슬롯을 비워야 한다.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from src.domain.value_objects.topic import Topic

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.4


class CaptureChannel:
    """토픽당 슬롯 하나를 가진 캡처 저장소.

    슬롯은 마지막 publish 값으로 덮어쓰지만, 빈 결과는 무시된다.
    뒤늦게 온 빈 응답이 앞서 받은 유효한 결과를 지우지 못하므로
    순수한 last-write-wins와는 다르다. 슬롯을 비우려면 reset()을 쓴다.
    """

    def __init__(self) -> None:
        self._slots: dict[Topic, list] = {}

    def publish(self, topic: Topic, records: Optional[list]) -> bool:
        """토픽 슬롯을 덮어쓴다. 빈 결과나 UNCLASSIFIED는 무시하고 False."""
        if topic is Topic.UNCLASSIFIED or not records:
            return False
        self._slots[topic] = list(records)
        logger.debug(f"[channel] publish {topic.value}: {len(records)}건")
        return True

    def get(self, topic: Topic) -> Optional[list]:
        return self._slots.get(topic)

    def reset(self, topic: Topic) -> None:
        self._slots.pop(topic, None)

    def snapshot(self) -> dict[Topic, list]:
        return {k: list(v) for k, v in self._slots.items()}

    async def wait_for(
        self,
        topic: Topic,
        timeout: float,
        interval: float = DEFAULT_POLL_INTERVAL,
        accept: Optional[Callable[[list], bool]] = None,
    ) -> Optional[list]:
        """비어 있지 않은 결과가 들어올 때까지 폴링. timeout이 다 지나야 None.

        accept가 주어지면 그 판정을 통과한 결과만 반환하고, 거부된 값은
        무시한 채 마감 시각까지 계속 기다린다.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while True:
            data = self.get(topic)
            if data and (accept is None or accept(data)):
                return data
            remaining = deadline - loop.time()
            if remaining <= 0:
                logger.debug(f"[channel] {topic.value} 대기 시간 초과 ({timeout}s)")
                return None
            await asyncio.sleep(min(interval, remaining))
