from __future__ import annotations

from typing import Awaitable, Callable, Optional, Protocol

from src.domain.entities import ProfileCapture

CaptureCheckpoint = Callable[[ProfileCapture], Awaitable[None]]


class ProfileScraper(Protocol):
    """프로필 수집기 인터페이스."""

    async def scrape(
        self, username: str, checkpoint: Optional[CaptureCheckpoint] = None
    ) -> ProfileCapture:
        """피드/하이라이트 수집 후 게시물별 캐러셀을 병합한다.

        checkpoint는 피드 수집 직후와 병합 완료 후 두 번 호출된다.
        로그인 화면에 막히면 LoginWallError.
        """
        ...
