from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Protocol

from src.domain.entities import HighlightRecord, PostRecord


class ProfileRepository(Protocol):
    """프로필별 수집 결과 저장소 인터페이스 (의존성 역전)."""

    def user_dir(self, username: str) -> Path: ...

    def images_dir(self, username: str) -> Path: ...

    async def save_posts(self, username: str, posts: list[PostRecord]) -> Path:
        """게시물 목록 전체를 덮어쓴다 (증분 저장 없음)."""
        ...

    async def load_posts(self, username: str) -> list[PostRecord]: ...

    async def save_highlights(self, username: str, highlights: list[HighlightRecord]) -> Path: ...

    async def load_highlights(self, username: str) -> list[HighlightRecord]: ...

    async def save_analysis(self, username: str, result: dict[str, Any]) -> Path: ...

    async def load_analysis(self, username: str) -> Optional[dict[str, Any]]:
        """저장된 분석 결과. 없으면 None."""
        ...
