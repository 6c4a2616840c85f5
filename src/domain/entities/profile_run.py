from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from src.domain.entities.highlight import HighlightRecord
from src.domain.entities.post import PostRecord


@dataclass
class ProfileCapture:
    """한 프로필에서 인터셉트한 결과 묶음."""

    username: str
    posts: list[PostRecord] = field(default_factory=list)
    highlights: list[HighlightRecord] = field(default_factory=list)
    screenshot_path: Optional[str] = None


@dataclass
class ProfileRun:
    """프로필 수집 실행 로그."""

    username: str
    started_at: datetime = field(default_factory=datetime.utcnow)

    completed_at: Optional[datetime] = None
    status: str = "running"  # running, success, failed
    posts_collected: int = 0
    highlights_collected: int = 0
    carousels_attached: int = 0
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"
