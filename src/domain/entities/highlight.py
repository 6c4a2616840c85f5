from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class HighlightRecord:
    """하이라이트 트레이 항목. 게시물과 병합되지 않는다."""

    id: Optional[str] = None
    title: str = ""
    user_id: Optional[str] = None
    cover_url: Optional[str] = None
    item_count: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "user_id": self.user_id,
            "cover": self.cover_url,
            "item_count": self.item_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HighlightRecord:
        return cls(
            id=data.get("id"),
            title=data.get("title") or "",
            user_id=data.get("user_id"),
            cover_url=data.get("cover"),
            item_count=data.get("item_count"),
        )
