from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ConnectionRecord:
    """팔로워/팔로잉 내보내기 파일의 한 항목."""

    username: str
    url: str

    @property
    def key(self) -> str:
        """필드 단위 비교용 정규화 키."""
        return json.dumps([self.username, self.url], ensure_ascii=False)

    def to_dict(self) -> dict[str, Any]:
        return {"username": self.username, "url": self.url}
