"""ProfileRepository: JSON 파일 구현.

사용자별 디렉터리: <base_dir>/<username>/
  profile_posts.json     게시물 목록 (매번 통째로 덮어씀)
  highlights.json        하이라이트 목록
  collage_analysis.json  콜라주 분석 결과
  images/                내려받은 게시물 이미지
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

from src.domain.entities import HighlightRecord, PostRecord
from src.domain.exceptions import ExportFormatError

POSTS_FILE = "profile_posts.json"
HIGHLIGHTS_FILE = "highlights.json"
ANALYSIS_FILE = "collage_analysis.json"


def _write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    tmp.replace(path)
    return path


def _read_json(path: Path) -> Any:
    if not path.exists():
        return None
    return json.loads(path.read_text(encoding="utf-8"))


class JsonProfileRepository:
    def __init__(self, base_dir: str | Path):
        self._base = Path(base_dir)

    def user_dir(self, username: str) -> Path:
        return self._base / username

    def images_dir(self, username: str) -> Path:
        return self.user_dir(username) / "images"

    async def save_posts(self, username: str, posts: list[PostRecord]) -> Path:
        data = [p.to_dict() for p in posts]
        return await asyncio.to_thread(_write_json, self.user_dir(username) / POSTS_FILE, data)

    async def load_posts(self, username: str) -> list[PostRecord]:
        data = await asyncio.to_thread(_read_json, self.user_dir(username) / POSTS_FILE)
        return [PostRecord.from_dict(d) for d in data or [] if isinstance(d, dict)]

    async def save_highlights(self, username: str, highlights: list[HighlightRecord]) -> Path:
        data = [h.to_dict() for h in highlights]
        return await asyncio.to_thread(
            _write_json, self.user_dir(username) / HIGHLIGHTS_FILE, data
        )

    async def load_highlights(self, username: str) -> list[HighlightRecord]:
        data = await asyncio.to_thread(_read_json, self.user_dir(username) / HIGHLIGHTS_FILE)
        return [HighlightRecord.from_dict(d) for d in data or [] if isinstance(d, dict)]

    async def save_analysis(self, username: str, result: dict[str, Any]) -> Path:
        return await asyncio.to_thread(
            _write_json, self.user_dir(username) / ANALYSIS_FILE, result
        )

    async def load_analysis(self, username: str) -> Optional[dict[str, Any]]:
        data = await asyncio.to_thread(_read_json, self.user_dir(username) / ANALYSIS_FILE)
        return data if isinstance(data, dict) else None


def load_connection_export(path: str | Path) -> list[dict[str, Any]]:
    """플랫폼에서 내려받은 팔로워 목록 JSON(항목 배열)을 읽는다."""
    export_path = Path(path)
    try:
        data = json.loads(export_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ExportFormatError(f"내보내기 파일 없음: {export_path}") from e
    except json.JSONDecodeError as e:
        raise ExportFormatError(f"내보내기 파일 JSON 오류: {export_path}: {e}") from e

    # following.json 형식은 {"relationships_following": [...]} 로 감싸져 있다
    if isinstance(data, dict) and len(data) == 1:
        data = next(iter(data.values()))
    if not isinstance(data, list):
        raise ExportFormatError(f"항목 배열이 아님: {export_path}")
    return data
