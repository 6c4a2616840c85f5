from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol


class VisionAnalyzer(Protocol):
    """비전 모델 인터페이스."""

    async def analyze_image(self, image_path: Path, system_prompt: str) -> str:
        """이미지 한 장과 시스템 프롬프트로 분석 텍스트를 받는다."""
        ...


class ImageDownloader(Protocol):
    async def download_all(self, urls: list[str], target_dir: Path) -> list[Path]:
        """URL 목록을 내려받고 저장된 경로를 반환 (실패 건은 제외)."""
        ...


class CollageRenderer(Protocol):
    def render(
        self,
        username: str,
        image_paths: list[Path],
        output_path: Path,
        screenshot_path: Optional[Path] = None,
    ) -> Path:
        ...
