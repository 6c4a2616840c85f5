"""프로필 콜라주 렌더러 (Pillow).

상단에 @username 제목, 그 아래 프로필 스크린샷, 그 아래 게시물 이미지 그리드.
비전 모델에 한 장으로 넘기기 위한 용도라 레이아웃은 단순하다.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont, ImageOps, UnidentifiedImageError

from src.domain.exceptions import AnalysisError
from src.infrastructure.config.settings import CollageConfig

logger = logging.getLogger(__name__)

TITLE_HEIGHT = 60
LABEL_HEIGHT = 30
BACKGROUND = (255, 255, 255)
BORDER = (204, 204, 204)
TEXT = (51, 51, 51)


def _open(path: Path) -> Optional[Image.Image]:
    try:
        with Image.open(path) as img:
            return img.convert("RGB")
    except (OSError, UnidentifiedImageError) as e:
        logger.warning(f"[collage] 이미지 열기 실패 {path.name}: {e}")
        return None


class PillowCollageRenderer:
    def __init__(self, config: CollageConfig):
        self._config = config

    def render(
        self,
        username: str,
        image_paths: list[Path],
        output_path: Path,
        screenshot_path: Optional[Path] = None,
    ) -> Path:
        cfg = self._config
        images = [img for img in (_open(p) for p in image_paths[: cfg.max_images]) if img]
        if not images:
            raise AnalysisError(f"{username}: 콜라주에 넣을 이미지가 없습니다")

        cols = max(1, cfg.columns)
        rows = (len(images) + cols - 1) // cols
        width = cols * cfg.cell_size + cfg.padding * 2

        header = _open(screenshot_path) if screenshot_path and screenshot_path.exists() else None
        if header is not None:
            header = ImageOps.contain(header, (width - cfg.padding * 2, cfg.cell_size * 2))
        header_height = header.height + cfg.padding if header is not None else 0

        grid_top = TITLE_HEIGHT + header_height + LABEL_HEIGHT
        height = grid_top + rows * cfg.cell_size + cfg.padding

        canvas = Image.new("RGB", (width, height), BACKGROUND)
        draw = ImageDraw.Draw(canvas)
        font = ImageFont.load_default()

        draw.text((cfg.padding, TITLE_HEIGHT // 3), f"@{username}", fill=TEXT, font=font)
        if header is not None:
            canvas.paste(header, ((width - header.width) // 2, TITLE_HEIGHT))
        draw.text(
            (cfg.padding, grid_top - LABEL_HEIGHT + 8),
            f"POSTS ({len(images)} images)",
            fill=TEXT,
            font=font,
        )

        for i, img in enumerate(images):
            x = cfg.padding + (i % cols) * cfg.cell_size
            y = grid_top + (i // cols) * cfg.cell_size
            thumb = ImageOps.contain(img, (cfg.cell_size, cfg.cell_size))
            canvas.paste(
                thumb,
                (x + (cfg.cell_size - thumb.width) // 2, y + (cfg.cell_size - thumb.height) // 2),
            )
            draw.rectangle([x, y, x + cfg.cell_size - 1, y + cfg.cell_size - 1], outline=BORDER)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        canvas.save(output_path, "JPEG", quality=cfg.quality)
        logger.info(f"[collage] 저장: {output_path} ({width}x{height})")
        return output_path
