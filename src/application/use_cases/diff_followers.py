from __future__ import annotations

import logging
from typing import Any, Callable

from src.domain.services.follower_diff import ConnectionDiff, diff_connections, parse_connections

logger = logging.getLogger(__name__)

ExportLoader = Callable[[str], list[dict[str, Any]]]


class DiffFollowersUseCase:
    """캠페인 전/후 팔로워 내보내기 파일을 비교한다."""

    def __init__(self, loader: ExportLoader):
        self._load = loader

    def execute(self, pre_path: str, post_path: str) -> ConnectionDiff:
        pre = parse_connections(self._load(pre_path))
        post = parse_connections(self._load(post_path))
        diff = diff_connections(pre, post)
        logger.info(
            f"[diff] 이전 {len(pre)}명, 이후 {len(post)}명 → "
            f"new {len(diff.new)}, lost {len(diff.lost)}"
        )
        return diff
