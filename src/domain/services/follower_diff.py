"""팔로워 목록 비교.

캠페인 전/후에 내려받은 팔로워 내보내기 파일을 비교하여
새로 생긴 연결(new)과 사라진 연결(lost)을 구한다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from src.domain.entities import ConnectionRecord


@dataclass
class ConnectionDiff:
    new: list[ConnectionRecord] = field(default_factory=list)
    lost: list[ConnectionRecord] = field(default_factory=list)

    def changed(self) -> list[ConnectionRecord]:
        return [*self.new, *self.lost]


def parse_connections(entries: Iterable[Any]) -> list[ConnectionRecord]:
    """내보내기 항목 {string_list_data: [{value, href}]}의 첫 원소만 사용한다."""
    records: list[ConnectionRecord] = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        items = entry.get("string_list_data") or []
        if not items or not isinstance(items[0], dict):
            continue
        first = items[0]
        records.append(
            ConnectionRecord(username=first.get("value") or "", url=first.get("href") or "")
        )
    return records


def diff_connections(
    pre: list[ConnectionRecord], post: list[ConnectionRecord]
) -> ConnectionDiff:
    pre_keys = {r.key for r in pre}
    post_keys = {r.key for r in post}
    return ConnectionDiff(
        new=[r for r in post if r.key not in pre_keys],
        lost=[r for r in pre if r.key not in post_keys],
    )
