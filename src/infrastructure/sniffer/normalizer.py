"""응답 정규화.

토픽별로 서로 다른 응답 형태(GraphQL 2종, REST v1 2종)를 하나의 스키마로 바꾼다.
구조가 예상과 다르면 예외를 밖으로 내보내지 않고 None/빈 목록을 돌려준다.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from src.domain.entities import (
    CarouselSlide,
    HighlightRecord,
    ImageCandidate,
    PostRecord,
    VideoCandidate,
)
from src.domain.value_objects.topic import Topic

logger = logging.getLogger(__name__)


# ─── 공통 헬퍼 ───


def _dig(obj: Any, *path: str | int) -> Any:
    """중첩 dict/list를 안전하게 따라간다. 중간에 끊기면 None."""
    cur = obj
    for key in path:
        if isinstance(key, int):
            if not isinstance(cur, list) or not 0 <= key < len(cur):
                return None
            cur = cur[key]
        else:
            if not isinstance(cur, dict):
                return None
            cur = cur.get(key)
        if cur is None:
            return None
    return cur


def _first_truthy(*values: Any) -> Any:
    for v in values:
        if v:
            return v
    return None


def _first_present(*values: Any) -> Any:
    """0도 유효한 값으로 취급 (None만 건너뜀)."""
    for v in values:
        if v is not None:
            return v
    return None


def _coerce_id(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        v = value.strip()
        return v if v else None
    if isinstance(value, int):
        return str(value)
    return None


def coerce_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _coerce_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _dicts(value: Any) -> list[dict[str, Any]]:
    return [x for x in _list(value) if isinstance(x, dict)]


def uniq_by_url(candidates: list) -> list:
    """URL 기준 중복 제거. 처음 나온 순서를 유지하고 URL 없는 후보는 버린다."""
    seen: set[str] = set()
    out = []
    for c in candidates:
        if not c.url or c.url in seen:
            continue
        seen.add(c.url)
        out.append(c)
    return out


def best_image(images: list[ImageCandidate]) -> Optional[ImageCandidate]:
    """면적(width×height)이 가장 큰 후보. 동률이면 먼저 나온 후보."""
    if not images:
        return None
    return max(images, key=lambda c: c.area)


# ─── profile_posts ───


def shape_profile_posts(data: Any) -> list[PostRecord]:
    edges = _first_present(
        _dig(data, "data", "user", "edge_owner_to_timeline_media", "edges"),
        _dig(data, "data", "xdt_user_by_username", "edge_owner_to_timeline_media", "edges"),
    )
    posts: list[PostRecord] = []
    for edge in _list(edges):
        node = _dig(edge, "node") or {}
        if not isinstance(node, dict):
            node = {}
        posts.append(
            PostRecord(
                id=_coerce_id(node.get("id")),
                shortcode=_coerce_str(node.get("shortcode")),
                type_name=node.get("__typename") or None,
                product_type=node.get("product_type") or None,
                taken_at=coerce_int(node.get("taken_at_timestamp")),
                is_video=bool(node.get("is_video")),
                display_url=_coerce_str(node.get("display_url")),
                thumbnail_url=_coerce_str(node.get("thumbnail_src")),
                caption=_dig(node, "edge_media_to_caption", "edges", 0, "node", "text") or "",
                like_count=coerce_int(
                    _first_present(
                        _dig(node, "edge_liked_by", "count"),
                        _dig(node, "edge_media_preview_like", "count"),
                    )
                ),
                comment_count=coerce_int(_dig(node, "edge_media_to_comment", "count")),
            )
        )
    return posts


# ─── highlights ───


def shape_highlights(data: Any) -> list[HighlightRecord]:
    trays = _first_present(
        _dig(data, "tray"),
        _dig(data, "reels_tray"),
        _dig(data, "data", "highlight_reels"),
        _dig(data, "data", "reels_media"),
    )
    records: list[HighlightRecord] = []
    for tray in _list(trays):
        t = tray if isinstance(tray, dict) else {}
        reel_items = _dig(t, "reel", "items")
        records.append(
            HighlightRecord(
                id=_coerce_id(_first_truthy(t.get("id"), t.get("pk"), _dig(t, "reel", "id"))),
                title=_first_truthy(t.get("title"), t.get("name"), _dig(t, "reel", "title")) or "",
                user_id=_coerce_id(
                    _first_truthy(
                        _dig(t, "user", "pk"),
                        _dig(t, "owner", "id"),
                        _dig(t, "reel", "owner_id"),
                    )
                ),
                cover_url=_first_truthy(
                    _dig(t, "cover_media", "cropped_image_version", "url"),
                    _dig(t, "cover_media", "image_versions2", "candidates", 0, "url"),
                    _dig(t, "cover_media", "thumbnail_url"),
                ),
                item_count=coerce_int(
                    _first_present(
                        t.get("media_count"),
                        len(reel_items) if isinstance(reel_items, list) else None,
                    )
                ),
            )
        )
    return records


# ─── post_carousel ───


def _image_candidates(node: dict[str, Any]) -> list[ImageCandidate]:
    candidates = [
        ImageCandidate(
            url=r.get("src"),
            width=coerce_int(_first_present(r.get("config_width"), r.get("width"))),
            height=coerce_int(_first_present(r.get("config_height"), r.get("height"))),
        )
        for r in _dicts(node.get("display_resources"))
    ]
    candidates += [
        ImageCandidate(
            url=c.get("url"),
            width=coerce_int(c.get("width")),
            height=coerce_int(c.get("height")),
            type=c.get("type") or None,
        )
        for c in _dicts(_dig(node, "image_versions2", "candidates"))
    ]
    if node.get("display_url"):
        candidates.append(
            ImageCandidate(
                url=node["display_url"],
                width=coerce_int(_dig(node, "dimensions", "width")),
                height=coerce_int(_dig(node, "dimensions", "height")),
            )
        )
    return uniq_by_url(candidates)


def _video_candidates(node: dict[str, Any]) -> list[VideoCandidate]:
    candidates = [
        VideoCandidate(
            url=v.get("url"),
            width=coerce_int(v.get("width")),
            height=coerce_int(v.get("height")),
            type=v.get("type") or None,
        )
        for v in _dicts(node.get("video_versions"))
    ]
    if node.get("video_url"):
        candidates.append(VideoCandidate(url=node["video_url"]))
    return uniq_by_url(candidates)


def shape_slide(node: dict[str, Any], index: int, shortcode: Optional[str]) -> CarouselSlide:
    images = _image_candidates(node)
    videos = _video_candidates(node)
    return CarouselSlide(
        index=index,
        id=_coerce_id(_first_truthy(node.get("id"), node.get("pk"))),
        shortcode=shortcode,
        is_video=bool(node.get("is_video") or node.get("media_type") in (2, "2")),
        images=images,
        videos=videos,
        best_image=best_image(images),
        best_video=videos[0] if videos else None,
    )


def _carousel_nodes(data: Any) -> tuple[Optional[str], list[dict[str, Any]]]:
    """(shortcode, 슬라이드 노드 목록). GraphQL 형태를 먼저 보고 REST v1 형태를 본다."""
    sc = _first_truthy(
        _dig(data, "data", "shortcode_media"),
        _dig(data, "data", "xdt_shortcode_media"),
    )
    if isinstance(sc, dict):
        sidecar = [
            e["node"]
            for e in _dicts(_dig(sc, "edge_sidecar_to_children", "edges"))
            if isinstance(e.get("node"), dict)
        ]
        return _coerce_str(sc.get("shortcode")), sidecar or [sc]

    if not isinstance(data, dict):
        return None, []

    if isinstance(data.get("items"), list):
        items = data["items"]
    else:
        single = _first_truthy(data.get("media"), data.get("clip"), data.get("item"))
        items = [single] if single else []

    if not items or not isinstance(items[0], dict):
        return None, []

    root = items[0]
    shortcode = _coerce_str(_first_truthy(root.get("code"), root.get("shortcode")))
    carousel = _dicts(root.get("carousel_media"))
    return shortcode, carousel or [root]


def shape_post_carousel(data: Any) -> list[CarouselSlide]:
    shortcode, nodes = _carousel_nodes(data)
    return [shape_slide(node, idx, shortcode) for idx, node in enumerate(nodes)]


SHAPERS: dict[Topic, Callable[[Any], list]] = {
    Topic.PROFILE_POSTS: shape_profile_posts,
    Topic.HIGHLIGHTS: shape_highlights,
    Topic.POST_CAROUSEL: shape_post_carousel,
}


def shape(topic: Topic, data: Any) -> Optional[list]:
    """토픽에 맞는 정규화 결과. 알 수 없는 토픽이거나 파싱 중 오류면 None."""
    shaper = SHAPERS.get(topic)
    if shaper is None:
        return None
    try:
        return shaper(data)
    except Exception as e:
        logger.debug(f"[shape] {topic.value} 정규화 실패: {e}")
        return None
