"""인터셉트 대상 URL 필터.

경로 부분 문자열 포함 여부만 본다. 쿼리스트링이나 엔드포인트 버전이
바뀌어도 걸리도록 정확한 경로 매칭은 하지 않는다.
"""

from __future__ import annotations

PROFILE_INFO_PATH = "/api/v1/users/web_profile_info"
GRAPHQL_PATHS = ("/api/graphql", "/graphql/query")
HIGHLIGHTS_PATH = "/api/v1/highlights/"
REELS_TRAY_PATHS = ("/api/v1/feed/reels_tray", "/api/v1/feed/reels_media")
MEDIA_PATH = "/api/v1/media/"
CLIPS_PATH = "/api/v1/clips/"
SHORTCODE_PATH = "/api/v1/media/shortcode/"

ALLOW_LIST: tuple[str, ...] = (
    PROFILE_INFO_PATH,
    *GRAPHQL_PATHS,
    HIGHLIGHTS_PATH,
    *REELS_TRAY_PATHS,
    MEDIA_PATH,
    CLIPS_PATH,
    SHORTCODE_PATH,
)


def wants(url: str) -> bool:
    u = str(url or "")
    return any(pattern in u for pattern in ALLOW_LIST)


def is_graphql(url: str) -> bool:
    u = str(url or "")
    return any(p in u for p in GRAPHQL_PATHS)
