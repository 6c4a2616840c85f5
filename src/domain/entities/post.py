from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

DETAIL_ONLY_KEYS = {"shortcode", "carousel"}


@dataclass
class ImageCandidate:
    """게시물 이미지의 해상도별 후보 URL."""

    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    type: Optional[str] = None

    @property
    def area(self) -> int:
        return (self.width or 0) * (self.height or 0)

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "width": self.width, "height": self.height, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ImageCandidate:
        return cls(
            url=data["url"],
            width=data.get("width"),
            height=data.get("height"),
            type=data.get("type"),
        )


@dataclass
class VideoCandidate:
    """게시물 동영상의 후보 URL. 크기 정보는 대부분 비어 있다."""

    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    type: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {"url": self.url, "width": self.width, "height": self.height, "type": self.type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VideoCandidate:
        return cls(
            url=data["url"],
            width=data.get("width"),
            height=data.get("height"),
            type=data.get("type"),
        )


@dataclass
class CarouselSlide:
    """캐러셀(사이드카) 게시물 내 하나의 이미지/동영상 슬롯."""

    index: int
    id: Optional[str] = None
    shortcode: Optional[str] = None
    is_video: bool = False
    images: list[ImageCandidate] = field(default_factory=list)
    videos: list[VideoCandidate] = field(default_factory=list)
    best_image: Optional[ImageCandidate] = None
    best_video: Optional[VideoCandidate] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "id": self.id,
            "shortcode": self.shortcode,
            "is_video": self.is_video,
            "images": [c.to_dict() for c in self.images],
            "videos": [c.to_dict() for c in self.videos],
            "best_image": self.best_image.to_dict() if self.best_image else None,
            "best_video": self.best_video.to_dict() if self.best_video else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CarouselSlide:
        best_image = data.get("best_image")
        best_video = data.get("best_video")
        return cls(
            index=data.get("index", 0),
            id=data.get("id"),
            shortcode=data.get("shortcode"),
            is_video=bool(data.get("is_video")),
            images=[ImageCandidate.from_dict(c) for c in data.get("images") or []],
            videos=[VideoCandidate.from_dict(c) for c in data.get("videos") or []],
            best_image=ImageCandidate.from_dict(best_image) if best_image else None,
            best_video=VideoCandidate.from_dict(best_video) if best_video else None,
        )


@dataclass
class PostRecord:
    """프로필 피드에서 수집된 게시물.

    shortcode가 피드 수집 결과와 상세 페이지 수집 결과를 잇는 조인 키다.
    carousel은 상세 수집 단계에서만 채워진다(생성 시점에는 None).
    detail_only 레코드는 피드에 없던 게시물로, shortcode와 carousel만 가진다.
    """

    shortcode: Optional[str]
    id: Optional[str] = None
    type_name: Optional[str] = None
    product_type: Optional[str] = None
    taken_at: Optional[int] = None
    is_video: bool = False
    display_url: Optional[str] = None
    thumbnail_url: Optional[str] = None
    caption: str = ""
    like_count: Optional[int] = None
    comment_count: Optional[int] = None
    carousel: Optional[list[CarouselSlide]] = None
    detail_only: bool = False

    @classmethod
    def minimal(cls, shortcode: str, carousel: list[CarouselSlide]) -> PostRecord:
        return cls(shortcode=shortcode, carousel=carousel, detail_only=True)

    @property
    def is_reel(self) -> bool:
        return self.product_type == "clips" or (self.type_name == "GraphVideo" and self.is_video)

    def to_dict(self) -> dict[str, Any]:
        if self.detail_only:
            return {
                "shortcode": self.shortcode,
                "carousel": [s.to_dict() for s in self.carousel or []],
            }

        data: dict[str, Any] = {
            "id": self.id,
            "shortcode": self.shortcode,
            "__typename": self.type_name,
            "product_type": self.product_type,
            "taken_at": self.taken_at,
            "is_video": self.is_video,
            "display_url": self.display_url,
            "thumbnail_src": self.thumbnail_url,
            "caption": self.caption,
            "like_count": self.like_count,
            "comment_count": self.comment_count,
        }
        if self.carousel is not None:
            data["carousel"] = [s.to_dict() for s in self.carousel]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PostRecord:
        carousel = data.get("carousel")
        slides = [CarouselSlide.from_dict(s) for s in carousel] if carousel is not None else None

        # 피드 필드 없이 shortcode/carousel만 저장된 경우
        if set(data) == DETAIL_ONLY_KEYS:
            return cls(shortcode=data.get("shortcode"), carousel=slides, detail_only=True)

        return cls(
            shortcode=data.get("shortcode"),
            id=data.get("id"),
            type_name=data.get("__typename"),
            product_type=data.get("product_type"),
            taken_at=data.get("taken_at"),
            is_video=bool(data.get("is_video")),
            display_url=data.get("display_url"),
            thumbnail_url=data.get("thumbnail_src"),
            caption=data.get("caption") or "",
            like_count=data.get("like_count"),
            comment_count=data.get("comment_count"),
            carousel=slides,
        )
