from src.domain.entities.connection import ConnectionRecord
from src.domain.entities.highlight import HighlightRecord
from src.domain.entities.post import CarouselSlide, ImageCandidate, PostRecord, VideoCandidate
from src.domain.entities.profile_run import ProfileCapture, ProfileRun

__all__ = [
    "PostRecord",
    "CarouselSlide",
    "ImageCandidate",
    "VideoCandidate",
    "HighlightRecord",
    "ConnectionRecord",
    "ProfileCapture",
    "ProfileRun",
]
