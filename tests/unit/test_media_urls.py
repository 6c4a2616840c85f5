"""Tests for src.domain.services.media_urls."""

from src.domain.entities import CarouselSlide, ImageCandidate, PostRecord, VideoCandidate
from src.domain.services.media_urls import collect_image_urls, post_url


class TestCollectImageUrls:
    def test_feed_then_slides_deduped(self):
        img1 = ImageCandidate(url="https://cdn/1.jpg")
        img2 = ImageCandidate(url="https://cdn/2.jpg")
        post = PostRecord(
            shortcode="X",
            display_url="https://cdn/1.jpg",
            thumbnail_url="https://cdn/1_t.jpg",
            carousel=[CarouselSlide(index=0, images=[img1, img2], best_image=img2)],
        )
        assert collect_image_urls([post]) == [
            "https://cdn/1.jpg",
            "https://cdn/1_t.jpg",
            "https://cdn/2.jpg",
        ]

    def test_best_image_used_when_no_image_list(self):
        best = ImageCandidate(url="https://cdn/best.jpg")
        post = PostRecord.minimal("Y", [CarouselSlide(index=0, best_image=best)])
        assert collect_image_urls([post]) == ["https://cdn/best.jpg"]

    def test_videos_are_not_collected(self):
        vid = VideoCandidate(url="https://cdn/v.mp4")
        post = PostRecord.minimal("Y", [CarouselSlide(index=0, is_video=True, videos=[vid], best_video=vid)])
        assert collect_image_urls([post]) == []

    def test_no_posts(self):
        assert collect_image_urls([]) == []


class TestPostUrl:
    def test_regular_post(self):
        assert post_url(PostRecord(shortcode="Cx1")) == "https://www.instagram.com/p/Cx1/"

    def test_reel(self):
        post = PostRecord(shortcode="Cx2", product_type="clips")
        assert post_url(post, "https://www.instagram.com/") == "https://www.instagram.com/reel/Cx2/"
