"""Tests for src.domain.services.carousel_merge: feed/detail reconciliation."""

from src.domain.entities import CarouselSlide, ImageCandidate, PostRecord
from src.domain.services.carousel_merge import CarouselMergeEngine


def _slide(index=0, url="https://cdn/s.jpg"):
    img = ImageCandidate(url=url, width=1080, height=1080)
    return CarouselSlide(index=index, images=[img], best_image=img)


class TestCarouselMergeEngine:
    def test_unknown_shortcode_appends_minimal_record(self):
        x = PostRecord(shortcode="X", id="1", display_url="https://cdn/x.jpg", caption="hi")
        engine = CarouselMergeEngine([x])

        engine.attach("Y", [_slide()])

        assert [p.shortcode for p in engine.posts] == ["X", "Y"]
        assert engine.posts[0] is x
        assert x.carousel is None
        assert x.caption == "hi"

        y = engine.posts[1]
        assert y.detail_only is True
        assert y.to_dict() == {"shortcode": "Y", "carousel": [_slide().to_dict()]}

    def test_known_shortcode_is_mutated_in_place(self):
        x = PostRecord(shortcode="X", like_count=5)
        engine = CarouselMergeEngine([x])
        slides = [_slide(0), _slide(1, "https://cdn/t.jpg")]

        returned = engine.attach("X", slides)

        assert returned is x
        assert x.carousel == slides
        assert x.like_count == 5
        assert len(engine.posts) == 1

    def test_empty_carousel_is_attached(self):
        x = PostRecord(shortcode="X")
        engine = CarouselMergeEngine([x])
        engine.attach("X", [])
        assert x.carousel == []
        assert "carousel" in x.to_dict()

    def test_second_attach_for_new_code_reuses_record(self):
        engine = CarouselMergeEngine([])
        engine.attach("Y", [_slide()])
        engine.attach("Y", [_slide(0), _slide(1)])
        assert len(engine.posts) == 1
        assert len(engine.get("Y").carousel) == 2

    def test_targets_skip_records_without_shortcode(self):
        posts = [PostRecord(shortcode=None), PostRecord(shortcode="A"), PostRecord(shortcode="B")]
        engine = CarouselMergeEngine(posts)
        assert [p.shortcode for p in engine.targets()] == ["A", "B"]

    def test_input_list_is_not_mutated(self):
        posts = [PostRecord(shortcode="X")]
        engine = CarouselMergeEngine(posts)
        engine.attach("Y", [])
        assert len(posts) == 1
        assert len(engine.posts) == 2
