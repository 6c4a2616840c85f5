"""Tests for src.infrastructure.sniffer.classifier: ordered topic rules."""

from src.domain.value_objects.topic import Topic
from src.infrastructure.sniffer.classifier import RULES, Probe, Rule, classify

BASE = "https://www.instagram.com"
GRAPHQL = BASE + "/graphql/query/?doc_id=17888483320059182"


class TestClassifyOrder:
    def test_profile_info_url(self):
        assert classify(BASE + "/api/v1/users/web_profile_info/?username=a", {}) == Topic.PROFILE_POSTS

    def test_profile_info_wins_regardless_of_body(self):
        body = {"data": {"shortcode_media": {}}}
        assert classify(BASE + "/api/v1/users/web_profile_info/", body) == Topic.PROFILE_POSTS

    def test_graphql_timeline(self):
        body = {"data": {"user": {"edge_owner_to_timeline_media": {"edges": []}}}}
        assert classify(GRAPHQL, body) == Topic.PROFILE_POSTS

    def test_timeline_marker_beats_post_marker(self):
        body = {
            "data": {
                "user": {"edge_owner_to_timeline_media": {"edges": []}},
                "shortcode_media": {"id": "1"},
            }
        }
        assert classify(GRAPHQL, body) == Topic.PROFILE_POSTS

    def test_graphql_single_post(self):
        assert classify(GRAPHQL, {"data": {"shortcode_media": {}}}) == Topic.POST_CAROUSEL
        assert classify(GRAPHQL, {"data": {"xdt_shortcode_media": {}}}) == Topic.POST_CAROUSEL

    def test_post_marker_beats_highlight_marker(self):
        body = {"data": {"xdt_shortcode_media": {}, "highlight_reels": []}}
        assert classify(GRAPHQL, body) == Topic.POST_CAROUSEL

    def test_graphql_highlights(self):
        assert classify(GRAPHQL, {"data": {"highlight_reels": []}}) == Topic.HIGHLIGHTS
        assert classify(BASE + "/api/graphql", {"data": {"reels_media": []}}) == Topic.HIGHLIGHTS

    def test_markers_ignored_outside_graphql(self):
        url = BASE + "/api/v1/media/1/likers/"
        body = {"note": "edge_owner_to_timeline_media"}
        assert classify(url, body) == Topic.UNCLASSIFIED

    def test_graphql_without_markers_is_unclassified(self):
        assert classify(GRAPHQL, {"data": {"viewer": {}}}) == Topic.UNCLASSIFIED

    def test_shortcode_lookup_regardless_of_body(self):
        assert classify(BASE + "/api/v1/media/shortcode/ABC/", {}) == Topic.POST_CAROUSEL

    def test_media_endpoint_needs_payload(self):
        url = BASE + "/api/v1/media/123/info/"
        assert classify(url, {"items": [{"id": "1"}]}) == Topic.POST_CAROUSEL
        assert classify(url, {"media": {"id": "1"}}) == Topic.POST_CAROUSEL
        assert classify(url, {"items": []}) == Topic.UNCLASSIFIED
        assert classify(url, {"status": "ok"}) == Topic.UNCLASSIFIED

    def test_clip_endpoint(self):
        url = BASE + "/api/v1/clips/item/"
        assert classify(url, {"clip": {"code": "X"}}) == Topic.POST_CAROUSEL
        assert classify(url, {"item": {"code": "X"}}) == Topic.POST_CAROUSEL

    def test_highlight_tray_fragments(self):
        assert classify(BASE + "/api/v1/highlights/9/highlights_tray/", {}) == Topic.HIGHLIGHTS
        assert classify(BASE + "/api/v1/feed/reels_tray/", {}) == Topic.HIGHLIGHTS
        assert classify(BASE + "/api/v1/feed/reels_media/?reel_ids=1", {}) == Topic.HIGHLIGHTS

    def test_non_dict_body_on_media_endpoint(self):
        assert classify(BASE + "/api/v1/media/1/info/", ["items"]) == Topic.UNCLASSIFIED


class TestRules:
    def test_rule_table_order(self):
        assert [r.name for r in RULES] == [
            "profile_info",
            "graphql_timeline",
            "graphql_post",
            "graphql_highlights",
            "shortcode_lookup",
            "media_or_clip",
            "highlight_tray",
        ]

    def test_custom_rule_table(self):
        rules = (Rule("everything", lambda p: True, Topic.HIGHLIGHTS),)
        assert classify("https://example.com/", {}, rules=rules) == Topic.HIGHLIGHTS

    def test_empty_rule_table(self):
        assert classify(GRAPHQL, {"data": {"shortcode_media": {}}}, rules=()) == Topic.UNCLASSIFIED


class TestProbe:
    def test_serialized_keeps_unicode(self):
        probe = Probe(GRAPHQL, {"caption": "안녕"})
        assert "안녕" in probe.serialized

    def test_unserializable_body(self):
        probe = Probe(GRAPHQL, {"x": object()})
        assert probe.serialized == ""
        assert not probe.body_contains("x")

    def test_none_url(self):
        probe = Probe(None, {})
        assert probe.url == ""
        assert not probe.graphql
