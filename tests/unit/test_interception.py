"""Tests for src.infrastructure.sniffer.interception: URL allow-list."""

import pytest

from src.infrastructure.sniffer.channel import CaptureChannel
from src.infrastructure.sniffer.interception import ALLOW_LIST, is_graphql, wants
from src.infrastructure.sniffer.pipeline import NetworkExchange, ResponseSniffer

BASE = "https://www.instagram.com"


class TestWants:
    @pytest.mark.parametrize(
        "path",
        [
            "/api/v1/users/web_profile_info/?username=alice",
            "/api/graphql",
            "/graphql/query/?doc_id=123&variables=%7B%7D",
            "/api/v1/highlights/42/highlights_tray/",
            "/api/v1/feed/reels_tray/",
            "/api/v1/feed/reels_media/?reel_ids=highlight%3A1",
            "/api/v1/media/3141592653/info/",
            "/api/v1/clips/item/?clips_media_shortcode=Cx",
            "/api/v1/media/shortcode/Cx1/?children=true",
        ],
    )
    def test_allowed_paths(self, path):
        assert wants(BASE + path)

    @pytest.mark.parametrize(
        "url",
        [
            BASE + "/alice/",
            BASE + "/static/bundles/es6/ConsumerLibCommons.js",
            "https://scontent.cdninstagram.com/v/t51.2885-15/image.jpg",
            BASE + "/api/v1/web/accounts/login/ajax/",
            "",
        ],
    )
    def test_rejected_urls(self, url):
        assert not wants(url)

    def test_none_is_rejected(self):
        assert not wants(None)

    def test_allow_list_has_every_endpoint_family(self):
        assert len(ALLOW_LIST) == 9

    def test_substring_match_tolerates_versioning(self):
        assert wants("https://i.instagram.com/api/v1/media/shortcode/ABC/?v=2&x=y")


class TestIsGraphql:
    def test_both_graphql_paths(self):
        assert is_graphql(BASE + "/api/graphql")
        assert is_graphql(BASE + "/graphql/query/?doc_id=1")

    def test_rest_endpoint_is_not_graphql(self):
        assert not is_graphql(BASE + "/api/v1/media/1/info/")


class TestRejectedExchangeLeavesChannelUntouched:
    def test_no_publish_for_unmatched_url(self):
        channel = CaptureChannel()
        sniffer = ResponseSniffer(channel)
        exchange = NetworkExchange(
            url=BASE + "/static/data.json",
            content_type="application/json",
            raw_body=b'{"data": {"user": {"edge_owner_to_timeline_media": {"edges": [{"node": {}}]}}}}',
        )
        sniffer.handle(exchange)
        assert channel.snapshot() == {}
