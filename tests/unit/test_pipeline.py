"""Tests for src.infrastructure.sniffer.pipeline: response observer wiring."""

import asyncio
import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.entities import CarouselSlide, PostRecord
from src.domain.value_objects.topic import Topic
from src.infrastructure.sniffer.channel import CaptureChannel
from src.infrastructure.sniffer.pipeline import NetworkExchange, ResponseSniffer, decode_body

PROFILE_INFO_URL = "https://www.instagram.com/api/v1/users/web_profile_info/?username=alice"
FEED_BODY = {
    "data": {
        "user": {
            "edge_owner_to_timeline_media": {
                "edges": [{"node": {"shortcode": "CxA", "display_url": "https://cdn/a.jpg"}}]
            }
        }
    }
}


def _exchange(url, body, content_type="application/json; charset=utf-8"):
    raw = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return NetworkExchange(url=url, content_type=content_type, raw_body=raw)


def _mock_response(url, body, content_type="application/json"):
    resp = MagicMock()
    resp.url = url
    resp.headers = {"content-type": content_type}
    resp.body = AsyncMock(return_value=json.dumps(body).encode("utf-8"))
    return resp


class TestDecodeBody:
    def test_plain_json(self):
        assert decode_body(_exchange("u", {"a": 1})) == {"a": 1}

    def test_hijack_prefix_is_stripped(self):
        ex = _exchange("u", b'for (;;);{"a": 1}', content_type="text/javascript")
        assert decode_body(ex) == {"a": 1}

    def test_non_json_content_type(self):
        assert decode_body(_exchange("u", b"<html></html>", content_type="text/html")) is None

    def test_missing_content_type(self):
        assert decode_body(NetworkExchange(url="u", content_type="", raw_body=b"{}")) is None

    def test_broken_json_raises(self):
        with pytest.raises(ValueError):
            decode_body(_exchange("u", b"{not json"))


class TestHandle:
    def test_feed_exchange_is_published(self):
        sniffer = ResponseSniffer()
        topic = sniffer.handle(_exchange(PROFILE_INFO_URL, FEED_BODY))
        assert topic == Topic.PROFILE_POSTS
        posts = sniffer.channel.get(Topic.PROFILE_POSTS)
        assert isinstance(posts[0], PostRecord)
        assert posts[0].shortcode == "CxA"

    def test_carousel_exchange_is_published(self):
        sniffer = ResponseSniffer()
        url = "https://www.instagram.com/api/v1/media/shortcode/CxA/?children=true"
        sniffer.handle(_exchange(url, {"items": [{"code": "CxA", "display_url": "https://cdn/a.jpg"}]}))
        (slide,) = sniffer.channel.get(Topic.POST_CAROUSEL)
        assert isinstance(slide, CarouselSlide)
        assert slide.shortcode == "CxA"

    def test_broken_json_is_dropped(self):
        sniffer = ResponseSniffer()
        assert sniffer.handle(_exchange(PROFILE_INFO_URL, b"{oops")) == Topic.UNCLASSIFIED
        assert sniffer.channel.snapshot() == {}

    def test_unclassified_body_is_dropped(self):
        sniffer = ResponseSniffer()
        url = "https://www.instagram.com/graphql/query/?doc_id=1"
        assert sniffer.handle(_exchange(url, {"data": {"viewer": {}}})) == Topic.UNCLASSIFIED
        assert sniffer.channel.snapshot() == {}

    def test_empty_shape_keeps_previous_value(self):
        channel = CaptureChannel()
        sniffer = ResponseSniffer(channel)
        sniffer.handle(_exchange(PROFILE_INFO_URL, FEED_BODY))
        sniffer.handle(_exchange(PROFILE_INFO_URL, {"data": {"user": None}}))
        assert len(channel.get(Topic.PROFILE_POSTS)) == 1


class TestOnResponse:
    def test_response_flows_into_channel(self):
        sniffer = ResponseSniffer()
        asyncio.run(sniffer.on_response(_mock_response(PROFILE_INFO_URL, FEED_BODY)))
        assert sniffer.channel.get(Topic.PROFILE_POSTS)[0].shortcode == "CxA"

    def test_unwanted_url_body_not_read(self):
        sniffer = ResponseSniffer()
        resp = _mock_response("https://www.instagram.com/static/x.js", {})
        asyncio.run(sniffer.on_response(resp))
        resp.body.assert_not_called()

    def test_body_read_failure_is_ignored(self):
        sniffer = ResponseSniffer()
        resp = _mock_response(PROFILE_INFO_URL, FEED_BODY)
        resp.body = AsyncMock(side_effect=Exception("Response body is unavailable for redirect responses"))
        asyncio.run(sniffer.on_response(resp))
        assert sniffer.channel.snapshot() == {}

    def test_attach_registers_response_listener(self):
        sniffer = ResponseSniffer()
        page = MagicMock()
        sniffer.attach(page)
        page.on.assert_called_once_with("response", sniffer.on_response)
