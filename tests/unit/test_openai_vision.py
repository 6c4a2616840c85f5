"""Tests for src.infrastructure.ai.openai_vision: mocked OpenAI client."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from src.domain.exceptions import ProcessingError
from src.infrastructure.ai.openai_vision import OpenAIVisionAnalyzer, image_data_url
from src.infrastructure.config.settings import VisionConfig


def _completion(text: str, finish_reason: str = "stop") -> MagicMock:
    choice = MagicMock()
    choice.finish_reason = finish_reason
    choice.message.content = text
    response = MagicMock()
    response.choices = [choice]
    return response


@pytest.fixture
def collage(tmp_path: Path) -> Path:
    path = tmp_path / "profile_collage.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake")
    return path


class TestImageDataUrl:
    def test_jpeg(self, collage: Path):
        assert image_data_url(collage).startswith("data:image/jpeg;base64,")

    def test_png(self, tmp_path: Path):
        path = tmp_path / "a.png"
        path.write_bytes(b"\x89PNG")
        assert image_data_url(path).startswith("data:image/png;base64,")


class TestOpenAIVisionAnalyzer:
    def test_success(self, collage: Path):
        client = MagicMock()
        client.chat.completions.create.return_value = _completion("fashion, travel")
        analyzer = OpenAIVisionAnalyzer("sk-test", VisionConfig({"model": "gpt-4o-mini"}), client=client)

        text = asyncio.run(analyzer.analyze_image(collage, "describe"))

        assert text == "fashion, travel"
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"][0] == {"role": "system", "content": "describe"}
        part = kwargs["messages"][1]["content"][0]
        assert part["type"] == "image_url"
        assert part["image_url"]["url"].startswith("data:image/jpeg;base64,")

    def test_retries_with_linear_backoff(self, collage: Path):
        client = MagicMock()
        client.chat.completions.create.side_effect = [
            RuntimeError("rate limited"),
            RuntimeError("rate limited"),
            _completion("ok"),
        ]
        analyzer = OpenAIVisionAnalyzer(
            "sk-test", VisionConfig({"max_retries": 5, "retry_base_delay": 2.0}), client=client
        )

        with patch("src.infrastructure.ai.openai_vision.asyncio.sleep", new=AsyncMock()) as sleep:
            assert asyncio.run(analyzer.analyze_image(collage, "p")) == "ok"

        assert [c.args[0] for c in sleep.await_args_list] == [2.0, 4.0]

    def test_gives_up_after_max_retries(self, collage: Path):
        client = MagicMock()
        client.chat.completions.create.side_effect = RuntimeError("down")
        analyzer = OpenAIVisionAnalyzer("sk-test", VisionConfig({"max_retries": 3}), client=client)

        with patch("src.infrastructure.ai.openai_vision.asyncio.sleep", new=AsyncMock()) as sleep:
            with pytest.raises(ProcessingError):
                asyncio.run(analyzer.analyze_image(collage, "p"))

        assert client.chat.completions.create.call_count == 3
        assert sleep.await_count == 2

    def test_content_filter_is_an_error(self, collage: Path):
        client = MagicMock()
        client.chat.completions.create.return_value = _completion("", finish_reason="content_filter")
        analyzer = OpenAIVisionAnalyzer("sk-test", VisionConfig({"max_retries": 1}), client=client)

        with pytest.raises(ProcessingError):
            asyncio.run(analyzer.analyze_image(collage, "p"))
