"""OpenAI API 기반 비전 분석기.

도메인 VisionAnalyzer 인터페이스를 구현한다.
콜라주 이미지를 base64 data URL로 넣고 시스템 프롬프트와 함께 분석을 요청한다.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from pathlib import Path

from openai import OpenAI

from src.domain.exceptions import ProcessingError
from src.infrastructure.config.settings import VisionConfig

logger = logging.getLogger(__name__)


def image_data_url(image_path: Path) -> str:
    """로컬 이미지 파일을 data URL로 변환. 확장자로 MIME을 정하고 모르면 JPEG."""
    mime = mimetypes.guess_type(image_path.name)[0] or "image/jpeg"
    encoded = base64.b64encode(image_path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"


class OpenAIVisionAnalyzer:
    """OpenAI GPT 비전 분석기. 실패 시 attempt × base_delay 초 간격으로 재시도."""

    def __init__(self, api_key: str, config: VisionConfig, client: OpenAI | None = None):
        self._client = client or OpenAI(api_key=api_key)
        self._config = config

    def _call_api(self, system_prompt: str, data_url: str) -> str:
        """OpenAI Chat Completions API 동기 호출."""
        response = self._client.chat.completions.create(
            model=self._config.model,
            max_tokens=self._config.max_tokens,
            temperature=0.2,
            messages=[
                {"role": "system", "content": system_prompt},
                {
                    "role": "user",
                    "content": [{"type": "image_url", "image_url": {"url": data_url}}],
                },
            ],
        )
        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise ProcessingError("콘텐츠 필터에 의해 차단됨")
        return choice.message.content or ""

    async def analyze_image(self, image_path: Path, system_prompt: str) -> str:
        data_url = image_data_url(image_path)
        max_retries = self._config.max_retries
        logger.info(f"[vision] 분석 요청: {image_path.name} (model={self._config.model})")

        for attempt in range(1, max_retries + 1):
            try:
                text = self._call_api(system_prompt, data_url)
                logger.info(f"[vision] 응답 수신 ({len(text)}자)")
                return text
            except Exception as e:
                wait = self._config.retry_base_delay * attempt
                logger.warning(
                    f"[vision] 시도 {attempt}/{max_retries} 실패: {e}. {wait:.1f}초 후 재시도"
                )
                if attempt < max_retries:
                    await asyncio.sleep(wait)

        raise ProcessingError(f"비전 분석 {max_retries}회 시도 실패: {image_path}")
