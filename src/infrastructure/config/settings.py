from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic_settings import BaseSettings


# ──────────────────────────────────────────
# 환경변수 기반 시크릿 설정 (.env)
# ──────────────────────────────────────────
class Settings(BaseSettings):
    openai_api_key: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


# ──────────────────────────────────────────
# YAML 기반 앱 설정 (config/settings.yaml)
# ──────────────────────────────────────────
class ScraperConfig:
    def __init__(self, data: dict[str, Any]):
        self.base_url: str = data.get("base_url", "https://www.instagram.com")
        self.headless: bool = data.get("headless", True)
        self.profile_dir: str = data.get("profile_dir", "browser_data")
        self.output_dir: str = data.get("output_dir", "profile_screenshots")
        self.user_agent: str = data.get(
            "user_agent",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36",
        )
        self.viewport_width: int = data.get("viewport_width", 1280)
        self.viewport_height: int = data.get("viewport_height", 900)
        self.locale: str = data.get("locale", "en-US")
        self.navigation_timeout_ms: int = data.get("navigation_timeout_ms", 60000)
        self.settle_seconds: float = data.get("settle_seconds", 3.0)
        self.load_delay_ms: int = data.get("load_delay_ms", 800)
        self.scroll_px: int = data.get("scroll_px", 0)
        self.detail_settle_seconds: float = data.get("detail_settle_seconds", 0.8)
        # 캡처 저장소 폴링
        self.poll_interval: float = data.get("poll_interval", 0.4)
        self.feed_timeout: float = data.get("feed_timeout", 25.0)
        self.highlights_timeout: float = data.get("highlights_timeout", 20.0)
        self.carousel_timeout: float = data.get("carousel_timeout", 5.0)
        self.take_screenshot: bool = data.get("take_screenshot", True)
        self.download_delay: float = data.get("download_delay", 0.2)


class VisionConfig:
    def __init__(self, data: dict[str, Any]):
        self.model: str = data.get("model", "gpt-4o")
        self.max_retries: int = data.get("max_retries", 5)
        self.retry_base_delay: float = data.get("retry_base_delay", 1.0)
        self.max_tokens: int = data.get("max_tokens", 2048)
        self.prompt_path: str = data.get("prompt_path", "prompts/general_info_prompt.txt")


class CollageConfig:
    def __init__(self, data: dict[str, Any]):
        self.columns: int = data.get("columns", 3)
        self.cell_size: int = data.get("cell_size", 300)
        self.padding: int = data.get("padding", 20)
        self.max_images: int = data.get("max_images", 12)
        self.quality: int = data.get("quality", 90)


class CampaignConfig:
    def __init__(self, data: dict[str, Any]):
        self.max_profiles: int = data.get("max_profiles", 3)


class AppConfig:
    """YAML에서 로드된 전체 앱 설정."""

    def __init__(self, data: dict[str, Any]):
        self.name: str = data.get("app", {}).get("name", "IG Profile Sniffer")

        self.scraper = ScraperConfig(data.get("scraper", {}))
        self.vision = VisionConfig(data.get("vision", {}))
        self.collage = CollageConfig(data.get("collage", {}))
        self.campaign = CampaignConfig(data.get("campaign", {}))


def load_app_config(path: str = "config/settings.yaml") -> AppConfig:
    """YAML 설정 파일을 로드하여 AppConfig를 반환."""
    config_path = Path(path)
    if not config_path.exists():
        return AppConfig({})
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return AppConfig(data)


def read_system_prompt(path: str) -> str:
    prompt_path = Path(path)
    if not prompt_path.exists():
        raise FileNotFoundError(f"프롬프트 파일 없음: {prompt_path}")
    return prompt_path.read_text(encoding="utf-8").strip()
