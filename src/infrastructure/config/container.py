"""의존성 주입 컨테이너.

클린 아키텍처에서 모든 의존성 조립은 최외곽(Composition Root)에서 이루어진다.
이 컨테이너가 설정에 따라 구체 구현을 생성하고 유즈케이스에 주입한다.
"""

from __future__ import annotations

from src.application.use_cases.analyze_profile import AnalyzeProfileUseCase
from src.application.use_cases.diff_followers import DiffFollowersUseCase
from src.application.use_cases.get_user_info import GetUserInfoUseCase
from src.application.use_cases.process_connection_changes import ProcessConnectionChangesUseCase
from src.application.use_cases.scrape_profile import ScrapeProfileUseCase
from src.infrastructure.ai.openai_vision import OpenAIVisionAnalyzer
from src.infrastructure.collectors.browser_manager import BrowserManager
from src.infrastructure.collectors.instagram_scraper import InstagramProfileScraper
from src.infrastructure.config.settings import AppConfig, Settings, read_system_prompt
from src.infrastructure.database.json_profile_repo import (
    JsonProfileRepository,
    load_connection_export,
)
from src.infrastructure.delivery.collage import PillowCollageRenderer
from src.infrastructure.delivery.image_downloader import PlaywrightImageDownloader


class Container:
    """애플리케이션 의존성 컨테이너."""

    def __init__(self, settings: Settings, app_config: AppConfig):
        self.settings = settings
        self.config = app_config

        # ─── Repository (JSON 파일) ───
        self.profile_repo = JsonProfileRepository(app_config.scraper.output_dir)

        # ─── Infrastructure Services ───
        self.browser = BrowserManager(app_config.scraper)
        self.scraper = InstagramProfileScraper(self.browser, app_config.scraper)
        self.downloader = PlaywrightImageDownloader(
            self.browser, delay=app_config.scraper.download_delay
        )
        self.collage_renderer = PillowCollageRenderer(app_config.collage)
        self.vision = OpenAIVisionAnalyzer(
            api_key=settings.openai_api_key,
            config=app_config.vision,
        )

    def system_prompt(self) -> str:
        return read_system_prompt(self.config.vision.prompt_path)

    async def close(self) -> None:
        await self.browser.close()

    # ─── Use Case 팩토리 ───

    def scrape_profile_use_case(self) -> ScrapeProfileUseCase:
        return ScrapeProfileUseCase(scraper=self.scraper, repo=self.profile_repo)

    def analyze_profile_use_case(self) -> AnalyzeProfileUseCase:
        return AnalyzeProfileUseCase(
            repo=self.profile_repo,
            downloader=self.downloader,
            renderer=self.collage_renderer,
            analyzer=self.vision,
        )

    def get_user_info_use_case(self) -> GetUserInfoUseCase:
        return GetUserInfoUseCase(
            repo=self.profile_repo,
            scrape=self.scrape_profile_use_case(),
            analyze=self.analyze_profile_use_case(),
        )

    def diff_followers_use_case(self) -> DiffFollowersUseCase:
        return DiffFollowersUseCase(loader=load_connection_export)

    def process_connection_changes_use_case(self) -> ProcessConnectionChangesUseCase:
        return ProcessConnectionChangesUseCase(
            diff=self.diff_followers_use_case(),
            scrape=self.scrape_profile_use_case(),
            analyze=self.analyze_profile_use_case(),
            max_profiles=self.config.campaign.max_profiles,
        )
