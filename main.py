"""IG Profile Sniffer: 엔트리포인트.

1. 설정 로드 (.env + config/settings.yaml)
2. 의존성 컨테이너 조립
3. 명령 실행 (login / scrape / analyze / user-info / diff)

프로필 수집은 Playwright로 띄운 Chromium에서 페이지가 받는 응답을 관찰하여 수행.
로그인 화면이 뜨면 먼저 `python main.py login`으로 세션을 저장한다.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가
sys.path.insert(0, str(Path(__file__).parent))

from src.infrastructure.config.container import Container
from src.infrastructure.config.settings import AppConfig, Settings, load_app_config

Path("logs").mkdir(exist_ok=True)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler("logs/app.log", encoding="utf-8"),
    ],
)
logger = logging.getLogger(__name__)


async def run_login(settings: Settings, config: AppConfig) -> None:
    container = Container(settings=settings, app_config=config)
    try:
        await container.browser.manual_login(f"{config.scraper.base_url}/accounts/login/")
    finally:
        await container.close()


async def run_scrape(settings: Settings, config: AppConfig, usernames: list[str]) -> None:
    """지정한 프로필을 순서대로 수집. 하나가 실패해도 나머지는 계속."""
    container = Container(settings=settings, app_config=config)
    try:
        uc = container.scrape_profile_use_case()
        for username in usernames:
            print(f"[{username}] 수집 시작...")
            run = await uc.execute(username)
            if run.ok:
                print(
                    f"[{username}] 완료: 게시물 {run.posts_collected}건, "
                    f"하이라이트 {run.highlights_collected}건"
                )
            else:
                print(f"[{username}] 실패: {run.error_message}")
    finally:
        await container.close()


async def run_analyze(settings: Settings, config: AppConfig, usernames: list[str]) -> None:
    container = Container(settings=settings, app_config=config)
    try:
        prompt = container.system_prompt()
        uc = container.analyze_profile_use_case()
        for username in usernames:
            result = await uc.execute(username, prompt)
            await container.profile_repo.save_analysis(username, result)
            if result["ok"]:
                print(f"[{username}] 분석 완료 ({result['post_images_count']}장)\n{result['analysis']}")
            else:
                print(f"[{username}] 분석 실패: {result['error']}")
    finally:
        await container.close()


async def run_user_info(settings: Settings, config: AppConfig, username: str) -> None:
    container = Container(settings=settings, app_config=config)
    try:
        result = await container.get_user_info_use_case().execute(
            username, container.system_prompt()
        )
        print(json.dumps(result, ensure_ascii=False, indent=2))
    finally:
        await container.close()


async def run_diff(
    settings: Settings,
    config: AppConfig,
    pre_path: str,
    post_path: str,
    process: bool,
    limit: int | None,
) -> None:
    container = Container(settings=settings, app_config=config)
    try:
        if not process:
            diff = container.diff_followers_use_case().execute(pre_path, post_path)
            print(
                json.dumps(
                    {
                        "new": [c.to_dict() for c in diff.new],
                        "lost": [c.to_dict() for c in diff.lost],
                    },
                    ensure_ascii=False,
                    indent=2,
                )
            )
            return

        uc = container.process_connection_changes_use_case()
        report = await uc.execute(pre_path, post_path, container.system_prompt(), limit)

        print(f"\n[SUMMARY] {len(report.analyses)}명 처리")
        print(f"  성공: {len(report.succeeded)}")
        print(f"  실패: {len(report.failed)}")
        for r in report.succeeded:
            print(f"  - {r['user_name']}: 콜라주 이미지 {r['post_images_count']}장")
        for r in report.failed:
            print(f"  - {r['user_name']}: {r['error']}")
    finally:
        await container.close()


def main() -> None:
    parser = argparse.ArgumentParser(description="IG Profile Sniffer")
    parser.add_argument("--config", default="config/settings.yaml", help="YAML 설정 파일 경로")
    subparsers = parser.add_subparsers(dest="command", help="실행 명령")

    subparsers.add_parser("login", help="브라우저를 열어 수동 로그인 후 세션 저장")

    scrape_parser = subparsers.add_parser("scrape", help="프로필 수집 (피드/하이라이트/캐러셀)")
    scrape_parser.add_argument("usernames", nargs="+", help="수집할 사용자 이름")

    analyze_parser = subparsers.add_parser("analyze", help="저장된 수집 결과로 콜라주 분석")
    analyze_parser.add_argument("usernames", nargs="+", help="분석할 사용자 이름")

    info_parser = subparsers.add_parser("user-info", help="분석 결과 조회 (없으면 수집 + 분석)")
    info_parser.add_argument("username")

    diff_parser = subparsers.add_parser("diff", help="팔로워 내보내기 파일 비교")
    diff_parser.add_argument("pre", help="캠페인 이전 followers_1.json")
    diff_parser.add_argument("post", help="캠페인 이후 followers_1.json")
    diff_parser.add_argument(
        "--process", action="store_true", help="변화한 계정을 수집 + 분석까지 진행"
    )
    diff_parser.add_argument("--limit", type=int, default=None, help="처리할 최대 계정 수")

    args = parser.parse_args()

    settings = Settings()
    config = load_app_config(args.config)

    if args.command == "login":
        asyncio.run(run_login(settings, config))
    elif args.command == "scrape":
        asyncio.run(run_scrape(settings, config, args.usernames))
    elif args.command == "analyze":
        asyncio.run(run_analyze(settings, config, args.usernames))
    elif args.command == "user-info":
        asyncio.run(run_user_info(settings, config, args.username))
    elif args.command == "diff":
        asyncio.run(
            run_diff(settings, config, args.pre, args.post, args.process, args.limit)
        )
    else:
        parser.print_help()
        print("\n사용 방법:")
        print("  1. 로그인 세션 저장:")
        print("     python main.py login")
        print("  2. 프로필 수집 및 분석:")
        print("     python main.py scrape some.user other.user")
        print("     python main.py analyze some.user")
        print("     python main.py user-info some.user")
        print("  3. 팔로워 변화 비교:")
        print("     python main.py diff pre/followers_1.json post/followers_1.json --process")


if __name__ == "__main__":
    main()
