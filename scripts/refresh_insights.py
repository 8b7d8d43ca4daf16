#!/usr/bin/env python3
"""
refresh_insights.py - 산업 인사이트 주기 갱신

저장된 모든 산업(또는 --industry로 지정한 산업)의 인사이트를 다시 생성하고
last_updated / next_update를 갱신한다. 스케줄링은 외부(cron 등) 담당.

사용법:
    # 저장된 모든 산업 갱신
    uv run python scripts/refresh_insights.py

    # 특정 산업만
    uv run python scripts/refresh_insights.py --industry "tech-software"

    # cron 예시 (매주 일요일 자정)
    0 0 * * 0 cd /path/to/project && uv run python scripts/refresh_insights.py >> /var/log/refresh_insights.log 2>&1
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.app.main import build_generator, build_store, load_config  # noqa: E402
from src.app.services import InsightService  # noqa: E402
from src.domain.constants import INSIGHTS_REFRESH_DAYS  # noqa: E402

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


async def run(config_path: Path | None, industries: list[str] | None) -> int:
    """
    갱신 실행.

    Returns:
        실패한 산업 수
    """
    config = load_config(config_path)
    service = InsightService(
        build_store(config),
        build_generator(config),
        refresh_days=config.get("insights", {}).get(
            "refresh_days", INSIGHTS_REFRESH_DAYS
        ),
    )

    targets = industries if industries else service.store.list_industries()
    if not targets:
        logger.info("No industries to refresh")
        return 0

    logger.info(f"Refreshing {len(targets)} industries")
    refreshed = await service.refresh_all(targets)
    failed = len(targets) - refreshed
    logger.info(f"Refreshed {refreshed}/{len(targets)} industries")
    return failed


def main() -> int:
    parser = argparse.ArgumentParser(
        description="산업 인사이트 주기 갱신",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--industry",
        action="append",
        help="갱신할 산업 (여러 번 지정 가능, 생략 시 저장된 전체)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="설정 파일 경로 (기본: default.yaml)",
    )
    args = parser.parse_args()

    load_dotenv()
    failed = asyncio.run(run(args.config, args.industry))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
