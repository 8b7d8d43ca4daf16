#!/usr/bin/env python
"""
Gemini API 연결 확인 스크립트.

primary / fallback 모델에 각각 짧은 요청을 보내고,
ResilientTextGenerator 경유 호출(JSON 모드)까지 확인한다.

실행:
    uv run python scripts/check_gemini_connection.py
"""

import asyncio
import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

# .env 파일 로드
from dotenv import load_dotenv  # noqa: E402

load_dotenv()

from src.app.main import build_generator, load_config  # noqa: E402
from src.app.providers import extract_text  # noqa: E402
from src.domain.errors import GenerationError  # noqa: E402
from src.domain.schemas import ExpectFormat  # noqa: E402
from src.utils.rate_limit import classify_rate_limit  # noqa: E402


async def check_model(generator, model: str) -> bool:
    """단일 모델 직접 호출 (fallback 없음)."""
    print("\n" + "=" * 60)
    print(f"🧪 {model}")
    print("=" * 60)

    try:
        envelope = await generator.backend.invoke(model, "Reply with the single word: pong")
        print(f"📥 응답: {extract_text(envelope).strip()}")
        return True
    except GenerationError as e:
        print(f"❌ {e}")
        info = classify_rate_limit(e)
        if info.is_rate_limited:
            print(f"   rate limit (retry_after_ms={info.retry_after_ms})")
        return False


async def check_generator(generator) -> bool:
    """retry/fallback 경유 JSON 호출."""
    print("\n" + "=" * 60)
    print("🧪 ResilientTextGenerator (JSON)")
    print("=" * 60)

    try:
        result = await generator.generate_text(
            generator.request(
                'Return {"ok": true} as JSON only.',
                expect_format=ExpectFormat.JSON,
            )
        )
    except GenerationError as e:
        print(f"❌ {e}")
        return False

    print(f"📥 parsed={result.parsed}")
    print(f"   모델: {result.model_used} (fallback={result.fallback_triggered})")
    return True


async def main() -> int:
    print("🚀 Gemini 연결 확인 시작")

    generator = build_generator(load_config())
    results = {
        "primary": await check_model(generator, generator.primary_model),
        "fallback": await check_model(generator, generator.fallback_model),
        "generator": await check_generator(generator),
    }

    print("\n" + "=" * 60)
    print("📊 결과 요약")
    print("=" * 60)
    for name, passed in results.items():
        print(f"  {name}: {'✅ PASS' if passed else '❌ FAIL'}")

    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
