"""
App layer: API 서버 (FastAPI).

역할:
- 호출자 식별 (X-User-Id), 요청/응답 변환
- 서비스 호출 (생성 + 저장)
- ⚠️ 인증/스케줄링 없음 (호스팅 플랫폼에 위임)
"""
