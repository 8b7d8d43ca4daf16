"""
생성 백엔드 추상 인터페이스.

- Provider 추상화로 백엔드 교체 가능 (테스트에서는 mock 백엔드)
- 모델명은 config만 SSOT, 백엔드는 호출 시 target으로 받음
- 백엔드 핸들은 프로세스당 1회 생성, 요청마다 참조로 전달
"""

from abc import ABC, abstractmethod
from typing import Any


class TextBackend(ABC):
    """
    텍스트 생성 백엔드 추상 인터페이스.

    역할: target 모델에 프롬프트 전달, 응답 envelope 그대로 반환
    (envelope 정규화는 response.extract_text 담당)
    """

    @abstractmethod
    async def invoke(self, target: str, prompt: str) -> Any:
        """
        백엔드 호출.

        Args:
            target: 모델 ID
            prompt: 프롬프트

        Returns:
            응답 envelope (SDK 응답 객체 또는 dict)

        Raises:
            BackendError: 호출 실패 (status_code/message 포함)
        """
        ...
