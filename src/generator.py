'''
LLM 답변 생성 모델 설정
입력 : 모델 이름, temperature, 최대 출력 토큰 수
출력 : ChatOpenAI 객체 (질문 재작성 / 답변 생성 단계에서 공통 사용)

주요 함수:
def create_chat_model(model: str, temperature: float, max_tokens: int) -> ChatOpenAI
class UsageLoggingHandler(BaseCallbackHandler)
'''
import os
import time
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from dotenv import load_dotenv
from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.outputs import LLMResult
from langchain_openai import ChatOpenAI

# 환경변수 로드
load_dotenv()

logger = logging.getLogger(__name__)

# 기본 생성 설정
MODEL_NAME = "gpt-4-1106-preview"
TEMPERATURE = 0.5   # 값을 올리면 더 창의적인 답변
MAX_TOKENS = 4096


def create_chat_model(
    model: str = MODEL_NAME,
    temperature: float = TEMPERATURE,
    max_tokens: int = MAX_TOKENS,
) -> ChatOpenAI:
    """
    OpenAI 채팅 모델 생성

    API 키가 없으면 ValueError. 호출 중 발생하는 openai 오류(할당량, 타임아웃, 네트워크)는
    그대로 호출자에게 전달된다.
    """
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        raise ValueError("OPENAI_API_KEY 환경변수가 설정되지 않았습니다.")

    llm = ChatOpenAI(
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        api_key=api_key,
    )
    logger.info(f"Generator 초기화: model={model}, temperature={temperature}, max_tokens={max_tokens}")
    return llm


class UsageLoggingHandler(BaseCallbackHandler):
    """LLM 호출별 토큰 사용량과 지연 시간 로깅"""

    def __init__(self):
        self._start_times: Dict[UUID, float] = {}
        self.total_tokens = 0
        self.calls = 0

    def on_chat_model_start(self, serialized: Dict[str, Any], messages: Any, *, run_id: UUID, **kwargs: Any) -> None:
        self._start_times[run_id] = time.time()

    def on_llm_start(self, serialized: Dict[str, Any], prompts: Any, *, run_id: UUID, **kwargs: Any) -> None:
        self._start_times[run_id] = time.time()

    def on_llm_end(self, response: LLMResult, *, run_id: UUID, parent_run_id: Optional[UUID] = None, **kwargs: Any) -> None:
        start_time = self._start_times.pop(run_id, None)
        latency_ms = (time.time() - start_time) * 1000 if start_time else 0.0

        token_usage = (response.llm_output or {}).get("token_usage") or {}
        tokens_used = token_usage.get("total_tokens", 0)

        self.calls += 1
        self.total_tokens += tokens_used
        logger.info({
            "model": (response.llm_output or {}).get("model_name"),
            "tokens_used": tokens_used,
            "latency_ms": round(latency_ms, 2),
            "status": "success",
        })

    def on_llm_error(self, error: BaseException, *, run_id: UUID, **kwargs: Any) -> None:
        self._start_times.pop(run_id, None)
        logger.error({"error": str(error), "status": "failed"})
