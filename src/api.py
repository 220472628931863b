'''
채팅 API 서버
요청 : POST /api/chat {
    "question": "연차는 며칠?",
    "history": [["이전 질문", "이전 답변"], ...]
}
응답 : {
    "text": "LLM 생성 답변",
    "sourceDocuments": [{"pageContent": ..., "metadata": {...}}, ...]
}

실행: uvicorn api:app --app-dir src
'''
import os
import logging
from functools import lru_cache
from typing import List, Optional, Tuple

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from pipeline import RAGPipeline

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger("insajaengi")

app = FastAPI(title="AI 인사쟁이", version="1.0.0")


class ChatRequest(BaseModel):
    question: Optional[str] = Field(None, description="사용자의 최신 질문")
    history: List[Tuple[str, str]] = Field(
        default_factory=list,
        description="이전 대화 (질문, 답변) 목록 (클라이언트 관리)",
    )


@lru_cache(maxsize=1)
def get_pipeline() -> RAGPipeline:
    return RAGPipeline(config_path=os.getenv("RAG_CONFIG_PATH", "config/config.yaml"))


@app.exception_handler(RequestValidationError)
async def invalid_request(request: Request, exc: RequestValidationError):
    logger.warning("Invalid chat request: %s", exc.errors())
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


@app.post("/api/chat")
def chat(req: ChatRequest):
    if not req.question or not req.question.strip():
        return JSONResponse(status_code=400, content={"message": "No question in the request"})

    try:
        # 설정 파일 오류도 JSON 500으로 응답
        pipe = get_pipeline()
        result = pipe.query(req.question, req.history)
    except Exception as e:
        logger.exception("Chat processing failed: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e) or "Something went wrong"})

    return {"text": result["answer"], "sourceDocuments": result["source_documents"]}


@app.get("/health")
def health():
    return {"status": "ok"}
