"""공통 테스트 픽스처: 네트워크 없이 동작하는 가짜 검색기/모델/벡터스토어"""
from typing import Any, Callable, Dict, List, Tuple

import pytest
from langchain_core.callbacks import CallbackManagerForRetrieverRun
from langchain_core.documents import Document
from langchain_core.retrievers import BaseRetriever
from langchain_core.runnables import RunnableLambda
from pydantic import Field


class FakeRetriever(BaseRetriever):
    """고정된 문서를 반환하고 받은 쿼리를 기록"""

    documents: List[Document] = Field(default_factory=list)
    queries: List[str] = Field(default_factory=list)

    def _get_relevant_documents(
        self, query: str, *, run_manager: CallbackManagerForRetrieverRun
    ) -> List[Document]:
        self.queries.append(query)
        return list(self.documents)


class FakeVectorStore:
    def __init__(self, retriever: FakeRetriever):
        self.retriever = retriever
        self.search_kwargs: Dict[str, Any] = {}

    def as_retriever(self, **kwargs):
        self.search_kwargs = kwargs.get("search_kwargs", {})
        return self.retriever


def make_recording_model(responses: List[str]) -> Tuple[RunnableLambda, List[str]]:
    """
    호출 순서대로 responses를 반환하는 모델. 받은 프롬프트 문자열을 prompts에 기록
    """
    prompts: List[str] = []

    def _respond(prompt_value) -> str:
        prompts.append(prompt_value.to_string())
        return responses[len(prompts) - 1]

    return RunnableLambda(_respond), prompts


@pytest.fixture
def labor_law_docs() -> List[Document]:
    return [
        Document(
            page_content="근로기준법 제60조(연차 유급휴가) ① 사용자는 1년간 80퍼센트 이상 출근한 근로자에게 15일의 유급휴가를 주어야 한다.",
            metadata={"source": "근로기준법.pdf", "chunk_index": 3},
        ),
        Document(
            page_content="② 사용자는 계속하여 근로한 기간이 1년 미만인 근로자에게 1개월 개근 시 1일의 유급휴가를 주어야 한다.",
            metadata={"source": "근로기준법.pdf", "chunk_index": 4},
        ),
    ]


@pytest.fixture
def fake_retriever(labor_law_docs) -> FakeRetriever:
    return FakeRetriever(documents=labor_law_docs)


@pytest.fixture
def recording_model() -> Callable[[List[str]], Tuple[RunnableLambda, List[str]]]:
    return make_recording_model
