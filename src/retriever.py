from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from langchain_community.vectorstores import FAISS
from langchain_core.callbacks import BaseCallbackHandler
from langchain_core.documents import Document
from langchain_core.vectorstores import VectorStoreRetriever

# ============================
# 검색기 생성
# ============================

def get_retriever(vectorstore: FAISS, top_k: int = 4) -> VectorStoreRetriever:
    """
    VectorStore 기반 유사도 검색기 생성
    입력:
        vectorstore: 이미 로드된 VectorStore 객체
        top_k: 상위 검색 개수
    출력:
        VectorStoreRetriever (질문 문자열 -> Document 리스트)
    """
    return vectorstore.as_retriever(search_type="similarity", search_kwargs={"k": top_k})


# ============================
# 출처 문서 수집
# ============================

class SourceDocumentCollector(BaseCallbackHandler):
    """
    체인 실행 중 검색기 결과를 기록하는 콜백.
    검색을 다시 하지 않고 답변과 함께 출처 문서를 돌려주기 위해 사용
    """

    def __init__(self):
        self.documents: List[Document] = []

    def on_retriever_end(
        self,
        documents: Sequence[Document],
        *,
        run_id: UUID,
        parent_run_id: Optional[UUID] = None,
        **kwargs: Any,
    ) -> None:
        self.documents = list(documents)


# ============================
# 출처 문서 포맷팅
# ============================

def serialize_documents(docs: List[Document]) -> List[Dict]:
    return [{"pageContent": doc.page_content, "metadata": dict(doc.metadata)} for doc in docs]


def extract_sources(docs: List[Document]) -> List[str]:
    '''
    문서 metadata의 source(파일명) 중복 제거 후 정렬
    '''
    source_ids = []
    for doc in docs:
        source_id = doc.metadata.get('source', 'Unknown Source')
        if source_id not in source_ids:
            source_ids.append(source_id)
    source_ids.sort()
    return source_ids
