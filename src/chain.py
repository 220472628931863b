'''
대화형 검색 QA 체인 구성
입력 : {
    "question": "사용자 질문",
    "chat_history": "Human: ...\nAssistant: ..."
}
출력 : "LLM 생성 답변" (문자열)

단계:
1. 대화 기록을 이용해 질문을 독립적인 질문으로 재작성
2. 재작성된 질문으로 문서 검색 후 하나의 컨텍스트 문자열로 결합
3. 컨텍스트 + 대화 기록 + 질문으로 답변 생성

주요 함수:
def combine_documents(docs: List[Document], separator: str) -> str
def make_chain(retriever: BaseRetriever, llm: Optional[Runnable]) -> Runnable
'''
from operator import itemgetter
from typing import List, Optional

from langchain_core.documents import Document
from langchain_core.output_parsers import StrOutputParser
from langchain_core.retrievers import BaseRetriever
from langchain_core.runnables import Runnable, RunnableLambda

from generator import create_chat_model
from prompts import build_answer_prompt, build_condense_question_prompt


def combine_documents(docs: List[Document], separator: str = "\n\n") -> str:
    '''
    검색된 문서들의 본문을 순서대로 separator로 연결
    '''
    serialized_docs = [doc.page_content for doc in docs]
    return separator.join(serialized_docs)


def make_chain(retriever: BaseRetriever, llm: Optional[Runnable] = None) -> Runnable:
    """
    질문 재작성 → 검색 → 답변 생성 순서의 체인 생성

    Args:
        retriever: 질문을 받아 Document 리스트를 반환하는 검색기
        llm: 두 단계에서 함께 사용할 모델 (없으면 기본 설정의 ChatOpenAI)

    Returns:
        {"question", "chat_history"}를 입력으로 받아 답변 문자열을 반환하는 Runnable
    """
    condense_question_prompt = build_condense_question_prompt()
    answer_prompt = build_answer_prompt()

    model = llm if llm is not None else create_chat_model()

    # 1. 대화 맥락을 제거한 독립 질문 생성 (벡터 검색용)
    standalone_question_chain = condense_question_prompt | model | StrOutputParser()

    # 2. 검색 후 문서 결합
    retrieval_chain = retriever | RunnableLambda(combine_documents)

    # 3. 독립 질문 + 검색 컨텍스트 + 대화 기록으로 답변 생성
    answer_chain = (
        {
            "context": itemgetter("question") | retrieval_chain,
            "chat_history": itemgetter("chat_history"),
            "question": itemgetter("question"),
        }
        | answer_prompt
        | model
        | StrOutputParser()
    )

    conversational_retrieval_qa_chain = (
        {
            "question": standalone_question_chain,
            "chat_history": itemgetter("chat_history"),
        }
        | answer_chain
    )

    return conversational_retrieval_qa_chain
