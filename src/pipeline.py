'''
전체 RAG 파이프라인 통합
입력 : {
    "question": "사용자 질문",
    "chat_history": [("이전 질문", "이전 답변"), ...]  # optional
}

출력 :{
    "answer": "LLM 생성 답변",
    "sources": ["근로기준법.pdf", ...],
    "source_documents": [{"pageContent": ..., "metadata": {...}}, ...]
}

주요 함수:
class RAGPipeline:
    def __init__(self, config_path: str)
    def build_index(self, rebuild: bool)
    def load_index(self)
    def query(self, question: str, chat_history: List) -> Dict
    def stream_query(self, question: str, chat_history: List) -> Iterator[str]
'''
import os
import json
import copy
import logging
import argparse
from typing import Any, Dict, Iterator, List, Optional, Sequence

import yaml
from langchain_core.runnables import Runnable

from chain import make_chain
from conversation import ConversationManager, format_chat_history, sanitize_question
from data_loader import load_documents
from embedder import EMBEDDING_MODEL, embed_chunks
from generator import MAX_TOKENS, MODEL_NAME, TEMPERATURE, UsageLoggingHandler, create_chat_model
from preprocessor import DEFAULT_CHUNK_OVERLAP, DEFAULT_CHUNK_SIZE, process_all_documents
from retriever import SourceDocumentCollector, extract_sources, get_retriever, serialize_documents
from vector_store import create_vector_store, load_vector_store, save_vector_store

logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    'paths': {
        'data_dir': './data/docs',
        'vector_store_dir': './vector_store',
    },
    'chunking': {
        'chunk_size': DEFAULT_CHUNK_SIZE,
        'chunk_overlap': DEFAULT_CHUNK_OVERLAP,
    },
    'retrieval': {
        'top_k': 4,
    },
    'openai': {
        'chat_model': MODEL_NAME,
        'temperature': TEMPERATURE,
        'max_tokens': MAX_TOKENS,
        'embedding_model': EMBEDDING_MODEL,
    },
}


def load_config(config_path: Optional[str]) -> Dict[str, Any]:
    '''
    YAML/JSON 설정 파일을 기본 설정 위에 병합
    '''
    config = copy.deepcopy(DEFAULT_CONFIG)
    if config_path is None:
        return config

    if not os.path.exists(config_path):
        abs_path = os.path.abspath(config_path)
        raise FileNotFoundError(f"Config 파일이 존재하지 않습니다: {abs_path}")

    # YAML or JSON 자동 판별
    ext = os.path.splitext(config_path)[1].lower()
    with open(config_path, "r", encoding="utf-8") as f:
        if ext in [".yaml", ".yml"]:
            loaded = yaml.safe_load(f) or {}
        elif ext == ".json":
            loaded = json.load(f)
        else:
            raise ValueError("Config 파일은 .yaml/.yml/.json 만 지원합니다.")

    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values
    return config


class RAGPipeline:
    """
    전체 RAG 파이프라인 총괄
    build_index() → 문서 → 청크 → 임베딩 → VectorStore 저장
    query() → 질문 재작성 + 검색 + LLM 답변
    """
    def __init__(self, config_path: Optional[str] = None,
                 llm: Optional[Runnable] = None, vector_store=None):
        self.config = load_config(config_path)
        self.top_k = self.config['retrieval']['top_k']
        self.vector_store_path = self.config['paths']['vector_store_dir']
        self.embedding_model = self.config['openai']['embedding_model']
        self.vector_store = vector_store
        self.llm = llm

    def build_index(self, rebuild: bool = False):
        index_file_path = os.path.join(self.vector_store_path, 'index.faiss')

        # 기존 인덱스 로드 시도
        if os.path.exists(index_file_path) and not rebuild:
            logger.info(f"기존 벡터스토어 로드: {self.vector_store_path}")
            self.load_index()
            return

        logger.info("새 인덱스 생성")
        documents = load_documents(self.config['paths']['data_dir'])
        all_chunks = process_all_documents(documents, self.config['chunking'])
        all_chunks = embed_chunks(all_chunks, self.embedding_model)

        self.vector_store = create_vector_store(all_chunks, self.embedding_model)
        save_vector_store(self.vector_store, self.vector_store_path)

    def load_index(self):
        self.vector_store = load_vector_store(self.vector_store_path, self.embedding_model)

    def _get_llm(self) -> Runnable:
        if self.llm is None:
            openai_config = self.config['openai']
            self.llm = create_chat_model(
                model=openai_config['chat_model'],
                temperature=openai_config['temperature'],
                max_tokens=openai_config['max_tokens'],
            )
        return self.llm

    def _prepare(self, question: str, chat_history: Optional[Sequence[Sequence[str]]]):
        if not question or not question.strip():
            raise ValueError("질문이 비어 있습니다.")

        if self.vector_store is None:
            self.load_index()

        retriever = get_retriever(self.vector_store, self.top_k)
        chain = make_chain(retriever, self._get_llm())
        inputs = {
            "question": sanitize_question(question),
            "chat_history": format_chat_history(chat_history),
        }
        return chain, inputs

    def query(self, question: str, chat_history: Optional[Sequence[Sequence[str]]] = None) -> Dict[str, Any]:
        """
        전체 RAG Query 처리 (체인 1회 실행, 출처 문서는 콜백으로 수집)
        """
        chain, inputs = self._prepare(question, chat_history)
        collector = SourceDocumentCollector()

        logger.info(f"질문 처리 중: history_turns={len(chat_history or [])}, question_len={len(inputs['question'])}")
        answer = chain.invoke(inputs, config={"callbacks": [collector, UsageLoggingHandler()]})
        logger.info(f"답변 생성 완료: {len(answer)}자, 검색된 문서 {len(collector.documents)}개")

        return {
            "answer": answer,
            "sources": extract_sources(collector.documents),
            "source_documents": serialize_documents(collector.documents),
        }

    def stream_query(self, question: str, chat_history: Optional[Sequence[Sequence[str]]] = None) -> Iterator[str]:
        chain, inputs = self._prepare(question, chat_history)
        for chunk in chain.stream(inputs, config={"callbacks": [UsageLoggingHandler()]}):
            yield chunk


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="AI 인사쟁이 노무 상담 챗봇")
    parser.add_argument("--config", default=os.getenv("RAG_CONFIG_PATH", "config/config.yaml"))
    parser.add_argument("--ingest", action="store_true", help="문서로 VectorStore를 새로 생성")
    args = parser.parse_args(argv)

    pipe = RAGPipeline(config_path=args.config)
    if args.ingest:
        pipe.build_index(rebuild=True)

    conversation = ConversationManager()
    while True:
        question = input("질문(q 입력시 종료): ")
        if question.lower() == 'q':
            break

        print("🤖 AI: ", end="", flush=True)
        answer = ""
        for chunk in pipe.stream_query(question, conversation.get_history()):
            answer += chunk
            print(chunk, end="", flush=True)
        print()
        conversation.add_turn(question, answer)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    main()
