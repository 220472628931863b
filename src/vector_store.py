'''
역할: Vector DB(FAISS) 구축 및 관리
입력 : [
    {
        "chunk_id": "doc_0_chunk_0",
        "text": "청크1 텍스트...",
        "embedding": [0.123, -0.456, ...],
        "metadata": {...}
    }
]
출력 : VectorStore 인덱스 저장 (파일 시스템: index.faiss, index.pkl)

주요 함수:
def get_embedding_model(model: str) -> OpenAIEmbeddings
def create_vector_store(chunks: List[Dict], model: str) -> FAISS
def save_vector_store(store: FAISS, path: str)
def load_vector_store(path: str, model: str) -> FAISS
'''

import os
import logging
from typing import List, Dict

from dotenv import load_dotenv
from langchain_community.vectorstores import FAISS
from langchain_openai import OpenAIEmbeddings

from embedder import EMBEDDING_MODEL

# 환경변수 로드
load_dotenv()

logger = logging.getLogger(__name__)


def get_embedding_model(model: str = EMBEDDING_MODEL) -> OpenAIEmbeddings:
    '''
    검색 시 쿼리 임베딩용 모델 (청크 임베딩과 같은 모델이어야 함)
    '''
    return OpenAIEmbeddings(model=model, api_key=os.getenv('OPENAI_API_KEY'))


def create_vector_store(chunks: List[Dict], model: str = EMBEDDING_MODEL) -> FAISS:
    '''
    이미 임베딩된 청크로 LangChain VectorStore 생성
    '''
    if not chunks:
        raise ValueError("VectorStore를 만들 청크가 없습니다.")

    texts = [chunk['text'] for chunk in chunks]
    embeddings_list = [chunk['embedding'] for chunk in chunks]
    metadatas = [chunk.get('metadata', {}) for chunk in chunks]
    ids = [chunk['chunk_id'] for chunk in chunks]

    vectorstore = FAISS.from_embeddings(
        text_embeddings=list(zip(texts, embeddings_list)),
        embedding=get_embedding_model(model),
        metadatas=metadatas,
        ids=ids,
    )
    logger.info(f"저장된 벡터의 개수 : {len(chunks)}")
    return vectorstore


def save_vector_store(vectorstore: FAISS, path: str):
    vectorstore.save_local(path)
    logger.info(f"VectorStore 저장 완료: {path}")


def load_vector_store(path: str, model: str = EMBEDDING_MODEL) -> FAISS:
    if not os.path.exists(os.path.join(path, 'index.faiss')):
        raise FileNotFoundError(f"VectorStore 경로가 존재하지 않습니다: {os.path.abspath(path)}")

    vectorstore = FAISS.load_local(
        path,
        embeddings=get_embedding_model(model),
        allow_dangerous_deserialization=True  # 직접 저장한 index.pkl만 로드
    )
    logger.info(f"VectorStore 불러오기 완료: {path}")
    return vectorstore
