'''
청크 텍스트 임베딩 생성 (OpenAI API 사용)
입력 : [
    {
        "chunk_id": "doc_0_chunk_0",
        "text": "청크1 텍스트...",
        "metadata": {...}
    }
]

출력 : [
    {
        "chunk_id": "doc_0_chunk_0",
        "text": "청크1 텍스트...",
        "embedding": [0.123, -0.456, ...],  # text-embedding-3-small: 1536차원
        "metadata": {...}
    }
]

주요 함수:
def get_embeddings(texts: List[str], model: str) -> List[List[float]]
def embed_chunks(chunks: List[Dict], model: str, batch_size: int) -> List[Dict]
'''

import os
import time
from typing import List, Dict, Optional

from dotenv import load_dotenv
from openai import OpenAI
from tqdm import tqdm

# 환경변수 로드
load_dotenv()

EMBEDDING_MODEL = 'text-embedding-3-small'

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    global _client
    if _client is None:
        api_key = os.getenv('OPENAI_API_KEY')
        if not api_key:
            raise ValueError("OPENAI_API_KEY 환경변수가 설정되지 않았습니다.")
        _client = OpenAI(api_key=api_key)
    return _client


def get_embeddings(texts: List[str], model: str = EMBEDDING_MODEL) -> List[List[float]]:
    '''
    여러 텍스트를 한 번의 요청으로 임베딩 (응답 순서 = 입력 순서)
    '''
    response = get_client().embeddings.create(model=model, input=texts)
    return [item.embedding for item in sorted(response.data, key=lambda d: d.index)]


def embed_chunks(chunks: List[Dict], model: str = EMBEDDING_MODEL, batch_size: int = 100) -> List[Dict]:
    '''
    각 청크에 embedding 필드 추가
    '''
    for start in tqdm(range(0, len(chunks), batch_size), desc="임베딩 생성 중"):
        batch = chunks[start:start + batch_size]
        embeddings = get_embeddings([chunk['text'] for chunk in batch], model)
        for chunk, embedding in zip(batch, embeddings):
            chunk['embedding'] = embedding
        time.sleep(0.01)  # API rate limit 방지

    return chunks
