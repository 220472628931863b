'''
텍스트 정제 및 청킹
입력 : {
    "doc_id": "doc_0",
    "text": "문서 전체 텍스트...",
    "metadata": {"source": "근로기준법.pdf", ...}
}

출력 : [
    {
        "chunk_id": "doc_0_chunk_0",
        "text": "청크1 텍스트...",
        "metadata": {
            "source": "근로기준법.pdf",
            "doc_id": "doc_0",
            "chunk_index": 0,
            "total_chunks": 12
        }
    },
    ...
]

주요 함수:
def clean_text(text: str) -> str
def chunk_text(text: str, chunk_size: int, chunk_overlap: int) -> List[str]
def process_document(document: Dict, config: Dict) -> List[Dict]
def process_all_documents(documents: List[Dict], config: Dict) -> List[Dict]
'''
import re
import logging
from typing import List, Dict

from langchain_text_splitters import RecursiveCharacterTextSplitter
from tqdm import tqdm

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200


def clean_text(text: str) -> str:
    """
    텍스트 정제

    Args:
        text: 원본 텍스트

    Returns:
        정제된 텍스트
    """
    # 1. 제어 문자 제거 (개행, 탭은 유지)
    text = re.sub(r'[\x00-\x08\x0b-\x0c\x0e-\x1f\x7f-\x9f]', '', text)

    # 2. 허용 문자만 유지
    # ASCII, 가운뎃점, 한글(자모 포함), 한자, 구두점(「」 ※ 등), 로마숫자, 화살표·수학기호(∙),
    # 원문자, 도형, CJK 기호(㈜ ㎡), 전각 문자(～)
    text = re.sub(
        r"[^\u0000-\u007F\u00B7\uAC00-\uD7A3\u4E00-\u9FFF\u2010-\u206F\u2160-\u217F\u2190-\u22FF\u2460-\u24FF\u25A0-\u25FF\u3000-\u303F\u3130-\u318F\u3200-\u33FF\uFF00-\uFFEF]+",
        '',
        text,
    )

    # 3. 개행 정리
    text = text.replace('\r\n', '\n')

    # 4. 공백 정리
    text = re.sub(r'[ \t]+', ' ', text)
    text = re.sub(r' *\n *', '\n', text)

    # 5. 연속 개행은 최대 3개
    text = re.sub(r'\n{4,}', '\n\n\n', text)

    return text.strip()


def chunk_text(text: str, chunk_size: int, chunk_overlap: int) -> List[str]:
    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
        separators=["\n\n\n", "\n\n", "\n", ". ", " ", ""],
        length_function=len
    )
    return splitter.split_text(text)


def process_document(document: Dict, config: Dict) -> List[Dict]:
    """
    문서를 처리하여 청크 리스트 생성

    Args:
        document: {'doc_id': str, 'text': str, 'metadata': dict}
        config: {'chunk_size': int, 'chunk_overlap': int} (없으면 기본값)

    Returns:
        청크 딕셔너리 리스트
    """
    chunk_size = config.get('chunk_size', DEFAULT_CHUNK_SIZE)
    chunk_overlap = config.get('chunk_overlap', DEFAULT_CHUNK_OVERLAP)

    cleaned_text = clean_text(document['text'])
    text_chunks = chunk_text(cleaned_text, chunk_size, chunk_overlap)

    chunks = []
    for chunk_index, chunk_content in enumerate(text_chunks):
        chunks.append({
            'chunk_id': f"{document['doc_id']}_chunk_{chunk_index}",
            'text': chunk_content,
            'metadata': {
                **document['metadata'],  # 원본 metadata 복사
                'doc_id': document['doc_id'],
                'chunk_index': chunk_index,
                'total_chunks': len(text_chunks)
            }
        })
    return chunks


def process_all_documents(documents: List[Dict], config: Dict) -> List[Dict]:
    all_chunks = []

    for doc in tqdm(documents, desc="Chunking"):
        all_chunks.extend(process_document(doc, config))

    avg_chunks = len(all_chunks) / len(documents) if documents else 0
    logger.info(f"총 {len(documents)}개 문서 → {len(all_chunks)}개 청크 생성 (문서당 평균 {avg_chunks:.1f}개)")

    return all_chunks
