'''
노무/인사 참고 문서 로딩 (근로기준법, 질의 회신 등)
입력 : 문서 폴더 경로 (.pdf, .txt, .md)

출력 : {
    "doc_id": "doc_0",
    "text": "문서 전체 텍스트...",
    "metadata": {
        "source": "근로기준법.pdf",
        "file_path": "path/to/근로기준법.pdf"
    }
}

주요 함수:
def load_pdf(file_path: str) -> str
def load_text(file_path: str) -> str
def load_documents(doc_folder: str) -> List[Dict]
'''

import os
import logging
from typing import Dict, List

from pypdf import PdfReader

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = ('.txt', '.md')


def load_pdf(file_path):
    reader = PdfReader(file_path)
    text = ""

    # 모든 페이지를 순회하며 텍스트를 추출합니다.
    for page in reader.pages:
        text += page.extract_text() or ""   # 텍스트가 없는 페이지는 스킵
        text += "\n\n"   # 페이지 구분
    return text


def load_text(file_path):
    with open(file_path, 'r', encoding='utf-8') as f:
        return f.read()


def load_documents(file_dir: str) -> List[Dict]:
    if not os.path.isdir(file_dir):
        raise FileNotFoundError(f"문서 폴더가 존재하지 않습니다: {os.path.abspath(file_dir)}")

    # 하위 폴더까지 파일 경로 수집 (정렬해서 doc_id 순서 고정)
    file_path_list = []
    for root, dirs, files in os.walk(file_dir):
        file_path_list.extend(os.path.join(root, file) for file in files)
    file_path_list.sort()

    documents = []
    for file_path in file_path_list:
        file_name = os.path.basename(file_path)
        lower = file_name.lower()
        if lower.endswith('.pdf'):
            text = load_pdf(file_path)
        elif lower.endswith(TEXT_EXTENSIONS):
            text = load_text(file_path)
        else:
            logger.warning(f"지원되는 파일 형식이 아닙니다: {file_name}")
            continue

        metadata = {'source': file_name, 'file_path': file_path}
        documents.append({'doc_id': f'doc_{len(documents)}', 'text': text, 'metadata': metadata})

    logger.info(f"문서 {len(documents)}개 로드 완료: {file_dir}")
    return documents


if __name__ == '__main__':
    config = {'data_dir': '../data/docs'}

    documents = load_documents(config['data_dir'])
    print(documents[0])
