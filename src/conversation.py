'''
대화 기록 관리
입력 : [("이전 질문", "이전 답변"), ...]
출력 : "Human: 이전 질문\nAssistant: 이전 답변\n..."

주요 함수:
def format_chat_history(history: List[Tuple[str, str]]) -> str
def sanitize_question(question: str) -> str
class ConversationManager
'''
import logging
from typing import List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

ChatTurn = Tuple[str, str]


def format_chat_history(history: Optional[Sequence[Sequence[str]]]) -> str:
    '''
    (질문, 답변) 턴 목록을 프롬프트용 문자열로 변환
    '''
    if not history:
        return ""

    past_messages = []
    for question, answer in history:
        past_messages.append(f"Human: {question}\nAssistant: {answer}")
    return "\n".join(past_messages)


def sanitize_question(question: str) -> str:
    # OpenAI 권장: 개행을 공백으로 치환
    return question.strip().replace("\n", " ")


class ConversationManager:
    """호출자 측에서 최근 대화 턴만 유지 (체인은 기록을 변경하지 않음)"""

    def __init__(self, max_history: int = 5):
        self.history: List[ChatTurn] = []
        self.max_history = max_history

    def add_turn(self, user_msg: str, assistant_msg: str):
        self.history.append((user_msg, assistant_msg))

        if len(self.history) > self.max_history:
            self.history = self.history[-self.max_history:]

        logger.info(f"대화 턴 추가 (총 {len(self.history)}턴)")

    def get_history(self) -> List[ChatTurn]:
        return list(self.history)

    def clear_history(self):
        self.history = []
