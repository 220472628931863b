import pytest
from langchain_core.documents import Document

from chain import combine_documents, make_chain
from conftest import FakeRetriever
from prompts import build_answer_prompt, build_condense_question_prompt


def test_combine_documents_joins_in_order():
    docs = [Document(page_content="첫째"), Document(page_content="둘째"), Document(page_content="셋째")]

    assert combine_documents(docs) == "첫째\n\n둘째\n\n셋째"


def test_combine_documents_empty_list_is_empty_string():
    assert combine_documents([]) == ""


def test_combine_documents_custom_separator():
    docs = [Document(page_content="a"), Document(page_content="b")]

    assert combine_documents(docs, separator=" | ") == "a | b"


def test_condense_prompt_renders_history_and_question():
    prompt = build_condense_question_prompt()

    text = prompt.invoke({"chat_history": "Human: 안녕\nAssistant: 안녕하세요", "question": "연차는?"}).to_string()

    assert "Human: 안녕\nAssistant: 안녕하세요" in text
    assert "Follow Up Input: 연차는?" in text
    assert text.rstrip().endswith("Standalone question:")


def test_answer_prompt_carries_hr_system_prompt():
    prompt = build_answer_prompt()

    text = prompt.invoke({"context": "근로기준법 제60조", "chat_history": "", "question": "연차는?"}).to_string()

    assert "HR 전문가" in text
    assert "근로기준법" in text
    assert "<context>\n  근로기준법 제60조\n</context>" in text
    assert "Question: 연차는?" in text
    assert text.rstrip().endswith("Helpful answer in markdown:")


def test_answer_prompt_missing_variable_raises():
    with pytest.raises(KeyError):
        build_answer_prompt().invoke({"question": "연차는?", "chat_history": ""})


def test_chain_returns_final_stage_output_unchanged(fake_retriever, recording_model):
    model, prompts = recording_model(["연차 유급휴가는 며칠인가요?", "## 답변\n15일입니다."])
    chain = make_chain(fake_retriever, model)

    answer = chain.invoke({"question": "연차는 며칠?", "chat_history": ""})

    assert answer == "## 답변\n15일입니다."
    assert all(len(p) > 0 for p in prompts)


def test_chain_invokes_each_stage_exactly_once(fake_retriever, recording_model):
    model, prompts = recording_model(["standalone", "answer"])
    chain = make_chain(fake_retriever, model)

    chain.invoke({"question": "연차는 며칠?", "chat_history": ""})

    # 모델 2회 = 질문 재작성 1회 + 답변 생성 1회
    assert len(prompts) == 2
    assert fake_retriever.queries == ["standalone"]


def test_chain_uses_standalone_question_for_retrieval_and_answer(fake_retriever, recording_model, labor_law_docs):
    model, prompts = recording_model(["입사 1년차 연차 일수는?", "15일"])
    chain = make_chain(fake_retriever, model)
    history = "Human: 입사 1년 됐어요\nAssistant: 무엇이 궁금하신가요?"

    chain.invoke({"question": "그럼 연차는?", "chat_history": history})

    condense_prompt, answer_prompt = prompts
    assert "Follow Up Input: 그럼 연차는?" in condense_prompt
    assert history in condense_prompt
    assert fake_retriever.queries == ["입사 1년차 연차 일수는?"]
    assert "Question: 입사 1년차 연차 일수는?" in answer_prompt
    assert history in answer_prompt
    assert combine_documents(labor_law_docs) in answer_prompt


def test_chain_with_no_documents_sends_empty_context(recording_model):
    retriever = FakeRetriever(documents=[])
    model, prompts = recording_model(["q", "모르겠습니다"])

    answer = make_chain(retriever, model).invoke({"question": "q", "chat_history": ""})

    assert answer == "모르겠습니다"
    assert "<context>\n  \n</context>" in prompts[1]


def test_chain_propagates_model_errors(fake_retriever):
    from langchain_core.runnables import RunnableLambda

    def _fail(_):
        raise RuntimeError("quota exceeded")

    chain = make_chain(fake_retriever, RunnableLambda(_fail))

    with pytest.raises(RuntimeError, match="quota exceeded"):
        chain.invoke({"question": "연차는?", "chat_history": ""})
    assert fake_retriever.queries == []
