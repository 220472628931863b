import pytest
from fastapi.testclient import TestClient

import api
from api import app


class StubPipeline:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def query(self, question, chat_history=None):
        self.calls.append((question, chat_history))
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def client_with(monkeypatch):
    def _make(pipe):
        monkeypatch.setattr(api, "get_pipeline", lambda: pipe)
        return TestClient(app)

    return _make


def test_chat_returns_text_and_source_documents(client_with):
    docs = [{"pageContent": "근로기준법 제60조", "metadata": {"source": "근로기준법.pdf"}}]
    pipe = StubPipeline(result={"answer": "15일입니다.", "sources": ["근로기준법.pdf"], "source_documents": docs})
    client = client_with(pipe)

    response = client.post("/api/chat", json={"question": "연차는 며칠?", "history": [["안녕", "안녕하세요"]]})

    assert response.status_code == 200
    assert response.json() == {"text": "15일입니다.", "sourceDocuments": docs}
    assert pipe.calls == [("연차는 며칠?", [("안녕", "안녕하세요")])]


def test_chat_without_question_is_bad_request(client_with):
    pipe = StubPipeline()
    client = client_with(pipe)

    response = client.post("/api/chat", json={"history": []})

    assert response.status_code == 400
    assert response.json() == {"message": "No question in the request"}
    assert pipe.calls == []


def test_chat_pipeline_error_is_server_error(client_with):
    client = client_with(StubPipeline(error=RuntimeError("quota exceeded")))

    response = client.post("/api/chat", json={"question": "연차는?"})

    assert response.status_code == 500
    assert response.json() == {"error": "quota exceeded"}


def test_chat_rejects_get(client_with):
    client = client_with(StubPipeline())

    assert client.get("/api/chat").status_code == 405


def test_health(client_with):
    client = client_with(StubPipeline())

    assert client.get("/health").json() == {"status": "ok"}


def test_chat_missing_config_file_is_json_server_error(monkeypatch, tmp_path):
    monkeypatch.setenv("RAG_CONFIG_PATH", str(tmp_path / "missing.yaml"))
    api.get_pipeline.cache_clear()
    client = TestClient(app)

    response = client.post("/api/chat", json={"question": "연차는?"})

    assert response.status_code == 500
    assert "missing.yaml" in response.json()["error"]
    api.get_pipeline.cache_clear()


def test_chat_malformed_history_is_bad_request(client_with):
    pipe = StubPipeline()
    client = client_with(pipe)

    response = client.post("/api/chat", json={"question": "연차는?", "history": [["only-one"]]})

    assert response.status_code == 400
    assert response.json() == {"message": "Invalid request body"}
    assert pipe.calls == []
