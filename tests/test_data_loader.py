import pytest

from data_loader import load_documents


def test_load_documents_reads_text_files_and_skips_unsupported(tmp_path):
    (tmp_path / "b_취업규칙.txt").write_text("제1조 목적", encoding="utf-8")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "a_질의회신.md").write_text("# 연차 질의", encoding="utf-8")
    (tmp_path / "목록.csv").write_text("x,y", encoding="utf-8")

    documents = load_documents(str(tmp_path))

    assert [d["metadata"]["source"] for d in documents] == ["b_취업규칙.txt", "a_질의회신.md"]
    assert [d["doc_id"] for d in documents] == ["doc_0", "doc_1"]
    assert documents[0]["text"] == "제1조 목적"


def test_load_documents_missing_folder(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_documents(str(tmp_path / "없음"))
