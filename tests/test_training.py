"""Tests for the append-only training logs and the server session index."""

import json

from tests.conftest import line_count
from yuna_chat.services.llm.base import Message
from yuna_chat.services.session_index import SessionIndex
from yuna_chat.services.training import TrainingLog


def _read_lines(path):
    return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines() if line]


def test_record_writes_three_encodings(tmp_path):
    log = TrainingLog(tmp_path, "persona")
    history = [
        Message(role="user", content="q1"),
        Message(role="assistant", content="a1"),
        Message(role="user", content="q2"),
    ]

    log.record(history, "a2")

    (sharegpt,) = _read_lines(log.sharegpt_path)
    assert sharegpt["conversations"] == [
        {"from": "system", "value": "persona"},
        {"from": "human", "value": "q1"},
        {"from": "gpt", "value": "a1"},
        {"from": "human", "value": "q2"},
        {"from": "gpt", "value": "a2"},
    ]

    (openai,) = _read_lines(log.openai_path)
    assert [m["role"] for m in openai["messages"]] == ["system", "user", "assistant", "user", "assistant"]
    assert openai["messages"][-1]["content"] == "a2"

    (alpaca,) = _read_lines(log.alpaca_path)
    assert alpaca == {"instruction": "persona", "input": "q2", "output": "a2"}


def test_records_append_without_rewriting(tmp_path):
    log = TrainingLog(tmp_path, "persona")
    log.record([Message(role="user", content="one")], "r1")
    log.record([Message(role="user", content="one")], "r1")

    for path in log.paths:
        assert line_count(path) == 2


def test_non_ascii_is_written_verbatim(tmp_path):
    log = TrainingLog(tmp_path, "persona")
    log.record([Message(role="user", content="สวัสดี")], "สวัสดีค่ะ")
    assert "สวัสดีค่ะ" in log.alpaca_path.read_text(encoding="utf-8")


def test_stats(tmp_path):
    log = TrainingLog(tmp_path, "persona")
    assert log.stats() == {"training_pairs": 0, "size_kb": 0.0}

    log.record([Message(role="user", content="x" * 2048)], "y")
    stats = log.stats()
    assert stats["training_pairs"] == 1
    assert stats["size_kb"] > 2.0


def test_session_index_counts_exchanges(tmp_path):
    index = SessionIndex(tmp_path)
    index.record_exchange("s1", "first title")
    entry = index.record_exchange("s1")

    assert entry["messageCount"] == 4
    assert entry["title"] == "first title"
    assert entry["updatedAt"] >= entry["createdAt"]
    assert index.stats() == {"sessions": 1, "total_messages": 4}


def test_session_index_unreadable_file_reads_empty(tmp_path):
    index = SessionIndex(tmp_path)
    index.path.write_text("{not json", encoding="utf-8")
    assert index.read() == {}
