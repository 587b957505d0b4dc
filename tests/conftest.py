"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine

from yuna_chat.core.config import settings
from yuna_chat.services.llm import get_completion_client
from yuna_chat.services.store import SessionStore


@pytest.fixture
def engine():
    # In-memory SQLite with StaticPool so all connections share one DB
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)


@pytest.fixture
def store(engine):
    return SessionStore(engine)


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "data_dir", tmp_path)
    return tmp_path


@pytest.fixture
def mock_completion():
    """Completion client that answers every request with a tagged greeting."""
    completion = AsyncMock()
    completion.complete.return_value = "[EMOTION:happy] สวัสดีค่ะ"
    return completion


@pytest.fixture
def app(data_dir, mock_completion):
    from yuna_chat.main import app

    app.dependency_overrides[get_completion_client] = lambda: mock_completion
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def line_count(path):
    if not path.exists():
        return 0
    return sum(1 for line in path.read_text(encoding="utf-8").splitlines() if line.strip())
