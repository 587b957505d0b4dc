"""Session and message models for local chat persistence."""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, Relationship, SQLModel

from yuna_chat.models.emotion import Emotion

DEFAULT_SESSION_TITLE = "แชทใหม่"


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_session_id() -> str:
    return f"session_{uuid.uuid4().hex}"


class ChatSession(SQLModel, table=True):
    id: str = Field(default_factory=new_session_id, primary_key=True)
    title: str = Field(default=DEFAULT_SESSION_TITLE)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    messages: list["ChatMessage"] = Relationship(
        back_populates="session",
        sa_relationship_kwargs={"order_by": "ChatMessage.id", "cascade": "all, delete-orphan"},
    )


class ChatMessage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: str = Field(foreign_key="chatsession.id", index=True)
    role: Role
    content: str
    emotion: Optional[Emotion] = None
    timestamp: datetime = Field(default_factory=utcnow)

    session: Optional[ChatSession] = Relationship(back_populates="messages")


class StateEntry(SQLModel, table=True):
    """Well-known keys (active session pointer, identity) stored as JSON text."""

    key: str = Field(primary_key=True)
    value: str
