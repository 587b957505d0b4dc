"""Local persistence for chat sessions, the active-session pointer and the identity."""

import json
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from yuna_chat.core.database import engine as default_engine, init_db
from yuna_chat.models.emotion import Emotion
from yuna_chat.models.session import ChatMessage, ChatSession, Role, StateEntry, utcnow
from yuna_chat.services.llm.base import Message
from yuna_chat.services.persona import Identity

logger = logging.getLogger(__name__)

ACTIVE_SESSION_KEY = "active_session"
IDENTITY_KEY = "identity"

TITLE_LENGTH = 40


def derive_title(content: str) -> str:
    if len(content) > TITLE_LENGTH:
        return content[:TITLE_LENGTH] + "..."
    return content


def _as_utc(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class SessionStore:
    """Owns every session and message record.

    Operations on an unknown session id are no-ops; callers that care must
    check with ``get_session`` first.
    """

    def __init__(self, engine=None):
        self.engine = engine if engine is not None else default_engine
        init_db(self.engine)

    def _session(self) -> Session:
        return Session(self.engine, expire_on_commit=False)

    # --- Sessions ---

    def create_session(self) -> str:
        with self._session() as db:
            conv = ChatSession()
            db.add(conv)
            db.commit()
            logger.debug(f"Created session {conv.id}")
            return conv.id

    def get_session(self, session_id: str) -> ChatSession | None:
        with self._session() as db:
            return db.exec(
                select(ChatSession)
                .where(ChatSession.id == session_id)
                .options(selectinload(ChatSession.messages))  # type: ignore
            ).first()

    def list_sessions(self) -> list[ChatSession]:
        with self._session() as db:
            return list(db.exec(
                select(ChatSession)
                .options(selectinload(ChatSession.messages))  # type: ignore
                .order_by(ChatSession.updated_at.desc())  # type: ignore
            ).all())

    def delete_session(self, session_id: str) -> None:
        with self._session() as db:
            conv = db.get(ChatSession, session_id)
            if conv:
                db.delete(conv)
            if self._get_state(db, ACTIVE_SESSION_KEY) == session_id:
                self._delete_state(db, ACTIVE_SESSION_KEY)
            db.commit()
        logger.debug(f"Deleted session {session_id}")

    def append_message(
        self,
        session_id: str,
        role: Role | str,
        content: str,
        emotion: Emotion | None = None,
    ) -> ChatMessage | None:
        role = Role(role)
        with self._session() as db:
            conv = db.get(ChatSession, session_id)
            if not conv:
                logger.debug(f"Append to missing session {session_id} ignored")
                return None

            if role is Role.USER:
                has_user_message = db.exec(
                    select(ChatMessage.id)
                    .where(ChatMessage.session_id == session_id, ChatMessage.role == Role.USER)
                ).first()
                if has_user_message is None:
                    conv.title = derive_title(content)

            msg = ChatMessage(
                session_id=session_id,
                role=role,
                content=content,
                emotion=emotion if role is Role.ASSISTANT else None,
            )
            conv.updated_at = max(utcnow(), _as_utc(conv.updated_at))
            db.add(msg)
            db.add(conv)
            db.commit()
            return msg

    def history(self, session_id: str) -> list[Message]:
        conv = self.get_session(session_id)
        if not conv:
            return []
        return [Message(role=m.role.value, content=m.content) for m in conv.messages]

    def clear_all(self) -> None:
        with self._session() as db:
            for conv in db.exec(select(ChatSession)).all():
                db.delete(conv)
            self._delete_state(db, ACTIVE_SESSION_KEY)
            db.commit()

    # --- Well-known keys ---

    @property
    def active_session_id(self) -> str | None:
        with self._session() as db:
            return self._get_state(db, ACTIVE_SESSION_KEY)

    @active_session_id.setter
    def active_session_id(self, session_id: str | None) -> None:
        with self._session() as db:
            if session_id is None:
                self._delete_state(db, ACTIVE_SESSION_KEY)
            else:
                self._set_state(db, ACTIVE_SESSION_KEY, session_id)
            db.commit()

    def get_identity(self) -> Identity:
        with self._session() as db:
            stored = self._get_state(db, IDENTITY_KEY)
        return Identity.model_validate(stored) if stored else Identity()

    def save_identity(self, identity: Identity) -> None:
        with self._session() as db:
            self._set_state(db, IDENTITY_KEY, identity.model_dump())
            db.commit()

    @staticmethod
    def _get_state(db: Session, key: str):
        entry = db.get(StateEntry, key)
        if entry is None:
            return None
        try:
            return json.loads(entry.value)
        except json.JSONDecodeError:
            return None

    @staticmethod
    def _set_state(db: Session, key: str, value) -> None:
        entry = db.get(StateEntry, key)
        if entry is None:
            entry = StateEntry(key=key, value="")
        entry.value = json.dumps(value, ensure_ascii=False)
        db.add(entry)

    @staticmethod
    def _delete_state(db: Session, key: str) -> None:
        entry = db.get(StateEntry, key)
        if entry is not None:
            db.delete(entry)

    # --- Reporting ---

    def stats(self) -> dict:
        sessions = self.list_sessions()
        messages = [m for s in sessions for m in s.messages]
        return {
            "sessions": len(sessions),
            "total_messages": len(messages),
            "user_messages": sum(1 for m in messages if m.role == Role.USER),
            "assistant_messages": sum(1 for m in messages if m.role == Role.ASSISTANT),
        }

    def export_all(self) -> dict:
        """Full dump of every session plus instruction/input/output training pairs."""
        identity = self.get_identity()
        sessions = self.list_sessions()

        training_data = []
        for s in sessions:
            for current, following in zip(s.messages, s.messages[1:]):
                if current.role == Role.USER and following.role == Role.ASSISTANT:
                    training_data.append({
                        "instruction": identity.system_prompt,
                        "input": current.content,
                        "output": following.content,
                    })

        return {
            "exportedAt": utcnow().isoformat(),
            "aiIdentity": {"name": identity.name, "systemPrompt": identity.system_prompt},
            "totalSessions": len(sessions),
            "totalMessages": sum(len(s.messages) for s in sessions),
            "sessions": [
                {
                    "id": s.id,
                    "title": s.title,
                    "createdAt": s.created_at.isoformat(),
                    "updatedAt": s.updated_at.isoformat(),
                    "messages": [
                        {
                            "role": m.role.value,
                            "content": m.content,
                            "timestamp": m.timestamp.isoformat(),
                        }
                        for m in s.messages
                    ],
                }
                for s in sessions
            ],
            "trainingData": training_data,
        }
