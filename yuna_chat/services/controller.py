"""Chat session controller - drives one send from user input to stored reply."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from yuna_chat.core.errors import ChatError
from yuna_chat.models.session import ChatMessage, ChatSession, Role
from yuna_chat.services.backends import ReplyBackend
from yuna_chat.services.store import SessionStore

logger = logging.getLogger(__name__)

ERROR_PREFIX = "⚠️ เกิดข้อผิดพลาด: "


class SendState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class SendResult:
    state: SendState  # SUCCESS or FAILED
    message: ChatMessage


class ChatView(ABC):
    @abstractmethod
    def show_message(self, message: ChatMessage) -> None:
        """Render one message at the bottom of the conversation."""
        ...


class ChatController:
    """Owns the send state for a single chat view.

    Only one send may be in flight; a second call while SENDING is rejected,
    not queued.
    """

    def __init__(self, store: SessionStore, backend: ReplyBackend, view: ChatView | None = None):
        self.store = store
        self.backend = backend
        self.view = view
        self.state = SendState.IDLE

    @property
    def active_session_id(self) -> str | None:
        return self.store.active_session_id

    def new_chat(self) -> str:
        session_id = self.store.create_session()
        self.store.active_session_id = session_id
        return session_id

    def switch_to(self, session_id: str) -> ChatSession | None:
        session = self.store.get_session(session_id)
        if session:
            self.store.active_session_id = session_id
        return session

    def delete_session(self, session_id: str) -> None:
        self.store.delete_session(session_id)

    async def send(self, text: str) -> SendResult | None:
        """Send one user message. Returns None when the input is rejected."""
        if not text.strip():
            logger.debug("Blank message rejected")
            return None
        if self.state is SendState.SENDING:
            logger.debug("Send already in flight, rejected")
            return None

        self.state = SendState.SENDING
        try:
            return await self._send(text)
        finally:
            self.state = SendState.IDLE

    async def _send(self, text: str) -> SendResult:
        session_id = self.store.active_session_id
        if session_id is None or self.store.get_session(session_id) is None:
            session_id = self.new_chat()

        # Shown before the network call resolves
        user_message = self.store.append_message(session_id, Role.USER, text)
        self._show(user_message)

        try:
            session = self.store.get_session(session_id)
            reply = await self.backend.reply(session, self.store.get_identity())
        except ChatError as e:
            logger.warning(f"Send failed in session {session_id}: {e.message}")
            return self._fail(session_id, e.message)
        except Exception as e:
            logger.exception(f"Unexpected error sending in session {session_id}")
            return self._fail(session_id, str(e))

        assistant_message = self.store.append_message(
            session_id, Role.ASSISTANT, reply.content, reply.emotion
        )
        self._show(assistant_message)
        return SendResult(state=SendState.SUCCESS, message=assistant_message)

    def _fail(self, session_id: str, reason: str) -> SendResult:
        # Displayed only, never stored
        error_message = ChatMessage(
            session_id=session_id,
            role=Role.ASSISTANT,
            content=ERROR_PREFIX + reason,
            emotion=self.backend.failure_emotion,
        )
        self._show(error_message)
        return SendResult(state=SendState.FAILED, message=error_message)

    def _show(self, message: ChatMessage | None) -> None:
        if self.view is not None and message is not None:
            self.view.show_message(message)
