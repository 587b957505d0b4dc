"""Reply backends for the chat controller.

``DirectBackend`` calls Gemini itself with the user's identity prompt, the way
the local-key client does. ``ServerBackend`` goes through the server's
``/api/chat`` proxy, which owns the persona and returns a parsed emotion.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

import httpx

from yuna_chat.core.config import settings
from yuna_chat.core.errors import EmptyResponse, UpstreamError
from yuna_chat.models.emotion import Emotion
from yuna_chat.models.session import ChatSession
from yuna_chat.services.llm.base import BaseCompletionClient, Message
from yuna_chat.services.persona import Identity

logger = logging.getLogger(__name__)


@dataclass
class Reply:
    content: str
    emotion: Emotion | None = None


class ReplyBackend(ABC):
    # Emotion shown with the synthetic error message after a failed send
    failure_emotion: Emotion | None = None

    @abstractmethod
    async def reply(self, session: ChatSession, identity: Identity) -> Reply:
        """Produce the assistant reply for a session whose last message is the user's."""
        ...


def _history(session: ChatSession) -> list[Message]:
    return [Message(role=m.role.value, content=m.content) for m in session.messages]


class DirectBackend(ReplyBackend):
    def __init__(self, client: BaseCompletionClient):
        self.client = client

    async def reply(self, session: ChatSession, identity: Identity) -> Reply:
        text = await self.client.complete(_history(session), identity.system_prompt)
        return Reply(content=text)


class ServerBackend(ReplyBackend):
    failure_emotion = Emotion.SAD

    def __init__(self, base_url: str | None = None, http_client: httpx.AsyncClient | None = None):
        self.base_url = (base_url or settings.server_url).rstrip("/")
        self._http_client = http_client

    async def reply(self, session: ChatSession, identity: Identity) -> Reply:
        payload = {
            "messages": [{"role": m.role, "content": m.content} for m in _history(session)],
            "sessionId": session.id,
            "sessionTitle": session.title,
        }
        if self._http_client is not None:
            resp = await self._http_client.post(f"{self.base_url}/api/chat", json=payload)
        else:
            # No timeout: a slow model reply is waited out
            async with httpx.AsyncClient(timeout=None) as client:
                resp = await client.post(f"{self.base_url}/api/chat", json=payload)

        try:
            data = resp.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not resp.is_success:
            logger.warning(f"Chat server returned {resp.status_code} for session {session.id}")
            raise UpstreamError(resp.status_code, data.get("error") or f"Error: {resp.status_code}")

        reply = data.get("reply")
        if not isinstance(reply, str) or not reply:
            raise EmptyResponse()

        return Reply(content=reply, emotion=Emotion.coerce(data.get("emotion")))
