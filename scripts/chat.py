"""Terminal chat with Yuna.

Talks to Gemini directly with the locally stored identity prompt, or through a
running server with --server (replies then carry an emotion).

Usage:
    python scripts/chat.py            # direct, needs YUNA_GEMINI_API_KEY
    python scripts/chat.py --server   # via YUNA_SERVER_URL

Commands: /new starts a new chat, /export writes all sessions to export.json,
/quit exits.
"""

import asyncio
import json
import sys
from pathlib import Path

from yuna_chat.models.session import ChatMessage, Role
from yuna_chat.services.backends import DirectBackend, ServerBackend
from yuna_chat.services.controller import ChatController, ChatView
from yuna_chat.services.llm import get_completion_client
from yuna_chat.services.store import SessionStore


class TerminalView(ChatView):
    def __init__(self, name: str):
        self.name = name

    def show_message(self, message: ChatMessage) -> None:
        if message.role == Role.USER:
            return  # already on screen as typed
        mood = f" ({message.emotion.value})" if message.emotion else ""
        print(f"\n{self.name}{mood}: {message.content}\n")


async def main() -> None:
    store = SessionStore()
    if "--server" in sys.argv:
        backend = ServerBackend()
    else:
        backend = DirectBackend(get_completion_client())

    identity = store.get_identity()
    controller = ChatController(store, backend, TerminalView(identity.name))

    print(f"Chatting with {identity.name}. /new, /export, /quit")
    while True:
        try:
            text = input("> ")
        except (EOFError, KeyboardInterrupt):
            break

        if text == "/quit":
            break
        if text == "/new":
            controller.new_chat()
            print("Started a new chat.")
            continue
        if text == "/export":
            path = Path("export.json")
            path.write_text(json.dumps(store.export_all(), ensure_ascii=False, indent=2))
            print(f"Exported to {path.resolve()}")
            continue

        await controller.send(text)


asyncio.run(main())
