"""Lightweight session metadata kept by the server in ``sessions.json``."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from yuna_chat.models.session import DEFAULT_SESSION_TITLE

logger = logging.getLogger(__name__)

SESSIONS_FILE = "sessions.json"


class SessionIndex:
    def __init__(self, data_dir: Path):
        self.path = data_dir / SESSIONS_FILE

    def read(self) -> dict[str, dict]:
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return {}

    def write(self, sessions: dict[str, dict]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(sessions, ensure_ascii=False, indent=2), encoding="utf-8")

    def record_exchange(self, session_id: str, title: str | None = None) -> dict:
        """Count one user/assistant exchange against a session, creating it if new."""
        now = datetime.now(timezone.utc).isoformat()
        sessions = self.read()
        entry = sessions.get(session_id)
        if entry is None:
            entry = {
                "id": session_id,
                "title": title or DEFAULT_SESSION_TITLE,
                "messageCount": 0,
                "createdAt": now,
            }
            sessions[session_id] = entry

        entry["messageCount"] = entry.get("messageCount", 0) + 2
        entry["title"] = title or entry["title"]
        entry["updatedAt"] = now
        self.write(sessions)
        return entry

    def stats(self) -> dict:
        sessions = self.read()
        return {
            "sessions": len(sessions),
            "total_messages": sum(s.get("messageCount", 0) for s in sessions.values()),
        }
