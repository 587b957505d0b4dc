"""Append-only training data export.

Every successful exchange is written in three encodings so the logs can be fed
to different fine-tuning frameworks:

- ``train_sharegpt.jsonl``: ShareGPT conversations (Axolotl, LLaMA-Factory, Unsloth)
- ``train_openai.jsonl``: OpenAI chat fine-tuning messages
- ``train_alpaca.jsonl``: Alpaca instruction/input/output triples

The running system never reads these back except to report stats.
"""

import json
import logging
from pathlib import Path

from yuna_chat.services.llm.base import Message

logger = logging.getLogger(__name__)

SHAREGPT_FILE = "train_sharegpt.jsonl"
OPENAI_FILE = "train_openai.jsonl"
ALPACA_FILE = "train_alpaca.jsonl"


class TrainingLog:
    def __init__(self, data_dir: Path, system_prompt: str):
        self.data_dir = data_dir
        self.system_prompt = system_prompt
        self.sharegpt_path = data_dir / SHAREGPT_FILE
        self.openai_path = data_dir / OPENAI_FILE
        self.alpaca_path = data_dir / ALPACA_FILE

    @property
    def paths(self) -> list[Path]:
        return [self.sharegpt_path, self.openai_path, self.alpaca_path]

    def ensure_files(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for path in self.paths:
            path.touch(exist_ok=True)

    def record(self, history: list[Message], reply: str) -> None:
        """Append one exchange (history ending in the user turn, plus the reply)."""
        conversation = [
            Message(role="assistant" if m.role == "assistant" else "user", content=m.content)
            for m in history
        ]
        conversation.append(Message(role="assistant", content=reply))
        last_user = next((m.content for m in reversed(history) if m.role == "user"), "")

        sharegpt = {
            "conversations": [{"from": "system", "value": self.system_prompt}]
            + [
                {"from": "gpt" if m.role == "assistant" else "human", "value": m.content}
                for m in conversation
            ]
        }
        openai = {
            "messages": [{"role": "system", "content": self.system_prompt}]
            + [{"role": m.role, "content": m.content} for m in conversation]
        }
        alpaca = {
            "instruction": self.system_prompt,
            "input": last_user,
            "output": reply,
        }

        self.ensure_files()
        _append_line(self.sharegpt_path, sharegpt)
        _append_line(self.openai_path, openai)
        _append_line(self.alpaca_path, alpaca)
        logger.debug(f"Recorded training exchange ({len(conversation)} turns)")

    def stats(self) -> dict:
        pairs = 0
        if self.sharegpt_path.exists():
            with self.sharegpt_path.open(encoding="utf-8") as f:
                pairs = sum(1 for line in f if line.strip())
        size = sum(p.stat().st_size for p in self.paths if p.exists())
        return {"training_pairs": pairs, "size_kb": round(size / 1024, 1)}


def _append_line(path: Path, record: dict) -> None:
    # One write call per line so concurrent requests never split a record
    with path.open("a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")
