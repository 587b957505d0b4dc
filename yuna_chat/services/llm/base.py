"""Abstract completion client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class Message:
    role: str  # "user" | "assistant"
    content: str


class BaseCompletionClient(ABC):
    @abstractmethod
    async def complete(self, messages: list[Message], system_prompt: str) -> str:
        """Send the full history with a persona instruction and return one reply."""
        ...
