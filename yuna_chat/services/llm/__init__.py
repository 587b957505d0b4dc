"""Completion client factory."""

from yuna_chat.services.llm.base import BaseCompletionClient


def get_completion_client() -> BaseCompletionClient:
    """Factory function that returns the configured completion client."""
    from yuna_chat.services.llm.gemini import GeminiClient
    return GeminiClient()
