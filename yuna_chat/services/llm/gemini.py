"""Google Gemini completion client."""

import logging

from google import genai
from google.genai import errors, types

from yuna_chat.core.config import settings
from yuna_chat.core.errors import ConfigurationError, EmptyResponse, UpstreamError
from yuna_chat.services.llm.base import BaseCompletionClient, Message

logger = logging.getLogger(__name__)

# Generation parameters are fixed, not user-configurable
TEMPERATURE = 0.8
TOP_P = 0.95
TOP_K = 40
MAX_OUTPUT_TOKENS = 8192

PLACEHOLDER_KEYS = {"", "ใส่_API_KEY_ที่นี่", "your-api-key-here"}


def to_gemini_contents(messages: list[Message]) -> list[dict]:
    """Map chat roles onto Gemini roles: assistant -> model, anything else -> user."""
    return [
        {
            "role": "model" if m.role == "assistant" else "user",
            "parts": [{"text": m.content}],
        }
        for m in messages
    ]


def first_candidate_text(response) -> str | None:
    candidates = response.candidates or []
    if not candidates:
        return None
    content = candidates[0].content
    if content is None or not content.parts:
        return None
    return content.parts[0].text


class GeminiClient(BaseCompletionClient):
    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: genai.Client | None = None,
    ):
        self.api_key = settings.gemini_api_key if api_key is None else api_key
        self.model = model or settings.gemini_model
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            if self.api_key.strip() in PLACEHOLDER_KEYS:
                raise ConfigurationError("Gemini API key is not configured, set YUNA_GEMINI_API_KEY in .env")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def complete(self, messages: list[Message], system_prompt: str) -> str:
        client = self.client
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            temperature=TEMPERATURE,
            top_p=TOP_P,
            top_k=TOP_K,
            max_output_tokens=MAX_OUTPUT_TOKENS,
        )

        logger.info(f"Gemini request: model={self.model} messages={len(messages)}")
        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=to_gemini_contents(messages),
                config=config,
            )
        except errors.APIError as e:
            logger.warning(f"Gemini API error {e.code}: {e.message}")
            raise UpstreamError(e.code or 500, e.message) from e

        text = first_candidate_text(response)
        if not text:
            raise EmptyResponse()
        return text
