"""Chat proxy: forwards history to Gemini with the hidden persona and logs the exchange."""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from yuna_chat.api.deps import get_session_index, get_training_log
from yuna_chat.core.errors import ChatError, InputValidationError
from yuna_chat.models.schemas import ChatRequest, ChatResponse
from yuna_chat.services.emotion import parse_emotion_tag
from yuna_chat.services.llm import get_completion_client
from yuna_chat.services.llm.base import BaseCompletionClient, Message
from yuna_chat.services.persona import PERSONA_PROMPT
from yuna_chat.services.session_index import SessionIndex
from yuna_chat.services.training import TrainingLog

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("", response_model=ChatResponse)
async def chat(
    body: ChatRequest,
    client: BaseCompletionClient = Depends(get_completion_client),
    training: TrainingLog = Depends(get_training_log),
    index: SessionIndex = Depends(get_session_index),
):
    if not body.messages:
        raise InputValidationError("messages must be a non-empty list")

    history = [Message(role=t.role, content=t.content) for t in body.messages]

    try:
        raw = await client.complete(history, PERSONA_PROMPT)
        tagged = parse_emotion_tag(raw)

        # Logs keep the clean text, without the emotion tag
        await run_in_threadpool(training.record, history, tagged.text)

        if body.session_id:
            await run_in_threadpool(index.record_exchange, body.session_id, body.session_title)
    except ChatError:
        raise
    except Exception as e:
        logger.exception("Chat request failed")
        raise ChatError(str(e) or "Internal server error") from e

    return ChatResponse(reply=tagged.text, emotion=tagged.emotion)
