"""Aggregate counts over the server's session index and training logs."""

import logging

from fastapi import APIRouter, Depends

from yuna_chat.api.deps import get_session_index, get_training_log
from yuna_chat.services.session_index import SessionIndex
from yuna_chat.services.training import TrainingLog

router = APIRouter()
logger = logging.getLogger(__name__)

EMPTY_STATS = {"sessions": 0, "totalMessages": 0, "trainingPairs": 0, "dataSizeKB": 0.0}


@router.get("")
async def get_stats(
    training: TrainingLog = Depends(get_training_log),
    index: SessionIndex = Depends(get_session_index),
):
    try:
        sessions = index.stats()
        logs = training.stats()
    except Exception:
        logger.exception("Failed to compute stats")
        return dict(EMPTY_STATS)

    return {
        "sessions": sessions["sessions"],
        "totalMessages": sessions["total_messages"],
        "trainingPairs": logs["training_pairs"],
        "dataSizeKB": logs["size_kb"],
    }
