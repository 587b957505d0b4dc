from yuna_chat.core.config import settings
from yuna_chat.services.persona import PERSONA_PROMPT
from yuna_chat.services.session_index import SessionIndex
from yuna_chat.services.training import TrainingLog


def get_training_log() -> TrainingLog:
    return TrainingLog(settings.data_dir, PERSONA_PROMPT)


def get_session_index() -> SessionIndex:
    return SessionIndex(settings.data_dir)
