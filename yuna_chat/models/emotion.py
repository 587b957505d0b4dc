"""Closed vocabulary of display moods attached to assistant replies."""

from enum import Enum


class Emotion(str, Enum):
    HAPPY = "happy"
    SHY = "shy"
    ANGRY = "angry"
    SAD = "sad"
    THINKING = "thinking"
    SURPRISED = "surprised"
    LOVE = "love"
    WORRIED = "worried"
    # Explicit-content variants, each rendered by the client with its own avatar
    SEX1 = "sex1"
    SEX2 = "sex2"
    SEX3 = "sex3"
    SEX4 = "sex4"
    SEX5 = "sex5"
    SEX6 = "sex6"
    SEX7 = "sex7"
    SEX8 = "sex8"
    SEX9 = "sex9"
    SEX10 = "sex10"
    SEX11 = "sex11"
    SEX12 = "sex12"
    SEX13 = "sex13"
    SEX14 = "sex14"
    SEX15 = "sex15"

    @classmethod
    def coerce(cls, value: str | None) -> "Emotion":
        """Map a free-form identifier onto the vocabulary, falling back to HAPPY."""
        if not value:
            return DEFAULT_EMOTION
        try:
            return cls(value.strip().lower())
        except ValueError:
            return DEFAULT_EMOTION


DEFAULT_EMOTION = Emotion.HAPPY
