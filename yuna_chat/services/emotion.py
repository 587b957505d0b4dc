"""Parsing of the [EMOTION:<name>] prefix the persona puts on every reply.

The convention is best effort: a reply without a tag, or with a name outside
the vocabulary, falls back to the default emotion and is never an error.
"""

import logging
import re
from dataclasses import dataclass

from yuna_chat.models.emotion import DEFAULT_EMOTION, Emotion

logger = logging.getLogger(__name__)

EMOTION_TAG = re.compile(r"^\[EMOTION:(\w+)\]\s*")


@dataclass(frozen=True)
class TaggedReply:
    text: str
    emotion: Emotion


def parse_emotion_tag(raw: str) -> TaggedReply:
    """Split a raw model reply into its emotion and the text without the tag."""
    match = EMOTION_TAG.match(raw)
    if not match:
        logger.debug(f"Reply has no emotion tag, using {DEFAULT_EMOTION.value}")
        return TaggedReply(text=raw, emotion=DEFAULT_EMOTION)

    name = match.group(1)
    emotion = Emotion.coerce(name)
    if emotion.value != name.lower():
        logger.debug(f"Unknown emotion tag '{name}', using {DEFAULT_EMOTION.value}")
    return TaggedReply(text=raw[match.end():], emotion=emotion)
