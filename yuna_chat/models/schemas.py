"""Wire schemas for the chat API."""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from yuna_chat.models.emotion import Emotion


class UserTurn(BaseModel):
    role: Literal["user"] = "user"
    content: str


class AssistantTurn(BaseModel):
    role: Literal["assistant"] = "assistant"
    content: str


ChatTurn = Annotated[Union[UserTurn, AssistantTurn], Field(discriminator="role")]


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    messages: Optional[list[ChatTurn]] = None
    session_id: Optional[str] = Field(default=None, alias="sessionId")
    session_title: Optional[str] = Field(default=None, alias="sessionTitle")


class ChatResponse(BaseModel):
    reply: str
    emotion: Emotion
