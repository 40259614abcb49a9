"""Schemas for the chat endpoint."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ChatMessage(BaseModel):
    """One turn of the conversation as sent by the client."""

    model_config = ConfigDict(extra="ignore")

    role: str = Field(..., description="Message author", examples=["user", "assistant"])
    content: Optional[str] = Field(default=None, description="Message text")


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., description="Conversation so far, oldest first")
