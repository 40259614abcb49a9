"""Chat API endpoints."""

import json
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, Request, status
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AppError
from app.dependencies import get_chat_service
from app.schemas.chat import ChatRequest
from app.services.chat.chat_service import ChatService
from app.utils.logging import get_logger
from app.utils.responses import http_error, http_error_from

LOGGER = get_logger(__name__)

router = APIRouter()

INVALID_MESSAGES = "Invalid or empty messages array"


@router.post(
    "",
    summary="Chat with the tariff assistant",
    description=(
        "Send the conversation so far; the assistant can look up the best available "
        "hotel rate for a city and date range. Returns the final assistant message."
    ),
    operation_id="chat_with_assistant",
)
async def chat(
    request: Request,
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
) -> Dict[str, Any]:
    # Body is validated by hand so malformed input gets a 400 instead of a 422
    try:
        body = await request.json()
        chat_request = ChatRequest.model_validate(body)
    except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError):
        raise http_error(status.HTTP_400_BAD_REQUEST, "Bad Request", INVALID_MESSAGES, request)

    if not chat_request.messages:
        raise http_error(status.HTTP_400_BAD_REQUEST, "Bad Request", INVALID_MESSAGES, request)

    messages = [message.model_dump(exclude_none=True) for message in chat_request.messages]

    try:
        return await chat_service.respond(messages)
    except AppError as e:
        LOGGER.error(f"Chat request failed: {e.message}", extra={"message_count": len(messages)})
        raise http_error_from(e, request)
