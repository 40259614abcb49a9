"""Chat tool runtime."""

from app.services.chat.chat_service import ChatService
from app.services.chat.tools import BEST_RATE_TOOL_SCHEMA, BestRateTool, count_nights

__all__ = ["BEST_RATE_TOOL_SCHEMA", "BestRateTool", "ChatService", "count_nights"]
