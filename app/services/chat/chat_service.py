"""Chat assistant with a best-rate lookup tool."""

import json
from typing import Any, Dict, List

from app.core.openai_client import AzureOpenAIClient
from app.core.exceptions import ValidationError
from app.services.chat.tools import BestRateTool, error_payload
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)

SYSTEM_PROMPT = """You are a travel cost assistant. Your job is to help users find the best hotel rates.

When a user asks about hotel prices or accommodation costs:
1. Extract the city, hotel category, check-in date, check-out date, and number of people from their query
2. Use the getBestRate tool to find the best available rate
3. Respond with a friendly message that includes:
   - The hotel name
   - The total price
   - The number of nights
   - Per person cost if applicable

If information is missing, ask the user for the specific details you need.
Always format currency values properly and be helpful and concise."""


class ChatService:
    """One chat turn: model call, optional tool execution, final summary.

    Attributes:
        client: Azure OpenAI chat client
        tool: Best-rate lookup offered to the model
    """

    def __init__(self, client: AzureOpenAIClient, tool: BestRateTool):
        self.client = client
        self.tool = tool

    @staticmethod
    def validate(messages: Any) -> None:
        if not isinstance(messages, list) or not messages:
            raise ValidationError("Invalid or empty messages array")

    async def respond(self, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        """Answer the conversation, running the tool if the model asks for it.

        Args:
            messages: Prior conversation as role/content dicts

        Returns:
            The final assistant message

        Raises:
            ValidationError: If messages is empty
            APIClientError: If the model call fails
        """
        self.validate(messages)

        chat_messages: List[Dict[str, Any]] = [{"role": "system", "content": SYSTEM_PROMPT}, *messages]

        response_message = await self.client.chat(chat_messages, tools=[self.tool.schema], tool_choice="auto")
        tool_calls = response_message.get("tool_calls") or []
        if not tool_calls:
            return response_message

        chat_messages.append(response_message)
        for call in tool_calls:
            function = call.get("function") or {}
            name = function.get("name")

            if name == self.tool.name:
                result = await self.tool.invoke(function.get("arguments"))
            else:
                LOGGER.warning(f"Model requested unknown tool {name!r}")
                result = error_payload(f"Unknown tool: {name}", "The requested tool is not available.")

            chat_messages.append(
                {
                    "role": "tool",
                    "tool_call_id": call.get("id"),
                    "content": json.dumps(result),
                }
            )

        LOGGER.info(f"Executed {len(tool_calls)} tool call(s), requesting final answer")
        return await self.client.chat(chat_messages)
