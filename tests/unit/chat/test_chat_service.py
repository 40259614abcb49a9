"""Tests for the chat tool-calling loop."""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from app.core.exceptions import ValidationError
from app.services.chat.chat_service import SYSTEM_PROMPT, ChatService
from app.services.chat.tools import BEST_RATE_TOOL_NAME, BEST_RATE_TOOL_SCHEMA


class TestChatService:
    """Test suite for ChatService."""

    @pytest.fixture
    def mock_client(self):
        client = Mock()
        client.chat = AsyncMock()
        return client

    @pytest.fixture
    def mock_tool(self):
        tool = Mock()
        tool.name = BEST_RATE_TOOL_NAME
        tool.schema = BEST_RATE_TOOL_SCHEMA
        tool.invoke = AsyncMock(return_value={"found": True, "hotel": {"name": "Goa Sands"}})
        return tool

    @pytest.mark.asyncio
    async def test_plain_answer_is_returned(self, mock_client, mock_tool):
        mock_client.chat.return_value = {"role": "assistant", "content": "Hello!"}
        service = ChatService(mock_client, mock_tool)

        reply = await service.respond([{"role": "user", "content": "Hi"}])

        assert reply == {"role": "assistant", "content": "Hello!"}
        sent = mock_client.chat.call_args.args[0]
        assert sent[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert sent[1] == {"role": "user", "content": "Hi"}
        assert mock_client.chat.call_args.kwargs["tools"] == [BEST_RATE_TOOL_SCHEMA]
        mock_tool.invoke.assert_not_called()

    @pytest.mark.asyncio
    async def test_tool_call_result_is_sent_back(self, mock_client, mock_tool):
        arguments = json.dumps({"city": "Goa", "category": "4-star", "start": "2024-12-20", "end": "2024-12-22"})
        tool_message = {
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {"id": "call_1", "type": "function", "function": {"name": BEST_RATE_TOOL_NAME, "arguments": arguments}}
            ],
        }
        final = {"role": "assistant", "content": "Goa Sands is the best option."}
        mock_client.chat.side_effect = [tool_message, final]
        service = ChatService(mock_client, mock_tool)

        reply = await service.respond([{"role": "user", "content": "Best hotel in Goa?"}])

        assert reply == final
        mock_tool.invoke.assert_awaited_once_with(arguments)
        followup = mock_client.chat.call_args_list[1].args[0]
        assert followup[-2] == tool_message
        assert followup[-1]["role"] == "tool"
        assert followup[-1]["tool_call_id"] == "call_1"
        assert json.loads(followup[-1]["content"])["hotel"]["name"] == "Goa Sands"

    @pytest.mark.asyncio
    async def test_unknown_tool_gets_error_payload(self, mock_client, mock_tool):
        tool_message = {
            "role": "assistant",
            "content": None,
            "tool_calls": [{"id": "call_9", "function": {"name": "bookHotel", "arguments": "{}"}}],
        }
        mock_client.chat.side_effect = [tool_message, {"role": "assistant", "content": "Sorry."}]

        await ChatService(mock_client, mock_tool).respond([{"role": "user", "content": "Book it"}])

        mock_tool.invoke.assert_not_called()
        payload = json.loads(mock_client.chat.call_args_list[1].args[0][-1]["content"])
        assert payload["found"] is False

    @pytest.mark.asyncio
    async def test_empty_messages_rejected(self, mock_client, mock_tool):
        with pytest.raises(ValidationError):
            await ChatService(mock_client, mock_tool).respond([])

        mock_client.chat.assert_not_called()
