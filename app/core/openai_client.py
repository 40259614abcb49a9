"""Azure OpenAI chat completion client."""

from typing import Any, Dict, List, Optional

from app.core.base_llm_client import BaseLLMClient
from app.core.exceptions import APIClientError
from app.utils.logging import get_logger

LOGGER = get_logger(__name__)


class AzureOpenAIClient:
    """Wrapper for the Azure OpenAI chat completions REST API.

    Exposes two calls: ``chat`` returns the full assistant message (including
    any tool calls) and ``generate_content`` returns only its text.
    """

    def __init__(
        self,
        endpoint: str,
        api_key: str,
        deployment: str,
        api_version: str = "2024-12-01-preview",
        timeout: int = 60,
        max_retries: int = 1,
    ):
        """Initialize Azure OpenAI client.

        Args:
            endpoint: Resource endpoint, e.g. https://<resource>.openai.azure.com
            api_key: Azure OpenAI API key
            deployment: Chat model deployment name
            api_version: REST API version
            timeout: Request timeout in seconds
            max_retries: Total attempts per call
        """
        self.deployment = deployment
        self.api_version = api_version

        self.client = BaseLLMClient(
            base_url=f"{endpoint.rstrip('/')}/openai/deployments/{deployment}",
            auth_headers={"api-key": api_key},
            timeout=timeout,
            max_retries=max_retries,
        )

        LOGGER.info(f"Initialized Azure OpenAI client with deployment {self.deployment}")

    async def chat(
        self,
        messages: List[Dict[str, Any]],
        temperature: Optional[float] = None,
        tools: Optional[List[Dict[str, Any]]] = None,
        tool_choice: Optional[str] = None,
        response_format: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a chat completion request and return the assistant message.

        Args:
            messages: Ordered role/content messages
            temperature: Optional sampling temperature
            tools: Optional function tool schemas
            tool_choice: Optional tool choice mode ("auto", "none")
            response_format: Optional response format, e.g. {"type": "json_object"}

        Returns:
            The first choice's message dict (role, content, optional tool_calls)

        Raises:
            APIClientError: If the call fails or the response is malformed
        """
        payload: Dict[str, Any] = {"messages": messages}
        if temperature is not None:
            payload["temperature"] = temperature
        if tools:
            payload["tools"] = tools
            payload["tool_choice"] = tool_choice or "auto"
        if response_format:
            payload["response_format"] = response_format

        response = await self.client.call_api(
            endpoint="/chat/completions",
            payload=payload,
            params={"api-version": self.api_version},
        )

        try:
            return response["choices"][0]["message"]
        except (KeyError, IndexError, TypeError) as e:
            LOGGER.error(f"Unexpected Azure OpenAI response format: {response}")
            raise APIClientError("Invalid response format from Azure OpenAI", original_error=e) from e

    async def generate_content(
        self,
        contents: str,
        system_instruction: Optional[str] = None,
        temperature: float = 0.0,
    ) -> str:
        """Generate a plain-text completion for a single user prompt.

        Args:
            contents: User prompt
            system_instruction: Optional system prompt
            temperature: Sampling temperature

        Returns:
            Assistant text, stripped; empty string when the model returned nothing
        """
        messages: List[Dict[str, Any]] = []
        if system_instruction:
            messages.append({"role": "system", "content": system_instruction})
        messages.append({"role": "user", "content": contents})

        message = await self.chat(messages, temperature=temperature)
        content = message.get("content") or ""

        if not content:
            LOGGER.warning("Empty response from Azure OpenAI")

        return content.strip()
