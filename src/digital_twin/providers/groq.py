"""
Groq LLM Provider.
"""

from typing import Any

from openai import AsyncOpenAI

from digital_twin import constants
from digital_twin.exceptions import ConfigurationError
from digital_twin.providers.base import LLMProvider


class GroqProvider(LLMProvider):
    """
    LLM Provider for Groq's OpenAI-compatible chat completion API.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str = constants.GROQ_BASE_URL,
        client: Any = None
    ):
        if not api_key and client is None:
            raise ConfigurationError("Missing GROQ_API_KEY in environment variables")

        self.api_key = api_key
        self.base_url = base_url
        self._client = client

    def _get_client(self) -> Any:
        """Get or create the OpenAI-compatible client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.api_key,
                base_url=self.base_url
            )
        return self._client

    async def complete(
        self,
        messages: list[dict[str, Any]],
        *,
        model: str = constants.LLM_MODEL,
        temperature: float = constants.LLM_TEMPERATURE,
        max_tokens: int = constants.LLM_MAX_TOKENS,
        **kwargs: Any
    ) -> dict[str, Any]:
        """Get a completion from Groq."""
        client = self._get_client()

        params: dict[str, Any] = {
            "model": model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        params.update(kwargs)

        response = await client.chat.completions.create(**params)

        text = None
        finish_reason = "stop"
        if response.choices:
            choice = response.choices[0]
            text = choice.message.content if choice.message else None
            finish_reason = choice.finish_reason or "stop"

        return {
            "text": text,
            "usage": {
                "prompt_tokens": response.usage.prompt_tokens if response.usage else 0,
                "completion_tokens": response.usage.completion_tokens if response.usage else 0,
                "total_tokens": response.usage.total_tokens if response.usage else 0
            },
            "finish_reason": finish_reason
        }

