"""First-person answer generation with a hosted LLM."""

from typing import Optional

from .. import constants
from ..exceptions import GenerationError
from ..providers.base import LLMProvider
from ..utils.logging import get_logger

logger = get_logger(__name__)


class ResponseGenerator:
    """Answers questions in the profile owner's voice.

    Wraps an :class:`LLMProvider` with the persona system prompt and the
    fixed deployment settings (model, max tokens, temperature).

    Example:
        ```python
        generator = ResponseGenerator(GroqProvider(api_key="..."))
        answer = await generator.generate("Projects: Built X", "What did you build?")
        ```
    """

    def __init__(
        self,
        provider: LLMProvider,
        model: str = constants.LLM_MODEL,
        max_tokens: int = constants.LLM_MAX_TOKENS,
        temperature: float = constants.LLM_TEMPERATURE,
        profile_owner: str = constants.PROFILE_OWNER,
        system_prompt: Optional[str] = None,
    ):
        self.provider = provider
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.system_prompt = system_prompt or constants.SYSTEM_PROMPT_TEMPLATE.format(
            owner=profile_owner
        )

    def build_messages(self, context: str, question: str) -> list[dict[str, str]]:
        """Build the system and user messages for one question."""
        prompt = constants.USER_PROMPT_TEMPLATE.format(context=context, question=question)
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": prompt},
        ]

    async def generate(self, context: str, question: str) -> str:
        """Generate an answer grounded in ``context``.

        Raises:
            GenerationError: The provider failed or returned no text
        """
        try:
            response = await self.provider.complete(
                self.build_messages(context, question),
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error(f"LLM generation error: {e}")
            raise GenerationError(str(e), e) from e

        text = response.get("text")
        if not text:
            logger.error("LLM generation error: empty completion")
            raise GenerationError("No text response from LLM")

        logger.debug(f"Generated answer ({response.get('usage', {}).get('total_tokens', 0)} tokens)")
        return text

    async def health_check(self) -> bool:
        """Return True if a minimal completion succeeds."""
        try:
            await self.provider.complete(
                [{"role": "user", "content": "Hi"}],
                model=self.model,
                max_tokens=10,
            )
            return True
        except Exception as e:
            logger.error(f"LLM health check failed: {e}")
            return False
