"""RAG orchestration: retrieve, format, generate, score."""

from typing import Callable, Optional, Sequence

from .. import constants
from ..exceptions import (
    ConfigurationError,
    PipelineStageError,
    RetrievalError,
    SectionLookupError,
)
from ..models import (
    HealthStatus,
    ProfileSearchResult,
    ProfileSection,
    QuestionOutcome,
    RAGResponse,
    VectorSearchResult,
)
from ..utils.logging import get_logger
from ..vector.base import VectorSearchClient
from .confidence import ConfidenceStrategy, MeanScoreConfidence
from .formatter import format_context
from .generator import ResponseGenerator

logger = get_logger(__name__)

SectionCatalog = Callable[[], Sequence[ProfileSection]]


def static_sections() -> list[ProfileSection]:
    """The hand-maintained list of profile sections."""
    return [ProfileSection(**section) for section in constants.PROFILE_SECTIONS]


class ProfileRAG:
    """Question answering over the indexed profile.

    All collaborators are injected so they can be replaced by test doubles.

    Example:
        ```python
        rag = ProfileRAG(
            vector_client=UpstashVectorClient(url, token),
            generator=ResponseGenerator(GroqProvider(api_key)),
        )

        response = await rag.answer_question("What projects have you built?")
        print(response.answer, response.confidence)
        ```
    """

    def __init__(
        self,
        vector_client: VectorSearchClient,
        generator: ResponseGenerator,
        confidence: Optional[ConfidenceStrategy] = None,
        sections: Optional[SectionCatalog] = None,
        top_k: int = constants.VECTOR_TOP_K,
        search_top_k: int = constants.SEARCH_TOP_K,
    ):
        """Initialize the orchestrator.

        Args:
            vector_client: Hosted vector index client
            generator: Answer generator wrapping the LLM provider
            confidence: Confidence strategy (default: MeanScoreConfidence)
            sections: Section catalog (default: static_sections)
            top_k: Chunks retrieved per question
            search_top_k: Chunks retrieved per keyword search
        """
        self.vector_client = vector_client
        self.generator = generator
        self.confidence = confidence or MeanScoreConfidence()
        self.sections = sections or static_sections
        self.top_k = top_k
        self.search_top_k = search_top_k

    async def _retrieve(self, text: str, k: int) -> list[VectorSearchResult]:
        try:
            return await self.vector_client.query(text, k)
        except (RetrievalError, ConfigurationError):
            raise
        except Exception as e:
            logger.error(f"Vector search error: {e}")
            raise RetrievalError(str(e), e) from e

    async def answer_question(self, question: str) -> RAGResponse:
        """Answer a question from retrieved profile chunks.

        The LLM is only called when at least one chunk was retrieved.

        Raises:
            RetrievalError: The vector search failed
            GenerationError: The LLM call failed or returned no text
        """
        results = await self._retrieve(question, self.top_k)

        if not results:
            logger.info("No profile chunks matched; returning fallback answer")
            return RAGResponse.no_information()

        context = format_context(results)
        answer = await self.generator.generate(context, question)

        confidence = self.confidence.estimate([result.score for result in results])
        confidence = min(max(confidence, 0.0), 1.0)

        logger.info(f"Answered question from {len(results)} chunks (confidence {confidence:.2f})")
        return RAGResponse(answer=answer, confidence=confidence, sources=results)

    async def search_by_keyword(
        self,
        query: str,
        category: Optional[str] = None,
    ) -> list[ProfileSearchResult]:
        """Search the profile, optionally restricted to one category.

        An empty list is a valid result. Retrieval failures propagate as raised
        by the vector client.
        """
        results = await self.vector_client.query(query, self.search_top_k)

        if category:
            results = [
                result for result in results
                if result.metadata is not None and result.metadata.category == category
            ]

        return [
            ProfileSearchResult(
                id=str(index),
                title=result.title,
                type=(result.metadata.type if result.metadata and result.metadata.type is not None else "unknown"),
                relevance=result.score,
                preview=result.content[:constants.PREVIEW_LENGTH] + "...",
            )
            for index, result in enumerate(results)
        ]

    async def list_sections(self) -> list[ProfileSection]:
        """List the available profile sections.

        Raises:
            SectionLookupError: The section catalog could not be read
        """
        try:
            return list(self.sections())
        except SectionLookupError:
            raise
        except Exception as e:
            logger.error(f"Profile overview error: {e}")
            raise SectionLookupError(str(e)) from e

    async def answer_sequential(self, questions: Sequence[str]) -> list[RAGResponse]:
        """Answer questions one at a time, in order.

        Each question is independent. The first failure is raised and the
        answers gathered so far are discarded.
        """
        responses: list[RAGResponse] = []

        for question in questions:
            responses.append(await self.answer_question(question))

        return responses

    async def answer_each(self, questions: Sequence[str]) -> list[QuestionOutcome]:
        """Answer questions one at a time, recording failures per question."""
        outcomes: list[QuestionOutcome] = []

        for question in questions:
            try:
                response = await self.answer_question(question)
            except PipelineStageError as e:
                logger.warning(f"Question failed at {e.stage} stage: {e}")
                outcomes.append(QuestionOutcome(question=question, error=str(e)))
            else:
                outcomes.append(QuestionOutcome(question=question, response=response))

        return outcomes

    async def check_health(self) -> HealthStatus:
        """Probe the vector index and the LLM."""
        return HealthStatus(
            vector_store=await self.vector_client.health_check(),
            language_model=await self.generator.health_check(),
        )
