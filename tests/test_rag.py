"""Tests for the profile RAG pipeline."""

import pytest

from helpers import FakeProvider, FakeVectorClient, make_result

from digital_twin import constants
from digital_twin.exceptions import (
    GenerationError,
    RetrievalError,
    SectionLookupError,
)
from digital_twin.models import ProfileSection, RAGResponse, VectorSearchResult
from digital_twin.rag import (
    ConfidenceStrategy,
    MeanScoreConfidence,
    ProfileRAG,
    ResponseGenerator,
    estimate_confidence,
    format_context,
)


class TestConfidence:
    def test_empty_scores(self):
        assert estimate_confidence([]) == 0

    def test_mean_at_two_decimals(self):
        assert estimate_confidence([0.8, 0.6]) == 0.7

    def test_mean_rounds_to_half(self):
        assert estimate_confidence([0.333, 0.667]) == 0.5

    def test_round_half_up(self):
        assert MeanScoreConfidence().estimate([0.125]) == 0.13


class TestFormatContext:
    def test_title_content_blocks(self):
        results = [
            VectorSearchResult(title="A", content="x", score=0.9),
            VectorSearchResult(title="B", content="y", score=0.8),
        ]
        assert format_context(results) == "A: x\n\nB: y"

    def test_empty(self):
        assert format_context([]) == ""

    def test_no_truncation(self):
        long = "z" * 5000
        assert format_context([VectorSearchResult(title="T", content=long)]) == f"T: {long}"


class TestResponseGenerator:
    @pytest.mark.asyncio
    async def test_prompt_and_settings(self):
        provider = FakeProvider(text="I studied computer science.")
        generator = ResponseGenerator(provider, profile_owner="Alex")

        answer = await generator.generate("Education: BSc", "Where did you study?")

        assert answer == "I studied computer science."
        call = provider.calls[0]
        assert call["model"] == "llama-3.3-70b-versatile"
        assert call["max_tokens"] == 1024
        assert call["temperature"] == 0.7
        system, user = call["messages"]
        assert system["role"] == "system"
        assert "You are Alex" in system["content"]
        assert "first person" in system["content"]
        assert user["content"].startswith("Context about my professional profile:\nEducation: BSc")
        assert "Question: Where did you study?" in user["content"]

    @pytest.mark.asyncio
    async def test_empty_completion_fails(self):
        generator = ResponseGenerator(FakeProvider(text=""))

        with pytest.raises(GenerationError, match="No text response from LLM"):
            await generator.generate("ctx", "q")

    @pytest.mark.asyncio
    async def test_provider_error_wrapped(self):
        generator = ResponseGenerator(FakeProvider(error=RuntimeError("rate limited")))

        with pytest.raises(GenerationError) as exc_info:
            await generator.generate("ctx", "q")

        assert exc_info.value.stage == "generation"
        assert "rate limited" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_health_check(self):
        assert await ResponseGenerator(FakeProvider()).health_check()
        assert not await ResponseGenerator(FakeProvider(error=RuntimeError("down"))).health_check()


class TestAnswerQuestion:
    @pytest.mark.asyncio
    async def test_answer_with_sources(self, rag, vector_client, provider, profile_results):
        response = await rag.answer_question("What have you built?")

        assert response.answer == "I built a RAG system."
        assert response.confidence == 0.8
        assert response.sources == profile_results
        assert vector_client.calls == [("What have you built?", 3)]
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_context_passed_to_llm(self, rag, provider):
        await rag.answer_question("What have you built?")

        user_prompt = provider.calls[0]["messages"][1]["content"]
        assert (
            "Projects: Built a digital twin MCP server.\n\n"
            "Experience: Worked as a data engineer.\n\n"
            "Skills: Python, TypeScript, SQL."
        ) in user_prompt

    @pytest.mark.asyncio
    async def test_no_results_skips_llm(self, provider):
        rag = ProfileRAG(FakeVectorClient([[]]), ResponseGenerator(provider))

        response = await rag.answer_question("What is your favourite food?")

        assert response.confidence == 0
        assert response.answer == constants.NO_INFORMATION_ANSWER
        assert response.sources == []
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_retrieval_failure(self, provider):
        rag = ProfileRAG(FakeVectorClient([ConnectionError("timeout")]), ResponseGenerator(provider))

        with pytest.raises(RetrievalError) as exc_info:
            await rag.answer_question("q")

        assert exc_info.value.stage == "retrieval"
        assert isinstance(exc_info.value.cause, ConnectionError)
        assert provider.calls == []

    @pytest.mark.asyncio
    async def test_generation_failure(self, vector_client):
        rag = ProfileRAG(vector_client, ResponseGenerator(FakeProvider(text=None)))

        with pytest.raises(GenerationError):
            await rag.answer_question("q")

    @pytest.mark.asyncio
    async def test_custom_confidence_strategy(self, vector_client, provider):
        class TopScore(ConfidenceStrategy):
            def estimate(self, scores):
                return max(scores, default=0.0)

        rag = ProfileRAG(vector_client, ResponseGenerator(provider), confidence=TopScore())

        response = await rag.answer_question("q")
        assert response.confidence == 0.9

    @pytest.mark.asyncio
    async def test_confidence_clamped(self, provider):
        results = [VectorSearchResult(title="T", content="c", score=1.4)]
        rag = ProfileRAG(FakeVectorClient([results]), ResponseGenerator(provider))

        response = await rag.answer_question("q")
        assert response.confidence == 1.0


class TestSearchByKeyword:
    @pytest.mark.asyncio
    async def test_maps_results(self, rag, vector_client):
        results = await rag.search_by_keyword("python")

        assert vector_client.calls == [("python", 5)]
        assert [r.id for r in results] == ["0", "1", "2"]
        assert results[0].title == "Projects"
        assert results[0].type == "projects"
        assert results[0].relevance == 0.9

    @pytest.mark.asyncio
    async def test_preview_truncated(self, provider):
        content = "a" * 200
        rag = ProfileRAG(FakeVectorClient([[make_result("T", content, 0.5)]]), ResponseGenerator(provider))

        results = await rag.search_by_keyword("q")

        assert results[0].preview == "a" * 150 + "..."

    @pytest.mark.asyncio
    async def test_short_preview_still_has_ellipsis(self, provider):
        rag = ProfileRAG(FakeVectorClient([[make_result("T", "0123456789", 0.5)]]), ResponseGenerator(provider))

        results = await rag.search_by_keyword("q")

        assert results[0].preview == "0123456789..."

    @pytest.mark.asyncio
    async def test_category_filter_keeps_rank(self, provider):
        chunks = [
            make_result("P1", "one", 0.9, "projects"),
            make_result("E1", "two", 0.8, "experience"),
            make_result("P2", "three", 0.7, "projects"),
        ]
        rag = ProfileRAG(FakeVectorClient([chunks]), ResponseGenerator(provider))

        results = await rag.search_by_keyword("q", category="projects")

        assert [r.title for r in results] == ["P1", "P2"]
        assert [r.id for r in results] == ["0", "1"]

    @pytest.mark.asyncio
    async def test_category_filter_to_empty(self, rag):
        assert await rag.search_by_keyword("q", category="goals") == []

    @pytest.mark.asyncio
    async def test_missing_type_is_unknown(self, provider):
        chunks = [VectorSearchResult(title="T", content="c", score=0.4)]
        rag = ProfileRAG(FakeVectorClient([chunks]), ResponseGenerator(provider))

        results = await rag.search_by_keyword("q")

        assert results[0].type == "unknown"

    @pytest.mark.asyncio
    async def test_empty_type_is_kept(self, provider):
        chunks = [make_result("T", "c", 0.4, "projects", "")]
        rag = ProfileRAG(FakeVectorClient([chunks]), ResponseGenerator(provider))

        results = await rag.search_by_keyword("q")

        assert results[0].type == ""

    @pytest.mark.asyncio
    async def test_retrieval_error_propagates(self, provider):
        error = RetrievalError("boom")
        rag = ProfileRAG(FakeVectorClient([error]), ResponseGenerator(provider))

        with pytest.raises(RetrievalError) as exc_info:
            await rag.search_by_keyword("q")

        assert exc_info.value is error


class TestListSections:
    @pytest.mark.asyncio
    async def test_eight_sections(self, rag):
        sections = await rag.list_sections()

        assert [s.type for s in sections] == constants.PROFILE_CATEGORIES
        assert len(sections) == 8
        assert all(s.name and s.description for s in sections)

    @pytest.mark.asyncio
    async def test_custom_catalog(self, vector_client, provider):
        catalog = lambda: [ProfileSection(name="Projects", type="projects", description="d", count=4)]
        rag = ProfileRAG(vector_client, ResponseGenerator(provider), sections=catalog)

        sections = await rag.list_sections()
        assert sections[0].count == 4

    @pytest.mark.asyncio
    async def test_catalog_failure(self, vector_client, provider):
        def broken():
            raise OSError("catalog offline")

        rag = ProfileRAG(vector_client, ResponseGenerator(provider), sections=broken)

        with pytest.raises(SectionLookupError, match="catalog offline"):
            await rag.list_sections()


class TestBatches:
    @pytest.mark.asyncio
    async def test_sequential_in_order(self, profile_results, provider):
        vector_client = FakeVectorClient([profile_results, []])
        rag = ProfileRAG(vector_client, ResponseGenerator(provider))

        responses = await rag.answer_sequential(["q1", "q2"])

        assert [call[0] for call in vector_client.calls] == ["q1", "q2"]
        assert responses[0].answer == "I built a RAG system."
        assert responses[1] == RAGResponse.no_information()

    @pytest.mark.asyncio
    async def test_sequential_all_or_nothing(self, profile_results, provider):
        vector_client = FakeVectorClient([profile_results, ConnectionError("down")])
        rag = ProfileRAG(vector_client, ResponseGenerator(provider))

        with pytest.raises(RetrievalError):
            await rag.answer_sequential(["q1", "q2"])

        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_sequential_empty(self, rag):
        assert await rag.answer_sequential([]) == []

    @pytest.mark.asyncio
    async def test_answer_each_keeps_successes(self, profile_results, provider):
        vector_client = FakeVectorClient([profile_results, ConnectionError("down"), profile_results])
        rag = ProfileRAG(vector_client, ResponseGenerator(provider))

        outcomes = await rag.answer_each(["q1", "q2", "q3"])

        assert [o.ok for o in outcomes] == [True, False, True]
        assert outcomes[0].response.answer == "I built a RAG system."
        assert outcomes[1].response is None
        assert "down" in outcomes[1].error
        assert outcomes[2].question == "q3"


class TestHealth:
    @pytest.mark.asyncio
    async def test_healthy(self, rag):
        status = await rag.check_health()
        assert status.healthy

    @pytest.mark.asyncio
    async def test_vector_store_down(self, provider):
        rag = ProfileRAG(FakeVectorClient([RuntimeError("down")]), ResponseGenerator(provider))

        status = await rag.check_health()

        assert not status.vector_store
        assert status.language_model
        assert not status.healthy


class TestModels:
    def test_profile_chunk_is_immutable(self):
        from pydantic import ValidationError

        from digital_twin.models import ChunkTags, ProfileCategory, ProfileChunk

        chunk = ProfileChunk(
            id="exp-1",
            title="Experience",
            type="experience",
            content="Data engineer",
            metadata=ChunkTags(category="experience", tags=["etl"])
        )

        assert chunk.type is ProfileCategory.EXPERIENCE
        with pytest.raises(ValidationError):
            chunk.title = "Changed"

    def test_unknown_category_rejected(self):
        from pydantic import ValidationError

        from digital_twin.models import ProfileChunk

        with pytest.raises(ValidationError):
            ProfileChunk(id="x", title="Hobbies", type="hobbies", content="Chess")

    def test_no_information_response(self):
        response = RAGResponse.no_information()

        assert response.confidence == 0
        assert response.sources == []
        assert response.answer.startswith("I don't have information about that in my profile.")
