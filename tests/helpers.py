"""
Test doubles for the hosted service clients.
"""

from typing import Any

from digital_twin.models import ChunkMetadata, VectorSearchResult
from digital_twin.providers.base import LLMProvider
from digital_twin.vector.base import VectorSearchClient


class FakeVectorClient(VectorSearchClient):
    """Vector client returning canned results, one list per call."""

    def __init__(self, responses: list[Any] | None = None):
        self.responses = list(responses or [])
        self.calls: list[tuple[str, int]] = []

    async def query(self, text: str, top_k: int = 3) -> list[VectorSearchResult]:
        self.calls.append((text, top_k))
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response[:top_k]


class FakeProvider(LLMProvider):
    """LLM provider that records calls and returns a fixed text."""

    def __init__(self, text: str | None = "I built a RAG system.", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def complete(self, messages, *, model, temperature=0.7, max_tokens=1024, **kwargs):
        self.calls.append({
            "messages": messages,
            "model": model,
            "temperature": temperature,
            "max_tokens": max_tokens,
        })
        if self.error:
            raise self.error
        return {"text": self.text, "usage": {"total_tokens": 12}, "finish_reason": "stop"}


def make_result(
    title: str,
    content: str,
    score: float,
    category: str | None = None,
    type: str | None = None
) -> VectorSearchResult:
    return VectorSearchResult(
        title=title,
        content=content,
        score=score,
        metadata=ChunkMetadata(title=title, content=content, category=category, type=type)
    )
