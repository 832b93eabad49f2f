"""
Upstash Vector REST client.
"""

from typing import Any

import httpx

from digital_twin.exceptions import ConfigurationError, RetrievalError
from digital_twin.models import ChunkMetadata, VectorSearchResult
from digital_twin.utils.logging import get_logger
from digital_twin.vector.base import VectorSearchClient

logger = get_logger(__name__)


class UpstashVectorClient(VectorSearchClient):
    """
    Semantic search over an Upstash Vector index.

    The index embeds the query text itself (``/query-data``), so no local
    embedding model is needed. Each vector's metadata carries the chunk
    title, content, category, type and tags.
    """

    def __init__(
        self,
        url: str | None,
        token: str | None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None
    ):
        if not url or not token:
            raise ConfigurationError(
                "Missing Upstash Vector credentials. Set "
                "UPSTASH_VECTOR_REST_URL and UPSTASH_VECTOR_REST_TOKEN"
            )

        self.url = url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.url,
            headers={"Authorization": f"Bearer {token}"},
            timeout=httpx.Timeout(timeout),
            transport=transport
        )

    async def query(self, text: str, top_k: int = 3) -> list[VectorSearchResult]:
        """Query the index and return results with parsed metadata."""
        payload = {
            "data": text,
            "topK": top_k,
            "includeMetadata": True,
        }

        try:
            response = await self._client.post("/query-data", json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Vector search error: {e}")
            raise RetrievalError(
                f"HTTP {e.response.status_code}: {e.response.text}", e
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Vector search error: {e}")
            raise RetrievalError(str(e), e) from e

        if isinstance(data, dict) and data.get("error"):
            raise RetrievalError(str(data["error"]))

        matches = data.get("result") if isinstance(data, dict) else None
        if not isinstance(matches, list):
            raise RetrievalError("Malformed response: missing 'result' list")

        results = [self._to_result(match) for match in matches]
        logger.debug(f"Vector search returned {len(results)} results for top_k={top_k}")
        return results

    def _to_result(self, match: Any) -> VectorSearchResult:
        """Convert one raw match to a VectorSearchResult."""
        if not isinstance(match, dict):
            raise RetrievalError(f"Malformed match: {match!r}")

        metadata = ChunkMetadata.from_raw(match.get("metadata"))
        score = match.get("score")

        return VectorSearchResult(
            title=(metadata.title if metadata and metadata.title else "Information"),
            content=(metadata.content if metadata and metadata.content else ""),
            score=float(score) if isinstance(score, (int, float)) else 0.0,
            metadata=metadata
        )

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "UpstashVectorClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
