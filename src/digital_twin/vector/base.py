"""
Base vector search interface.
"""

from abc import ABC, abstractmethod

from digital_twin.models import VectorSearchResult
from digital_twin.utils.logging import get_logger

logger = get_logger(__name__)


class VectorSearchClient(ABC):
    """
    Abstract base class for hosted semantic vector indexes.
    """

    @abstractmethod
    async def query(self, text: str, top_k: int) -> list[VectorSearchResult]:
        """
        Search the index with a natural-language query.

        Args:
            text: Query text, embedded by the hosted service
            top_k: Number of results to return

        Returns:
            Results ranked by descending score

        Raises:
            ConfigurationError: Connection settings are missing
            RetrievalError: The remote call failed
        """
        pass

    async def health_check(self) -> bool:
        """Return True if a one-result query succeeds."""
        try:
            await self.query("test", 1)
            return True
        except Exception as e:
            logger.error(f"Vector database health check failed: {e}")
            return False
