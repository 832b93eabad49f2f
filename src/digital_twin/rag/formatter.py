"""Context formatting for the language model."""

from typing import Sequence

from ..models import VectorSearchResult


def format_context(results: Sequence[VectorSearchResult]) -> str:
    """Join results as ``title: content`` blocks separated by a blank line.

    Input order is kept; nothing is truncated or deduplicated.
    """
    return "\n\n".join(f"{result.title}: {result.content}" for result in results)
