"""Retrieval-augmented question answering over the profile."""

from .confidence import ConfidenceStrategy, MeanScoreConfidence, estimate_confidence
from .formatter import format_context
from .generator import ResponseGenerator
from .orchestrator import ProfileRAG, SectionCatalog, static_sections

__all__ = [
    "ConfidenceStrategy", "MeanScoreConfidence", "estimate_confidence",
    "format_context",
    "ResponseGenerator",
    "ProfileRAG", "SectionCatalog", "static_sections",
]
