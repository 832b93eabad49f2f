"""
Digital Twin - question answering over a professional profile with MCP tools.
"""

from digital_twin.app import DigitalTwinApp, build_rag
from digital_twin.exceptions import (
    ConfigurationError,
    DigitalTwinError,
    GenerationError,
    PipelineStageError,
    RetrievalError,
    SectionLookupError,
)
from digital_twin.mcp import MCPServer, ToolResult, create_profile_server, serve_stdio
from digital_twin.models import (
    ChunkMetadata,
    HealthStatus,
    ProfileCategory,
    ProfileChunk,
    ProfileSearchResult,
    ProfileSection,
    QuestionOutcome,
    RAGResponse,
    VectorSearchResult,
)
from digital_twin.providers import GroqProvider, LLMProvider
from digital_twin.rag import (
    ConfidenceStrategy,
    MeanScoreConfidence,
    ProfileRAG,
    ResponseGenerator,
    estimate_confidence,
    format_context,
)
from digital_twin.utils import Settings, load_settings
from digital_twin.vector import UpstashVectorClient, VectorSearchClient

__version__ = "1.0.0"
__all__ = [
    # App
    "DigitalTwinApp",
    "build_rag",
    "Settings",
    "load_settings",
    # Errors
    "DigitalTwinError",
    "ConfigurationError",
    "PipelineStageError",
    "RetrievalError",
    "GenerationError",
    "SectionLookupError",
    # Models
    "ProfileCategory",
    "ProfileChunk",
    "ChunkMetadata",
    "VectorSearchResult",
    "RAGResponse",
    "ProfileSearchResult",
    "ProfileSection",
    "QuestionOutcome",
    "HealthStatus",
    # RAG
    "ProfileRAG",
    "ResponseGenerator",
    "ConfidenceStrategy",
    "MeanScoreConfidence",
    "estimate_confidence",
    "format_context",
    # Clients
    "VectorSearchClient",
    "UpstashVectorClient",
    "LLMProvider",
    "GroqProvider",
    # MCP
    "MCPServer",
    "ToolResult",
    "create_profile_server",
    "serve_stdio",
]
