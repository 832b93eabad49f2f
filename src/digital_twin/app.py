"""
Process-level wiring of the hosted service clients.
"""

from digital_twin.mcp.server import MCPServer
from digital_twin.mcp.tools import create_profile_server
from digital_twin.providers.base import LLMProvider
from digital_twin.providers.groq import GroqProvider
from digital_twin.rag.generator import ResponseGenerator
from digital_twin.rag.orchestrator import ProfileRAG
from digital_twin.utils.config import Settings
from digital_twin.utils.logging import get_logger
from digital_twin.vector.base import VectorSearchClient
from digital_twin.vector.upstash import UpstashVectorClient

logger = get_logger(__name__)


def build_rag(
    settings: Settings,
    vector_client: VectorSearchClient | None = None,
    provider: LLMProvider | None = None
) -> ProfileRAG:
    """
    Create the orchestrator and its service clients.

    Clients not passed in are built from settings; missing credentials raise
    ConfigurationError before any network call.

    Args:
        settings: Loaded settings
        vector_client: Vector search client to use instead of Upstash
        provider: LLM provider to use instead of Groq

    Returns:
        ProfileRAG ready to answer questions
    """
    if vector_client is None:
        vector_client = UpstashVectorClient(
            url=settings.upstash_url,
            token=settings.upstash_token,
            timeout=settings.request_timeout
        )

    if provider is None:
        provider = GroqProvider(
            api_key=settings.groq_api_key,
            base_url=settings.groq_base_url
        )

    generator = ResponseGenerator(
        provider,
        model=settings.llm_model,
        max_tokens=settings.llm_max_tokens,
        temperature=settings.llm_temperature,
        profile_owner=settings.profile_owner
    )

    return ProfileRAG(
        vector_client=vector_client,
        generator=generator,
        top_k=settings.vector_top_k,
        search_top_k=settings.search_top_k
    )


class DigitalTwinApp:
    """
    Holds the service clients for the lifetime of the process.

    async with DigitalTwinApp(load_settings()) as app:
        response = await app.rag.answer_question("Where did you study?")
    """

    def __init__(
        self,
        settings: Settings,
        vector_client: VectorSearchClient | None = None,
        provider: LLMProvider | None = None
    ):
        self.settings = settings
        self.rag = build_rag(settings, vector_client=vector_client, provider=provider)
        self.server: MCPServer = create_profile_server(self.rag, settings)
        logger.info(f"Initialized {settings.server_name} for {settings.profile_owner}")

    async def close(self) -> None:
        """Release the HTTP client held by the vector search client."""
        aclose = getattr(self.rag.vector_client, "aclose", None)
        if aclose is not None:
            await aclose()

    async def __aenter__(self) -> "DigitalTwinApp":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
