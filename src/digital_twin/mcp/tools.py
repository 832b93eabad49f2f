"""
Profile tools exposed over MCP.
"""

import math
from typing import Any

from digital_twin.mcp.server import MCPServer
from digital_twin.mcp.types import ToolResult
from digital_twin.models import ProfileCategory
from digital_twin.rag.orchestrator import ProfileRAG
from digital_twin.utils.config import Settings
from digital_twin.utils.logging import get_logger

logger = get_logger(__name__)

ASK_SCHEMA = {
    "type": "object",
    "properties": {
        "question": {
            "type": "string",
            "description": "Your question about the profile",
        },
    },
    "required": ["question"],
}

SEARCH_SCHEMA = {
    "type": "object",
    "properties": {
        "query": {
            "type": "string",
            "description": "Search keywords",
        },
        "category": {
            "type": "string",
            "enum": ProfileCategory.values(),
            "description": "Optional category filter",
        },
    },
    "required": ["query"],
}

LIST_SCHEMA = {
    "type": "object",
    "properties": {},
    "required": [],
}


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _percent(value: float) -> str:
    return f"{math.floor(value * 100 + 0.5)}%"


async def ask_about_profile(rag: ProfileRAG, question: Any) -> ToolResult:
    """Answer a question about the profile."""
    if _is_blank(question):
        return ToolResult.error("Please provide a question about my professional profile.")

    try:
        response = await rag.answer_question(question)
    except Exception as e:
        logger.error(f"askAboutProfile failed: {e}")
        return ToolResult.error(f"Error processing query: {e}")

    return ToolResult.text(f"{response.answer}\n\n[Confidence: {_percent(response.confidence)}]")


async def search_profile(rag: ProfileRAG, query: Any, category: Any = None) -> ToolResult:
    """Search the profile by keywords."""
    if _is_blank(query):
        return ToolResult.error("Please provide search keywords.")

    if not category:
        category = None
    elif category not in ProfileCategory.values():
        return ToolResult.error(
            f"Invalid category {category!r}. "
            f"Valid categories: {', '.join(ProfileCategory.values())}."
        )

    try:
        results = await rag.search_by_keyword(query, category)
    except Exception as e:
        logger.error(f"searchProfile failed: {e}")
        return ToolResult.error(f"Error searching profile: {e}")

    if not results:
        in_category = f' in category "{category}"' if category else ""
        return ToolResult.text(f'No results found for "{query}"{in_category}.')

    formatted = "\n\n".join(
        f"{index + 1}. **{result.title}** ({result.type}, relevance: {_percent(result.relevance)})\n"
        f"   {result.preview}"
        for index, result in enumerate(results)
    )
    plural = "" if len(results) == 1 else "s"

    return ToolResult.text(f"Found {len(results)} matching result{plural}:\n\n{formatted}")


async def list_profile_sections(rag: ProfileRAG) -> ToolResult:
    """Describe the sections of the profile."""
    try:
        sections = await rag.list_sections()
    except Exception as e:
        logger.error(f"listProfileSections failed: {e}")
        return ToolResult.error(f"Error retrieving profile sections: {e}")

    if not sections:
        return ToolResult.text("No profile sections available.")

    formatted = "\n\n".join(
        f"• **{section.name}** ({section.type})\n  {section.description}"
        for section in sections
    )

    return ToolResult.text(
        f"My profile contains the following sections:\n\n{formatted}\n\n"
        "You can ask me about any of these areas!"
    )


def create_profile_server(rag: ProfileRAG, settings: Settings | None = None) -> MCPServer:
    """
    Build an MCP server exposing the profile tools.

    Args:
        rag: Orchestrator backing the tools
        settings: Server name, version and profile owner

    Returns:
        MCPServer with askAboutProfile, searchProfile and listProfileSections
    """
    settings = settings or Settings()
    server = MCPServer(name=settings.server_name, version=settings.server_version)

    @server.tool(
        name="askAboutProfile",
        description=f"Ask questions about {settings.profile_owner}'s professional profile",
        input_schema=ASK_SCHEMA
    )
    async def ask(question: Any = None) -> ToolResult:
        return await ask_about_profile(rag, question)

    @server.tool(
        name="searchProfile",
        description="Search for specific information within the profile",
        input_schema=SEARCH_SCHEMA
    )
    async def search(query: Any = None, category: Any = None) -> ToolResult:
        return await search_profile(rag, query, category)

    @server.tool(
        name="listProfileSections",
        description="Get an overview of available profile sections",
        input_schema=LIST_SCHEMA
    )
    async def sections() -> ToolResult:
        return await list_profile_sections(rag)

    return server
