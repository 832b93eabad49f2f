"""
MCP Type definitions.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class ToolDefinition(BaseModel):
    """Definition of an MCP tool."""
    name: str
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=lambda: {
        "type": "object",
        "properties": {},
        "required": []
    })

    def to_wire(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema
        }


class TextBlock(BaseModel):
    """Text content block."""
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result of calling a tool."""
    model_config = ConfigDict(populate_by_name=True)

    content: list[TextBlock] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(content=[TextBlock(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(content=[TextBlock(text=text)], is_error=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ServerInfo(BaseModel):
    """Information about an MCP server."""
    name: str
    version: str
    protocol_version: str = "2024-11-05"
