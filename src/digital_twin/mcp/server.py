"""
MCP Server exposing callables as tools.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import json
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from digital_twin.mcp.exceptions import (
    MCPError,
    MCPInvalidParamsError,
    MCPInvalidRequestError,
    MCPMethodNotFoundError,
    MCPToolNotFoundError,
)
from digital_twin.mcp.types import ServerInfo, ToolDefinition, ToolResult
from digital_twin.utils.logging import get_logger

logger = get_logger(__name__)


class MCPServer:
    """
    Minimal MCP server with tool support.

    Use the decorator to define tools:

    @server.tool()
    async def my_tool(arg: str) -> ToolResult:
        '''Tool description'''
        return ToolResult.text(f"Result: {arg}")
    """

    def __init__(
        self,
        name: str = "digital-twin",
        version: str = "1.0.0"
    ):
        self.info = ServerInfo(name=name, version=version)
        self._tools: dict[str, ToolHandler] = {}

    @property
    def name(self) -> str:
        return self.info.name

    @property
    def version(self) -> str:
        return self.info.version

    def tool(
        self,
        name: str | None = None,
        description: str | None = None,
        input_schema: dict[str, Any] | None = None
    ) -> Callable:
        """Decorator to register a tool."""
        def decorator(func: Callable) -> Callable:
            tool_name = name or func.__name__
            tool_desc = description or inspect.getdoc(func) or ""

            handler = ToolHandler(
                definition=ToolDefinition(
                    name=tool_name,
                    description=tool_desc,
                    input_schema=input_schema or self._build_schema_from_func(func)
                ),
                handler=func
            )

            self._tools[tool_name] = handler
            logger.debug(f"Registered tool: {tool_name}")

            @functools.wraps(func)
            def wrapper(*args, **kwargs):
                return func(*args, **kwargs)

            return wrapper

        return decorator

    def list_tools(self) -> list[ToolDefinition]:
        return [handler.definition for handler in self._tools.values()]

    def _build_schema_from_func(self, func: Callable) -> dict[str, Any]:
        """Build JSON schema from function signature."""
        sig = inspect.signature(func)
        properties = {}
        required = []

        for param_name, param in sig.parameters.items():
            param_info: dict[str, Any] = {"type": "string"}

            if param.annotation != inspect.Parameter.empty:
                if param.annotation in (int, "int"):
                    param_info = {"type": "integer"}
                elif param.annotation in (float, "float"):
                    param_info = {"type": "number"}
                elif param.annotation in (bool, "bool"):
                    param_info = {"type": "boolean"}

            properties[param_name] = param_info

            if param.default == inspect.Parameter.empty:
                required.append(param_name)

        return {
            "type": "object",
            "properties": properties,
            "required": required
        }

    async def handle_request(
        self,
        method: str,
        params: dict[str, Any]
    ) -> dict[str, Any]:
        """Handle an incoming request."""
        if method == "initialize":
            return await self._handle_initialize(params)
        elif method == "ping":
            return {}
        elif method == "tools/list":
            return await self._handle_tools_list()
        elif method == "tools/call":
            return await self._handle_tools_call(params)
        else:
            raise MCPMethodNotFoundError(method)

    async def handle_message(self, message: Any) -> dict[str, Any] | None:
        """
        Handle a JSON-RPC 2.0 message.

        Returns the response envelope, or None for notifications.
        """
        if not isinstance(message, dict) or not isinstance(message.get("method"), str):
            return self._error_response(None, MCPInvalidRequestError())

        request_id = message.get("id")
        is_notification = "id" not in message
        params = message.get("params") or {}

        try:
            if not isinstance(params, dict):
                raise MCPInvalidRequestError("params must be an object")
            result = await self.handle_request(message["method"], params)
        except MCPError as e:
            logger.warning(f"Request {message['method']} failed: {e.message}")
            if is_notification:
                return None
            return self._error_response(request_id, e)
        except Exception as e:
            logger.error(f"Internal error handling {message['method']}: {e}")
            if is_notification:
                return None
            return self._error_response(request_id, MCPError(f"Internal error: {e}"))

        if is_notification:
            return None

        return {"jsonrpc": "2.0", "id": request_id, "result": result}

    def _error_response(self, request_id: Any, error: MCPError) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "id": request_id,
            "error": {"code": error.code, "message": error.message}
        }

    async def _handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle initialize request."""
        client_info = params.get("clientInfo", {})
        logger.info(f"Initialize from client: {client_info.get('name', 'unknown')}")

        return {
            "protocolVersion": self.info.protocol_version,
            "capabilities": {
                "tools": {}
            },
            "serverInfo": {
                "name": self.info.name,
                "version": self.info.version
            }
        }

    async def _handle_tools_list(self) -> dict[str, Any]:
        """Handle tools/list request."""
        return {"tools": [definition.to_wire() for definition in self.list_tools()]}

    async def _handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle tools/call request."""
        name = params.get("name")
        arguments = params.get("arguments") or {}

        if name not in self._tools:
            raise MCPToolNotFoundError(str(name))

        if not isinstance(arguments, dict):
            raise MCPInvalidParamsError("arguments must be an object")

        handler = self._tools[name]

        try:
            inspect.signature(handler.handler).bind(**arguments)
        except TypeError as e:
            raise MCPInvalidParamsError(str(e)) from e

        logger.debug(f"Calling tool {name}")
        result = handler.handler(**arguments)

        if asyncio.iscoroutine(result):
            result = await result

        # Format result as MCP content
        if isinstance(result, ToolResult):
            return result.to_wire()
        elif isinstance(result, str):
            return ToolResult.text(result).to_wire()
        elif isinstance(result, (dict, list)):
            return ToolResult.text(json.dumps(result)).to_wire()
        else:
            return ToolResult.text(str(result)).to_wire()


class ToolHandler(BaseModel):
    """Handler for a tool."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    definition: ToolDefinition
    handler: Callable
