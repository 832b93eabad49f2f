"""
MCP-specific exceptions.
"""


class MCPError(Exception):
    """Base exception for MCP-related errors."""

    def __init__(self, message: str, code: int = -32603):
        self.message = message
        self.code = code
        super().__init__(self.message)


class MCPParseError(MCPError):
    """Raised when a message is not valid JSON."""

    def __init__(self, message: str = "Parse error"):
        super().__init__(message, code=-32700)


class MCPInvalidRequestError(MCPError):
    """Raised when a message is not a valid JSON-RPC request."""

    def __init__(self, message: str = "Invalid request"):
        super().__init__(message, code=-32600)


class MCPMethodNotFoundError(MCPError):
    """Raised for an unknown method."""

    def __init__(self, method: str):
        self.method = method
        super().__init__(f"Unknown method: {method}", code=-32601)


class MCPToolNotFoundError(MCPError):
    """Raised for an unknown tool name."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}", code=-32601)


class MCPInvalidParamsError(MCPError):
    """Raised when tool arguments do not match the handler."""

    def __init__(self, message: str):
        super().__init__(f"Invalid params: {message}", code=-32602)
