"""
Stdio transport for serving MCP.
"""

import asyncio
import json
import sys
from typing import Any, TextIO

from digital_twin.mcp.exceptions import MCPParseError
from digital_twin.mcp.server import MCPServer
from digital_twin.utils.logging import get_logger

logger = get_logger(__name__)


async def _read_line(stream: TextIO) -> str:
    return await asyncio.to_thread(stream.readline)


def _write(stream: TextIO, message: dict[str, Any]) -> None:
    stream.write(json.dumps(message) + "\n")
    stream.flush()
    logger.debug(f"Sent: {message}")


async def serve_stdio(
    server: MCPServer,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None
) -> None:
    """
    Serve newline-delimited JSON-RPC messages until stdin closes.

    Args:
        server: Server handling the requests
        stdin: Input stream (defaults to sys.stdin)
        stdout: Output stream (defaults to sys.stdout)
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    logger.info(f"Serving {server.name} {server.version} over stdio")

    while True:
        line = await _read_line(stdin)
        if not line:
            break

        line = line.strip()
        if not line:
            continue

        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse message: {e}")
            error = MCPParseError(f"Parse error: {e}")
            _write(stdout, {
                "jsonrpc": "2.0",
                "id": None,
                "error": {"code": error.code, "message": error.message}
            })
            continue

        logger.debug(f"Received: {message}")
        response = await server.handle_message(message)

        if response is not None:
            _write(stdout, response)

    logger.info("Stdin closed, stopping server")
