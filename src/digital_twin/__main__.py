"""
Command line entry point.

Examples:
    python -m digital_twin serve
    python -m digital_twin ask "What projects have you built?" "Where did you study?"
    python -m digital_twin sections
    python -m digital_twin health --config digital_twin.yaml
"""

import argparse
import asyncio
import sys

from digital_twin.app import DigitalTwinApp
from digital_twin.exceptions import DigitalTwinError
from digital_twin.mcp.stdio import serve_stdio
from digital_twin.utils.config import load_settings
from digital_twin.utils.logging import get_logger, set_log_level

logger = get_logger("digital_twin")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digital-twin",
        description="Question answering over a professional profile"
    )
    parser.add_argument(
        "--config",
        type=str,
        default="digital_twin.yaml",
        help="Path to a YAML or JSON config file (default: digital_twin.yaml)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (DEBUG, INFO, WARNING, ERROR)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("serve", help="Run the MCP server over stdio")

    ask = subparsers.add_parser("ask", help="Answer one or more questions in order")
    ask.add_argument("questions", nargs="+", help="Questions to answer")

    subparsers.add_parser("sections", help="List the profile sections")
    subparsers.add_parser("health", help="Check the hosted services")

    return parser


async def run(args: argparse.Namespace) -> int:
    settings = load_settings(args.config)
    set_log_level(args.log_level or settings.log_level)

    async with DigitalTwinApp(settings) as app:
        if args.command == "serve":
            await serve_stdio(app.server)
        elif args.command == "ask":
            for response in await app.rag.answer_sequential(args.questions):
                print(f"{response.answer}\n\n[Confidence: {response.confidence * 100:.0f}%]\n")
        elif args.command == "sections":
            for section in await app.rag.list_sections():
                print(f"{section.name} ({section.type}): {section.description}")
        elif args.command == "health":
            status = await app.rag.check_health()
            print(f"vector store:   {'ok' if status.vector_store else 'unreachable'}")
            print(f"language model: {'ok' if status.language_model else 'unreachable'}")
            return 0 if status.healthy else 1

    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        return asyncio.run(run(args))
    except DigitalTwinError as e:
        logger.error(e.message)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
