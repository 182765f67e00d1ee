"""Command-line entry for calendarpicker."""

from __future__ import annotations

import argparse
import sys
from typing import NoReturn, Optional

from . import run_server


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the calendarpicker CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="calendarpicker",
        description="Calendar Picker - date selection API for chat-bot inline keyboards",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m calendarpicker                    # Start server on default port (3000)
  python -m calendarpicker --port 8080        # Start server on port 8080
  python -m calendarpicker --debug            # Verbose logging
        """,
    )

    parser.add_argument(
        "--port",
        type=int,
        metavar="PORT",
        help="Port number for the web server (default: 3000, or from CALENDARPICKER_WEB_PORT env var)",
    )
    parser.add_argument(
        "--host",
        metavar="HOST",
        help="Address to bind (default: 0.0.0.0, or from CALENDARPICKER_WEB_HOST env var)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging for calendarpicker modules",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> NoReturn:
    """Run the calendarpicker CLI."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    try:
        run_server(args)
    except OSError as exc:
        print(f"calendarpicker failed to start: {exc}", file=sys.stderr)
        sys.exit(1)
    sys.exit(0)


if __name__ == "__main__":
    main()
