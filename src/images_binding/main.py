"""Main module for the images binding CLI."""

import sys
import argparse
from typing import Optional

from . import __version__
from .core.config import load_settings
from .core.exceptions import ConfigurationError
from .core.logging_config import setup_logger


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``images-binding`` command."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        prog="images-binding",
        description="Images Binding - local image transform and info server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Serve on the default host and port
  images-binding serve

  # Serve on all interfaces with debug logging
  images-binding serve --host 0.0.0.0 --port 9000 --log-level DEBUG

  # Show version
  images-binding version
        """,
    )

    subparsers: argparse._SubParsersAction = parser.add_subparsers(
        dest="command", help="Available commands"
    )

    serve_parser: argparse.ArgumentParser = subparsers.add_parser(
        "serve", help="Run the HTTP server"
    )
    serve_parser.add_argument("--host", default=None, help="Interface to bind")
    serve_parser.add_argument("--port", type=int, default=None, help="Port to bind")
    serve_parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: from IMAGES_BINDING_LOG_LEVEL or INFO)",
    )

    subparsers.add_parser("version", help="Show version information")
    return parser


def serve(
    host: Optional[str] = None,
    port: Optional[int] = None,
    log_level: Optional[str] = None,
) -> None:
    """Start uvicorn with an application built from the given overrides."""
    import uvicorn

    from .server import create_app

    overrides = {
        key: value
        for key, value in {"host": host, "port": port, "log_level": log_level}.items()
        if value is not None
    }
    settings = load_settings(**overrides)
    logger = setup_logger(level=settings.log_level)
    logger.info(f"Serving images binding on http://{settings.host}:{settings.port}")

    uvicorn.run(
        create_app(settings=settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """
    Entry point for the ``images-binding`` command-line interface.

    ``serve`` runs the HTTP server; ``version`` prints version information.
    """
    parser = build_parser()
    args: argparse.Namespace = parser.parse_args()

    if args.command == "serve":
        try:
            serve(host=args.host, port=args.port, log_level=args.log_level)
        except ConfigurationError as exc:
            print(exc.message, file=sys.stderr)
            sys.exit(2)

    elif args.command == "version":
        print("Images Binding CLI")
        print(f"Version {__version__}")
        sys.exit(0)

    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
