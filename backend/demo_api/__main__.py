"""
SDLC Demo API — Server Launcher
================================

Example:
    python -m demo_api --port 3000
    demo-api --host 127.0.0.1 --reload
"""

import argparse
import logging
import sys

import uvicorn

from demo_api.config import settings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="demo-api",
        description="SDLC Automation Demo API server",
    )
    parser.add_argument("--host", default=settings.backend_host, help="Address to bind to")
    parser.add_argument("--port", type=int, default=settings.backend_port, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload for development")
    parser.add_argument(
        "--log-level",
        default=settings.log_level.lower(),
        choices=["debug", "info", "warning", "error", "critical"],
        help="Uvicorn log level",
    )
    return parser


def main(argv=None) -> int:
    """
    CLI entry point.

    Uvicorn owns the listener and signal handling: SIGINT/SIGTERM stop
    accepting connections, drain in-flight requests and then run the
    application's lifespan shutdown.
    """
    args = build_parser().parse_args(argv)

    try:
        uvicorn.run(
            # Import string (not the object) so --reload can re-import the app
            "demo_api.main:app",
            host=args.host,
            port=args.port,
            reload=args.reload,
            log_level=args.log_level,
        )
    except Exception as e:
        logger.exception("Server startup failed: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
