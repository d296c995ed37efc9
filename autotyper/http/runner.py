"""Run the autotyper HTTP server with uvicorn."""

import argparse
from typing import Sequence

import uvicorn

from autotyper.http.app import create_app
from autotyper.logging_config import LOG_LEVELS, configure_logging, get_logger

__all__ = ["run_http", "main"]

logger = get_logger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000


def run_http(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    log_level: str = "info",
) -> None:
    """Serve the HTTP API until interrupted.

    Args:
        host: Bind address (default: 127.0.0.1).
        port: Port (default: 3000).
        log_level: uvicorn log level (default: "info").
    """
    logger.info("Starting HTTP server on http://%s:%d", host, port)
    uvicorn.run(create_app(), host=host, port=port, log_level=log_level)


def main(argv: Sequence[str] | None = None) -> None:
    """Console-script entry point for ``autotyper-server``."""
    parser = argparse.ArgumentParser(
        prog="autotyper-server",
        description="Serve the autotyper DSL API over HTTP",
    )
    parser.add_argument(
        "--host", default=DEFAULT_HOST, help=f"Bind address (default: {DEFAULT_HOST})"
    )
    parser.add_argument(
        "--port", type=int, default=DEFAULT_PORT, help=f"Port (default: {DEFAULT_PORT})"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="info",
        help="Logging level (default: info)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    run_http(args.host, args.port, args.log_level)


if __name__ == "__main__":
    main()
