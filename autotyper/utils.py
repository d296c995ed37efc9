"""Utility functions for reading DSL input and writing generated files.

This module keeps the file-system and stream handling used by the CLI
out of the code generators.
"""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import TextIO

from .logging_config import get_logger

logger = get_logger(__name__)

DISTRIBUTION_NAME = "autotyper"


class DSLInputError(Exception):
    """Custom exception for DSL input errors."""

    pass


def read_dsl_from_stream(stream: TextIO | None) -> str:
    """Read DSL text piped into the process.

    Interactive terminals are not read from, so running the command without
    arguments does not block waiting for input.

    Args:
        stream: Usually ``sys.stdin``.

    Returns:
        The stripped text, or an empty string for a terminal or missing stream.

    Raises:
        DSLInputError: If the stream cannot be read.
    """
    if stream is None or stream.isatty():
        logger.debug("No piped input available")
        return ""

    try:
        text = stream.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Failed to read DSL from input stream: {e}")
        raise DSLInputError(f"Failed to read DSL from input: {e}") from e

    logger.debug(f"Read {len(text)} characters of DSL from input stream")
    return text.strip()


def write_out_file(path: str | Path, content: str) -> Path:
    """Write generated code, creating parent directories as needed.

    Args:
        path: Destination file.
        content: File content; a trailing newline is added when missing.

    Returns:
        The path written to.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if not content.endswith("\n"):
        content += "\n"

    path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {path}")
    return path


def get_version() -> str:
    """Return the installed package version.

    Falls back to the version recorded in the package when running from a
    source checkout that was never installed.
    """
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        from . import __version__

        logger.debug("Distribution metadata not found; using package __version__")
        return __version__
