"""
Command-line interface for autotyper.

Reads a DSL string from the arguments or standard input and prints or
writes the generated TypeScript.
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence, TextIO

from rich.console import Console
from rich.markup import escape

from .codegen import (
    OUTPUT_MODES,
    ConfigError,
    DSLError,
    GenerationOptions,
    GenerationResult,
    build_output,
    get_default_generator,
    load_config,
    render_mode,
)
from .completion import SUPPORTED_SHELLS, get_completion_script
from .logging_config import LOG_LEVELS, configure_logging, get_logger
from .utils import DSLInputError, get_version, read_dsl_from_stream, write_out_file

logger = get_logger(__name__)

DEFAULT_OUTDIR = "./core"
LOG_LEVEL_ENV = "AUTOTYPER_LOG_LEVEL"

EPILOG = """
Examples:
  autotyper "User email:s password:s isAdmin?:b createdAt:d tags:s[]"
  echo "User email:s isAdmin?:b" | autotyper
  autotyper --mode all "User email:s isAdmin?:b"
  autotyper --mode json --strict "User email:s createdAt:d"
  autotyper --type --zod --outdir src/models "User email:s"
  autotyper completion <bash|zsh|fish>

Also supports the old format:
  autotyper "type:user-email:s/password:s/isAdmin:b:o"

Shell completion:
  autotyper completion bash > ~/.bash_completion.d/autotyper
  autotyper completion zsh  > ~/.zsh/completions/_autotyper
  autotyper completion fish > ~/.config/fish/completions/autotyper.fish
""".strip()


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Initialize rich consoles
console = Console()
err_console = Console(stderr=True, emoji=False)


def _echo(text: str) -> None:
    """Print text verbatim: no markup, highlighting or wrapping."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _print_error(
    message: str,
    hint: str | None = None,
    token: str | None = None,
    index: int | None = None,
) -> None:
    err_console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)
    if hint:
        err_console.print(f"[yellow]Hint:[/yellow] {escape(hint)}", soft_wrap=True)
    if index is not None and token:
        err_console.print(escape(f"At token[{index}]: {token}"), soft_wrap=True)


def _default_log_level() -> str:
    level = os.getenv(LOG_LEVEL_ENV, "warning").lower()
    return level if level in LOG_LEVELS else "warning"


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="autotyper",
        description="autotyper: generate TypeScript (and Zod) from a tiny DSL",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )

    parser.add_argument(
        "dsl",
        nargs="*",
        help="DSL words (joined with spaces), or: completion <bash|zsh|fish>",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s v{get_version()}",
        help="Print version",
    )

    # Output selection
    output_group = parser.add_argument_group("output")
    output_group.add_argument(
        "--mode",
        choices=OUTPUT_MODES,
        help="Output mode (default: type)",
    )
    output_group.add_argument(
        "--type",
        dest="write_type",
        action="store_true",
        help="Write <outdir>/<type-name>.type.ts",
    )
    output_group.add_argument(
        "--interface",
        dest="write_interface",
        action="store_true",
        help="Write <outdir>/<type-name>.interface.ts",
    )
    output_group.add_argument(
        "--zod",
        dest="write_zod",
        action="store_true",
        help="Write <outdir>/<type-name>.zod.ts",
    )
    output_group.add_argument(
        "--outdir",
        default=DEFAULT_OUTDIR,
        metavar="PATH",
        help=f"Output directory (default: {DEFAULT_OUTDIR})",
    )
    output_group.add_argument(
        "--dry-run",
        action="store_true",
        help="Print what would be written without writing",
    )

    # Generation options
    gen_group = parser.add_argument_group("generation options")
    gen_group.add_argument(
        "--strict", action="store_true", help="Zod: add .strict()"
    )
    gen_group.add_argument(
        "--optional-by-default",
        action="store_true",
        help="Make fields optional unless you mark them with !",
    )
    gen_group.add_argument(
        "--no-zod",
        action="store_true",
        help="Disable zod output (only affects json/all)",
    )
    gen_group.add_argument(
        "--no-interface",
        action="store_true",
        help="Disable interface output (only affects json/all)",
    )
    gen_group.add_argument(
        "--no-example",
        action="store_true",
        help="Disable example output (only affects json/all)",
    )
    gen_group.add_argument(
        "--config", metavar="FILE", help="JSON file with generation options"
    )

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=_default_log_level(),
        help=f"Logging level (default: ${LOG_LEVEL_ENV} or warning)",
    )

    return parser


def _build_options(args: argparse.Namespace) -> GenerationOptions:
    """Merge the options file with the flags given on the command line."""
    overrides = {}
    if args.optional_by_default:
        overrides["optional_by_default"] = True
    if args.strict:
        overrides["strict_zod"] = True
    if args.no_zod:
        overrides["zod"] = False
    if args.no_interface:
        overrides["interface"] = False
    if args.no_example:
        overrides["example"] = False

    return load_config(overrides, args.config)


def _emit_files(result: GenerationResult, args: argparse.Namespace) -> list[Path]:
    """Write the artifacts requested with --type/--interface/--zod."""
    generator = get_default_generator()
    outdir = Path(args.outdir).resolve()

    requested = [
        ("type", args.write_type, result.type_text),
        ("interface", args.write_interface, result.interface_text),
        ("zod", args.write_zod, result.zod_text),
    ]

    emitted = []
    for artifact, wanted, content in requested:
        if not wanted:
            continue
        if not content:
            raise CLIError(f"No {artifact} output (did you disable it?)")

        path = outdir / generator.artifact_filename(result.type_name, artifact)
        if args.dry_run:
            logger.info("Dry run, skipping write of %s", path)
        else:
            write_out_file(path, content)
        emitted.append(path)

    return emitted


def _handle_completion(words: list[str]) -> int:
    shell = words[1] if len(words) > 1 else None
    script = get_completion_script(shell)

    if script is None:
        err_console.print(
            f"Usage: autotyper completion <{'|'.join(SUPPORTED_SHELLS)}>",
            markup=False,
        )
        return 1

    _echo(script.rstrip("\n"))
    return 0


def main(argv: Sequence[str] | None = None, stdin: TextIO | None = None) -> int:
    """
    Run the command line interface.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])
        stdin: Stream to read DSL from when no DSL argument is given

    Returns:
        Exit code (0 for success, 1 for error)
    """
    parser = create_parser()
    args = parser.parse_intermixed_args(argv)
    configure_logging(args.log_level)

    if args.dsl[:1] == ["completion"]:
        return _handle_completion(args.dsl)

    try:
        dsl = " ".join(args.dsl).strip()
        if not dsl:
            dsl = read_dsl_from_stream(sys.stdin if stdin is None else stdin)

        if not dsl:
            parser.print_help()
            _print_error("No DSL provided.")
            return 1

        options = _build_options(args)
        logger.info("Generating from DSL: %s", dsl)
        result = build_output(dsl, options)

        emitted = _emit_files(result, args)
        for path in emitted:
            _echo(f"[dry-run] {path}" if args.dry_run else f"Wrote {path}")

        # Writing files replaces stdout output unless a mode was asked for
        if emitted and args.mode is None:
            return 0

        mode = args.mode or "type"
        text = render_mode(result, mode)
        if not text:
            raise CLIError(
                f'Mode "{mode}" produced empty output. '
                "(Maybe disabled with --no-zod/--no-interface?)"
            )

        _echo(text.rstrip("\n"))
        return 0

    except DSLError as e:
        logger.info("DSL error: %s", e.message)
        _print_error(e.message, hint=e.hint, token=e.token, index=e.index)
        return 1
    except (CLIError, ConfigError, DSLInputError) as e:
        logger.info("Generation failed: %s", e)
        _print_error(str(e))
        return 1
    except OSError as e:
        logger.debug("File error", exc_info=True)
        _print_error(str(e))
        return 1


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
