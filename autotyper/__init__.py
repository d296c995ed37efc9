"""Generate TypeScript types, interfaces and Zod schemas from a tiny record DSL."""

from .codegen import (
    DSLError,
    GenerationOptions,
    GenerationResult,
    build_output,
    parse_dsl,
)

# Version info
__version__ = "0.1.0"

__all__ = [
    "DSLError",
    "GenerationOptions",
    "GenerationResult",
    "build_output",
    "parse_dsl",
    "__version__",
]
