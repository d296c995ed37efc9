"""
Output builder: DSL text in, generated artifacts out.

Runs the parser once and feeds the result to the generators selected by
the options. Both front ends (CLI and HTTP) go through :func:`build_output`.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Union

from ..logging_config import get_logger
from .config import GenerationOptions, coerce_options
from .generator import get_default_generator
from .parser import parse_dsl

logger = get_logger(__name__)

OUTPUT_MODES = ("type", "interface", "zod", "all", "json")


@dataclass
class GenerationResult:
    """Container for everything generated from one DSL string."""

    type_name: str
    normalized: Dict[str, Any]
    type_text: str
    interface_text: Optional[str] = None
    zod_text: Optional[str] = None
    example: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON shape shared by ``--mode json`` and ``POST /dsl``."""
        out: Dict[str, Any] = {
            "typeName": self.type_name,
            "normalized": self.normalized,
            "type": self.type_text,
        }
        if self.interface_text is not None:
            out["interface"] = self.interface_text
        if self.zod_text is not None:
            out["zod"] = self.zod_text
        if self.example is not None:
            out["example"] = self.example
        return out


def build_output(
    dsl: str,
    options: Union[GenerationOptions, Mapping[str, Any], None] = None,
    now: Optional[datetime] = None,
) -> GenerationResult:
    """
    Parse a DSL string and generate the requested artifacts.

    Args:
        dsl: DSL text in either dialect
        options: Generation options, a mapping of option values, or None for defaults
        now: Moment used for ``Date`` values in the example object

    Returns:
        GenerationResult; the type declaration is always present

    Raises:
        DSLError: If the DSL cannot be parsed
        ConfigError: If ``options`` is not a mapping
    """
    options = coerce_options(options)
    parsed = parse_dsl(dsl, options)
    generator = get_default_generator()

    result = GenerationResult(
        type_name=parsed.type_name,
        normalized=parsed.to_dict(),
        type_text=generator.generate_type(parsed.type_name, parsed.props),
    )

    if options.interface:
        result.interface_text = generator.generate_interface(
            parsed.type_name, parsed.props
        )
    if options.zod:
        result.zod_text = generator.generate_zod(
            parsed.type_name, parsed.props, strict=options.strict_zod
        )
    if options.example:
        result.example = generator.generate_example(parsed.props, now)

    logger.debug(
        "Generated %s (%s)",
        result.type_name,
        ", ".join(key for key in result.to_dict() if key not in ("typeName", "normalized")),
    )
    return result


def format_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False)


def render_all(result: GenerationResult) -> str:
    """Concatenate every generated artifact under a banner comment."""
    parts = ["// --- TYPE ---", result.type_text.rstrip(), ""]

    if result.interface_text:
        parts += ["// --- INTERFACE ---", result.interface_text.rstrip(), ""]
    if result.zod_text:
        parts += ["// --- ZOD ---", result.zod_text.rstrip(), ""]
    if result.example is not None:
        parts += ["// --- EXAMPLE (required fields only) ---", format_json(result.example)]

    return "\n".join(parts)


def render_mode(result: GenerationResult, mode: str) -> str:
    """
    Text for one output mode.

    Args:
        result: Build result
        mode: One of ``OUTPUT_MODES``

    Returns:
        Selected text, empty when that artifact was not generated

    Raises:
        ValueError: For an unknown mode
    """
    if mode == "type":
        return result.type_text
    if mode == "interface":
        return result.interface_text or ""
    if mode == "zod":
        return result.zod_text or ""
    if mode == "json":
        return format_json(result.to_dict())
    if mode == "all":
        return render_all(result)
    raise ValueError(f"Unknown output mode: {mode}")
