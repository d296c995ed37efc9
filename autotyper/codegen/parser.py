"""
Parser for the record DSL.

Two dialects are accepted:

* modern: ``User email:s password:s isAdmin?:b createdAt:d tags:s[]``
* legacy: ``type:user-email:s/password:s/isAdmin:b:o``

The legacy dialect is recognized by its ``type:`` prefix; everything else
is parsed as the modern dialect.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from ..logging_config import get_logger
from .config import GenerationOptions
from .naming import sanitize_property_name, sanitize_type_name
from .schema import ParsedDSL, Prop
from .types import infer_type_from_name, map_type

logger = get_logger(__name__)

LEGACY_PREFIX = "type:"
LEGACY_OPTIONAL_MARKER = "o"
REQUIRED_SUFFIX = "!"
OPTIONAL_SUFFIX = "?"

_WHITESPACE_RE = re.compile(r"\s+")
_LIST_SEPARATOR_RE = re.compile(r"[,\n]")
_TOKEN_SPLIT_RE = re.compile(r"(?:\s+|/)+")


class DSLError(Exception):
    """Raised when the DSL cannot be parsed.

    Attributes:
        message: Human readable description.
        token: The offending token, when one can be pointed at.
        index: Position of that token among the property tokens.
        hint: Suggestion for fixing the input.
    """

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        index: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.index = index
        self.hint = hint

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "index": self.index,
            "token": self.token,
            "hint": self.hint,
        }


def strip_quotes(value: str) -> str:
    """Remove one pair of matching surrounding quotes."""
    value = value.strip()
    if value and value[0] in ("'", '"') and value.endswith(value[0]):
        return value[1:-1]
    return value


def parse_prop_name(
    raw: str, token: Optional[str] = None, index: Optional[int] = None
) -> Tuple[str, Optional[bool]]:
    """
    Split requiredness markers off a property name and sanitize it.

    ``name!`` forces required, ``name?`` forces optional; ``!`` wins when
    both are present.

    Args:
        raw: Property part of a token, e.g. ``isAdmin?``
        token: Whole token, reported on error
        index: Token position, reported on error

    Returns:
        Tuple of (sanitized name, required flag or None when unmarked)

    Raises:
        DSLError: If nothing is left of the name once markers are removed
    """
    name = raw.strip()

    is_required = name.endswith(REQUIRED_SUFFIX)
    is_optional = name.endswith(OPTIONAL_SUFFIX)

    if is_required:
        name = name[: -len(REQUIRED_SUFFIX)]
    if name.endswith(OPTIONAL_SUFFIX):
        name = name[: -len(OPTIONAL_SUFFIX)]

    name = name.strip()
    if not name:
        raise DSLError(
            "Empty property name",
            token=token if token is not None else raw,
            index=index,
            hint="Put the name before the '!' or '?' marker, e.g. email!",
        )

    sanitized = sanitize_property_name(name)

    if is_required:
        return sanitized, True
    if is_optional:
        return sanitized, False
    return sanitized, None


def parse_dsl(dsl: str, options: Optional[GenerationOptions] = None) -> ParsedDSL:
    """
    Parse a DSL string into a record name and its properties.

    Args:
        dsl: Raw DSL text in either dialect
        options: Generation options; only ``optional_by_default`` is read

    Returns:
        Parsed record with properties in DSL order

    Raises:
        DSLError: If the input is malformed
    """
    options = options or GenerationOptions()
    text = dsl.strip()

    if not text:
        raise DSLError(
            "Empty DSL",
            hint='Example: "User email:s password:s isAdmin?:b createdAt:d tags:s[]"',
        )

    if text.startswith(LEGACY_PREFIX):
        logger.debug("Parsing legacy DSL: %s", text)
        parsed = _parse_legacy(text, options)
    else:
        logger.debug("Parsing DSL: %s", text)
        parsed = _parse_modern(text, options)

    logger.debug("Parsed %s with %d properties", parsed.type_name, len(parsed))
    return parsed


def _parse_legacy(text: str, options: GenerationOptions) -> ParsedDSL:
    """Parse ``type:<name>-<prop>:<type>[:o]/...``."""
    # Only the text between the first and second '-' is the body.
    pieces = text.split("-")
    head = pieces[0]
    body = pieces[1] if len(pieces) > 1 else ""

    chunks = [chunk for chunk in body.split("/") if chunk]
    if not chunks:
        raise DSLError(
            "Missing properties after '-' in old DSL",
            hint="type:user-email:s/password:s",
        )

    raw_type_name = strip_quotes(head[len(LEGACY_PREFIX) :])
    if not raw_type_name:
        raise DSLError("Missing type name", hint="type:user-email:s/password:s")
    type_name = sanitize_type_name(raw_type_name)

    props: List[Prop] = []
    for index, chunk in enumerate(chunks):
        parts = [part for part in chunk.split(":") if part]
        raw_prop = strip_quotes(parts[0]) if parts else ""
        raw_type = parts[1] if len(parts) > 1 else ""

        if not raw_prop or not raw_type:
            raise DSLError(
                "Bad property chunk",
                token=chunk,
                index=index,
                hint="Expected: name:type or name:type:o (optional). Example: isAdmin:b:o",
            )

        name, explicit = parse_prop_name(raw_prop, token=chunk, index=index)
        if explicit is not None:
            is_required = explicit
        else:
            is_optional = LEGACY_OPTIONAL_MARKER in parts[2:]
            is_required = not is_optional and not options.optional_by_default

        props.append(Prop(name=name, is_required=is_required, ts_type=map_type(raw_type)))

    return ParsedDSL(type_name=type_name, props=tuple(props))


def _normalize_modern(text: str) -> str:
    text = text.replace("\r\n", "\n")
    text = _LIST_SEPARATOR_RE.sub(" ", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def _parse_modern(text: str, options: GenerationOptions) -> ParsedDSL:
    """Parse ``<Name> <prop>[:<type>[:o]] ...``."""
    normalized = _normalize_modern(text)
    raw_type_name, _, rest = normalized.partition(" ")

    raw_type_name = strip_quotes(raw_type_name)
    if not raw_type_name:
        raise DSLError(
            "Missing type name", hint='Start with the type name, e.g. "User email:s"'
        )
    type_name = sanitize_type_name(raw_type_name)

    tokens = [token.strip() for token in _TOKEN_SPLIT_RE.split(rest)]
    tokens = [token for token in tokens if token]
    if not tokens:
        raise DSLError(
            "No properties provided",
            hint='Example: "User email:s password:s isAdmin?:b"',
        )

    props = [
        _parse_modern_token(token, index, options)
        for index, token in enumerate(tokens)
    ]
    return ParsedDSL(type_name=type_name, props=tuple(props))


def _parse_modern_token(token: str, index: int, options: GenerationOptions) -> Prop:
    cleaned = token[:-1] if token.endswith(";") else token
    cleaned = cleaned.strip()

    if cleaned.endswith(":"):
        raise DSLError(
            "Bad token (dangling ':')",
            token=token,
            index=index,
            hint="Use email:s (not email:)",
        )

    raw_type: Optional[str] = None
    parts = [part for part in cleaned.split(":") if part]
    if len(parts) >= 2:
        raw_prop = strip_quotes(parts[0])
        raw_type = parts[1]
        if LEGACY_OPTIONAL_MARKER in parts[2:] and not raw_prop.endswith(OPTIONAL_SUFFIX):
            raw_prop = f"{raw_prop}{OPTIONAL_SUFFIX}"
    else:
        raw_prop = strip_quotes(cleaned)

    if not raw_prop:
        raise DSLError("Empty token", token=token, index=index, hint="Example: email:s")

    name, explicit = parse_prop_name(raw_prop, token=token, index=index)
    ts_type = map_type(raw_type) if raw_type else infer_type_from_name(name)
    is_required = explicit if explicit is not None else not options.optional_by_default

    return Prop(name=name, is_required=is_required, ts_type=ts_type)
