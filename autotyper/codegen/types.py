"""
TypeScript type resolution for DSL properties.

Maps explicit type tokens (``s``, ``n[]``, ``UUID``...) to TypeScript
types and guesses a type from the property name when none was given.
"""

import re
from typing import Dict

STRING_TYPE = "string"
NUMBER_TYPE = "number"
BOOLEAN_TYPE = "boolean"
DATE_TYPE = "Date"
UNKNOWN_TYPE = "unknown"
ANY_TYPE = "any"

ARRAY_SUFFIX = "[]"

SHORTHAND_TYPES: Dict[str, str] = {
    "s": STRING_TYPE,
    "n": NUMBER_TYPE,
    "b": BOOLEAN_TYPE,
    "d": DATE_TYPE,
    "u": UNKNOWN_TYPE,
    "a": ANY_TYPE,
}

_DATE_SUFFIX_RE = re.compile(r"(At|On)$")
_DATE_RE = re.compile(r"date", re.IGNORECASE)
_BOOLEAN_PREFIX_RE = re.compile(r"^(is|has|can|should|did|was)[A-Za-z_]")


def normalize_type_token(raw: str) -> str:
    return raw.strip()


def map_type(raw: str) -> str:
    """Resolve a DSL type token to a TypeScript type.

    Array suffixes are handled recursively, so ``s[][]`` becomes
    ``string[][]``. Tokens outside the shorthand table are returned as
    written, which is how custom types such as ``UUID`` or
    ``Record<string, number>`` get through.

    Args:
        raw: Type token as written after the ``:`` in the DSL.

    Returns:
        The TypeScript type.
    """
    token = normalize_type_token(raw)

    if token.endswith(ARRAY_SUFFIX):
        return f"{map_type(token[: -len(ARRAY_SUFFIX)])}{ARRAY_SUFFIX}"

    return SHORTHAND_TYPES.get(token, token)


def is_array_type(ts_type: str) -> bool:
    return ts_type.endswith(ARRAY_SUFFIX)


def element_type(ts_type: str) -> str:
    """Strip one array level: ``string[][]`` -> ``string[]``."""
    return ts_type[: -len(ARRAY_SUFFIX)]


def is_pluralish(name: str) -> bool:
    return len(name) > 3 and name.endswith("s")


def infer_type_from_name(name: str) -> str:
    """Guess a TypeScript type from a sanitized property name.

    Rules are checked in order and the first match wins:

    1. ``...At``, ``...On`` or anything containing ``date`` -> ``Date``
    2. ``is``/``has``/``can``/``should``/``did``/``was`` prefix -> ``boolean``
    3. ``id``, ``..._id``, ``...Id`` -> ``string``
    4. pluralish names -> ``string[]``
    5. everything else -> ``string``

    Args:
        name: Sanitized property name.

    Returns:
        The inferred TypeScript type.
    """
    name = name.strip()

    if _DATE_SUFFIX_RE.search(name) or _DATE_RE.search(name):
        return DATE_TYPE

    if _BOOLEAN_PREFIX_RE.match(name):
        return BOOLEAN_TYPE

    if name == "id" or name.endswith("_id") or name.endswith("Id"):
        return STRING_TYPE

    if is_pluralish(name):
        return f"{STRING_TYPE}{ARRAY_SUFFIX}"

    return STRING_TYPE
