"""
Naming utilities for safe code generation.

Turns raw DSL tokens into TypeScript identifiers: PascalCase type names,
camelCase property names, and kebab-case file names, steering clear of
reserved words.
"""

import re
from typing import FrozenSet, Optional


# TypeScript keywords and literals, plus the contextual words that make
# awkward identifiers in generated declarations.
TS_RESERVED_WORDS: FrozenSet[str] = frozenset(
    {
        "break",
        "case",
        "catch",
        "class",
        "const",
        "continue",
        "debugger",
        "default",
        "delete",
        "do",
        "else",
        "enum",
        "export",
        "extends",
        "false",
        "finally",
        "for",
        "function",
        "if",
        "import",
        "in",
        "instanceof",
        "new",
        "null",
        "return",
        "super",
        "switch",
        "this",
        "throw",
        "true",
        "try",
        "typeof",
        "var",
        "void",
        "while",
        "with",
        "as",
        "implements",
        "interface",
        "let",
        "package",
        "private",
        "protected",
        "public",
        "static",
        "yield",
        "any",
        "boolean",
        "constructor",
        "declare",
        "get",
        "module",
        "require",
        "number",
        "set",
        "string",
        "symbol",
        "type",
        "from",
        "of",
        "unknown",
    }
)

_SEGMENT_SPLIT_RE = re.compile(r"[-_\s]+")
_INVALID_IDENTIFIER_CHARS_RE = re.compile(r"[^A-Za-z0-9_$]")
_CASE_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")
_KEBAB_SEPARATOR_RE = re.compile(r"[_\s]+")


def to_pascal_case(value: str) -> str:
    """Convert to PascalCase, keeping the inner casing of each segment.

    Characters that cannot appear in an identifier are dropped from each
    segment before it is capitalized, so ``@user`` becomes ``User``.
    """
    segments = (
        _INVALID_IDENTIFIER_CHARS_RE.sub("", segment)
        for segment in _SEGMENT_SPLIT_RE.split(value)
    )
    return "".join(
        segment[:1].upper() + segment[1:] for segment in segments if segment
    )


def to_camel_case(value: str) -> str:
    """Convert to camelCase."""
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]


def to_kebab_case(value: str) -> str:
    """Convert to kebab-case (``UserProfile`` -> ``user-profile``)."""
    value = _CASE_BOUNDARY_RE.sub(r"\1-\2", value)
    value = _KEBAB_SEPARATOR_RE.sub("-", value)
    return value.lower()


class NameSanitizer:
    """Builds identifiers that are valid and not reserved in the target language.

    Unlike a registry of generated names, the sanitizer holds no per-call
    state: the same input always yields the same identifier, and two
    properties that sanitize to the same name are left as they are.
    """

    def __init__(
        self,
        reserved_words: Optional[FrozenSet[str]] = None,
        type_suffix: str = "Type",
        property_suffix: str = "_",
    ):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Words that may not be used as identifiers
            type_suffix: Appended to type names that collide with a reserved word
            property_suffix: Appended to property names that collide with a reserved word
        """
        self.reserved_words = reserved_words or frozenset()
        self.type_suffix = type_suffix
        self.property_suffix = property_suffix

    def sanitize_type_name(self, raw: str) -> str:
        """
        Sanitize a raw token into a PascalCase type name.

        Args:
            raw: Type name as written in the DSL

        Returns:
            Identifier, ``Type`` when nothing usable is left
        """
        cleaned = to_pascal_case(raw.strip()) or "Type"

        if self.is_reserved(cleaned):
            cleaned = f"{cleaned}{self.type_suffix}"

        return cleaned

    def sanitize_property_name(self, raw: str) -> str:
        """
        Sanitize a raw token into a camelCase property name.

        Args:
            raw: Property name as written in the DSL, markers already removed

        Returns:
            Identifier, ``prop`` when nothing usable is left
        """
        cleaned = to_camel_case(raw.strip()) or "prop"

        if cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if self.is_reserved(cleaned):
            cleaned = f"{cleaned}{self.property_suffix}"

        return cleaned

    def is_reserved(self, name: str) -> bool:
        """Check whether a name collides with a reserved word."""
        return name in self.reserved_words


def create_typescript_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for TypeScript."""
    return NameSanitizer(TS_RESERVED_WORDS, type_suffix="Type", property_suffix="_")


_TYPESCRIPT_SANITIZER = create_typescript_sanitizer()


# Convenience functions
def sanitize_type_name(raw: str) -> str:
    """Sanitize name for a TypeScript type (PascalCase)."""
    return _TYPESCRIPT_SANITIZER.sanitize_type_name(raw)


def sanitize_property_name(raw: str) -> str:
    """Sanitize name for a TypeScript property (camelCase)."""
    return _TYPESCRIPT_SANITIZER.sanitize_property_name(raw)
