"""
Code generators for parsed DSL records.

The TypeScript generator emits a type alias, an interface, a Zod schema
module and an example object from a :class:`~autotyper.codegen.schema.ParsedDSL`.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional

from .naming import to_kebab_case
from .schema import Prop
from .templates import TemplateEngine, get_default_template_engine
from .types import (
    ANY_TYPE,
    BOOLEAN_TYPE,
    DATE_TYPE,
    NUMBER_TYPE,
    STRING_TYPE,
    UNKNOWN_TYPE,
    element_type,
    is_array_type,
)


# Zod expressions for the TypeScript types the DSL can produce.
ZOD_TYPE_MAP: Dict[str, str] = {
    STRING_TYPE: "z.string()",
    NUMBER_TYPE: "z.number()",
    BOOLEAN_TYPE: "z.boolean()",
    DATE_TYPE: "z.coerce.date()",
    UNKNOWN_TYPE: "z.unknown()",
    ANY_TYPE: "z.any()",
}
ZOD_FALLBACK = "z.unknown()"


def ts_type_to_zod(ts_type: str) -> str:
    """Map a TypeScript type to a Zod builder expression, wrapping arrays."""
    if is_array_type(ts_type):
        return f"z.array({ts_type_to_zod(element_type(ts_type))})"
    return ZOD_TYPE_MAP.get(ts_type, ZOD_FALLBACK)


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. ``2024-01-31T09:15:00.000Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def default_value_for(ts_type: str, now: Optional[datetime] = None) -> Any:
    """
    Placeholder value for a property of the given type.

    Args:
        ts_type: Resolved TypeScript type
        now: Moment used for ``Date`` values, defaults to the current time

    Returns:
        JSON-compatible value, None for types without an obvious default
    """
    if is_array_type(ts_type):
        return []
    if ts_type == STRING_TYPE:
        return ""
    if ts_type == NUMBER_TYPE:
        return 0
    if ts_type == BOOLEAN_TYPE:
        return False
    if ts_type == DATE_TYPE:
        return format_timestamp(now or datetime.now(timezone.utc))
    return None


def format_field(prop: Prop) -> str:
    """Declaration line shared by the type alias and the interface."""
    marker = "" if prop.is_required else "?"
    return f"{prop.name}{marker}: {prop.ts_type};"


class TypeScriptGenerator:
    """Code generator for TypeScript declarations and Zod schemas."""

    FILE_EXTENSION = ".ts"

    def __init__(self, template_engine: Optional[TemplateEngine] = None):
        """
        Initialize generator.

        Args:
            template_engine: Engine to render with, defaults to the shared
                engine over the bundled templates
        """
        self.template_engine = template_engine or get_default_template_engine()

    def artifact_filename(self, type_name: str, artifact: str) -> str:
        """
        File name for one generated artifact.

        Args:
            type_name: Sanitized type name
            artifact: Artifact kind, e.g. "type" or "zod"

        Returns:
            File name such as ``user-profile.type.ts``
        """
        base = to_kebab_case(type_name or "type")
        return f"{base}.{artifact}{self.FILE_EXTENSION}"

    def format_code(self, code: str) -> str:
        """
        Apply basic formatting to generated code.

        Args:
            code: Raw generated code

        Returns:
            Formatted code
        """
        # Basic cleanup - remove excessive blank lines
        lines = code.split("\n")
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:  # Allow max 2 consecutive blank lines
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return "\n".join(formatted_lines)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """Render a template with context and format the result."""
        return self.format_code(
            self.template_engine.render_template(template_name, context)
        )

    def generate_type(self, type_name: str, props: Iterable[Prop]) -> str:
        """Generate an ``export type X = {...};`` declaration."""
        context = {
            "type_name": type_name,
            "lines": [format_field(prop) for prop in props],
        }
        return self.render_template("type.ts.j2", context)

    def generate_interface(self, type_name: str, props: Iterable[Prop]) -> str:
        """Generate an ``export interface X {...}`` declaration."""
        context = {
            "type_name": type_name,
            "lines": [format_field(prop) for prop in props],
        }
        return self.render_template("interface.ts.j2", context)

    def generate_zod(
        self, type_name: str, props: Iterable[Prop], strict: bool = False
    ) -> str:
        """
        Generate a Zod schema module for the record.

        Args:
            type_name: Sanitized type name
            props: Properties in DSL order
            strict: Reject unknown keys with ``.strict()``

        Returns:
            Module text exporting ``<TypeName>Schema`` and the inferred type
        """
        fields = []
        for prop in props:
            expr = ts_type_to_zod(prop.ts_type)
            if not prop.is_required:
                expr = f"{expr}.optional()"
            fields.append({"name": prop.name, "expr": expr})

        context = {"type_name": type_name, "fields": fields, "strict": strict}
        return self.render_template("zod.ts.j2", context)

    def generate_example(
        self, props: Iterable[Prop], now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Build an example object holding only the required properties.

        Optional properties are left out entirely.

        Args:
            props: Properties in DSL order
            now: Moment used for ``Date`` values

        Returns:
            Mapping of property name to placeholder value
        """
        now = now or datetime.now(timezone.utc)
        return {
            prop.name: default_value_for(prop.ts_type, now)
            for prop in props
            if prop.is_required
        }


# Default generator instance
_default_generator = None


def get_default_generator() -> TypeScriptGenerator:
    """Get the shared generator over the bundled templates."""
    global _default_generator
    if _default_generator is None:
        _default_generator = TypeScriptGenerator()
    return _default_generator


# Convenience functions
def generate_type(type_name: str, props: Iterable[Prop]) -> str:
    return get_default_generator().generate_type(type_name, props)


def generate_interface(type_name: str, props: Iterable[Prop]) -> str:
    return get_default_generator().generate_interface(type_name, props)


def generate_zod(type_name: str, props: Iterable[Prop], strict: bool = False) -> str:
    return get_default_generator().generate_zod(type_name, props, strict)


def generate_example(
    props: Iterable[Prop], now: Optional[datetime] = None
) -> Dict[str, Any]:
    return get_default_generator().generate_example(props, now)
