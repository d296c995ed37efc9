"""
Parsed representation of a DSL record.

The parser produces a :class:`ParsedDSL`; every generator reads it and none
of them modifies it.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Tuple


@dataclass(frozen=True)
class Prop:
    """A single property of the record."""

    name: str  # Sanitized identifier
    is_required: bool
    ts_type: str  # Resolved TypeScript type, e.g. "string[]" or "UUID"

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form used in the normalized echo."""
        return {"name": self.name, "type": self.ts_type, "required": self.is_required}


@dataclass(frozen=True)
class ParsedDSL:
    """A record name and its properties in DSL order."""

    type_name: str
    props: Tuple[Prop, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Accept any iterable of props but always store a tuple."""
        if not isinstance(self.props, tuple):
            object.__setattr__(self, "props", tuple(self.props))

    def __iter__(self) -> Iterator[Prop]:
        return iter(self.props)

    def __len__(self) -> int:
        return len(self.props)

    @property
    def required_props(self) -> Tuple[Prop, ...]:
        return tuple(prop for prop in self.props if prop.is_required)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form: ``{"type": ..., "props": [...]}``."""
        return {
            "type": self.type_name,
            "props": [prop.to_dict() for prop in self.props],
        }
