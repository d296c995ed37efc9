"""
autotyper code generation module.

Parses the record DSL and generates TypeScript types, interfaces,
Zod schemas and example objects from it.
"""

from .builder import (
    OUTPUT_MODES,
    GenerationResult,
    build_output,
    render_all,
    render_mode,
)
from .config import ConfigError, ConfigManager, GenerationOptions, load_config
from .generator import (
    TypeScriptGenerator,
    generate_example,
    get_default_generator,
    generate_interface,
    generate_type,
    generate_zod,
    ts_type_to_zod,
)
from .naming import (
    NameSanitizer,
    sanitize_property_name,
    sanitize_type_name,
    to_kebab_case,
)
from .parser import DSLError, parse_dsl
from .schema import ParsedDSL, Prop
from .templates import TemplateEngine, TemplateError
from .types import infer_type_from_name, map_type

# Export main interfaces
__all__ = [
    # Output builder
    "OUTPUT_MODES",
    "GenerationResult",
    "build_output",
    "render_all",
    "render_mode",
    # Configuration system
    "ConfigError",
    "ConfigManager",
    "GenerationOptions",
    "load_config",
    # Generators
    "TypeScriptGenerator",
    "generate_example",
    "get_default_generator",
    "generate_interface",
    "generate_type",
    "generate_zod",
    "ts_type_to_zod",
    # Naming utilities
    "NameSanitizer",
    "sanitize_property_name",
    "sanitize_type_name",
    "to_kebab_case",
    # Parsing
    "DSLError",
    "parse_dsl",
    "ParsedDSL",
    "Prop",
    "infer_type_from_name",
    "map_type",
    # Template system
    "TemplateEngine",
    "TemplateError",
]
