"""
Tests for the TypeScript generator.

Output text is compared exactly: generated files are meant to be committed
as they are.
"""

from datetime import datetime, timedelta, timezone

import pytest

from autotyper.codegen.generator import (
    TypeScriptGenerator,
    default_value_for,
    format_field,
    format_timestamp,
    generate_example,
    generate_interface,
    generate_type,
    generate_zod,
    get_default_generator,
    ts_type_to_zod,
)
from autotyper.codegen.schema import Prop
from autotyper.codegen.templates import (
    TemplateEngine,
    TemplateError,
    get_default_template_engine,
)

PROPS = (
    Prop("email", True, "string"),
    Prop("age", False, "number"),
    Prop("tags", True, "string[]"),
)


@pytest.fixture
def generator():
    return TypeScriptGenerator()


class TestDeclarations:
    """Type alias and interface."""

    def test_type(self):
        assert generate_type("User", PROPS) == (
            "export type User = {\n"
            "  email: string;\n"
            "  age?: number;\n"
            "  tags: string[];\n"
            "};\n"
        )

    def test_interface(self):
        assert generate_interface("User", PROPS) == (
            "export interface User {\n"
            "  email: string;\n"
            "  age?: number;\n"
            "  tags: string[];\n"
            "}\n"
        )

    def test_no_props(self):
        assert generate_type("Empty", []) == "export type Empty = {\n};\n"

    def test_format_field(self):
        assert format_field(Prop("id", True, "UUID")) == "id: UUID;"
        assert format_field(Prop("bio", False, "string")) == "bio?: string;"


class TestZod:
    """Zod schema module."""

    def test_schema(self):
        assert generate_zod("User", PROPS) == (
            'import { z } from "zod";\n'
            "\n"
            "export const UserSchema = z.object({\n"
            "  email: z.string(),\n"
            "  age: z.number().optional(),\n"
            "  tags: z.array(z.string()),\n"
            "});\n"
            "\n"
            "export type User = z.infer<typeof UserSchema>;\n"
        )

    def test_strict(self):
        text = generate_zod("User", PROPS, strict=True)
        assert "}).strict();\n" in text

    def test_not_strict_by_default(self, generator):
        assert ".strict()" not in generator.generate_zod("User", PROPS)

    @pytest.mark.parametrize(
        "ts_type,expected",
        [
            ("string", "z.string()"),
            ("number", "z.number()"),
            ("boolean", "z.boolean()"),
            ("Date", "z.coerce.date()"),
            ("unknown", "z.unknown()"),
            ("any", "z.any()"),
            ("UUID", "z.unknown()"),
            ("string[]", "z.array(z.string())"),
            ("number[][]", "z.array(z.array(z.number()))"),
            ("UUID[]", "z.array(z.unknown())"),
        ],
    )
    def test_ts_type_to_zod(self, ts_type, expected):
        assert ts_type_to_zod(ts_type) == expected


class TestExample:
    """Example object of required fields."""

    def test_required_only(self, now):
        example = generate_example(PROPS, now)
        assert example == {"email": "", "tags": []}
        assert "age" not in example

    def test_defaults(self, now):
        props = [
            Prop("s", True, "string"),
            Prop("n", True, "number"),
            Prop("b", True, "boolean"),
            Prop("d", True, "Date"),
            Prop("a", True, "number[][]"),
            Prop("c", True, "UUID"),
        ]
        assert generate_example(props, now) == {
            "s": "",
            "n": 0,
            "b": False,
            "d": "2024-01-31T09:15:00.000Z",
            "a": [],
            "c": None,
        }

    def test_key_order_follows_props(self, now):
        props = [Prop("z", True, "string"), Prop("a", True, "string")]
        assert list(generate_example(props, now)) == ["z", "a"]

    def test_default_value_uses_current_time(self):
        value = default_value_for("Date")
        assert value.endswith("Z")
        assert len(value) == len("2024-01-31T09:15:00.000Z")

    def test_timestamp_is_converted_to_utc(self):
        moment = datetime(2024, 1, 31, 11, 15, 30, 250000, tzinfo=timezone(timedelta(hours=2)))
        assert format_timestamp(moment) == "2024-01-31T09:15:30.250Z"


class TestGeneratorPlumbing:
    """File names, formatting and template engine sharing."""

    def test_artifact_filename(self, generator):
        assert generator.artifact_filename("UserProfile", "type") == "user-profile.type.ts"
        assert generator.artifact_filename("User", "zod") == "user.zod.ts"
        assert generator.artifact_filename("", "interface") == "type.interface.ts"

    def test_generators_share_one_engine(self):
        """Templates are compiled once, not per generator."""
        assert TypeScriptGenerator().template_engine is get_default_template_engine()
        assert get_default_generator() is get_default_generator()

    def test_custom_engine(self, tmp_path):
        (tmp_path / "type.ts.j2").write_text("type {{ type_name }}\n")
        generator = TypeScriptGenerator(TemplateEngine(tmp_path))
        assert generator.generate_type("User", PROPS) == "type User\n"

    def test_format_code_collapses_blank_lines(self, generator):
        assert generator.format_code("a  \n\n\n\n\nb\n") == "a\n\n\nb\n"


class TestTemplateEngine:
    def test_missing_template(self, tmp_path):
        engine = TemplateEngine(tmp_path)
        with pytest.raises(TemplateError):
            engine.render_template("nope.j2", {})

    def test_undefined_variable_is_an_error(self, tmp_path):
        (tmp_path / "t.j2").write_text("{{ missing }}")
        engine = TemplateEngine(tmp_path)
        with pytest.raises(TemplateError):
            engine.render_template("t.j2", {})

    def test_no_html_escaping(self, tmp_path):
        (tmp_path / "t.j2").write_text("{{ value }}")
        engine = TemplateEngine(tmp_path)
        assert engine.render_template("t.j2", {"value": "Array<string> & \"x\""}) == (
            "Array<string> & \"x\""
        )
