"""Tests for JSON class descriptions."""

import pytest

from tsclassgen.codegen.core.config import EmitterConfig
from tsclassgen.codegen.core.generator import generate_class, render_class
from tsclassgen.codegen.core.type_name import (
    NULL,
    NUMBER,
    STRING,
    ArrayType,
    NamedType,
    ParameterizedType,
    UnionType,
)
from tsclassgen.codegen.description import DescriptionError, class_spec_from_dict, parse_type
from tsclassgen.codegen.specs.errors import AbstractModifierError, SpecError

USER = {
    "name": "User",
    "modifiers": ["export"],
    "superclass": "BaseEntity@./base",
    "mixins": ["Serializable@./serializable"],
    "properties": [
        {"name": "id", "type": "number", "modifiers": ["readonly"]},
        {"name": "email", "type": "string"},
        {"name": "tags", "type": "string[]", "initializer": "[]"},
    ],
    "constructor": {
        "parameters": [
            {"name": "id", "type": "number"},
            {"name": "email", "type": "string"},
        ],
        "body": ["super();", "this.id = id;", "this.email = email;"],
    },
    "functions": [
        {"name": "describe", "returns": "string", "body": "return `${this.id}`;"},
    ],
}


# --- Types ---

class TestParseType:
    def test_builtin(self):
        assert parse_type("string") is STRING

    def test_imported(self):
        assert parse_type("User@./user") == NamedType("User", "./user")

    def test_array(self):
        assert parse_type("number[]") == ArrayType(NUMBER)

    def test_generic(self):
        assert parse_type("Map<string, Order@./order>") == ParameterizedType(
            NamedType("Map"), (STRING, NamedType("Order", "./order"))
        )

    def test_nested_generic(self):
        assert str(parse_type("Promise<Array<number>>")) == "Promise<Array<number>>"

    def test_union(self):
        assert parse_type("string | null") == UnionType((STRING, NULL))

    def test_union_inside_generic(self):
        assert str(parse_type("Set<string | number>")) == "Set<string | number>"

    def test_parenthesized_array(self):
        assert parse_type("(string | null)[]") == ArrayType(UnionType((STRING, NULL)))

    def test_malformed(self):
        with pytest.raises(DescriptionError):
            parse_type("Map<string")
        with pytest.raises(DescriptionError):
            parse_type("Map<string>x")
        with pytest.raises(DescriptionError):
            parse_type("")
        with pytest.raises(DescriptionError):
            parse_type(5)


# --- Classes ---

class TestClassDescriptions:
    def test_full_description(self):
        spec = class_spec_from_dict(USER)
        assert render_class(spec) == (
            "export class User extends BaseEntity implements Serializable {\n"
            "\n"
            "  tags: string[] = [];\n"
            "\n"
            "  constructor(readonly id: number, public email: string) {\n"
            "    super();\n"
            "  }\n"
            "\n"
            "  describe(): string {\n"
            "    return `${this.id}`;\n"
            "  }\n"
            "\n"
            "}\n"
        )

    def test_imports(self):
        result = generate_class(class_spec_from_dict(USER))
        assert result.metadata["imports"] == {
            "./base": ["BaseEntity"],
            "./serializable": ["Serializable"],
        }

    def test_config_sets_promotion_default(self):
        config = EmitterConfig(promote_constructor_properties=False)
        assert not class_spec_from_dict(USER, config).promote_constructor_properties
        explicit = dict(USER, promote_constructor_properties=True)
        assert class_spec_from_dict(explicit, config).promote_constructor_properties

    def test_decorators_and_type_variables(self):
        spec = class_spec_from_dict(
            {
                "name": "Repo",
                "decorators": [{"name": "Entity@typeorm", "arguments": ["'users'"]}, "Injectable"],
                "type_variables": [{"name": "T", "bounds": ["object"]}, "K"],
            }
        )
        assert render_class(spec) == (
            "@Entity('users')\n@Injectable\nclass Repo<T extends object, K> {\n}\n"
        )

    def test_parameter_details(self):
        spec = class_spec_from_dict(
            {
                "name": "Conn",
                "constructor": {
                    "parameters": [
                        {"name": "host", "type": "string", "modifiers": ["private"]},
                        {"name": "port", "type": "number", "default": 80},
                        {"name": "tls", "type": "boolean", "optional": True},
                    ],
                    "rest": {"name": "flags", "type": "string[]"},
                },
            }
        )
        assert render_class(spec) == (
            "class Conn {\n"
            "\n"
            "  constructor(private host: string, port: number = 80, "
            "tls: boolean | undefined, ...flags: string[]) {\n"
            "  }\n"
            "\n"
            "}\n"
        )

    def test_docs(self):
        spec = class_spec_from_dict(
            {
                "name": "A",
                "doc": "A class.",
                "properties": [{"name": "x", "type": "number", "doc": "The x."}],
            }
        )
        assert render_class(spec) == (
            "/**\n * A class.\n */\nclass A {\n\n  /**\n   * The x.\n   */\n  x: number;\n\n}\n"
        )

    def test_unknown_keys_are_ignored(self):
        spec = class_spec_from_dict({"name": "A", "colour": "blue"})
        assert spec.name == "A"


class TestInvalidDescriptions:
    def test_not_an_object(self):
        with pytest.raises(DescriptionError):
            class_spec_from_dict(["A"])

    def test_missing_name(self):
        with pytest.raises(DescriptionError, match="missing a name"):
            class_spec_from_dict({"properties": []})

    def test_property_without_type(self):
        with pytest.raises(DescriptionError, match="missing a type"):
            class_spec_from_dict({"name": "A", "properties": [{"name": "x"}]})

    def test_unknown_modifier(self):
        with pytest.raises(DescriptionError, match="Unknown modifier"):
            class_spec_from_dict({"name": "A", "modifiers": ["sealed"]})

    def test_bad_body(self):
        with pytest.raises(DescriptionError):
            class_spec_from_dict({"name": "A", "functions": [{"name": "f", "body": 3}]})

    def test_builder_rules_still_apply(self):
        with pytest.raises(SpecError):
            class_spec_from_dict(
                {"name": "A", "functions": [{"name": "f", "modifiers": ["abstract"]}]}
            )
        with pytest.raises(AbstractModifierError):
            class_spec_from_dict(
                {"name": "A", "functions": [{"name": "f", "modifiers": ["abstract"], "body": "x();"}]}
            )


class TestMalformedEntries:
    @pytest.mark.parametrize(
        "data, message",
        [
            ({"name": "A", "properties": ["id"]}, "Property must be an object"),
            ({"name": "A", "properties": [7]}, "Property must be an object"),
            ({"name": "A", "functions": ["run"]}, "Function must be an object"),
            ({"name": "A", "constructor": "this.x = x;"}, "Constructor must be an object"),
            ({"name": "A", "constructor": {"parameters": ["x"]}}, "Parameter must be an object"),
            ({"name": "A", "constructor": {"rest": "args"}}, "Parameter must be an object"),
            ({"name": "A", "decorators": [3]}, "Decorator must be an object"),
            ({"name": "A", "type_variables": [1]}, "Type variable must be an object"),
        ],
    )
    def test_entry_not_an_object(self, data, message):
        with pytest.raises(DescriptionError, match=message):
            class_spec_from_dict(data)

    @pytest.mark.parametrize(
        "data",
        [
            {"name": "A", "properties": {"name": "id", "type": "number"}},
            {"name": "A", "functions": "run"},
            {"name": "A", "modifiers": "export"},
            {"name": "A", "mixins": "Serializable"},
            {"name": "A", "functions": [{"name": "f", "parameters": {"name": "x"}}]},
            {"name": "A", "decorators": [{"name": "Entity", "arguments": "'users'"}]},
            {"name": "A", "type_variables": [{"name": "T", "bounds": "object"}]},
        ],
    )
    def test_collection_not_a_list(self, data):
        with pytest.raises(DescriptionError, match="must be a list"):
            class_spec_from_dict(data)

    def test_modifier_not_a_string(self):
        with pytest.raises(DescriptionError, match="Modifier must be a string"):
            class_spec_from_dict({"name": "A", "modifiers": [1]})

    def test_body_lines_not_strings(self):
        with pytest.raises(DescriptionError, match="Code lines must be strings"):
            class_spec_from_dict({"name": "A", "functions": [{"name": "f", "body": ["x();", 2]}]})

    def test_property_without_name(self):
        with pytest.raises(DescriptionError, match="missing a name"):
            class_spec_from_dict({"name": "A", "properties": [{"type": "number"}]})
