"""Tests for type references."""

import pytest

from tsclassgen.codegen.core.type_name import (
    NULL,
    NUMBER,
    STRING,
    ArrayType,
    NamedType,
    TypeName,
    as_type_name,
)
from tsclassgen.codegen.core.writer import CodeWriter


class TestNamedTypes:
    def test_parse_symbol(self):
        assert TypeName.parse_symbol("Observable@rxjs") == NamedType("Observable", "rxjs")
        assert TypeName.parse_symbol("Date") == NamedType("Date")

    def test_parse_symbol_requires_name(self):
        with pytest.raises(ValueError):
            TypeName.parse_symbol("@rxjs")

    def test_as_type_name(self):
        assert as_type_name("string") is STRING
        assert as_type_name("User@./user") == NamedType("User", "./user")
        assert as_type_name(NUMBER) is NUMBER
        with pytest.raises(TypeError):
            as_type_name(3)

    def test_structural_equality(self):
        assert TypeName.named("A") == NamedType("A")
        assert hash(TypeName.named("A", "./a")) == hash(NamedType("A", "./a"))
        assert TypeName.named("A") != TypeName.named("A", "./a")


class TestComposites:
    def test_parameterized(self):
        assert TypeName.parameterized("Map", STRING, NUMBER).reference() == "Map<string, number>"

    def test_parameterized_without_arguments(self):
        assert TypeName.parameterized("Array").reference() == "Array"

    def test_union(self):
        assert str(TypeName.union(STRING, NULL)) == "string | null"

    def test_array(self):
        assert str(TypeName.array(NUMBER)) == "number[]"
        assert isinstance(TypeName.array(NUMBER), ArrayType)

    def test_array_of_union(self):
        assert str(TypeName.array(TypeName.union(STRING, NULL))) == "(string | null)[]"

    def test_type_variable_declaration(self):
        tv = TypeName.type_variable("T", TypeName.named("A"), TypeName.named("B"))
        assert tv.reference() == "T"
        assert tv.declaration() == "T extends A & B"


class TestImportsAndScope:
    def test_records_imports(self):
        writer = CodeWriter()
        t = TypeName.parameterized(
            TypeName.named("Observable", "rxjs"), TypeName.named("User", "./user")
        )
        assert t.reference(None, writer) == "Observable<User>"
        assert writer.imports == {"./user": ["User"], "rxjs": ["Observable"]}

    def test_builtins_are_not_imported(self):
        writer = CodeWriter()
        TypeName.union(STRING, NUMBER).reference(None, writer)
        assert writer.imports == {}

    def test_scope_strips_namespace(self):
        writer = CodeWriter()
        t = TypeName.named("ns.inner.Thing", "./ns")
        assert t.reference(["ns", "inner"], writer) == "Thing"
        assert writer.imports == {}

    def test_out_of_scope_imports_root(self):
        writer = CodeWriter()
        t = TypeName.named("ns.inner.Thing", "./ns")
        assert t.reference(["other"], writer) == "ns.inner.Thing"
        assert writer.imports == {"./ns": ["ns"]}

    def test_scope_keeps_last_segment(self):
        assert TypeName.named("ns.Thing").reference(["ns", "Thing"]) == "Thing"
