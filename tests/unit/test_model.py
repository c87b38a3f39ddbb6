"""Tests for the host metadata model."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from memento.core.errors import MetadataError, ResolutionError
from memento.core.model import (
    AccessLevel,
    ElementIndex,
    FieldElement,
    Modifier,
    TypeElement,
    load_element_index,
)
from memento.core.names import ACTIVITY_TYPE, OBJECT_TYPE, RETAIN_ANNOTATION


class TestFieldElement:
    def test_access_level_defaults_to_package_private(self) -> None:
        assert FieldElement(name="x", type="int").access_level is AccessLevel.PACKAGE_PRIVATE

    @pytest.mark.parametrize(
        ("modifiers", "expected"),
        [
            ([Modifier.PUBLIC], AccessLevel.PUBLIC),
            ([Modifier.PROTECTED, Modifier.FINAL], AccessLevel.PROTECTED),
            ([Modifier.STATIC, Modifier.PRIVATE], AccessLevel.PRIVATE),
        ],
    )
    def test_access_level_from_modifiers(self, modifiers, expected) -> None:
        assert FieldElement(name="x", type="int", modifiers=modifiers).access_level is expected

    def test_retained_by_qualified_or_simple_name(self) -> None:
        assert FieldElement(name="x", type="int", annotations=[RETAIN_ANNOTATION]).is_retained
        assert FieldElement(name="x", type="int", annotations=["Retain"]).is_retained
        assert not FieldElement(name="x", type="int", annotations=["Nullable"]).is_retained


class TestTypeElement:
    def test_names(self) -> None:
        t = TypeElement(qualified_name="com.example.MainScreen")
        assert t.simple_name == "MainScreen"
        assert t.package_name == "com.example"

    def test_default_package(self) -> None:
        t = TypeElement(qualified_name="MainScreen")
        assert t.simple_name == "MainScreen"
        assert t.package_name == ""

    def test_fields_know_their_enclosing_type(self, main_screen: TypeElement) -> None:
        assert {f.enclosing for f in main_screen.fields} == {"com.example.MainScreen"}

    def test_enclosing_set_for_field_instances(self) -> None:
        t = TypeElement(qualified_name="a.B", fields=[FieldElement(name="x", type="int")])
        assert t.fields[0].enclosing == "a.B"


class TestElementIndex:
    def test_get_declared_type(self, index: ElementIndex) -> None:
        assert index.get("com.example.MainScreen").simple_name == "MainScreen"

    def test_framework_types_are_builtin(self) -> None:
        index = ElementIndex()
        assert index.get(ACTIVITY_TYPE).qualified_name == ACTIVITY_TYPE
        assert OBJECT_TYPE in index

    def test_unknown_type(self, index: ElementIndex) -> None:
        with pytest.raises(ResolutionError, match="com.example.Missing"):
            index.get("com.example.Missing")

    def test_supertype_chain(self, index: ElementIndex, main_screen: TypeElement) -> None:
        names = []
        current = main_screen
        while current is not None:
            names.append(current.qualified_name)
            current = index.supertype_of(current)
        assert names == [
            "com.example.MainScreen",
            "com.example.BaseScreen",
            ACTIVITY_TYPE,
            OBJECT_TYPE,
        ]

    def test_missing_superclass_means_root(self) -> None:
        index = ElementIndex(types=[TypeElement(qualified_name="a.Plain")])
        assert index.supertype_of(index.get("a.Plain")).qualified_name == OBJECT_TYPE

    def test_elements_annotated_in_declaration_order(self, index: ElementIndex) -> None:
        names = [f.name for f in index.elements_annotated_with(RETAIN_ANNOTATION)]
        assert names == ["counter", "label"]

    def test_rejects_duplicates(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate"):
            ElementIndex(types=[TypeElement(qualified_name="a.A"), TypeElement(qualified_name="a.A")])

    def test_rejects_duplicate_fields(self) -> None:
        with pytest.raises(ValidationError, match="Duplicate field x in a.A"):
            TypeElement(
                qualified_name="a.A",
                fields=[FieldElement(name="x", type="int"), FieldElement(name="x", type="long")],
            )

    def test_rejects_cycles(self) -> None:
        with pytest.raises(ValidationError, match="Cyclic inheritance"):
            ElementIndex(
                types=[
                    TypeElement(qualified_name="a.A", superclass="a.B"),
                    TypeElement(qualified_name="a.B", superclass="a.A"),
                ]
            )


class TestLoadElementIndex:
    def test_load(self, metadata_file: Path) -> None:
        index = load_element_index(metadata_file)
        fields = index.elements_annotated_with()
        assert [(f.enclosing, f.name) for f in fields] == [
            ("com.example.MainScreen", "counter"),
            ("com.example.MainScreen", "label"),
        ]

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(MetadataError, match="Cannot read"):
            load_element_index(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(MetadataError, match="Invalid JSON"):
            load_element_index(path)

    def test_invalid_modifier(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(
            '{"types": [{"qualified_name": "a.A", '
            '"fields": [{"name": "x", "type": "int", "modifiers": ["sealed"]}]}]}'
        )
        with pytest.raises(MetadataError, match="Invalid metadata"):
            load_element_index(path)

    def test_duplicate_field_names(self, tmp_path: Path) -> None:
        path = tmp_path / "dup.json"
        path.write_text(
            '{"types": [{"qualified_name": "a.A", "fields": '
            '[{"name": "x", "type": "int"}, {"name": "x", "type": "int"}]}]}'
        )
        with pytest.raises(MetadataError, match="Duplicate field x"):
            load_element_index(path)
