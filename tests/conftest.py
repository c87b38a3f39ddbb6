"""Shared pytest fixtures for memento tests."""

from pathlib import Path

import pytest

from memento.core.model import ElementIndex, FieldElement, Modifier, TypeElement
from memento.core.names import ACTIVITY_TYPE, FRAGMENT_ACTIVITY_TYPE, RETAIN_ANNOTATION


def retained(name: str, type_: str, *modifiers: Modifier) -> FieldElement:
    """Build a field carrying the retention marker."""
    return FieldElement(
        name=name,
        type=type_,
        modifiers=list(modifiers),
        annotations=[RETAIN_ANNOTATION],
    )


@pytest.fixture
def base_screen() -> TypeElement:
    return TypeElement(qualified_name="com.example.BaseScreen", superclass=ACTIVITY_TYPE)


@pytest.fixture
def main_screen() -> TypeElement:
    """MainScreen -> BaseScreen -> android.app.Activity, two public retained fields."""
    return TypeElement(
        qualified_name="com.example.MainScreen",
        superclass="com.example.BaseScreen",
        fields=[
            retained("counter", "int", Modifier.PUBLIC),
            retained("label", "java.lang.String", Modifier.PUBLIC),
            FieldElement(name="scratch", type="int", modifiers=[Modifier.PRIVATE]),
        ],
    )


@pytest.fixture
def compat_screen() -> TypeElement:
    return TypeElement(
        qualified_name="com.example.compat.PagerScreen",
        superclass=FRAGMENT_ACTIVITY_TYPE,
        fields=[retained("page", "int")],
    )


@pytest.fixture
def index(base_screen: TypeElement, main_screen: TypeElement) -> ElementIndex:
    return ElementIndex(types=[base_screen, main_screen])


@pytest.fixture
def metadata_file(tmp_path: Path) -> Path:
    """Write a metadata file describing the MainScreen hierarchy."""
    path = tmp_path / "hosts.json"
    path.write_text(
        """
{
  "types": [
    {"qualified_name": "com.example.BaseScreen", "superclass": "android.app.Activity"},
    {
      "qualified_name": "com.example.MainScreen",
      "superclass": "com.example.BaseScreen",
      "fields": [
        {"name": "counter", "type": "int", "modifiers": ["public"],
         "annotations": ["com.github.mttkay.memento.Retain"]},
        {"name": "label", "type": "java.lang.String", "modifiers": ["public"],
         "annotations": ["com.github.mttkay.memento.Retain"]}
      ]
    }
  ]
}
"""
    )
    return path
