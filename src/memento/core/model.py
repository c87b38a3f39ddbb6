"""
Host metadata model.

Immutable description of the host types and fields the generator reads:
qualified names, superclass links, field types and modifiers. This is the
same information an annotation processor obtains from the compiler's
element API, loaded here from a JSON metadata file.
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator
from pydantic import ValidationError as PydanticValidationError

from .errors import MetadataError, ResolutionError
from .names import ACTIVITY_TYPE, FRAGMENT_ACTIVITY_TYPE, OBJECT_TYPE, RETAIN_ANNOTATION


class Modifier(str, Enum):
    """Declaration modifiers that can appear on a field."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    STATIC = "static"
    FINAL = "final"
    TRANSIENT = "transient"
    VOLATILE = "volatile"


class AccessLevel(str, Enum):
    """Java access levels, from most to least visible."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE_PRIVATE = "package-private"
    PRIVATE = "private"


class FieldElement(BaseModel):
    """
    A field declared on a host type.

    Attributes:
        name: Simple field name, unique within the enclosing type
        type: Declared type as source text, copied verbatim into generated code
        modifiers: Declared modifiers
        annotations: Qualified names of annotations on the field
        enclosing: Qualified name of the enclosing type
    """

    name: str
    type: str
    modifiers: list[Modifier] = Field(default_factory=list)
    annotations: list[str] = Field(default_factory=list)
    enclosing: str = ""

    model_config = ConfigDict(frozen=True)

    @property
    def access_level(self) -> AccessLevel:
        if Modifier.PRIVATE in self.modifiers:
            return AccessLevel.PRIVATE
        if Modifier.PROTECTED in self.modifiers:
            return AccessLevel.PROTECTED
        if Modifier.PUBLIC in self.modifiers:
            return AccessLevel.PUBLIC
        return AccessLevel.PACKAGE_PRIVATE

    def is_annotated_with(self, annotation: str) -> bool:
        """Check for an annotation by qualified name, or by simple name."""
        simple = annotation.rsplit(".", 1)[-1]
        return any(a == annotation or a == simple for a in self.annotations)

    @property
    def is_retained(self) -> bool:
        return self.is_annotated_with(RETAIN_ANNOTATION)


class TypeElement(BaseModel):
    """
    A class declaration.

    Attributes:
        qualified_name: Fully qualified class name
        superclass: Qualified name of the direct superclass, or None when the
            class extends the universal root directly
        fields: Declared fields in source order
    """

    qualified_name: str
    superclass: str | None = None
    fields: list[FieldElement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _attach_enclosing(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "fields" not in data:
            return data
        owner = data.get("qualified_name", "")
        fields = []
        for f in data["fields"]:
            if isinstance(f, FieldElement):
                f = f.model_copy(update={"enclosing": owner})
            elif isinstance(f, dict):
                f = {**f, "enclosing": owner}
            fields.append(f)
        return {**data, "fields": fields}

    @model_validator(mode="after")
    def _check_field_names(self) -> TypeElement:
        seen: set[str] = set()
        for f in self.fields:
            if f.name in seen:
                raise ValueError(f"Duplicate field {f.name} in {self.qualified_name}")
            seen.add(f.name)
        return self

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def package_name(self) -> str:
        """Enclosing package, empty for the default package."""
        if "." not in self.qualified_name:
            return ""
        return self.qualified_name.rsplit(".", 1)[0]


# Framework types resolvable without being declared in the metadata file.
# Declared types with the same names take precedence.
BUILTIN_TYPES = (
    TypeElement(qualified_name=OBJECT_TYPE),
    TypeElement(qualified_name=ACTIVITY_TYPE),
    TypeElement(qualified_name=FRAGMENT_ACTIVITY_TYPE, superclass=ACTIVITY_TYPE),
)


class ElementIndex(BaseModel):
    """
    Lookup over all known type declarations.

    Superclass chains are guaranteed finite: duplicate declarations and
    inheritance cycles are rejected when the index is built.
    """

    types: list[TypeElement] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    _by_name: dict[str, TypeElement] = PrivateAttr(default_factory=dict)

    @model_validator(mode="after")
    def _check_hierarchy(self) -> ElementIndex:
        seen: set[str] = set()
        for t in self.types:
            if t.qualified_name in seen:
                raise ValueError(f"Duplicate type declaration: {t.qualified_name}")
            seen.add(t.qualified_name)

        superclasses = {t.qualified_name: t.superclass for t in self.types}
        for t in self.types:
            chain = [t.qualified_name]
            current = t.superclass
            while current is not None and current in superclasses:
                if current in chain:
                    cycle = " -> ".join([*chain, current])
                    raise ValueError(f"Cyclic inheritance: {cycle}")
                chain.append(current)
                current = superclasses[current]
        return self

    def model_post_init(self, __context: Any) -> None:
        self._by_name = {t.qualified_name: t for t in BUILTIN_TYPES}
        self._by_name.update({t.qualified_name: t for t in self.types})

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._by_name

    def get(self, qualified_name: str) -> TypeElement:
        """Resolve a type by qualified name."""
        try:
            return self._by_name[qualified_name]
        except KeyError:
            raise ResolutionError(qualified_name) from None

    def supertype_of(self, element: TypeElement) -> TypeElement | None:
        """
        Return the direct superclass of a type.

        Classes without an explicit superclass extend the universal root;
        the root itself has no supertype.
        """
        if element.qualified_name == OBJECT_TYPE:
            return None
        return self.get(element.superclass or OBJECT_TYPE)

    def elements_annotated_with(self, annotation: str = RETAIN_ANNOTATION) -> list[FieldElement]:
        """Fields carrying an annotation, in declaration order."""
        return [f for t in self.types for f in t.fields if f.is_annotated_with(annotation)]


def load_element_index(path: Path) -> ElementIndex:
    """
    Load host metadata from a JSON file.

    Args:
        path: File of the form {"types": [{"qualified_name": ..., ...}, ...]}

    Returns:
        ElementIndex over the declared types

    Raises:
        MetadataError: if the file cannot be read or does not describe a
            valid class hierarchy
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MetadataError(f"Cannot read metadata file {path}: {e}") from e

    try:
        return ElementIndex.model_validate(json.loads(raw))
    except json.JSONDecodeError as e:
        raise MetadataError(f"Invalid JSON in {path}: {e}") from e
    except PydanticValidationError as e:
        raise MetadataError(f"Invalid metadata in {path}:\n{e}") from e
