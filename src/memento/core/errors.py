"""
Error types for memento metadata loading, classification and emission.

Every error is fatal for the generation request that raised it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from memento.core.model import FieldElement


class MementoError(Exception):
    """Base exception for all memento errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AccessibilityError(MementoError):
    """
    Raised when a retained field cannot be reached from the generated holder.

    The holder lives in a separate compilation unit of the same package, so
    private fields are out of reach.
    """

    def __init__(self, field: FieldElement):
        self.field = field
        super().__init__(
            f"Annotated fields cannot be private: "
            f"{field.enclosing}#{field.name}({field.type})"
        )


class ClassificationError(MementoError):
    """Raised when a host type does not descend from a supported activity type."""

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        super().__init__(f"Annotated type does not seem to be an Activity: {qualified_name}")


class EmissionIOError(MementoError):
    """
    Raised when a generated source file cannot be opened, written or committed.

    The underlying OSError is chained as ``__cause__``.
    """

    pass


class MetadataError(MementoError):
    """Raised when host metadata cannot be read or parsed."""

    pass


class ResolutionError(MetadataError):
    """Raised when a type name is not present in the metadata index."""

    def __init__(self, qualified_name: str):
        self.qualified_name = qualified_name
        super().__init__(f"Unknown type: {qualified_name}")


class WriterStateError(MementoError):
    """Raised when the source writer is asked to close a scope that is not open."""

    pass


class ConfigError(MementoError):
    """Raised when memento.toml cannot be parsed or holds invalid values."""

    pass
