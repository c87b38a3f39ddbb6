"""
memento - retained-state holders for Android activities.

Generates a companion class for each activity with fields marked @Retain,
copying those fields out before the activity is destroyed and back into the
recreated instance.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

from .core.errors import (
    AccessibilityError,
    ClassificationError,
    ConfigError,
    EmissionIOError,
    MementoError,
    MetadataError,
)

try:
    __version__ = _metadata_version("memento-gen")
except PackageNotFoundError:
    # Running from a source checkout without installing.
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "MementoError",
    "AccessibilityError",
    "ClassificationError",
    "ConfigError",
    "EmissionIOError",
    "MetadataError",
]
