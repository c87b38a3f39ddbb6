"""
Host type classification.

Walks a host type's superclass chain to find which supported activity base
it descends from. The result only selects which Fragment type the generated
holder imports.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from .errors import ClassificationError
from .model import TypeElement
from .names import (
    ACTIVITY_TYPE,
    COMPAT_FRAGMENT_IMPORT,
    FRAGMENT_ACTIVITY_TYPE,
    LEGACY_FRAGMENT_IMPORT,
    OBJECT_TYPE,
)

logger = logging.getLogger("memento.core.classifier")

SupertypeLookup = Callable[[TypeElement], TypeElement | None]


class HostKind(str, Enum):
    """Activity base a host type descends from."""

    LEGACY = "legacy"  # android.app.Activity
    COMPAT = "compat"  # android.support.v4.app.FragmentActivity

    @property
    def fragment_import(self) -> str:
        if self is HostKind.COMPAT:
            return COMPAT_FRAGMENT_IMPORT
        return LEGACY_FRAGMENT_IMPORT


def _kind_of(element: TypeElement) -> HostKind | None:
    if element.qualified_name == ACTIVITY_TYPE:
        return HostKind.LEGACY
    if element.qualified_name == FRAGMENT_ACTIVITY_TYPE:
        return HostKind.COMPAT
    return None


def find_activity_supertype(
    host: TypeElement, supertype_of: SupertypeLookup
) -> tuple[TypeElement, HostKind] | None:
    """
    Find the nearest supported activity type in a host's ancestry.

    The host itself counts as its own ancestor.

    Returns:
        The matching ancestor and its kind, or None when the walk reaches
        the root
    """
    current: TypeElement | None = host
    while current is not None and current.qualified_name != OBJECT_TYPE:
        kind = _kind_of(current)
        if kind is not None:
            return current, kind
        current = supertype_of(current)
    return None


def classify(host: TypeElement, supertype_of: SupertypeLookup) -> HostKind:
    """
    Classify a host type by its activity base.

    Args:
        host: The annotated host type
        supertype_of: Returns the direct superclass of a type, or None past
            the universal root

    Raises:
        ClassificationError: if neither activity base is an ancestor
    """
    found = find_activity_supertype(host, supertype_of)
    if found is None:
        raise ClassificationError(host.qualified_name)

    activity, kind = found
    logger.debug("%s classified as %s via %s", host.qualified_name, kind.value, activity.qualified_name)
    return kind
