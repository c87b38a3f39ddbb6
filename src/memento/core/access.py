"""Accessibility checks for retained fields."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import AccessibilityError
from .model import AccessLevel, FieldElement


def verify_fields_accessible(fields: Iterable[FieldElement]) -> None:
    """
    Ensure every field can be read and assigned from the generated holder.

    Raises:
        AccessibilityError: on the first private field
    """
    for field in fields:
        if field.access_level is AccessLevel.PRIVATE:
            raise AccessibilityError(field)
