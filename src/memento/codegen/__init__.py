"""Java source generation for memento holders."""

from .emitter import GeneratedUnit, MementoEmitter
from .filer import SourceFiler
from .writer import JavaWriter

__all__ = [
    "GeneratedUnit",
    "JavaWriter",
    "MementoEmitter",
    "SourceFiler",
]
