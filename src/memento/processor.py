"""
Memento processor: from host metadata to generated holder classes.

Finds retained fields, checks that all of them are reachable, groups them by
host type and emits one holder per host.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from memento.codegen.emitter import GeneratedUnit, MementoEmitter
from memento.codegen.filer import SourceFiler
from memento.config import MementoConfig
from memento.core.access import verify_fields_accessible
from memento.core.classifier import classify
from memento.core.errors import MementoError
from memento.core.model import ElementIndex, FieldElement

logger = logging.getLogger("memento.processor")


@dataclass
class GenerationResult:
    """
    Result of a processor run.

    Attributes:
        units: Holder classes generated, in host discovery order
        files_created: Source files written
        sources: Rendered source per qualified class name, when not writing files
    """

    units: list[GeneratedUnit] = field(default_factory=list)
    files_created: list[Path] = field(default_factory=list)
    sources: dict[str, str] = field(default_factory=dict)

    @property
    def empty(self) -> bool:
        return not self.units

    def add_unit(self, unit: GeneratedUnit, source: str | None = None) -> None:
        self.units.append(unit)
        if unit.path is not None:
            self.files_created.append(unit.path)
        if source is not None:
            self.sources[unit.qualified_class_name] = source

    def merge(self, other: GenerationResult) -> None:
        """Merge another result into this one."""
        self.units.extend(other.units)
        self.files_created.extend(other.files_created)
        self.sources.update(other.sources)


def group_by_host(fields: list[FieldElement]) -> dict[str, list[FieldElement]]:
    """Group fields by enclosing type, keeping first-seen host order and field order."""
    groups: dict[str, list[FieldElement]] = {}
    for f in fields:
        groups.setdefault(f.enclosing, []).append(f)
    return groups


class MementoProcessor:
    """
    Runs classification and emission for every host with retained fields.

    Args:
        index: Host metadata
        filer: Output for generated files; sources are rendered in memory when None
        config: Generator configuration
    """

    def __init__(
        self,
        index: ElementIndex,
        filer: SourceFiler | None = None,
        config: MementoConfig | None = None,
    ):
        self.index = index
        self.filer = filer
        self.config = config or MementoConfig()

    def process(self) -> GenerationResult:
        """
        Generate holders for every host with retained fields.

        Every host is resolved and classified before the first file is
        written, so input errors produce no output. If writing fails part
        way, files already written by this run are removed again.
        """
        result = GenerationResult()

        elements = self.index.elements_annotated_with(self.config.retain_annotation)
        if not elements:
            return result

        verify_fields_accessible(elements)
        self._log(f"processing {len(elements)} fields")

        emitters = [
            self.prepare_host(host_name, fields)
            for host_name, fields in group_by_host(elements).items()
        ]

        try:
            for emitter in emitters:
                result.merge(self.emit(emitter))
        except MementoError:
            self._discard(result.files_created)
            raise

        return result

    def prepare_host(self, host_name: str, fields: list[FieldElement]) -> MementoEmitter:
        """Resolve and classify one host."""
        host = self.index.get(host_name)
        kind = classify(host, self.index.supertype_of)
        return MementoEmitter(host, kind, fields, indent=self.config.indent)

    def emit(self, emitter: MementoEmitter) -> GenerationResult:
        """Write one holder, or render it in memory when there is no filer."""
        result = GenerationResult()
        self._log(f"writing class {emitter.qualified_class_name}")

        if self.filer is None:
            result.add_unit(emitter.unit(), emitter.render())
        else:
            result.add_unit(emitter.write_to(self.filer))
        return result

    def _discard(self, paths: list[Path]) -> None:
        for path in paths:
            logger.warning("Removing %s after failed generation", path)
            path.unlink(missing_ok=True)

    def _log(self, message: str) -> None:
        logger.info("Memento: %s", message)
