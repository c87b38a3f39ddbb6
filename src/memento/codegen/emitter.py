"""
Memento holder generation.

Builds the companion class for one host type:

    package com.example;

    import android.app.Fragment;
    import android.app.Activity;

    public final class MainScreen$Memento
        extends Fragment
        implements com.github.mttkay.memento.MementoMethods {

      int counter;

      public MainScreen$Memento() {
        setRetainInstance(true);
      }

      @Override
      public void retain(Activity source) {
        MainScreen activity = (MainScreen) source;
        this.counter = activity.counter;
      }

      @Override
      public void restore(Activity target) {
        MainScreen activity = (MainScreen) target;
        activity.counter = this.counter;
      }
    }

Fields appear in the same order in the declarations and in both copy
methods.
"""

from __future__ import annotations

import io
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from memento.core.classifier import HostKind
from memento.core.model import FieldElement, TypeElement
from memento.core.names import ACTIVITY_TYPE, FRAGMENT_SIMPLE_NAME, MEMENTO_METHODS, MEMENTO_SUFFIX

from .filer import SourceFiler
from .writer import JavaWriter

ACTIVITY_SIMPLE_NAME = ACTIVITY_TYPE.rsplit(".", 1)[-1]
NARROWED_NAME = "activity"


class GeneratedUnit(BaseModel):
    """A generated holder class."""

    qualified_class_name: str
    host: str
    kind: HostKind
    fields: list[str]
    path: Path | None = None

    model_config = ConfigDict(frozen=True)


class MementoEmitter:
    """
    Emits the holder class for one host type.

    Args:
        host: The host type whose fields are retained
        kind: Classification of the host
        fields: Retained fields, in discovery order
        indent: Indentation unit for the generated source
    """

    def __init__(
        self,
        host: TypeElement,
        kind: HostKind,
        fields: list[FieldElement],
        indent: str = "  ",
    ):
        self.host = host
        self.kind = kind
        self.fields = list(fields)
        self.indent = indent

    @property
    def simple_class_name(self) -> str:
        return self.host.simple_name + MEMENTO_SUFFIX

    @property
    def qualified_class_name(self) -> str:
        if not self.host.package_name:
            return self.simple_class_name
        return f"{self.host.package_name}.{self.simple_class_name}"

    def unit(self, path: Path | None = None) -> GeneratedUnit:
        return GeneratedUnit(
            qualified_class_name=self.qualified_class_name,
            host=self.host.qualified_name,
            kind=self.kind,
            fields=[f.name for f in self.fields],
            path=path,
        )

    # -------------------------------------------------------------------------
    # Output targets
    # -------------------------------------------------------------------------

    def render(self) -> str:
        """Render the holder source as a string."""
        buffer = io.StringIO()
        self.emit(JavaWriter(buffer, self.indent))
        return buffer.getvalue()

    def write_to(self, filer: SourceFiler) -> GeneratedUnit:
        """Write the holder source through a filer and describe the result."""
        with filer.create_source_file(self.qualified_class_name) as stream:
            writer = JavaWriter(stream, self.indent)
            self.emit(writer)
            writer.close()
        return self.unit(filer.path_for(self.qualified_class_name))

    # -------------------------------------------------------------------------
    # Emission stages, in output order
    # -------------------------------------------------------------------------

    def emit(self, writer: JavaWriter) -> None:
        self._emit_header(writer)
        writer.begin_type(
            self.simple_class_name,
            "class",
            ["public", "final"],
            FRAGMENT_SIMPLE_NAME,
            MEMENTO_METHODS,
        )
        self._emit_fields(writer)
        self._emit_constructor(writer)
        self._emit_retain(writer)
        self._emit_restore(writer)
        writer.end_type()

    def _emit_header(self, writer: JavaWriter) -> None:
        writer.emit_package(self.host.package_name)
        writer.emit_imports(self.kind.fragment_import)
        writer.emit_imports(ACTIVITY_TYPE)
        writer.emit_empty_line()

    def _emit_fields(self, writer: JavaWriter) -> None:
        writer.emit_empty_line()
        for field in self.fields:
            writer.emit_field(field.type, field.name)

    def _emit_constructor(self, writer: JavaWriter) -> None:
        writer.emit_empty_line()
        writer.begin_method(None, self.simple_class_name, ["public"])
        writer.emit_statement("setRetainInstance(true)")
        writer.end_method()

    def _emit_retain(self, writer: JavaWriter) -> None:
        self._begin_copy_method(writer, "retain", "source")
        for field in self.fields:
            writer.emit_statement(f"this.{field.name} = {NARROWED_NAME}.{field.name}")
        writer.end_method()

    def _emit_restore(self, writer: JavaWriter) -> None:
        self._begin_copy_method(writer, "restore", "target")
        for field in self.fields:
            writer.emit_statement(f"{NARROWED_NAME}.{field.name} = this.{field.name}")
        writer.end_method()

    def _begin_copy_method(self, writer: JavaWriter, name: str, param: str) -> None:
        host = self.host.simple_name
        writer.emit_empty_line()
        writer.emit_annotation("Override")
        writer.begin_method("void", name, ["public"], ACTIVITY_SIMPLE_NAME, param)
        writer.emit_statement(f"{host} {NARROWED_NAME} = ({host}) {param}")
