"""
Structural Java source writer.

Turns declaration-level calls (package, imports, types, fields, methods,
statements) into formatted source text on a stream. The writer tracks
scope nesting for indentation and brace matching but performs no type
analysis: type and statement text is written exactly as given.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import TextIO

from memento.core.errors import WriterStateError

# Canonical modifier order, as javac prints them.
MODIFIER_ORDER = (
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "transient",
    "volatile",
    "synchronized",
    "native",
)

_TYPE_SCOPE = "type"
_METHOD_SCOPE = "method"


def format_modifiers(modifiers: Iterable[str]) -> str:
    """Render modifiers in canonical order, with a trailing space if non-empty."""
    wanted = {m.value if isinstance(m, Enum) else m for m in modifiers}
    unknown = wanted.difference(MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"Unknown modifier(s): {', '.join(sorted(unknown))}")
    ordered = [m for m in MODIFIER_ORDER if m in wanted]
    return "".join(f"{m} " for m in ordered)


class JavaWriter:
    """
    Writes one Java compilation unit to a text stream.

    Example:
        writer = JavaWriter(stream)
        writer.emit_package("com.example")
        writer.begin_type("Greeter", "class", ["public"])
        writer.begin_method("void", "greet", ["public"], "String", "name")
        writer.emit_statement('System.out.println("Hello " + name)')
        writer.end_method()
        writer.end_type()
        writer.close()
    """

    def __init__(self, out: TextIO, indent: str = "  "):
        self.out = out
        self.indent = indent
        self._scopes: list[str] = []

    def _line(self, text: str = "") -> None:
        if text:
            self.out.write(self.indent * len(self._scopes) + text)
        self.out.write("\n")

    def _pop_scope(self, expected: str) -> None:
        if not self._scopes or self._scopes[-1] != expected:
            current = self._scopes[-1] if self._scopes else "none"
            raise WriterStateError(f"Cannot end {expected}: innermost open scope is {current}")
        self._scopes.pop()

    def emit_package(self, package_name: str) -> JavaWriter:
        """Emit a package declaration; the default package emits nothing."""
        if package_name:
            self._line(f"package {package_name};")
            self._line()
        return self

    def emit_imports(self, *types: str) -> JavaWriter:
        for type_name in types:
            self._line(f"import {type_name};")
        return self

    def emit_empty_line(self) -> JavaWriter:
        self._line()
        return self

    def begin_type(
        self,
        name: str,
        kind: str,
        modifiers: Iterable[str] = (),
        extends: str | None = None,
        *implements: str,
    ) -> JavaWriter:
        """
        Open a type declaration.

        Supertypes go on indented continuation lines; the opening brace
        ends the last line.
        """
        header = f"{format_modifiers(modifiers)}{kind} {name}"
        if extends:
            header += f"\n{self.indent * (len(self._scopes) + 2)}extends {extends}"
        if implements:
            header += f"\n{self.indent * (len(self._scopes) + 2)}implements {', '.join(implements)}"
        self._line(header + " {")
        self._scopes.append(_TYPE_SCOPE)
        return self

    def end_type(self) -> JavaWriter:
        self._pop_scope(_TYPE_SCOPE)
        self._line("}")
        return self

    def emit_field(self, type_name: str, name: str, modifiers: Iterable[str] = ()) -> JavaWriter:
        self._line(f"{format_modifiers(modifiers)}{type_name} {name};")
        return self

    def emit_annotation(self, name: str) -> JavaWriter:
        self._line(f"@{name}")
        return self

    def begin_method(
        self,
        return_type: str | None,
        name: str,
        modifiers: Iterable[str] = (),
        *parameters: str,
    ) -> JavaWriter:
        """
        Open a method or constructor.

        Args:
            return_type: Return type text, or None for a constructor
            name: Method name (the class name for constructors)
            modifiers: Method modifiers
            parameters: Alternating parameter type and name
        """
        if len(parameters) % 2:
            raise ValueError("Method parameters must be given as type, name pairs")
        params = ", ".join(
            f"{parameters[i]} {parameters[i + 1]}" for i in range(0, len(parameters), 2)
        )
        signature = f"{return_type} {name}" if return_type is not None else name
        self._line(f"{format_modifiers(modifiers)}{signature}({params}) {{")
        self._scopes.append(_METHOD_SCOPE)
        return self

    def end_method(self) -> JavaWriter:
        self._pop_scope(_METHOD_SCOPE)
        self._line("}")
        return self

    def emit_statement(self, statement: str) -> JavaWriter:
        self._line(f"{statement};")
        return self

    def close(self) -> None:
        """Close the underlying stream. Every opened scope must be closed first."""
        if self._scopes:
            raise WriterStateError(f"Unclosed scopes: {', '.join(self._scopes)}")
        self.out.close()
