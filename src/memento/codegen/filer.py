"""
Scoped output files for generated sources.

A source file is written to a temporary sibling and moved into place only
when writing finished cleanly, so a failed generation never leaves a
complete-looking artifact behind.

A failed write does not touch an existing file at the target path: the
previous build's source stays in place and is not this run's output.
Callers that need to know which files a run produced must use the paths it
reports, not the contents of the output directory.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from memento.core.errors import EmissionIOError

logger = logging.getLogger("memento.codegen.filer")


class SourceFiler:
    """Creates Java source files below an output root, one directory per package segment."""

    def __init__(self, output_dir: Path):
        self.output_dir = output_dir

    def path_for(self, qualified_name: str) -> Path:
        """Get the source path for a qualified class name."""
        *package, simple_name = qualified_name.split(".")
        return self.output_dir.joinpath(*package, f"{simple_name}.java")

    @contextmanager
    def create_source_file(self, qualified_name: str) -> Iterator[TextIO]:
        """
        Open a source file for writing.

        The file appears at its final path only after the block exits
        without an exception. Errors from the file system are raised as
        EmissionIOError; the temporary file is removed on every failure.
        A file left at the target path by an earlier run is kept unchanged
        when this write fails.
        """
        target = self.path_for(qualified_name)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
            )
        except OSError as e:
            raise EmissionIOError(f"Failed opening source file for {qualified_name}") from e

        tmp_path = Path(tmp_name)
        committed = False
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as stream:
                yield stream
            os.replace(tmp_path, target)
            committed = True
            logger.debug("Committed %s", target)
        except OSError as e:
            raise EmissionIOError(f"Failed writing source file for {qualified_name}") from e
        finally:
            if not committed:
                tmp_path.unlink(missing_ok=True)
