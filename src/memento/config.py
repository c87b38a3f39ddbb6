"""
Generator configuration.

Parses the [generator] section from memento.toml.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from memento.core.errors import ConfigError
from memento.core.names import RETAIN_ANNOTATION

CONFIG_FILENAME = "memento.toml"


class MementoConfig(BaseModel):
    """Generator configuration."""

    output: str = "generated/"
    indent: str = "  "
    retain_annotation: str = Field(default=RETAIN_ANNOTATION)

    @field_validator("indent")
    @classmethod
    def validate_indent(cls, v: str) -> str:
        if v.strip(" \t"):
            raise ValueError("indent must contain only spaces or tabs")
        return v

    def get_output_path(self, project_root: Path) -> Path:
        """Get absolute output directory path."""
        output_dir = Path(self.output)
        if output_dir.is_absolute():
            return output_dir
        return project_root / output_dir


def load_config(toml_path: Path) -> MementoConfig:
    """
    Load generator configuration from memento.toml.

    Args:
        toml_path: Path to memento.toml file

    Returns:
        MementoConfig with parsed values or defaults
    """
    if not toml_path.exists():
        return MementoConfig()

    try:
        with open(toml_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {toml_path}: {e}") from e

    try:
        return MementoConfig(**data.get("generator", {}))
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid [generator] section in {toml_path}:\n{e}") from e
