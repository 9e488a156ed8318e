"""Run options for analysis and code generation."""

from __future__ import annotations

import re

from pydantic import BaseModel, Field, field_validator

from scenejsx.config import DEFAULT_PRECISION

_IDENTIFIER = re.compile(r"^[A-Za-z_$][\w$]*$")


class AnalyzeOptions(BaseModel):
    """Options that drive pruning, deduplication and prop calculation."""

    precision: int = Field(default=DEFAULT_PRECISION, ge=0)
    """Decimals kept for emitted numbers."""

    bones: bool = False
    """Emit bones as regular elements instead of opaque passthroughs."""

    instance: bool = False
    """Share geometries that occur more than once."""

    instance_all: bool = False
    """Share every geometry, even single occurrences."""

    keep_groups: bool = False
    """Skip the pruning dry run (a single prune + compact pass)."""

    keep_names: bool = False
    """Write the original node names as ``name`` props."""

    shadows: bool = False
    """Let every mesh cast and receive shadows."""

    meta: bool = False
    """Write node user data as ``userData`` props."""


class GenerateOptions(AnalyzeOptions):
    """Options for the generated component source."""

    component_name: str = "Model"
    model_load_path: str = "model.glb"
    header: str | None = None
    size: str | None = None
    """Human readable size of the model file, printed in the header."""

    export_default: bool = False
    draco: bool = False

    @field_validator("component_name")
    @classmethod
    def _check_component_name(cls, value: str) -> str:
        if not _IDENTIFIER.match(value):
            raise ValueError(f"component_name must be a valid identifier, got {value!r}")
        return value
