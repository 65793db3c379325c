"""Run option models."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ValidateOptions(BaseModel):
    """Options for a validation run's output."""

    model_config = {"extra": "forbid"}

    format: Literal["terminal", "json"] = Field(
        default="terminal",
        description="Output format for the validation report",
    )
    verbosity: Verbosity = Field(
        default=Verbosity.NORMAL,
        description="Output verbosity level (quiet, normal, verbose)",
    )
