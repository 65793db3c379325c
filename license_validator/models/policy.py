"""License policy Pydantic model."""

from __future__ import annotations

import re
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Policy(BaseModel):
    """Immutable license policy applied to every dependency of a run.

    Patterns match when they equal the candidate string exactly or,
    interpreted as a regular expression, match the whole of it.
    Matching is case-sensitive. An allowed match always overrides a
    banned match for the same dependency.
    """

    model_config = {"extra": "forbid", "frozen": True}

    banned_licenses: tuple[str, ...] = Field(
        default=(),
        description="License name patterns that fail a dependency",
    )
    allowed_licenses: tuple[str, ...] = Field(
        default=(),
        description="License name patterns that pass a dependency",
    )
    allowed_unlicensed: Optional[tuple[str, ...]] = Field(
        default=(),
        description="Dependency key patterns allowed to declare no license. "
        "None means unset: every unlicensed dependency fails.",
    )
    allow_unrecognised: bool = Field(
        default=False,
        description="Verdict for licenses matched by neither list",
    )
    fail_fast: bool = Field(
        default=True,
        description="Stop at the first failing dependency",
    )
    include_transitive: bool = Field(
        default=True,
        description="Evaluate transitive dependencies as well as direct ones",
    )
    max_concurrency: int = Field(
        default=1,
        ge=1,
        description="Maximum number of dependencies evaluated concurrently",
    )

    @field_validator("banned_licenses", "allowed_licenses", "allowed_unlicensed")
    @classmethod
    def _patterns_compile(
        cls, value: Optional[tuple[str, ...]]
    ) -> Optional[tuple[str, ...]]:
        """Reject patterns that are not valid regular expressions."""
        if value is None:
            return value
        for pattern in value:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"invalid pattern '{pattern}': {e}") from e
        return value
