"""Classification and validation result Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from license_validator.models.dependency import DependencyRef


class Outcome(Enum):
    """Outcome of classifying one dependency against a policy."""

    ALLOWED = "allowed"
    BANNED = "banned"
    UNRECOGNISED_ALLOWED = "unrecognised_allowed"
    UNRECOGNISED_BANNED = "unrecognised_banned"
    UNLICENSED_ALLOWED = "unlicensed_allowed"
    UNLICENSED_BANNED = "unlicensed_banned"

    @property
    def passed(self) -> bool:
        """Whether this outcome lets the dependency pass."""
        return self in (
            Outcome.ALLOWED,
            Outcome.UNRECOGNISED_ALLOWED,
            Outcome.UNLICENSED_ALLOWED,
        )

    @property
    def is_unlicensed(self) -> bool:
        """Whether the unlicensed rule produced this outcome."""
        return self in (Outcome.UNLICENSED_ALLOWED, Outcome.UNLICENSED_BANNED)


# Human-readable reason per outcome, used in reports
OUTCOME_REASONS: dict[Outcome, str] = {
    Outcome.ALLOWED: "Has at least one allowed license",
    Outcome.BANNED: "Has at least one banned license",
    Outcome.UNRECOGNISED_ALLOWED: "Licenses neither allowed nor banned (allowed by default)",
    Outcome.UNRECOGNISED_BANNED: "Licenses neither allowed nor banned",
    Outcome.UNLICENSED_ALLOWED: "No license declared (allowed unlicensed)",
    Outcome.UNLICENSED_BANNED: "No license declared",
}


class Classification(BaseModel):
    """Result of the pure license classification for one dependency."""

    model_config = {"extra": "forbid", "frozen": True}

    outcome: Outcome
    allowed_matches: tuple[str, ...] = Field(
        default=(),
        description="Declared license names that matched an allowed pattern",
    )
    banned_matches: tuple[str, ...] = Field(
        default=(),
        description="Declared license names that matched a banned pattern",
    )
    unlicensed_pattern: Optional[str] = Field(
        default=None,
        description="allowed_unlicensed pattern that matched the dependency",
    )
    unlicensed_unset: bool = Field(
        default=False,
        description="True when the unlicensed rule ran with allowed_unlicensed unset",
    )

    @property
    def passed(self) -> bool:
        return self.outcome.passed


class Verdict(BaseModel):
    """Pass/fail verdict for one dependency, carried into reports."""

    model_config = {"extra": "forbid", "frozen": True}

    dependency: DependencyRef
    outcome: Outcome
    licenses: tuple[Optional[str], ...] = Field(
        default=(),
        description="Declared license names (None for an entry without a name)",
    )
    allowed_matches: tuple[str, ...] = Field(default=())
    banned_matches: tuple[str, ...] = Field(default=())

    @property
    def passed(self) -> bool:
        return self.outcome.passed

    @property
    def failed(self) -> bool:
        return not self.outcome.passed

    @property
    def reason(self) -> str:
        """Human-readable reason for the outcome."""
        return OUTCOME_REASONS[self.outcome]

    @property
    def violating_licenses(self) -> tuple[Optional[str], ...]:
        """Licenses responsible for a failure.

        Banned matches when there are any, otherwise every declared license.
        Empty for passing verdicts.
        """
        if self.passed:
            return ()
        if self.banned_matches:
            return self.banned_matches
        return self.licenses


class EvaluationResult(BaseModel):
    """Aggregate of all verdicts recorded in a validation run."""

    model_config = {"extra": "forbid"}

    verdicts: list[Verdict] = Field(
        default_factory=list,
        description="Per-dependency verdicts in evaluation order",
    )
    aborted: bool = Field(
        default=False,
        description="True when fail-fast stopped the run early",
    )

    @property
    def failures(self) -> list[Verdict]:
        """Verdicts that failed the policy."""
        return [v for v in self.verdicts if v.failed]

    @property
    def failed(self) -> bool:
        """Overall verdict: True if any dependency failed."""
        return any(v.failed for v in self.verdicts)

    @property
    def passed(self) -> bool:
        return not self.failed

    @property
    def total(self) -> int:
        return len(self.verdicts)
