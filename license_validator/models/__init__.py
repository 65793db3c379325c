"""Pydantic data models for license-validator."""

from license_validator.models.dependency import (
    DependencyRef,
    DependencySet,
    LicenseEntry,
)
from license_validator.models.options import ValidateOptions, Verbosity
from license_validator.models.policy import Policy
from license_validator.models.result import (
    Classification,
    EvaluationResult,
    Outcome,
    Verdict,
)

__all__ = [
    "Classification",
    "DependencyRef",
    "DependencySet",
    "EvaluationResult",
    "LicenseEntry",
    "Outcome",
    "Policy",
    "ValidateOptions",
    "Verdict",
    "Verbosity",
]
