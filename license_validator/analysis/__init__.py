"""License policy analysis for license-validator."""
from license_validator.analysis.classifier import (
    classify,
    classify_unlicensed,
    matches_pattern,
)
from license_validator.analysis.selection import select_dependencies

__all__ = [
    "classify",
    "classify_unlicensed",
    "matches_pattern",
    "select_dependencies",
]
