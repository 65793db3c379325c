"""Custom exceptions for license-validator."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from license_validator.models.dependency import DependencyRef


class LicenseValidatorError(Exception):
    """Base exception for all license-validator errors."""

    pass


class ConfigurationError(LicenseValidatorError):
    """Exception raised when configuration is invalid."""

    pass


class ResolutionError(LicenseValidatorError):
    """Exception raised when a dependency or its descriptor cannot be resolved.

    Always fatal for a validation run: without descriptor data no
    classification is possible.
    """

    def __init__(self, message: str, ref: Optional[DependencyRef] = None) -> None:
        super().__init__(message)
        self.ref = ref
