"""Tests for custom exceptions."""

from license_validator.exceptions import (
    ConfigurationError,
    LicenseValidatorError,
    ResolutionError,
)
from license_validator.models.dependency import DependencyRef


class TestExceptionHierarchy:
    """Tests for exception hierarchy."""

    def test_license_validator_error_is_exception(self) -> None:
        assert issubclass(LicenseValidatorError, Exception)

    def test_configuration_error_inherits_from_base(self) -> None:
        assert issubclass(ConfigurationError, LicenseValidatorError)

    def test_resolution_error_inherits_from_base(self) -> None:
        assert issubclass(ResolutionError, LicenseValidatorError)

    def test_configuration_error_can_be_raised(self) -> None:
        """Test that ConfigurationError can be raised with a message."""
        try:
            raise ConfigurationError("Invalid config file")
        except LicenseValidatorError as e:
            assert str(e) == "Invalid config file"
        else:
            raise AssertionError("ConfigurationError was not raised")


class TestResolutionError:
    """Tests for ResolutionError."""

    def test_carries_dependency(self) -> None:
        """Test that the failing dependency is attached to the error."""
        ref = DependencyRef(artifact="requests", version="2.31.0")
        error = ResolutionError("Unable to resolve", ref=ref)

        assert str(error) == "Unable to resolve"
        assert error.ref == ref

    def test_dependency_is_optional(self) -> None:
        error = ResolutionError("Dependency 'x' is not installed")

        assert error.ref is None
