"""Base descriptor provider interface."""

from abc import ABC, abstractmethod

from license_validator.models.dependency import DependencyRef, LicenseEntry


class BaseDescriptorProvider(ABC):
    """Abstract base class for license descriptor providers.

    A provider looks up the licenses a dependency declares in its own
    metadata. Implementations may block on network or disk I/O, so
    describe() is async.
    """

    #: Short label used in error messages
    name: str = "provider"

    @abstractmethod
    async def describe(self, ref: DependencyRef) -> list[LicenseEntry]:
        """Return the licenses declared by a dependency.

        Args:
            ref: The dependency to describe.

        Returns:
            Declared license entries, possibly empty.

        Raises:
            ResolutionError: If the descriptor cannot be found or fetched.
        """
