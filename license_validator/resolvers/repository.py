"""Descriptor provider combining a local cache with remote sources."""

from __future__ import annotations

from typing import Optional, Sequence

from license_validator.exceptions import ResolutionError
from license_validator.models.dependency import DependencyRef, LicenseEntry
from license_validator.resolvers.base import BaseDescriptorProvider


class RepositoryDescriptorProvider(BaseDescriptorProvider):
    """Looks a dependency up in a local cache, then in each remote in order.

    The first source that describes the dependency wins. Failures are
    not retried; if every source fails, a single ResolutionError names
    the dependency and each source's failure.

    Args:
        local: Local cache consulted first (None to skip it).
        remotes: Remote sources consulted in order.
    """

    name = "repository"

    def __init__(
        self,
        local: Optional[BaseDescriptorProvider] = None,
        remotes: Sequence[BaseDescriptorProvider] = (),
    ) -> None:
        self._sources: list[BaseDescriptorProvider] = []
        if local is not None:
            self._sources.append(local)
        self._sources.extend(remotes)

    @property
    def sources(self) -> list[BaseDescriptorProvider]:
        return list(self._sources)

    async def describe(self, ref: DependencyRef) -> list[LicenseEntry]:
        """Return the licenses declared by ref in the first source that has it.

        Raises:
            ResolutionError: If no source can describe ref.
        """
        failures: list[str] = []
        for source in self._sources:
            try:
                return await source.describe(ref)
            except ResolutionError as e:
                failures.append(f"{source.name}: {e}")

        detail = "; ".join(failures) if failures else "no sources configured"
        raise ResolutionError(
            f"Unable to resolve descriptor for {ref.conflict_id} ({detail})",
            ref=ref,
        )
