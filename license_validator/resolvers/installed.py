"""Descriptor provider backed by the installed environment."""

from __future__ import annotations

from importlib.metadata import Distribution, distributions
from typing import Optional

from license_validator.exceptions import ResolutionError
from license_validator.models.dependency import DependencyRef, LicenseEntry
from license_validator.resolvers.base import BaseDescriptorProvider
from license_validator.resolvers.metadata import extract_licenses, normalize_name


class InstalledDescriptorProvider(BaseDescriptorProvider):
    """Reads declared licenses from installed distribution metadata.

    Acts as the local cache of the repository: lookups never touch the
    network. A dependency is found only if the installed version is the
    one requested.
    """

    name = "installed environment"

    def __init__(self) -> None:
        self._installed: dict[str, Distribution] = {}
        for dist in distributions():
            dist_name = dist.metadata.get("Name")
            if dist_name:
                self._installed.setdefault(normalize_name(dist_name), dist)

    def _find(self, ref: DependencyRef) -> Optional[Distribution]:
        dist = self._installed.get(normalize_name(ref.artifact))
        if dist is None or dist.metadata.get("Version") != ref.version:
            return None
        return dist

    async def describe(self, ref: DependencyRef) -> list[LicenseEntry]:
        """Return licenses declared in the installed metadata of ref.

        Raises:
            ResolutionError: If ref is not installed at the requested version.
        """
        dist = self._find(ref)
        if dist is None:
            raise ResolutionError(
                f"{ref.conflict_id} is not installed", ref=ref
            )

        metadata = dist.metadata
        return extract_licenses(
            license_expression=metadata.get("License-Expression"),
            license_field=metadata.get("License"),
            classifiers=metadata.get_all("Classifier") or [],
        )
