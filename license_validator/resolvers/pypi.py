"""PyPI JSON API descriptor provider."""

from typing import Any, Optional

import httpx

from license_validator.constants import DEFAULT_REPOSITORY_URL
from license_validator.exceptions import ResolutionError
from license_validator.models.dependency import DependencyRef, LicenseEntry
from license_validator.resolvers.base import BaseDescriptorProvider
from license_validator.resolvers.metadata import extract_licenses

REQUEST_TIMEOUT = 30.0


def licenses_from_pypi_metadata(metadata: dict[str, Any]) -> list[LicenseEntry]:
    """Extract declared licenses from a PyPI JSON API response.

    Args:
        metadata: PyPI JSON API response dict.

    Returns:
        Declared license entries, possibly empty.
    """
    info: dict[str, Any] = metadata.get("info") or {}
    return extract_licenses(
        license_expression=info.get("license_expression"),
        license_field=info.get("license"),
        classifiers=info.get("classifiers") or [],
    )


class PyPIDescriptorProvider(BaseDescriptorProvider):
    """Fetches declared licenses for an exact release from a PyPI-style index.

    Args:
        base_url: JSON API root, e.g. "https://pypi.org/pypi".
        client: Optional shared httpx.AsyncClient. If not provided,
            a new client is created per request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_REPOSITORY_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.name = self.base_url
        self._client = client

    def release_url(self, ref: DependencyRef) -> str:
        """URL of the JSON document describing ref's release."""
        return f"{self.base_url}/{ref.artifact}/{ref.version}/json"

    async def fetch_metadata(self, ref: DependencyRef) -> dict[str, Any]:
        """Fetch release metadata from the JSON API.

        Raises:
            ResolutionError: If the release is not found, the request fails,
                or the body is not a JSON object.
        """
        url = self.release_url(ref)

        async def do_fetch(c: httpx.AsyncClient) -> dict[str, Any]:
            try:
                response = await c.get(url, timeout=httpx.Timeout(REQUEST_TIMEOUT))
                if response.status_code == 404:
                    raise ResolutionError(
                        f"{ref.conflict_id} not found at {self.base_url}", ref=ref
                    )
                response.raise_for_status()
                payload = response.json()
            except ValueError as e:
                raise ResolutionError(
                    f"Invalid JSON for {ref.conflict_id} from {self.base_url}: {e}",
                    ref=ref,
                ) from e
            except httpx.HTTPStatusError as e:
                raise ResolutionError(
                    f"Failed to fetch {ref.conflict_id} from {self.base_url}: "
                    f"HTTP {e.response.status_code}",
                    ref=ref,
                ) from e
            except httpx.RequestError as e:
                raise ResolutionError(
                    f"Failed to fetch {ref.conflict_id} from {self.base_url}: {e}",
                    ref=ref,
                ) from e

            if not isinstance(payload, dict):
                raise ResolutionError(
                    f"Unexpected response for {ref.conflict_id} from "
                    f"{self.base_url}: expected a JSON object, "
                    f"got {type(payload).__name__}",
                    ref=ref,
                )
            return payload

        if self._client is not None:
            return await do_fetch(self._client)

        async with httpx.AsyncClient() as new_client:
            return await do_fetch(new_client)

    async def describe(self, ref: DependencyRef) -> list[LicenseEntry]:
        """Return licenses declared in the index metadata of ref.

        Raises:
            ResolutionError: If the release is not found or the request fails.
        """
        metadata = await self.fetch_metadata(ref)
        return licenses_from_pypi_metadata(metadata)
