"""Configuration Pydantic models for license-validator."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from license_validator.constants import DEFAULT_REPOSITORY_URL
from license_validator.models.policy import Policy


class ValidatorConfig(BaseModel):
    """Configuration for license-validator.

    Keys may be given in snake_case or with their camelCase aliases
    (``bannedLicenses``, ``failFast``...).
    """

    model_config = {"extra": "forbid", "populate_by_name": True}

    include_transitive_dependencies: bool = Field(
        default=True,
        alias="includeTransitiveDependencies",
        description="Validate transitive dependencies as well as direct ones.",
    )
    banned_licenses: List[str] = Field(
        default_factory=list,
        alias="bannedLicenses",
        description="License names or regular expressions that fail a dependency.",
    )
    allowed_licenses: List[str] = Field(
        default_factory=list,
        alias="allowedLicenses",
        description="License names or regular expressions that pass a dependency. "
        "Allowed licenses override banned ones.",
    )
    allowed_unlicensed: Optional[List[str]] = Field(
        default_factory=list,
        alias="allowedUnlicensed",
        description="Dependency keys or regular expressions allowed to declare "
        "no license. Set to null to fail every unlicensed dependency.",
    )
    allow_unrecognised: bool = Field(
        default=False,
        alias="allowUnrecognised",
        description="Pass licenses that are neither allowed nor banned.",
    )
    fail_fast: bool = Field(
        default=True,
        alias="failFast",
        description="Stop at the first failing dependency.",
    )
    max_concurrency: int = Field(
        default=1,
        ge=1,
        alias="maxConcurrency",
        description="Maximum number of dependencies evaluated concurrently.",
    )
    repositories: List[str] = Field(
        default_factory=lambda: [DEFAULT_REPOSITORY_URL],
        description="Remote JSON API base URLs consulted, in order, for "
        "dependencies missing from the local environment.",
    )
    offline: bool = Field(
        default=False,
        description="Never consult remote repositories.",
    )
    optional_dependencies: List[str] = Field(
        default_factory=list,
        alias="optionalDependencies",
        description="Names of [project.optional-dependencies] groups treated "
        "as direct dependencies.",
    )

    def to_policy(self) -> Policy:
        """Build the immutable policy for a validation run.

        Returns:
            Policy carrying the matching and run-control settings.

        Raises:
            pydantic.ValidationError: If a pattern is not a valid regex.
        """
        return Policy(
            banned_licenses=tuple(self.banned_licenses),
            allowed_licenses=tuple(self.allowed_licenses),
            allowed_unlicensed=(
                None
                if self.allowed_unlicensed is None
                else tuple(self.allowed_unlicensed)
            ),
            allow_unrecognised=self.allow_unrecognised,
            fail_fast=self.fail_fast,
            include_transitive=self.include_transitive_dependencies,
            max_concurrency=self.max_concurrency,
        )
