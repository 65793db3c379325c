"""Dependency and declared-license Pydantic models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class DependencyRef(BaseModel):
    """Identity of a dependency under evaluation.

    Instances are frozen and hashable so that dependency sets have
    set semantics, unique by identity.
    """

    model_config = {"extra": "forbid", "frozen": True}

    group: Optional[str] = Field(
        default=None,
        description="Publishing group or namespace (None for Python distributions)",
    )
    artifact: str = Field(description="Artifact or distribution name")
    version: str = Field(description="Resolved version")

    @property
    def key(self) -> str:
        """Identity without version, matched against allowed_unlicensed.

        Returns:
            ``group:artifact``, or just ``artifact`` when there is no group.
        """
        if self.group:
            return f"{self.group}:{self.artifact}"
        return self.artifact

    @property
    def conflict_id(self) -> str:
        """Canonical identity used in reports.

        Returns:
            ``key:version``.
        """
        return f"{self.key}:{self.version}"

    def __str__(self) -> str:
        return self.conflict_id


class LicenseEntry(BaseModel):
    """A license declared in a dependency's own metadata.

    The name may be absent; a dependency with such an entry is treated
    as declaring no license at all.
    """

    model_config = {"extra": "forbid", "frozen": True}

    name: Optional[str] = Field(default=None, description="Declared license name")
    url: Optional[str] = Field(default=None, description="Declared license URL")


class DependencySet(BaseModel):
    """Resolved dependencies of a project.

    ``direct`` holds the directly declared dependencies, ``transitive``
    the full closure (direct ones included).
    """

    model_config = {"extra": "forbid", "frozen": True}

    direct: frozenset[DependencyRef] = Field(default_factory=frozenset)
    transitive: frozenset[DependencyRef] = Field(default_factory=frozenset)
