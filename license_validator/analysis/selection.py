"""Selection of the dependency set to validate."""

from __future__ import annotations

from license_validator.models.dependency import DependencyRef, DependencySet


def select_dependencies(
    dependencies: DependencySet,
    include_transitive: bool,
) -> frozenset[DependencyRef]:
    """Select the dependencies subject to validation.

    Args:
        dependencies: Resolved dependencies of the project.
        include_transitive: Whether to include transitive dependencies.

    Returns:
        The full transitive closure when include_transitive is True,
        otherwise only the directly declared dependencies.
    """
    if include_transitive:
        return dependencies.transitive
    return dependencies.direct
