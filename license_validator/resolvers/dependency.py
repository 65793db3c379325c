"""Dependency resolution over the installed environment.

Provides DependencyResolver, which turns a project's direct requirements
into the set of direct dependencies and their transitive closure.
"""
from collections import deque
from importlib.metadata import Distribution, distributions
from typing import Iterable, Optional

from packaging.markers import Marker
from packaging.requirements import InvalidRequirement, Requirement
from packaging.specifiers import SpecifierSet
from packaging.version import InvalidVersion

from license_validator.exceptions import ConfigurationError, ResolutionError
from license_validator.models.dependency import DependencyRef, DependencySet
from license_validator.output.reporter import Reporter
from license_validator.resolvers.metadata import normalize_name


def pinned_version(req: Requirement) -> Optional[str]:
    """Return the exact version a requirement pins, or None.

    Only a single `==` (without wildcard) or `===` clause counts as a pin.
    """
    specs = list(req.specifier)
    if len(specs) != 1:
        return None
    spec = specs[0]
    if spec.operator == "===" or (spec.operator == "==" and "*" not in spec.version):
        return spec.version
    return None


def _satisfies(specifier: SpecifierSet, version: str) -> bool:
    if not specifier:
        return True
    try:
        return specifier.contains(version, prereleases=True)
    except InvalidVersion:
        return False


class DependencyResolver:
    """Resolves direct and transitive dependencies of installed packages.

    Requirements are followed through the metadata of installed
    distributions. Environment markers are evaluated for the running
    interpreter; requirements guarded by an extra are followed only when
    that extra was requested.

    A requirement pinned to an exact version that is not installed is
    still resolved, at the pinned version, so its descriptor can be
    fetched from a remote repository. Its own requirements are unknown
    locally and are not followed.

    Args:
        reporter: Destination for resolution diagnostics.
    """

    def __init__(self, reporter: Optional[Reporter] = None) -> None:
        """Initialize resolver with package index."""
        self._reporter = reporter if reporter is not None else Reporter()
        self._installed: dict[str, Distribution] = {}
        for dist in distributions():
            name = dist.metadata.get("Name")
            if name:
                self._installed.setdefault(self._normalize(name), dist)

    @staticmethod
    def _normalize(name: str) -> str:
        return normalize_name(name)

    @staticmethod
    def _applies(marker: Optional[Marker], extras: Iterable[str]) -> bool:
        """Check whether a requirement marker holds for any requested extra.

        Args:
            marker: Parsed marker object from Requirement, or None.
            extras: Requested extras; "" stands for the base requirements.

        Returns:
            True if the requirement applies.
        """
        if marker is None:
            return True
        return any(marker.evaluate({"extra": extra}) for extra in extras)

    def _ref(self, dist: Distribution) -> DependencyRef:
        return DependencyRef(
            artifact=dist.metadata["Name"],
            version=dist.metadata.get("Version", "unknown"),
        )

    def _installed_match(
        self, req: Requirement, required_by: Optional[str]
    ) -> Optional[Distribution]:
        """Return the installed distribution answering req, or None for a pin.

        Direct requirements must be satisfied by the installed version.
        For transitive requirements the installed version is taken as is.

        Raises:
            ResolutionError: If req is neither installed (at an acceptable
                version) nor pinned to an exact version.
        """
        origin = f" (required by {required_by})" if required_by else ""
        dist = self._installed.get(self._normalize(req.name))
        pin = pinned_version(req)

        if dist is None:
            if pin is None:
                raise ResolutionError(
                    f"Dependency '{req.name}'{origin} is not installed"
                )
            return None

        installed_version = dist.metadata.get("Version", "unknown")
        if required_by is None and not _satisfies(req.specifier, installed_version):
            if pin is None:
                raise ResolutionError(
                    f"Dependency '{req.name}' requires {req.specifier} but "
                    f"{installed_version} is installed"
                )
            return None
        return dist

    def resolve(self, requirements: Iterable[str]) -> DependencySet:
        """Resolve direct requirements and their transitive closure.

        Args:
            requirements: Direct requirement strings (e.g. "requests>=2.0").

        Returns:
            DependencySet of the direct dependencies and the full closure.

        Raises:
            ConfigurationError: If a direct requirement is malformed.
            ResolutionError: If a required dependency is not installed,
                or a direct one is installed at a version its specifier
                excludes, and the requirement is not pinned.
        """
        direct: dict[str, DependencyRef] = {}
        closure: dict[str, DependencyRef] = {}
        # Extras already followed per distribution
        followed: dict[str, set[str]] = {}
        pending: deque[tuple[str, set[str]]] = deque()

        def visit(req: Requirement, required_by: Optional[str]) -> str:
            dist = self._installed_match(req, required_by)
            if dist is None:
                ref = DependencyRef(artifact=req.name, version=str(pinned_version(req)))
                key = f"{self._normalize(req.name)}=={ref.version}"
                if key not in closure:
                    self._reporter.warning(
                        f"{ref.conflict_id} is not installed; its license will be "
                        "looked up remotely and its dependencies are not followed"
                    )
                    closure[key] = ref
                return key

            key = self._normalize(dist.metadata["Name"])
            closure.setdefault(key, self._ref(dist))

            extras = set(req.extras)
            seen = followed.get(key)
            if seen is None:
                followed[key] = set(extras)
                pending.append((key, extras | {""}))
            elif not extras <= seen:
                new_extras = extras - seen
                seen.update(new_extras)
                pending.append((key, new_extras))
            return key

        for req_str in requirements:
            try:
                req = Requirement(req_str)
            except InvalidRequirement as e:
                raise ConfigurationError(
                    f"Invalid requirement '{req_str}': {e}"
                ) from e
            if not self._applies(req.marker, [""]):
                continue
            key = visit(req, required_by=None)
            direct[key] = closure[key]

        while pending:
            key, extras = pending.popleft()
            dist = self._installed[key]
            parent = closure[key].conflict_id
            for child_str in dist.requires or []:
                try:
                    child = Requirement(child_str)
                except InvalidRequirement:
                    # Skip malformed requirements in third-party metadata
                    continue
                if self._applies(child.marker, extras):
                    visit(child, required_by=parent)

        return DependencySet(
            direct=frozenset(direct.values()),
            transitive=frozenset(closure.values()),
        )
