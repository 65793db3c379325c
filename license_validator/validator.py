"""Validation driver: evaluates each dependency against the license policy."""
from __future__ import annotations

import asyncio
from typing import Iterable, Optional

from license_validator.analysis.classifier import classify
from license_validator.analysis.selection import select_dependencies
from license_validator.exceptions import ResolutionError
from license_validator.models.dependency import DependencyRef, DependencySet
from license_validator.models.policy import Policy
from license_validator.models.result import (
    Classification,
    EvaluationResult,
    Outcome,
    Verdict,
)
from license_validator.output.reporter import Reporter
from license_validator.resolvers.base import BaseDescriptorProvider


class LicenseValidator:
    """Validates dependencies' declared licenses against a policy.

    For each dependency the descriptor provider is asked for the
    declared licenses, the classifier decides, and the verdict is
    recorded. Up to policy.max_concurrency dependencies are evaluated
    at once; the default of 1 is strictly sequential.

    With fail_fast, the first failing verdict in submission order ends
    the run: no descriptors after it are requested and later verdicts
    are not recorded, though fetches already in flight may complete. A
    ResolutionError from the provider ends the run the same way
    regardless of fail_fast and is re-raised.
    """

    def __init__(
        self,
        policy: Policy,
        provider: BaseDescriptorProvider,
        reporter: Optional[Reporter] = None,
    ) -> None:
        self._policy = policy
        self._provider = provider
        self._reporter = reporter if reporter is not None else Reporter()

    @property
    def policy(self) -> Policy:
        return self._policy

    async def evaluate(self, ref: DependencyRef) -> Verdict:
        """Fetch and classify the licenses of a single dependency.

        Args:
            ref: Dependency to evaluate.

        Returns:
            Verdict for the dependency.

        Raises:
            ResolutionError: If the descriptor cannot be fetched.
        """
        licenses = await self._provider.describe(ref)
        names = tuple(entry.name for entry in licenses)
        if names and None in names:
            self._reporter.error(
                f"Descriptor for {ref.conflict_id} declares a license without "
                "a name; treating the dependency as unlicensed"
            )

        classification = classify(ref.key, licenses, self._policy)
        self._report(ref, names, classification)

        return Verdict(
            dependency=ref,
            outcome=classification.outcome,
            licenses=names,
            allowed_matches=classification.allowed_matches,
            banned_matches=classification.banned_matches,
        )

    async def validate(self, dependencies: Iterable[DependencyRef]) -> EvaluationResult:
        """Validate dependencies in the given order.

        The result is the same as a sequential run's whatever the
        concurrency: a run stopped by a failure (under fail_fast) or by a
        ResolutionError keeps every verdict before the stopping
        dependency, and verdicts after it are discarded even if their
        fetches already completed.

        Args:
            dependencies: Dependencies to validate.

        Returns:
            EvaluationResult with verdicts in the order the dependencies
            were given.

        Raises:
            ResolutionError: If any dependency's descriptor cannot be fetched.
        """
        refs = list(dependencies)
        semaphore = asyncio.Semaphore(self._policy.max_concurrency)
        recorded: dict[int, Verdict] = {}
        # Lowest index at which the run stops, and the error raised there
        stop_at: Optional[int] = None
        resolution_error: Optional[ResolutionError] = None

        def stopped_before(idx: int) -> bool:
            return stop_at is not None and stop_at < idx

        async def evaluate_one(idx: int, ref: DependencyRef) -> None:
            nonlocal stop_at, resolution_error
            async with semaphore:
                if stopped_before(idx):
                    return
                try:
                    verdict = await self.evaluate(ref)
                except ResolutionError as e:
                    if not stopped_before(idx):
                        stop_at, resolution_error = idx, e
                    return
                if stopped_before(idx):
                    return
                recorded[idx] = verdict
                if verdict.failed and self._policy.fail_fast:
                    stop_at, resolution_error = idx, None

        outcomes = await asyncio.gather(
            *(evaluate_one(i, ref) for i, ref in enumerate(refs)),
            return_exceptions=True,
        )
        for outcome in outcomes:
            if isinstance(outcome, BaseException):
                raise outcome

        if resolution_error is not None:
            raise resolution_error

        return EvaluationResult(
            verdicts=[recorded[i] for i in sorted(recorded) if not stopped_before(i)],
            aborted=stop_at is not None,
        )

    async def validate_project(self, dependencies: DependencySet) -> EvaluationResult:
        """Select, order and validate a project's dependencies.

        Dependencies are selected according to policy.include_transitive
        and sorted by conflict id for deterministic runs.

        Args:
            dependencies: Resolved dependencies of the project.

        Returns:
            EvaluationResult for the selected dependencies.

        Raises:
            ResolutionError: If any dependency's descriptor cannot be fetched.
        """
        selected = select_dependencies(dependencies, self._policy.include_transitive)
        ordered = sorted(selected, key=lambda ref: ref.conflict_id.lower())
        self._reporter.info(f"Validating licenses of {len(ordered)} dependencies")
        return await self.validate(ordered)

    def _report(
        self,
        ref: DependencyRef,
        names: tuple[Optional[str], ...],
        classification: Classification,
    ) -> None:
        """Emit diagnostics for one classification."""
        dep_id = ref.conflict_id
        outcome = classification.outcome

        if outcome.is_unlicensed:
            if classification.unlicensed_unset:
                self._reporter.warning(
                    f"{dep_id} declares no license and allowed_unlicensed is "
                    "unset; failing it"
                )
            elif outcome == Outcome.UNLICENSED_ALLOWED:
                self._reporter.info(
                    f"{dep_id} declares no license and matches allowed "
                    f"unlicensed pattern '{classification.unlicensed_pattern}'"
                )
            else:
                self._reporter.error(
                    f"{dep_id} declares no license and does not match any "
                    "allowed unlicensed pattern"
                )
            return

        for name in classification.allowed_matches:
            self._reporter.info(f"{dep_id} matches allowed license {name}")
        for name in classification.banned_matches:
            self._reporter.warning(f"{dep_id} matches banned license {name}")

        listing = ", ".join(str(name) for name in names)
        if outcome == Outcome.ALLOWED:
            self._reporter.info(
                f"{dep_id} has at least one allowed license: {listing}"
            )
        elif outcome == Outcome.BANNED:
            self._reporter.error(
                f"{dep_id} has at least one banned license: {listing}"
            )
        elif outcome == Outcome.UNRECOGNISED_ALLOWED:
            self._reporter.info(
                f"{dep_id} has only licenses neither banned nor allowed: "
                f"{listing}; allowed by default"
            )
        else:
            self._reporter.error(
                f"{dep_id} has only licenses neither banned nor allowed: {listing}"
            )
