"""Tests for classification and result Pydantic models."""
import pytest

from license_validator.models.dependency import DependencyRef
from license_validator.models.result import (
    OUTCOME_REASONS,
    Classification,
    EvaluationResult,
    Outcome,
    Verdict,
)


def make_verdict(outcome: Outcome, artifact: str = "lib", **kwargs: object) -> Verdict:
    return Verdict(
        dependency=DependencyRef(artifact=artifact, version="1.0"),
        outcome=outcome,
        **kwargs,  # type: ignore[arg-type]
    )


class TestOutcome:
    """Tests for Outcome pass/fail mapping."""

    @pytest.mark.parametrize(
        "outcome",
        [Outcome.ALLOWED, Outcome.UNRECOGNISED_ALLOWED, Outcome.UNLICENSED_ALLOWED],
    )
    def test_passing_outcomes(self, outcome: Outcome) -> None:
        assert outcome.passed

    @pytest.mark.parametrize(
        "outcome",
        [Outcome.BANNED, Outcome.UNRECOGNISED_BANNED, Outcome.UNLICENSED_BANNED],
    )
    def test_failing_outcomes(self, outcome: Outcome) -> None:
        assert not outcome.passed

    def test_is_unlicensed(self) -> None:
        assert Outcome.UNLICENSED_ALLOWED.is_unlicensed
        assert Outcome.UNLICENSED_BANNED.is_unlicensed
        assert not Outcome.BANNED.is_unlicensed

    def test_every_outcome_has_reason(self) -> None:
        assert set(OUTCOME_REASONS) == set(Outcome)


class TestClassification:
    def test_passed_follows_outcome(self) -> None:
        assert Classification(outcome=Outcome.ALLOWED).passed
        assert not Classification(outcome=Outcome.BANNED).passed


class TestVerdict:
    """Tests for Verdict model."""

    def test_passed_and_failed(self) -> None:
        verdict = make_verdict(Outcome.BANNED)

        assert verdict.failed
        assert not verdict.passed

    def test_reason(self) -> None:
        verdict = make_verdict(Outcome.UNLICENSED_BANNED)

        assert verdict.reason == "No license declared"

    def test_violating_licenses_prefers_banned_matches(self) -> None:
        verdict = make_verdict(
            Outcome.BANNED,
            licenses=("GPL-3.0", "Other"),
            banned_matches=("GPL-3.0",),
        )

        assert verdict.violating_licenses == ("GPL-3.0",)

    def test_violating_licenses_for_unrecognised(self) -> None:
        verdict = make_verdict(Outcome.UNRECOGNISED_BANNED, licenses=("Apache-2.0",))

        assert verdict.violating_licenses == ("Apache-2.0",)

    def test_passing_verdict_has_no_violating_licenses(self) -> None:
        verdict = make_verdict(
            Outcome.ALLOWED,
            licenses=("MIT", "GPL-3.0"),
            allowed_matches=("MIT",),
            banned_matches=("GPL-3.0",),
        )

        assert verdict.violating_licenses == ()


class TestEvaluationResult:
    """Tests for EvaluationResult aggregate."""

    def test_empty_result_passes(self) -> None:
        result = EvaluationResult()

        assert result.passed
        assert not result.failed
        assert result.total == 0

    def test_any_failure_fails_run(self) -> None:
        result = EvaluationResult(
            verdicts=[
                make_verdict(Outcome.ALLOWED, "a"),
                make_verdict(Outcome.BANNED, "b"),
                make_verdict(Outcome.UNLICENSED_ALLOWED, "c"),
            ]
        )

        assert result.failed
        assert result.total == 3
        assert [v.dependency.artifact for v in result.failures] == ["b"]

    def test_all_passing(self) -> None:
        result = EvaluationResult(
            verdicts=[
                make_verdict(Outcome.ALLOWED, "a"),
                make_verdict(Outcome.UNRECOGNISED_ALLOWED, "b"),
            ]
        )

        assert result.passed
        assert result.failures == []
