"""Tests for the license classifier."""
from typing import Optional

import pytest

from license_validator.analysis.classifier import (
    classify,
    classify_unlicensed,
    first_match,
    matches_pattern,
)
from license_validator.models.dependency import LicenseEntry
from license_validator.models.policy import Policy
from license_validator.models.result import Outcome


def entries(*names: Optional[str]) -> list[LicenseEntry]:
    """Build license entries from names."""
    return [LicenseEntry(name=name) for name in names]


class TestMatchesPattern:
    """Tests for two-stage pattern matching."""

    def test_exact_match(self) -> None:
        assert matches_pattern("MIT", "MIT")

    def test_regex_full_match(self) -> None:
        assert matches_pattern("Apache License 2.0", "Apache.*")

    def test_literal_prefix_does_not_match(self) -> None:
        """Test that a bare substring pattern does not partially match."""
        assert not matches_pattern("Apache License 2.0", "Apache")

    def test_regex_must_cover_whole_value(self) -> None:
        assert not matches_pattern("LGPL-3.0", "GPL.*")

    def test_case_sensitive(self) -> None:
        assert not matches_pattern("MIT", "mit")

    def test_equality_checked_before_regex(self) -> None:
        """Test that a pattern with regex metacharacters matches itself."""
        # "GPL-2.0+" as a regex means "GPL-2.0" followed by one or more "0"
        assert matches_pattern("GPL-2.0+", "GPL-2.0+")

    def test_dot_in_pattern_is_regex(self) -> None:
        assert matches_pattern("Apache-2x0", "Apache-2.0")

    def test_first_match_returns_pattern(self) -> None:
        assert first_match("BSD-3-Clause", ["MIT", "BSD.*", "BSD-3-Clause"]) == "BSD.*"

    def test_first_match_none(self) -> None:
        assert first_match("MIT", ["GPL.*"]) is None


class TestUnlicensedRule:
    """Tests for dependencies declaring no license."""

    def test_no_licenses_without_allowed_unlicensed_fails(self) -> None:
        policy = Policy()

        result = classify("org.example:lib", [], policy)

        assert result.outcome == Outcome.UNLICENSED_BANNED
        assert not result.passed
        assert not result.unlicensed_unset

    def test_no_licenses_matching_exact_key_passes(self) -> None:
        policy = Policy(allowed_unlicensed=("org.example:lib",))

        result = classify("org.example:lib", [], policy)

        assert result.outcome == Outcome.UNLICENSED_ALLOWED
        assert result.passed
        assert result.unlicensed_pattern == "org.example:lib"

    def test_no_licenses_matching_regex_key_passes(self) -> None:
        policy = Policy(allowed_unlicensed=("internal-.*",))

        result = classify("internal-tools", [], policy)

        assert result.outcome == Outcome.UNLICENSED_ALLOWED

    def test_no_licenses_not_matching_key_fails(self) -> None:
        policy = Policy(allowed_unlicensed=("internal-.*",))

        result = classify("requests", [], policy)

        assert result.outcome == Outcome.UNLICENSED_BANNED

    def test_unset_allowed_unlicensed_always_fails(self) -> None:
        """Test that an unset list fails with the distinct unset flag."""
        policy = Policy(allowed_unlicensed=None)

        result = classify("anything", [], policy)

        assert result.outcome == Outcome.UNLICENSED_BANNED
        assert result.unlicensed_unset

    def test_entry_without_name_is_unlicensed(self) -> None:
        policy = Policy(allowed_licenses=("MIT",))

        result = classify("lib", entries(None), policy)

        assert result.outcome == Outcome.UNLICENSED_BANNED

    def test_one_unnamed_entry_makes_whole_dependency_unlicensed(self) -> None:
        """Test that an allowed license does not rescue an unnamed entry."""
        policy = Policy(allowed_licenses=("MIT",))

        result = classify("lib", entries("MIT", None), policy)

        assert result.outcome == Outcome.UNLICENSED_BANNED
        assert result.allowed_matches == ()

    def test_unnamed_entry_with_allowed_unlicensed_passes(self) -> None:
        policy = Policy(banned_licenses=("GPL.*",), allowed_unlicensed=("lib",))

        result = classify("lib", entries("GPL-3.0", None), policy)

        assert result.outcome == Outcome.UNLICENSED_ALLOWED

    def test_classify_unlicensed_directly(self) -> None:
        policy = Policy(allowed_unlicensed=("a", "b"))

        assert classify_unlicensed("b", policy).unlicensed_pattern == "b"


class TestAllowBanPrecedence:
    """Tests for allow-over-ban-over-default precedence."""

    def test_allowed_license_passes(self) -> None:
        policy = Policy(allowed_licenses=("MIT",))

        result = classify("lib", entries("MIT"), policy)

        assert result.outcome == Outcome.ALLOWED
        assert result.allowed_matches == ("MIT",)

    def test_banned_license_fails(self) -> None:
        policy = Policy(banned_licenses=("GPL.*",))

        result = classify("lib", entries("GPL-3.0"), policy)

        assert result.outcome == Outcome.BANNED
        assert result.banned_matches == ("GPL-3.0",)

    def test_allow_overrides_ban_across_licenses(self) -> None:
        """Test MIT + GPL-3.0 passes when MIT is allowed and GPL.* banned."""
        policy = Policy(
            allowed_licenses=("MIT",),
            banned_licenses=("GPL.*",),
            allow_unrecognised=False,
        )

        result = classify("lib", entries("MIT", "GPL-3.0"), policy)

        assert result.outcome == Outcome.ALLOWED
        assert result.passed

    def test_allow_overrides_ban_for_same_license(self) -> None:
        policy = Policy(allowed_licenses=("GPL-3.0",), banned_licenses=("GPL.*",))

        result = classify("lib", entries("GPL-3.0"), policy)

        assert result.outcome == Outcome.ALLOWED

    def test_allow_overrides_ban_regardless_of_order(self) -> None:
        policy = Policy(allowed_licenses=("MIT",), banned_licenses=("GPL.*",))

        result = classify("lib", entries("GPL-3.0", "Unknown-1.0", "MIT"), policy)

        assert result.outcome == Outcome.ALLOWED

    def test_all_licenses_checked_without_short_circuit(self) -> None:
        """Test that every license is matched against every pattern."""
        policy = Policy(
            allowed_licenses=("MIT", "BSD.*"),
            banned_licenses=("GPL.*", "AGPL.*"),
        )

        result = classify(
            "lib", entries("MIT", "GPL-2.0", "BSD-2-Clause", "AGPL-3.0"), policy
        )

        assert result.allowed_matches == ("MIT", "BSD-2-Clause")
        assert result.banned_matches == ("GPL-2.0", "AGPL-3.0")

    def test_ban_beats_unrecognised_default(self) -> None:
        policy = Policy(banned_licenses=("GPL.*",), allow_unrecognised=True)

        result = classify("lib", entries("Unknown-1.0", "GPL-2.0"), policy)

        assert result.outcome == Outcome.BANNED

    def test_unmatched_license_fails_by_default(self) -> None:
        """Test Apache-2.0 fails when matched by neither list."""
        policy = Policy(
            allowed_licenses=("MIT",),
            banned_licenses=("GPL.*",),
            allow_unrecognised=False,
        )

        result = classify("lib", entries("Apache-2.0"), policy)

        assert result.outcome == Outcome.UNRECOGNISED_BANNED
        assert not result.passed

    def test_unmatched_license_passes_when_allowed_by_default(self) -> None:
        policy = Policy(allowed_licenses=("MIT",), allow_unrecognised=True)

        result = classify("lib", entries("Apache-2.0"), policy)

        assert result.outcome == Outcome.UNRECOGNISED_ALLOWED
        assert result.passed

    def test_empty_policy_fails_any_license(self) -> None:
        result = classify("lib", entries("MIT"), Policy())

        assert result.outcome == Outcome.UNRECOGNISED_BANNED

    def test_allowed_unlicensed_ignored_when_licenses_declared(self) -> None:
        """Test that a declared license must meet the normal rules."""
        policy = Policy(allowed_unlicensed=("lib",))

        result = classify("lib", entries("Proprietary"), policy)

        assert result.outcome == Outcome.UNRECOGNISED_BANNED


class TestClassifierPurity:
    """Tests that classification is a pure function."""

    @pytest.mark.parametrize(
        "names",
        [
            (),
            ("MIT",),
            ("GPL-3.0",),
            ("MIT", "GPL-3.0"),
            ("Apache-2.0",),
            ("MIT", None),
        ],
    )
    def test_repeated_classification_is_identical(
        self, names: tuple[Optional[str], ...]
    ) -> None:
        policy = Policy(
            allowed_licenses=("MIT",),
            banned_licenses=("GPL.*",),
            allowed_unlicensed=("lib",),
        )
        licenses = entries(*names)

        first = classify("lib", licenses, policy)
        second = classify("lib", licenses, policy)

        assert first == second

    def test_inputs_not_mutated(self) -> None:
        licenses = entries("MIT", "GPL-3.0")
        snapshot = list(licenses)

        classify("lib", licenses, Policy(allowed_licenses=("MIT",)))

        assert licenses == snapshot
