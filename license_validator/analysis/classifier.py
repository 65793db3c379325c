"""License classification against an allow/ban policy.

The classifier is a pure function: it performs no I/O, keeps no state
beyond a cache of compiled patterns, and never raises for a valid
Policy. Reporting the outcome is left to the caller.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional, Sequence, cast

from license_validator.models.dependency import LicenseEntry
from license_validator.models.policy import Policy
from license_validator.models.result import Classification, Outcome


@lru_cache(maxsize=None)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def matches_pattern(value: str, pattern: str) -> bool:
    """Check whether a value matches a configured pattern.

    A value matches when it equals the pattern exactly or when the
    pattern, read as a regular expression, matches the entire value.
    Matching is case-sensitive, so "Apache.*" matches
    "Apache License 2.0" but "Apache" does not.

    Args:
        value: License name or dependency key.
        pattern: Configured literal or regular expression.

    Returns:
        True if the value matches.
    """
    if value == pattern:
        return True
    return _compile(pattern).fullmatch(value) is not None


def first_match(value: str, patterns: Sequence[str]) -> Optional[str]:
    """Return the first pattern matching value, or None."""
    for pattern in patterns:
        if matches_pattern(value, pattern):
            return pattern
    return None


def classify_unlicensed(dependency_key: str, policy: Policy) -> Classification:
    """Apply the unlicensed rule to a dependency declaring no license.

    Args:
        dependency_key: ``group:artifact`` identity of the dependency.
        policy: Policy in force.

    Returns:
        UNLICENSED_ALLOWED if the key matches an allowed_unlicensed
        pattern, UNLICENSED_BANNED otherwise (always when the pattern
        list is unset).
    """
    if policy.allowed_unlicensed is None:
        return Classification(
            outcome=Outcome.UNLICENSED_BANNED,
            unlicensed_unset=True,
        )

    pattern = first_match(dependency_key, policy.allowed_unlicensed)
    if pattern is not None:
        return Classification(
            outcome=Outcome.UNLICENSED_ALLOWED,
            unlicensed_pattern=pattern,
        )
    return Classification(outcome=Outcome.UNLICENSED_BANNED)


def classify(
    dependency_key: str,
    licenses: Sequence[LicenseEntry],
    policy: Policy,
) -> Classification:
    """Classify a dependency's declared licenses against a policy.

    Decision order:
    1. No licenses, or any license without a name: unlicensed rule.
    2. Any license matching an allowed pattern: ALLOWED, even if other
       (or the same) licenses match a banned pattern.
    3. Any license matching a banned pattern: BANNED.
    4. Otherwise UNRECOGNISED_ALLOWED or UNRECOGNISED_BANNED depending
       on policy.allow_unrecognised.

    Every license is checked against every pattern so that the
    classification lists all allowed and banned matches.

    Args:
        dependency_key: ``group:artifact`` identity of the dependency.
        licenses: Declared license entries.
        policy: Policy in force.

    Returns:
        Classification with the outcome and the matching license names.
    """
    names = [entry.name for entry in licenses]
    if not names or None in names:
        return classify_unlicensed(dependency_key, policy)

    allowed_matches: list[str] = []
    banned_matches: list[str] = []

    for name in cast(list[str], names):
        for pattern in policy.allowed_licenses:
            if matches_pattern(name, pattern) and name not in allowed_matches:
                allowed_matches.append(name)
        for pattern in policy.banned_licenses:
            if matches_pattern(name, pattern) and name not in banned_matches:
                banned_matches.append(name)

    if allowed_matches:
        outcome = Outcome.ALLOWED
    elif banned_matches:
        outcome = Outcome.BANNED
    elif policy.allow_unrecognised:
        outcome = Outcome.UNRECOGNISED_ALLOWED
    else:
        outcome = Outcome.UNRECOGNISED_BANNED

    return Classification(
        outcome=outcome,
        allowed_matches=tuple(allowed_matches),
        banned_matches=tuple(banned_matches),
    )
