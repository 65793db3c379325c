"""Extraction of declared licenses from Python core metadata."""

from __future__ import annotations

from typing import Iterable, Optional

from license_validator.constants import PLACEHOLDER_LICENSE_VALUES
from license_validator.models.dependency import LicenseEntry

LICENSE_CLASSIFIER_PREFIX = "License ::"


def _declared(value: Optional[str]) -> Optional[str]:
    """Strip a license field, returning None for blanks and placeholders."""
    if value is None:
        return None
    cleaned = value.strip()
    if cleaned.upper() in PLACEHOLDER_LICENSE_VALUES:
        return None
    return cleaned


def license_from_classifier(classifier: str) -> Optional[str]:
    """Extract the license name from a trove classifier.

    Args:
        classifier: e.g. "License :: OSI Approved :: MIT License".

    Returns:
        The last segment ("MIT License"), or None for non-license
        classifiers and for the bare "License :: OSI Approved".
    """
    if not classifier.startswith(LICENSE_CLASSIFIER_PREFIX):
        return None
    segments = [part.strip() for part in classifier.split("::")]
    if segments[1:] == ["OSI Approved"]:
        return None
    return segments[-1] or None


def extract_licenses(
    license_expression: Optional[str],
    license_field: Optional[str],
    classifiers: Iterable[str],
) -> list[LicenseEntry]:
    """Collect declared licenses from core metadata fields.

    Values are kept as written; no normalization is performed.

    Args:
        license_expression: PEP 639 License-Expression value.
        license_field: Legacy License value.
        classifiers: Trove classifiers.

    Returns:
        License entries in declaration order, without duplicates.
    """
    names: list[str] = []

    for value in (_declared(license_expression), _declared(license_field)):
        if value is not None and value not in names:
            names.append(value)

    for classifier in classifiers:
        name = license_from_classifier(classifier)
        if name is not None and name not in names:
            names.append(name)

    return [LicenseEntry(name=name) for name in names]


def normalize_name(name: str) -> str:
    """Normalize a distribution name so lookups ignore case and separators.

    Args:
        name: Distribution name to normalize.

    Returns:
        Lowercase name with "-" and "." replaced by "_".
    """
    return name.lower().replace("-", "_").replace(".", "_")
