"""Discovery of a project's directly declared requirements."""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Sequence

from license_validator.exceptions import ConfigurationError

PYPROJECT_NAME = "pyproject.toml"


def read_project_requirements(
    project_dir: Path | None = None,
    optional_groups: Sequence[str] = (),
) -> list[str]:
    """Read direct requirements from a project's pyproject.toml.

    Args:
        project_dir: Directory holding pyproject.toml. Defaults to the
            current working directory.
        optional_groups: Names of [project.optional-dependencies] groups
            to include alongside [project].dependencies.

    Returns:
        Requirement strings in declaration order.

    Raises:
        ConfigurationError: If pyproject.toml is missing, unreadable,
            malformed, or names an unknown optional group.
    """
    path = (project_dir or Path.cwd()) / PYPROJECT_NAME
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(
            f"No packages given and no {PYPROJECT_NAME} found in '{path.parent}'"
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read '{path}': {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML syntax in '{path}': {e}") from e

    project = data.get("project", {})
    requirements = list(project.get("dependencies", []))

    optional = project.get("optional-dependencies", {})
    for group in optional_groups:
        if group not in optional:
            raise ConfigurationError(
                f"Optional dependency group '{group}' not found in '{path}'"
            )
        requirements.extend(optional[group])

    return requirements
