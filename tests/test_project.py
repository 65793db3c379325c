"""Tests for project requirement discovery."""
from pathlib import Path

import pytest

from license_validator.exceptions import ConfigurationError
from license_validator.project import read_project_requirements

PYPROJECT = """\
[project]
name = "demo"
version = "0.1.0"
dependencies = ["requests>=2.31", "click"]

[project.optional-dependencies]
test = ["pytest"]
docs = ["sphinx"]
"""


class TestReadProjectRequirements:
    """Tests for read_project_requirements."""

    def test_reads_dependencies(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PYPROJECT)

        assert read_project_requirements(tmp_path) == ["requests>=2.31", "click"]

    def test_includes_optional_groups(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PYPROJECT)

        result = read_project_requirements(tmp_path, ["test"])

        assert result == ["requests>=2.31", "click", "pytest"]

    def test_unknown_optional_group_raises(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text(PYPROJECT)

        with pytest.raises(ConfigurationError) as exc_info:
            read_project_requirements(tmp_path, ["lint"])
        assert "'lint'" in str(exc_info.value)

    def test_no_dependencies_declared(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[project]\nname = "demo"\n')

        assert read_project_requirements(tmp_path) == []

    def test_missing_pyproject_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            read_project_requirements(tmp_path)
        assert "no pyproject.toml found" in str(exc_info.value)

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[project\n")

        with pytest.raises(ConfigurationError) as exc_info:
            read_project_requirements(tmp_path)
        assert "Invalid TOML syntax" in str(exc_info.value)

    def test_uses_cwd_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "pyproject.toml").write_text(PYPROJECT)
        monkeypatch.chdir(tmp_path)

        assert read_project_requirements() == ["requests>=2.31", "click"]
