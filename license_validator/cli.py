"""CLI entry point for license-validator."""

from __future__ import annotations

import asyncio
import sys
from io import StringIO
from pathlib import Path
from typing import Any, Literal, Optional, cast

import click
import httpx
from rich.console import Console
from rich.markup import escape

from license_validator import __version__
from license_validator.config import ValidatorConfig, build_policy, load_config
from license_validator.constants import EXIT_ERROR, EXIT_SUCCESS, EXIT_VIOLATIONS
from license_validator.exceptions import (
    ConfigurationError,
    LicenseValidatorError,
    ResolutionError,
)
from license_validator.models.options import ValidateOptions, Verbosity
from license_validator.models.policy import Policy
from license_validator.models.result import EvaluationResult
from license_validator.output.json_report import JsonFormatter
from license_validator.output.reporter import Reporter
from license_validator.output.terminal import TerminalFormatter
from license_validator.project import read_project_requirements
from license_validator.resolvers.dependency import DependencyResolver
from license_validator.resolvers.installed import InstalledDescriptorProvider
from license_validator.resolvers.pypi import PyPIDescriptorProvider
from license_validator.resolvers.repository import RepositoryDescriptorProvider
from license_validator.validator import LicenseValidator

# Module-level console for consistent output
_console = Console()
# Separate console for diagnostics and errors (writes to stderr)
_error_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Python License Validator - Enforce a license policy on dependencies.

    Checks the licenses declared by your project's dependencies against
    allowed and banned lists and fails when a dependency violates them.

    \b
    Examples:
        license-validator validate
        license-validator validate requests click
        license-validator validate --no-fail-fast --format json
    """
    pass


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--project",
    "project_dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Project directory holding pyproject.toml (default: current directory).",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["terminal", "json"], case_sensitive=False),
    default="terminal",
    help="Output format for the report (default: terminal).",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Write report to file instead of stdout.",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show every dependency and all diagnostic messages.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Show only the status line and failing dependencies.",
)
@click.option(
    "--fail-fast/--no-fail-fast",
    default=None,
    help="Stop at the first failing dependency (default: from config, true).",
)
@click.option(
    "--transitive/--direct-only",
    "include_transitive",
    default=None,
    help="Include transitive dependencies (default: from config, true).",
)
@click.option(
    "--allow-unrecognised/--ban-unrecognised",
    "allow_unrecognised",
    default=None,
    help="Pass licenses that are neither allowed nor banned "
    "(default: from config, false).",
)
@click.option(
    "--allow",
    "allowed",
    multiple=True,
    help="Additional allowed license name or regular expression.",
)
@click.option(
    "--ban",
    "banned",
    multiple=True,
    help="Additional banned license name or regular expression.",
)
@click.option(
    "--allow-unlicensed",
    "allowed_unlicensed",
    multiple=True,
    help="Additional dependency allowed to declare no license.",
)
@click.option(
    "--offline",
    is_flag=True,
    default=False,
    help="Use installed metadata only, never query remote repositories.",
)
@click.option(
    "--concurrency",
    type=click.IntRange(min=1),
    default=None,
    help="Number of dependencies evaluated concurrently (default: 1).",
)
@click.argument("packages", nargs=-1)
def validate(
    config_path: str | None,
    project_dir: str | None,
    output_format: str,
    output_path: str | None,
    verbose_flag: bool,
    quiet_flag: bool,
    fail_fast: Optional[bool],
    include_transitive: Optional[bool],
    allow_unrecognised: Optional[bool],
    allowed: tuple[str, ...],
    banned: tuple[str, ...],
    allowed_unlicensed: tuple[str, ...],
    offline: bool,
    concurrency: Optional[int],
    packages: tuple[str, ...],
) -> None:
    """Validate dependency licenses against the configured policy.

    PACKAGES are requirement strings treated as the direct dependencies.
    If none are given, they are read from [project].dependencies in the
    project's pyproject.toml. A requirement pinned with == that is not
    installed is looked up in the configured repositories.

    \b
    Examples:
        license-validator validate
        license-validator validate "requests>=2" click
        license-validator validate --direct-only --allow MIT --ban "GPL.*"
        license-validator validate --no-fail-fast --format json -o report.json
        license-validator validate --config custom-config.yaml
    """
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")

    if quiet_flag:
        verbosity = Verbosity.QUIET
    elif verbose_flag:
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL

    format_value = cast(Literal["terminal", "json"], output_format.lower())
    options = ValidateOptions(format=format_value, verbosity=verbosity)
    project_path = Path(project_dir) if project_dir is not None else None

    try:
        config = load_config(config_path, search_dir=project_path)
        config = _apply_cli_overrides(
            config,
            fail_fast=fail_fast,
            include_transitive=include_transitive,
            allow_unrecognised=allow_unrecognised,
            allowed=allowed,
            banned=banned,
            allowed_unlicensed=allowed_unlicensed,
            offline=offline,
            concurrency=concurrency,
        )
        policy = build_policy(config)

        if packages:
            requirements = list(packages)
        else:
            requirements = read_project_requirements(
                project_path, config.optional_dependencies
            )

        reporter = Reporter(console=_error_console, verbosity=verbosity)
        result = asyncio.run(_run_validation(requirements, config, policy, reporter))
        _display_result(result, options, output_path)

        if result.failed:
            sys.exit(EXIT_VIOLATIONS)
        sys.exit(EXIT_SUCCESS)

    except LicenseValidatorError as e:
        _display_error(e, options.format)
        sys.exit(EXIT_ERROR)


def _apply_cli_overrides(
    config: ValidatorConfig,
    fail_fast: Optional[bool] = None,
    include_transitive: Optional[bool] = None,
    allow_unrecognised: Optional[bool] = None,
    allowed: tuple[str, ...] = (),
    banned: tuple[str, ...] = (),
    allowed_unlicensed: tuple[str, ...] = (),
    offline: bool = False,
    concurrency: Optional[int] = None,
) -> ValidatorConfig:
    """Overlay command-line options on the loaded configuration.

    Flags that were not given leave the configured value untouched;
    pattern options extend the configured lists.

    Returns:
        A new ValidatorConfig.
    """
    update: dict[str, Any] = {}
    if fail_fast is not None:
        update["fail_fast"] = fail_fast
    if include_transitive is not None:
        update["include_transitive_dependencies"] = include_transitive
    if allow_unrecognised is not None:
        update["allow_unrecognised"] = allow_unrecognised
    if allowed:
        update["allowed_licenses"] = [*config.allowed_licenses, *allowed]
    if banned:
        update["banned_licenses"] = [*config.banned_licenses, *banned]
    if allowed_unlicensed:
        update["allowed_unlicensed"] = [
            *(config.allowed_unlicensed or []),
            *allowed_unlicensed,
        ]
    if offline:
        update["offline"] = True
    if concurrency is not None:
        update["max_concurrency"] = concurrency
    return config.model_copy(update=update)


async def _run_validation(
    requirements: list[str],
    config: ValidatorConfig,
    policy: Policy,
    reporter: Reporter,
) -> EvaluationResult:
    """Resolve the project's dependencies and validate their licenses.

    Args:
        requirements: Direct requirement strings.
        config: Loaded configuration (repository settings).
        policy: License policy for the run.
        reporter: Destination for diagnostic messages.

    Returns:
        EvaluationResult of the run.

    Raises:
        ResolutionError: If a dependency or its descriptor cannot be resolved.
        ConfigurationError: If a requirement string is malformed.
    """
    dependencies = DependencyResolver(reporter=reporter).resolve(requirements)

    # Shared HTTP client for connection reuse across remote lookups
    async with httpx.AsyncClient() as client:
        remotes = []
        if not config.offline:
            remotes = [
                PyPIDescriptorProvider(base_url=url, client=client)
                for url in config.repositories
            ]
        provider = RepositoryDescriptorProvider(
            local=InstalledDescriptorProvider(), remotes=remotes
        )
        validator = LicenseValidator(policy, provider, reporter)
        return await validator.validate_project(dependencies)


def _write_output_to_file(content: str, path: str) -> None:
    """Write report content to file.

    Args:
        content: The report content to write.
        path: The file path to write to.

    Raises:
        ConfigurationError: If file cannot be written.
    """
    file_path = Path(path)

    try:
        if file_path.exists():
            _error_console.print(
                f"[yellow]Warning: Overwriting existing file: {path}[/yellow]"
            )
        file_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot write to file '{path}': {e}") from e

    _error_console.print(f"[green]Report written to {path}[/green]")


def _display_result(
    result: EvaluationResult,
    options: ValidateOptions,
    output_path: str | None = None,
) -> None:
    """Display the validation result in the specified format.

    Args:
        result: The evaluation result to display.
        options: Output options including format.
        output_path: Optional file path to write output to.
    """
    if options.format == "json":
        content = JsonFormatter().format_result(result)
    elif output_path:
        # Terminal format to file is rendered as plain text
        recorder = Console(file=StringIO(), record=True, width=120)
        TerminalFormatter(console=recorder, verbosity=options.verbosity).format_result(
            result
        )
        content = recorder.export_text()
    else:
        TerminalFormatter(console=_console, verbosity=options.verbosity).format_result(
            result
        )
        return

    if output_path:
        _write_output_to_file(content, output_path)
    else:
        click.echo(content)


def _display_error(error: LicenseValidatorError, format_type: str) -> None:
    """Display error message to user on stderr.

    Args:
        error: The exception that occurred.
        format_type: Output format type for styling.
    """
    error_type = type(error).__name__
    message = f"Error: {error_type}: {error}"
    if isinstance(error, ResolutionError) and error.ref is not None:
        message += f" [dependency: {error.ref.conflict_id}]"

    if format_type == "terminal":
        _error_console.print(f"[red bold]{escape(message)}[/red bold]")
    else:
        click.echo(message, err=True)


if __name__ == "__main__":
    main()
