"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from license_validator.models.options import Verbosity
from license_validator.models.result import EvaluationResult, Verdict


def _format_licenses(licenses: tuple[Optional[str], ...]) -> str:
    if not licenses:
        return "None declared"
    return ", ".join(name if name is not None else "<unnamed>" for name in licenses)


class TerminalFormatter:
    """Format validation results for terminal display using Rich.

    Shows a summary panel, a table of evaluated dependencies and the
    list of failing dependencies with their violating licenses.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_result(self, result: EvaluationResult) -> None:
        """Format and display a validation result.

        Args:
            result: The evaluation result to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(result)
            return

        if result.total == 0:
            self._console.print("[yellow]No dependencies to validate[/yellow]")
            return

        self._print_summary(result)

        table = Table(title="License Validation Results")
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Licenses", style="magenta")
        table.add_column("Result")

        for verdict in result.verdicts:
            # Normal verbosity lists failures only once the run has any
            if (
                self._verbosity == Verbosity.NORMAL
                and result.failed
                and verdict.passed
            ):
                continue
            status = "[green]PASS[/green]" if verdict.passed else "[red]FAIL[/red]"
            if self._verbosity == Verbosity.VERBOSE:
                status += f" ({escape(verdict.reason)})"
            table.add_row(
                escape(verdict.dependency.conflict_id),
                escape(_format_licenses(verdict.licenses)),
                status,
            )

        self._console.print(table)

        if result.failed:
            self._print_failures(result)

    def _print_quiet_output(self, result: EvaluationResult) -> None:
        """Print minimal output for quiet mode: status line and failures."""
        if result.failed:
            self._console.print(
                f"[red]FAILED[/red] - {len(result.failures)} dependency(ies) "
                "violate the license policy"
            )
            for verdict in result.failures:
                self._print_failure_line(verdict)
        else:
            self._console.print(
                f"[green]PASS[/green] - All {result.total} dependencies comply"
            )

    def _print_summary(self, result: EvaluationResult) -> None:
        """Print summary panel."""
        if result.failed:
            status, color = "FAILED", "red"
        else:
            status, color = "PASS", "green"

        lines = [
            f"Dependencies Evaluated: {result.total}",
            f"Passed: {result.total - len(result.failures)}",
            f"Failed: {len(result.failures)}",
        ]
        if result.aborted:
            lines.append("Stopped at first failure (fail-fast)")
        lines.extend(["", f"Status: [{color}]{status}[/{color}]"])

        panel = Panel(
            "\n".join(lines),
            title="[bold]LICENSE VALIDATION[/bold]",
            border_style=color,
        )
        self._console.print(panel)
        self._console.print("")

    def _print_failures(self, result: EvaluationResult) -> None:
        """Print the failing dependencies section."""
        self._console.print("")
        self._console.print(
            f"[bold red]License Violations ({len(result.failures)})[/bold red]"
        )
        for verdict in result.failures:
            self._print_failure_line(verdict)

    def _print_failure_line(self, verdict: Verdict) -> None:
        licenses = _format_licenses(verdict.violating_licenses)
        self._console.print(
            f"  [red]![/red] {escape(verdict.dependency.conflict_id)} "
            f"([yellow]{escape(licenses)}[/yellow]): {escape(verdict.reason)}"
        )
