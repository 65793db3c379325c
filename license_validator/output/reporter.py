"""Severity-tagged diagnostic messages written with Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape

from license_validator.models.options import Verbosity


class Reporter:
    """Report diagnostic messages at info, warning or error severity.

    Messages go to stderr so that machine-readable reports on stdout
    stay clean. Verbosity filters what is shown:
    quiet shows errors, normal adds warnings, verbose adds info.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the reporter.

        Args:
            console: Optional Rich Console instance. If not provided,
                a Console writing to stderr is created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console(stderr=True)
        self._verbosity = verbosity

    def info(self, message: str) -> None:
        if self._verbosity == Verbosity.VERBOSE:
            self._console.print(f"[dim]INFO[/dim] {escape(message)}")

    def warning(self, message: str) -> None:
        if self._verbosity != Verbosity.QUIET:
            self._console.print(f"[yellow]WARNING[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red]ERROR[/red] {escape(message)}")
