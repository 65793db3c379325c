"""Output formatters for license-validator."""

from license_validator.output.json_report import JsonFormatter
from license_validator.output.reporter import Reporter
from license_validator.output.terminal import TerminalFormatter

__all__ = [
    "JsonFormatter",
    "Reporter",
    "TerminalFormatter",
]
