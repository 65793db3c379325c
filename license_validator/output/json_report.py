"""JSON output formatter for validation results."""
import json
from datetime import datetime, timezone
from typing import Any

from license_validator import __version__
from license_validator.models.result import EvaluationResult, Verdict


class JsonFormatter:
    """Format validation results as JSON for CI/CD integration."""

    def format_result(self, result: EvaluationResult) -> str:
        """Format an evaluation result as a JSON string.

        Args:
            result: The evaluation result to format.

        Returns:
            JSON string representation of the result.
        """
        output = {
            "metadata": self._build_metadata(),
            "summary": self._build_summary(result),
            "dependencies": [self._build_verdict(v) for v in result.verdicts],
            "violations": [self._build_verdict(v) for v in result.failures],
        }
        return json.dumps(output, indent=2)

    def _build_metadata(self) -> dict[str, Any]:
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
        return {
            "generated_at": timestamp,
            "tool_version": __version__,
        }

    def _build_summary(self, result: EvaluationResult) -> dict[str, Any]:
        return {
            "status": "fail" if result.failed else "pass",
            "total": result.total,
            "passed": result.total - len(result.failures),
            "failed": len(result.failures),
            "aborted": result.aborted,
        }

    def _build_verdict(self, verdict: Verdict) -> dict[str, Any]:
        """Build the JSON entry for one verdict."""
        ref = verdict.dependency
        return {
            "id": ref.conflict_id,
            "group": ref.group,
            "artifact": ref.artifact,
            "version": ref.version,
            "licenses": list(verdict.licenses),
            "outcome": verdict.outcome.value,
            "passed": verdict.passed,
            "reason": verdict.reason,
            "allowed_matches": list(verdict.allowed_matches),
            "banned_matches": list(verdict.banned_matches),
        }
