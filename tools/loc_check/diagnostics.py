"""Diagnostics collection and output for loc_check.

Diagnostics are collected while a pattern is checked, then rendered as JSON
so a structure wizard can show the offending segment next to its reason.
"""

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from locpattern import __version__


class Severity(str, Enum):
    """Diagnostic severity levels."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class SourceLocation:
    """Location of a problem inside the pattern string."""

    segment: str | None = None
    column: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass
class Diagnostic:
    """A single diagnostic message."""

    severity: Severity
    code: str
    message: str
    source: SourceLocation | None = None
    context: dict[str, Any] | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "severity": self.severity.value,
            "code": self.code,
            "message": self.message,
        }
        if self.source:
            result["source"] = self.source.to_dict()
        if self.context:
            result["context"] = self.context
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class DiagnosticsCollector:
    """Collects diagnostics for one check run."""

    def __init__(self):
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def add(
        self,
        severity: Severity,
        code: str,
        message: str,
        *,
        segment: str | None = None,
        column: int | None = None,
        context: dict[str, Any] | None = None,
        suggestion: str | None = None,
    ):
        """Add a diagnostic to the collection."""
        source = None
        if segment is not None or column is not None:
            source = SourceLocation(segment=segment, column=column)

        self._diagnostics.append(
            Diagnostic(
                severity=severity,
                code=code,
                message=message,
                source=source,
                context=context,
                suggestion=suggestion,
            )
        )

    def error(self, code: str, message: str, **kwargs):
        """Add an error diagnostic."""
        self.add(Severity.ERROR, code, message, **kwargs)

    def warning(self, code: str, message: str, **kwargs):
        """Add a warning diagnostic."""
        self.add(Severity.WARNING, code, message, **kwargs)

    def info(self, code: str, message: str, **kwargs):
        """Add an info diagnostic."""
        self.add(Severity.INFO, code, message, **kwargs)

    def count(self, severity: Severity) -> int:
        return sum(1 for d in self._diagnostics if d.severity == severity)

    def get_status(self) -> str:
        """Get overall status based on collected diagnostics."""
        severities = {d.severity for d in self._diagnostics}
        if Severity.ERROR in severities:
            return "error"
        if Severity.WARNING in severities:
            return "warning"
        return "success"

    def get_summary(self) -> dict[str, int]:
        """Get counts by severity."""
        return {
            "error_count": self.count(Severity.ERROR),
            "warning_count": self.count(Severity.WARNING),
            "info_count": self.count(Severity.INFO),
        }

    def to_dict(self) -> dict[str, Any]:
        """Convert diagnostics to dictionary for JSON serialization."""
        return {
            "version": "1.0.0",
            "status": self.get_status(),
            "locpattern_version": __version__,
            "timestamp": datetime.now().isoformat(),
            "diagnostics": [d.to_dict() for d in self._diagnostics],
            "summary": self.get_summary(),
        }

    def write_json(self, path: str | Path):
        """Write diagnostics to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
