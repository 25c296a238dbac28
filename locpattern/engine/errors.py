"""Errors raised by the location pattern engine."""


class PatternError(Exception):
    """Base class for pattern expansion failures.

    Attributes:
        code: Stable machine-readable error code
        segment: Offending pattern segment (or the whole input)
        column: 0-based offset inside ``segment`` where the problem starts
        expected: Short description of the grammar expected at that point
        context: Extra machine-readable facts, e.g. requested vs. allowed size
    """

    code = "PATTERN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        segment: str | None = None,
        column: int | None = None,
        expected: str | None = None,
        code: str | None = None,
        context: dict | None = None,
    ):
        self.reason = message
        self.context = context
        self.segment = segment
        self.column = column
        self.expected = expected
        if code is not None:
            self.code = code
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.reason]
        if self.segment is not None:
            where = f"in segment '{self.segment}'"
            if self.column is not None:
                where += f" at column {self.column}"
            parts.append(where)
        if self.expected:
            parts.append(f"(expected {self.expected})")
        return " ".join(parts)

    def to_dict(self) -> dict:
        result = {"code": self.code, "message": self.reason}
        if self.segment is not None:
            result["segment"] = self.segment
        if self.column is not None:
            result["column"] = self.column
        if self.expected:
            result["expected"] = self.expected
        if self.context:
            result["context"] = self.context
        return result


class InvalidPatternError(PatternError):
    """Raised when a segment is syntactically or semantically malformed."""

    code = "INVALID_PATTERN"


class LimitExceededError(PatternError):
    """Raised when an input would exceed a configured safety limit."""

    code = "LIMIT_EXCEEDED"
