"""Core loc_check logic."""

from dataclasses import dataclass, field

from locpattern.engine import (
    ExpansionLimits,
    PatternError,
    expand,
    find_duplicates,
    flatten,
    parse,
)
from locpattern.engine.limits import DEFAULT_LIMITS
from locpattern.engine.parser import split_segments

from .diagnostics import DiagnosticsCollector


@dataclass
class CheckResult:
    """Result of a loc_check run."""
    success: bool
    pattern: str
    segments: list[str] = field(default_factory=list)
    total_nodes: int = 0
    root_nodes: int = 0
    warnings: int = 0
    errors: int = 0
    error_messages: list[str] = field(default_factory=list)
    diagnostics: dict | None = None


def check_pattern(
    pattern: str,
    limits: ExpansionLimits | None = None,
    collector: DiagnosticsCollector | None = None,
) -> CheckResult:
    """
    Check a pattern without persisting anything.

    Every segment is parsed on its own so that all malformed segments are
    reported, not only the first one. Expansion runs only once the whole
    pattern parses.

    Args:
        pattern: Location pattern string
        limits: Safety limits (defaults apply when omitted)
        collector: Collector to record into (a fresh one when omitted)

    Returns:
        CheckResult with counts and structured diagnostics
    """
    limits = limits or DEFAULT_LIMITS
    collector = collector if collector is not None else DiagnosticsCollector()
    result = CheckResult(success=False, pattern=pattern)
    result.segments = split_segments(pattern)

    for segment in result.segments:
        try:
            parse(segment, limits)
        except PatternError as e:
            _record_error(collector, result, e)

    if not result.errors:
        try:
            nodes = expand(pattern, limits)
        except PatternError as e:
            _record_error(collector, result, e)
        else:
            result.root_nodes = len(nodes)
            result.total_nodes = len(flatten(nodes))
            for name in find_duplicates(nodes):
                collector.warning(
                    "DUPLICATE_NAME",
                    f"Location '{name}' is generated more than once",
                    suggestion="Remove the overlapping segment or change its prefix",
                )
            if not nodes:
                collector.info("EMPTY_PATTERN", "Pattern generates no locations")

    result.warnings = collector.get_summary()["warning_count"]
    result.diagnostics = collector.to_dict()
    result.success = result.errors == 0
    return result


def _record_error(collector: DiagnosticsCollector, result: CheckResult, error):
    collector.error(
        error.code,
        error.reason,
        segment=error.segment,
        column=error.column,
        context=error.context,
        suggestion=f"Expected {error.expected}" if error.expected else None,
    )
    result.errors += 1
    result.error_messages.append(str(error))
