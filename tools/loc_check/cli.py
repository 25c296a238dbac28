"""CLI for loc_check."""

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from locpattern.engine import PatternError, load_limits
from locpattern.engine.limits import DEFAULT_LIMITS

from .checker import check_pattern
from .diagnostics import DiagnosticsCollector


def format_result_table(result) -> str:
    """Format result as a nice table."""
    status = "✓ PASS" if result.success else "✗ FAIL"

    lines = [
        "┌" + "─" * 50 + "┐",
        "│ loc_check results" + " " * 32 + "│",
        "├" + "─" * 50 + "┤",
        f"│ Pattern: {result.pattern[:39]:<40}│",
        f"│ Segments: {len(result.segments)}".ljust(51) + "│",
        f"│ Locations: {result.total_nodes} ({result.root_nodes} top-level)".ljust(51)
        + "│",
        f"│ Warnings: {result.warnings}".ljust(51) + "│",
        f"│ Errors: {result.errors}".ljust(51) + "│",
        f"│ Status: {status}".ljust(51) + "│",
        "└" + "─" * 50 + "┘",
    ]

    if result.error_messages:
        lines.append("")
        lines.append("Errors:")
        for msg in result.error_messages[:10]:
            lines.append(f"  - {msg[:70]}")

    return "\n".join(lines)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="loc_check",
        description="Validate a warehouse location pattern"
    )
    parser.add_argument(
        "pattern",
        help="Location pattern, e.g. '20{2}*(+-[2])'"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON"
    )
    parser.add_argument(
        "--diagnostics-json",
        type=Path,
        help="Write structured diagnostics to this file"
    )
    parser.add_argument(
        "--limits",
        type=Path,
        help="YAML file with expansion limits"
    )
    parser.add_argument(
        "--max-nodes",
        type=int,
        help="Override the generated location cap"
    )

    args = parser.parse_args(argv)

    try:
        limits = load_limits(args.limits) if args.limits else DEFAULT_LIMITS
        if args.max_nodes is not None:
            limits = replace(limits, max_nodes=args.max_nodes)
    except PatternError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    collector = DiagnosticsCollector()
    result = check_pattern(args.pattern, limits, collector)

    if args.diagnostics_json:
        collector.write_json(args.diagnostics_json)

    if args.json_output:
        output = {
            "success": result.success,
            "pattern": result.pattern,
            "segments": result.segments,
            "total_nodes": result.total_nodes,
            "root_nodes": result.root_nodes,
            "warnings": result.warnings,
            "errors": result.errors,
            "error_messages": result.error_messages,
        }
        print(json.dumps(output, indent=2))
    else:
        print(format_result_table(result))

    # Exit code: 0=success, 1=warnings only, 2=errors
    if result.errors > 0:
        sys.exit(2)
    elif result.warnings > 0:
        sys.exit(1)
    else:
        sys.exit(0)


if __name__ == "__main__":
    main()
