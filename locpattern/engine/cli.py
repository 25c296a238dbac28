"""CLI for the location pattern engine."""

import argparse
import json
import logging
import sys
from dataclasses import asdict, replace
from pathlib import Path

import jsonschema
import yaml

from .aisles import AisleConfig, aisles_to_pattern, pattern_to_aisles
from .errors import PatternError
from .expander import count_nodes, expand
from .limits import DEFAULT_LIMITS, load_limits
from .nodes import flatten, tree_to_dicts
from .parser import parse
from .schema import validate_tree


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="locpattern",
        description="Expand warehouse location patterns into location trees",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # expand subcommand
    expand_parser = subparsers.add_parser(
        "expand", help="Expand a pattern into locations"
    )
    expand_parser.add_argument("pattern", help="Pattern, e.g. '20{2}*(+-[2])'")
    expand_parser.add_argument(
        "--format",
        "-f",
        choices=["json", "yaml", "names"],
        default="json",
        help="Output format (default: json)",
    )
    expand_parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate output against the location tree schema",
    )
    _add_limit_arguments(expand_parser)

    # parse subcommand
    parse_parser = subparsers.add_parser(
        "parse", help="Show the parsed segments without expanding"
    )
    parse_parser.add_argument("pattern", help="Pattern to parse")
    _add_limit_arguments(parse_parser)

    # aisles subcommand
    aisles_parser = subparsers.add_parser(
        "aisles", help="Show the aisle configs a pattern describes"
    )
    aisles_parser.add_argument("pattern", help="Pattern, e.g. 'A{4}*(+-[3]), B'")
    _add_limit_arguments(aisles_parser)

    # compose subcommand
    compose_parser = subparsers.add_parser(
        "compose", help="Build a pattern from a YAML list of aisle configs"
    )
    compose_parser.add_argument(
        "file", type=Path, help="YAML/JSON list of {name, columns, rows}"
    )
    _add_limit_arguments(compose_parser)

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        limits = _resolve_limits(args)
        if args.command == "expand":
            run_expand(args.pattern, args.format, limits, args.validate)
        elif args.command == "parse":
            run_parse(args.pattern, limits)
        elif args.command == "aisles":
            run_aisles(args.pattern, limits)
        elif args.command == "compose":
            run_compose(args.file, limits)
    except PatternError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except jsonschema.ValidationError as e:
        print(f"Validation error: {e.message}", file=sys.stderr)
        sys.exit(1)


def _add_limit_arguments(subparser):
    subparser.add_argument(
        "--limits", type=Path, help="YAML file with expansion limits"
    )
    subparser.add_argument(
        "--max-nodes", type=int, help="Override the generated location cap"
    )
    subparser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )


def _resolve_limits(args):
    limits = load_limits(args.limits) if args.limits else DEFAULT_LIMITS
    if args.max_nodes is not None:
        limits = replace(limits, max_nodes=args.max_nodes)
    return limits


def run_expand(pattern: str, output_format: str, limits, validate: bool = False):
    """Expand a pattern and print the result."""
    nodes = expand(pattern, limits)
    tree = tree_to_dicts(nodes)

    if validate:
        validate_tree(tree)

    if output_format == "json":
        print(json.dumps(tree, indent=2))
    elif output_format == "yaml":
        print(yaml.dump(tree, default_flow_style=False, sort_keys=False), end="")
    else:
        for name in flatten(nodes):
            print(name)


def run_parse(pattern: str, limits):
    """Print the parsed AST of each segment as JSON."""
    asts = parse(pattern, limits)
    output = {
        "segments": [
            {"kind": type(ast).__name__, **asdict(ast)} for ast in asts
        ],
        "total_nodes": count_nodes(asts),
    }
    print(json.dumps(output, indent=2))


def run_aisles(pattern: str, limits):
    """Print the aisle configs described by a pattern as JSON."""
    configs = pattern_to_aisles(pattern, limits)
    print(json.dumps([config.to_dict() for config in configs], indent=2))


def run_compose(path: Path, limits):
    """Read aisle configs from a file and print the pattern they produce."""
    if not path.exists():
        raise PatternError(f"Aisle file not found: {path}")
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or []
        except yaml.YAMLError as e:
            raise PatternError(f"Invalid YAML in aisle file {path}: {e}") from e

    if not isinstance(data, list) or not all(isinstance(d, dict) for d in data):
        raise PatternError(f"Aisle file must contain a list of mappings: {path}")
    try:
        configs = [AisleConfig(**entry) for entry in data]
    except TypeError as e:
        raise PatternError(f"Invalid aisle entry in {path}: {e}") from e

    print(aisles_to_pattern(configs, limits))


if __name__ == "__main__":
    main()
