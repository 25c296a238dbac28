"""CLI for location presets."""

import argparse
import json
import sys
from pathlib import Path

import yaml

from locpattern.engine import PatternError, flatten, load_limits, tree_to_dicts

from .expander import (
    PresetError,
    expand_preset,
    get_preset_info,
    list_presets,
    render_preset,
)


def main(argv: list[str] | None = None):
    parser = argparse.ArgumentParser(
        prog="loc_presets",
        description="Expand named warehouse location presets",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # list subcommand
    subparsers.add_parser("list", help="List available presets")

    # info subcommand
    info_parser = subparsers.add_parser("info", help="Show preset details")
    info_parser.add_argument("preset", help="Preset name")

    # expand subcommand
    expand_parser = subparsers.add_parser("expand", help="Expand a preset")
    expand_parser.add_argument("preset", help="Preset name")
    expand_parser.add_argument(
        "--param",
        "-p",
        action="append",
        dest="params",
        default=[],
        metavar="KEY=VALUE",
        help="Parameter value (can be repeated)",
    )
    expand_parser.add_argument(
        "--format",
        "-f",
        choices=["json", "yaml", "names", "pattern"],
        default="json",
        help="Output format (default: json)",
    )
    expand_parser.add_argument(
        "--limits", type=Path, help="YAML file with expansion limits"
    )

    args = parser.parse_args(argv)

    try:
        if args.command == "list":
            run_list()
        elif args.command == "info":
            run_info(args.preset)
        elif args.command == "expand":
            run_expand(args.preset, args.params, args.format, args.limits)
    except (PresetError, PatternError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def run_list():
    """List all available presets."""
    presets = list_presets()
    print("Available presets:")
    for name in sorted(presets):
        info = get_preset_info(name)
        desc = info.get("description", "").split("\n")[0][:60]
        print(f"  {name}: {desc}")


def run_info(preset_name: str):
    """Show detailed info about a preset."""
    info = get_preset_info(preset_name)

    print(f"Preset: {preset_name}")
    print(f"Category: {info.get('category', 'unknown')}")
    print()
    print("Description:")
    print(f"  {info.get('description', 'No description').strip()}")
    print()
    print("Parameters:")
    for param in info.get("parameters", []):
        if param.get("required"):
            req = "(required)"
        else:
            req = f"(default: {param.get('default', 'none')!r})"
        print(f"  - {param['name']}: {param.get('type', 'any')} {req}")
        if "description" in param:
            print(f"      {param['description']}")
    print()

    if "example" in info:
        print("Example:")
        for key, value in info["example"].items():
            print(f"  {key}: {value}")
        print(f"  -> {render_preset(preset_name, info['example'])}")


def parse_params(params: list[str]) -> dict:
    """Parse KEY=VALUE strings, converting numeric values."""
    parameters = {}
    for param_str in params:
        if "=" not in param_str:
            raise PresetError(
                f"Invalid parameter format: {param_str}. Use: --param KEY=VALUE"
            )
        key, value = param_str.split("=", 1)
        # Try to parse as number
        try:
            if "." in value:
                value = float(value)
            else:
                value = int(value)
        except ValueError:
            pass  # Keep as string
        parameters[key] = value
    return parameters


def run_expand(
    preset_name: str,
    params: list[str],
    output_format: str,
    limits_path: Path | None = None,
):
    """Expand a preset with given parameters."""
    parameters = parse_params(params)

    if output_format == "pattern":
        print(render_preset(preset_name, parameters))
        return

    limits = load_limits(limits_path) if limits_path else None
    nodes = expand_preset(preset_name, parameters, limits)

    if output_format == "json":
        print(json.dumps(tree_to_dicts(nodes), indent=2))
    elif output_format == "yaml":
        print(
            yaml.dump(tree_to_dicts(nodes), default_flow_style=False, sort_keys=False),
            end="",
        )
    else:
        for name in flatten(nodes):
            print(name)


if __name__ == "__main__":
    main()
