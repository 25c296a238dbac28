"""Preset rendering and expansion logic."""

from pathlib import Path
from typing import Any

import yaml
from jinja2 import Template, TemplateError

from locpattern.engine import ExpansionLimits, Node, expand

RULES_DIR = Path(__file__).parent.parent.parent / "rules"

# Pattern syntax uses { } and [ ], so templates use angle delimiters instead
TEMPLATE_DELIMITERS = {
    "variable_start_string": "<<",
    "variable_end_string": ">>",
    "block_start_string": "<%",
    "block_end_string": "%>",
    "comment_start_string": "<#",
    "comment_end_string": "#>",
}


class PresetError(Exception):
    """Error during preset lookup or rendering."""

    pass


def load_presets() -> dict:
    """Load presets from rules/presets.yaml."""
    presets_file = RULES_DIR / "presets.yaml"
    if not presets_file.exists():
        raise PresetError(f"Presets file not found: {presets_file}")

    with open(presets_file) as f:
        data = yaml.safe_load(f)

    return data.get("presets", {})


def list_presets() -> list[str]:
    """List available preset names."""
    return list(load_presets().keys())


def get_preset_info(preset_name: str) -> dict:
    """Get full info about a preset."""
    presets = load_presets()
    if preset_name not in presets:
        available = list(presets.keys())
        raise PresetError(f"Unknown preset: {preset_name}. Available: {available}")
    return presets[preset_name]


def render_preset(preset_name: str, parameters: dict[str, Any]) -> str:
    """
    Render a preset into a location pattern string.

    Args:
        preset_name: Name of the preset (e.g., 'shelves_with_bins')
        parameters: Dictionary of parameter values

    Returns:
        Pattern string ready for expansion

    Raises:
        PresetError: If preset not found, missing required params, or template error
    """
    preset = get_preset_info(preset_name)

    if "template" not in preset:
        raise PresetError(f"Preset '{preset_name}' does not have a template")

    # Check required parameters and apply defaults
    merged_params = {}
    for param_def in preset.get("parameters", []):
        param_name = param_def["name"]
        is_required = param_def.get("required", False)
        default = param_def.get("default")

        if param_name in parameters:
            merged_params[param_name] = parameters[param_name]
        elif default is not None:
            merged_params[param_name] = default
        elif is_required:
            raise PresetError(
                f"Missing required parameter '{param_name}' for preset "
                f"'{preset_name}'"
            )

    # Also include any extra parameters passed
    for key, value in parameters.items():
        if key not in merged_params:
            merged_params[key] = value

    try:
        template = Template(preset["template"], **TEMPLATE_DELIMITERS)
        result = template.render(**merged_params)
    except TemplateError as e:
        raise PresetError(f"Template rendering error: {e}")

    return result.strip()


def expand_preset(
    preset_name: str,
    parameters: dict[str, Any],
    limits: ExpansionLimits | None = None,
) -> list[Node]:
    """
    Render a preset and expand the resulting pattern.

    Raises:
        PresetError: If the preset cannot be rendered
        PatternError: If the rendered pattern is invalid or too large
    """
    pattern = render_preset(preset_name, parameters)
    return expand(pattern, limits)
