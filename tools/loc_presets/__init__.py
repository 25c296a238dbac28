"""Named location presets for the pattern engine."""

from .expander import (
    PresetError,
    expand_preset,
    get_preset_info,
    list_presets,
    render_preset,
)

__all__ = [
    "expand_preset",
    "get_preset_info",
    "list_presets",
    "render_preset",
    "PresetError",
]
