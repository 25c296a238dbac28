"""Safety limits for pattern expansion."""

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

from .errors import PatternError

# Letters available to the +-[K] child generator (A-Z)
LETTER_ALPHABET_SIZE = 26


@dataclass(frozen=True)
class ExpansionLimits:
    """Caps applied to a single ``expand()`` call."""

    max_nodes: int = 100_000
    max_pattern_length: int = 10_000
    max_letters: int = LETTER_ALPHABET_SIZE

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise PatternError(
                    f"Limit '{f.name}' must be a positive integer, got {value!r}"
                )
        if self.max_letters > LETTER_ALPHABET_SIZE:
            raise PatternError(
                f"Limit 'max_letters' cannot exceed {LETTER_ALPHABET_SIZE} "
                "(letter sequence is A-Z)"
            )

    def to_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_LIMITS = ExpansionLimits()


def load_limits(path: str | Path) -> ExpansionLimits:
    """
    Load expansion limits from a YAML file.

    The file holds a top-level ``limits`` mapping; keys that are missing keep
    their defaults.

    Raises:
        PatternError: If the file is missing, malformed or has unknown keys
    """
    path = Path(path)
    if not path.exists():
        raise PatternError(f"Limits file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise PatternError(f"Invalid YAML in limits file {path}: {e}") from e

    if not isinstance(data, dict):
        raise PatternError(f"Limits file must contain a mapping: {path}")

    values = data.get("limits", {}) or {}
    if not isinstance(values, dict):
        raise PatternError(f"'limits' must be a mapping in {path}")

    known = {f.name for f in fields(ExpansionLimits)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise PatternError(
            f"Unknown limit(s) in {path}: {unknown}. Known: {sorted(known)}"
        )

    return ExpansionLimits(**values)
