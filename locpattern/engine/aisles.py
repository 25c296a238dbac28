"""Conversion between aisle configurations and pattern text.

A structure wizard describes each aisle as a name plus a number of columns
(numbered positions) and rows (lettered bins per position). The mapping is:

    columns == 1, rows == 1  ->  NAME
    columns  > 1, rows == 1  ->  NAME{columns}
    columns == 1, rows  > 1  ->  NAME*(+-[rows])
    columns  > 1, rows  > 1  ->  NAME{columns}*(+-[rows])
"""

import logging
from dataclasses import dataclass

from .errors import InvalidPatternError
from .limits import DEFAULT_LIMITS, ExpansionLimits
from .nodes import BraceRange, Hierarchy, Literal
from .parser import TOKEN_KINDS, parse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AisleConfig:
    """One aisle: a name, numbered columns and lettered rows."""

    name: str
    columns: int = 1
    rows: int = 1

    def to_dict(self) -> dict:
        return {"name": self.name, "columns": self.columns, "rows": self.rows}


def _check_config(config: AisleConfig) -> str:
    name = config.name.strip()
    bad = sorted({c for c in name if c in TOKEN_KINDS or c == ","})
    if bad:
        raise InvalidPatternError(
            f"Aisle name contains pattern characters {bad}",
            segment=name,
            expected="a plain aisle code",
            code="INVALID_AISLE",
        )
    for field_name in ("columns", "rows"):
        value = getattr(config, field_name)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidPatternError(
                f"Aisle '{name}' {field_name} must be a positive integer, "
                f"got {value!r}",
                segment=name,
                expected=f"{field_name} >= 1",
                code="INVALID_AISLE",
            )
    return name


def aisles_to_pattern(
    configs: list[AisleConfig], limits: ExpansionLimits | None = None
) -> str:
    """
    Build pattern text from aisle configs.

    Configs with a blank name are skipped. The result is parsed before it is
    returned, so an aisle that asks for more rows than there are letters
    fails here rather than at expansion time.

    Raises:
        InvalidPatternError: If a config has a bad name, count, or row count
    """
    segments = []
    for config in configs:
        if not isinstance(config.name, str):
            raise InvalidPatternError(
                f"Aisle name must be text, got {config.name!r}",
                code="INVALID_AISLE",
            )
        if not config.name.strip():
            continue
        name = _check_config(config)
        segment = name
        if config.columns > 1:
            segment += f"{{{config.columns}}}"
        if config.rows > 1:
            segment += f"*(+-[{config.rows}])"
        segments.append(segment)

    pattern = ", ".join(segments)
    parse(pattern, limits or DEFAULT_LIMITS)
    logger.debug("Built pattern %r from %d aisle(s)", pattern, len(segments))
    return pattern


def pattern_to_aisles(
    pattern: str, limits: ExpansionLimits | None = None
) -> list[AisleConfig]:
    """
    Recover aisle configs from pattern text.

    Only the four shapes produced by ``aisles_to_pattern`` are aisles. A range
    with text after the braces (``A{3}-R``) or without a name (``{3}``)
    describes something else and is rejected.

    Raises:
        InvalidPatternError: If the pattern is malformed or not aisle-shaped
    """
    configs = []
    for ast in parse(pattern, limits):
        rows = 1
        base = ast
        if isinstance(ast, Hierarchy):
            rows = ast.generator.count
            base = ast.base

        if isinstance(base, Literal):
            configs.append(AisleConfig(name=base.text, columns=1, rows=rows))
        elif isinstance(base, BraceRange) and base.prefix and not base.suffix:
            configs.append(
                AisleConfig(name=base.prefix, columns=base.count, rows=rows)
            )
        else:
            raise InvalidPatternError(
                "Segment does not describe an aisle",
                segment=ast.segment,
                column=base.column,
                expected="NAME, NAME{columns} or NAME{columns}*(+-[rows])",
                code="NOT_AN_AISLE",
            )
    return configs
