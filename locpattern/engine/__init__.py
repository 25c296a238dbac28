"""Location pattern engine - expands pattern strings into location trees."""

from .aisles import AisleConfig, aisles_to_pattern, pattern_to_aisles
from .errors import InvalidPatternError, LimitExceededError, PatternError
from .expander import count_nodes, expand
from .limits import DEFAULT_LIMITS, ExpansionLimits, load_limits
from .nodes import Node, find_duplicates, flatten, tree_to_dicts
from .parser import parse
from .schema import validate_tree

__all__ = [
    "AisleConfig",
    "DEFAULT_LIMITS",
    "ExpansionLimits",
    "InvalidPatternError",
    "LimitExceededError",
    "Node",
    "PatternError",
    "aisles_to_pattern",
    "count_nodes",
    "expand",
    "find_duplicates",
    "flatten",
    "load_limits",
    "parse",
    "pattern_to_aisles",
    "tree_to_dicts",
    "validate_tree",
]
