"""Location pattern expansion: AST to Node forest."""

import logging

from .errors import LimitExceededError
from .limits import DEFAULT_LIMITS, ExpansionLimits
from .nodes import BraceRange, Hierarchy, Literal, Node, PatternAST
from .parser import parse

logger = logging.getLogger(__name__)


def _base_names(base: Literal | BraceRange) -> list[str]:
    if isinstance(base, BraceRange):
        return base.names()
    return [base.text]


def _segment_size(ast: PatternAST) -> int:
    """Number of Nodes a single segment generates, parents included."""
    if isinstance(ast, Hierarchy):
        parents = ast.base.count if isinstance(ast.base, BraceRange) else 1
        return parents * (1 + ast.generator.count)
    if isinstance(ast, BraceRange):
        return ast.count
    return 1


def count_nodes(asts: list[PatternAST]) -> int:
    """Total Nodes (parents and children) that ``asts`` will generate."""
    return sum(_segment_size(ast) for ast in asts)


def materialize(ast: PatternAST) -> list[Node]:
    """Generate the Nodes for one parsed segment."""
    if isinstance(ast, Hierarchy):
        return [
            Node(name, ast.generator.children_of(name))
            for name in _base_names(ast.base)
        ]
    if isinstance(ast, BraceRange):
        return [Node(name) for name in ast.names()]
    return [Node(ast.text)]


def check_size(asts: list[PatternAST], limits: ExpansionLimits) -> int:
    """
    Compute the output size and enforce ``limits.max_nodes``.

    Raises:
        LimitExceededError: If the total exceeds the cap
    """
    total = 0
    for ast in asts:
        total += _segment_size(ast)
        if total > limits.max_nodes:
            raise LimitExceededError(
                f"Pattern would generate more than {limits.max_nodes} locations",
                segment=ast.segment,
                expected=f"at most {limits.max_nodes} generated locations",
                code="NODE_LIMIT_EXCEEDED",
                context={
                    "total_nodes": count_nodes(asts),
                    "max_nodes": limits.max_nodes,
                },
            )
    return total


def expand(pattern: str, limits: ExpansionLimits | None = None) -> list[Node]:
    """
    Expand a location pattern into an ordered forest of Nodes.

    Args:
        pattern: Comma-separated segments, e.g. ``"X, 20{2}*(+-[2])"``
        limits: Safety limits (defaults apply when omitted)

    Returns:
        Nodes in segment order; empty list for empty input

    Raises:
        InvalidPatternError: If any segment is malformed
        LimitExceededError: If the input or its output is too large
    """
    limits = limits or DEFAULT_LIMITS
    asts = parse(pattern, limits)
    total = check_size(asts, limits)

    nodes: list[Node] = []
    for ast in asts:
        nodes.extend(materialize(ast))

    logger.debug(
        "Expanded %d segment(s) into %d location(s)", len(asts), total
    )
    return nodes
