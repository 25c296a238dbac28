"""Result tree and AST types for location patterns."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class Node:
    """A resolved location code and its ordered sub-locations."""

    name: str
    children: tuple["Node", ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "children": [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class Literal:
    """A segment that expands to itself."""

    text: str
    segment: str = ""
    column: int = 0


@dataclass(frozen=True)
class BraceRange:
    """``prefix{N}suffix`` producing N zero-padded names."""

    prefix: str
    count: int
    width: int
    suffix: str
    segment: str = ""
    column: int = 0

    def names(self) -> list[str]:
        return [
            f"{self.prefix}{str(i).zfill(self.width)}{self.suffix}"
            for i in range(1, self.count + 1)
        ]


@dataclass(frozen=True)
class LetterSequence:
    """``+-[K]`` child generator: K children suffixed ``-A``, ``-B``, ..."""

    separator: str
    count: int
    segment: str = ""
    column: int = 0

    def children_of(self, parent: str) -> tuple[Node, ...]:
        return tuple(
            Node(f"{parent}{self.separator}{chr(ord('A') + i)}")
            for i in range(self.count)
        )


@dataclass(frozen=True)
class Hierarchy:
    """``base*(generator)``: parents from ``base``, children from ``generator``."""

    base: Union[Literal, BraceRange]
    generator: LetterSequence
    segment: str = ""
    column: int = 0


PatternAST = Union[Literal, BraceRange, Hierarchy]


def tree_to_dicts(nodes: list[Node]) -> list[dict[str, Any]]:
    """Convert a result forest to plain dicts for JSON/YAML output."""
    return [node.to_dict() for node in nodes]


def flatten(nodes: list[Node]) -> list[str]:
    """
    List every name depth-first, each parent before its children.

    This is the order in which locations must be created so that a parent
    record exists before its bins reference it.
    """
    names: list[str] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        names.append(node.name)
        stack.extend(reversed(node.children))
    return names


def find_duplicates(nodes: list[Node]) -> list[str]:
    """Return names generated more than once, in first-seen order."""
    counts = Counter(flatten(nodes))
    return [name for name, n in counts.items() if n > 1]
