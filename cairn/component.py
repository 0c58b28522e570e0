"""Component tree nodes and the traversal orders used over them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Tuple

from .issues import Issue


class ComponentKind(Enum):
    """Structural level of a component in the analyzed project."""

    PROJECT = "PROJECT"
    MODULE = "MODULE"
    DIRECTORY = "DIRECTORY"
    FILE = "FILE"


@dataclass(eq=False)
class Component:
    """A node of the analyzed project tree.

    ``issues`` holds only the issues attached directly to this node; issues of
    descendants are reached through ``children``.
    """

    ref: int
    key: str
    kind: ComponentKind = ComponentKind.FILE
    children: List["Component"] = field(default_factory=list)
    issues: List[Issue] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Component(ref={self.ref}, key={self.key!r}, kind={self.kind.value})"


def iter_post_order(root: Component) -> Iterator[Component]:
    """Yield every component of the tree, children before their parent.

    Siblings come out in their declared order.  Uses an explicit stack so
    arbitrarily deep trees do not hit the recursion limit.
    """
    stack: List[Tuple[Component, bool]] = [(root, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            yield node
            continue
        stack.append((node, True))
        for child in reversed(node.children):
            stack.append((child, False))


def iter_pre_order(root: Component) -> Iterator[Tuple[Component, int]]:
    """Yield ``(component, depth)`` pairs, parents before children."""
    stack: List[Tuple[Component, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        yield node, depth
        for child in reversed(node.children):
            stack.append((child, depth + 1))
