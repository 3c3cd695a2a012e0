"""Depth metrics over explanation trees.

``min_depth`` / ``max_depth`` count how many layers of further explanation sit
beneath a node. Depth 0 means every immediate detail is a plain leaf.

Branches of a sum may bottom out at different depths (one child is a plain
roll, a sibling is itself a sum), so both ends of the range are reported.

Contributions
-------------
Walking a node's details at ``current`` depth:

- a die / constant descriptor contributes ``current``;
- a :class:`TerminalValue` contributes ``current + 1`` when it bundles more
  than one roll, else ``current``;
- a nested node contributes the contributions of its own details at
  ``current + 1``.
"""

from __future__ import annotations

from dicetrail.core.contracts.descriptors import TerminalValue
from dicetrail.core.contracts.node import ExplanationNode


def _contributions(node: ExplanationNode, current: int) -> list[int]:
    details = node.details
    items = details if isinstance(details, tuple) else (details,)
    out: list[int] = []
    for item in items:
        if isinstance(item, ExplanationNode):
            out.extend(_contributions(item, current + 1))
        elif isinstance(item, TerminalValue):
            out.append(current + (1 if item.component_count > 1 else 0))
        else:
            out.append(current)
    return out


def depth_range(node: ExplanationNode) -> tuple[int, int]:
    """Return ``(min_depth, max_depth)`` for ``node`` in a single walk."""
    found = _contributions(node, 0)
    return min(found), max(found)


def min_depth(node: ExplanationNode) -> int:
    """Return the shallowest layer of further explanation beneath ``node``."""
    return depth_range(node)[0]


def max_depth(node: ExplanationNode) -> int:
    """Return the deepest layer of further explanation beneath ``node``."""
    return depth_range(node)[1]


__all__ = ["depth_range", "max_depth", "min_depth"]
