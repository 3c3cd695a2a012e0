"""Flatten explanation trees into ordered, template-friendly records.

Each record is a flat ``dict`` with the fields

    label, number, identity, cause, has_children, depth, first, last, only, index

plus cause-specific fields (``die_sides``/``die_label``,
``constant_value``/``constant_label``, ``rolls``/``reroll_type``/``rolls_text``)
and, for every row except the root, a ``parent_``-prefixed mirror of the
immediate parent's own record.

Traversal orders
----------------
Depth-first
    Pre-order: a node's row, then each child's whole subtree in turn.
Breadth-first
    The root row, then level by level: for each node on the current level,
    rows for all of its immediate children, before any grandchildren.

Only ``MANY`` causes are descended into. A single-leaf cause is one row even
when its leaf bundles several rolls (that structure lives in the row's own
fields). Sibling order is always the order details were supplied.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from dicetrail.core.contracts.cause import Detail
from dicetrail.core.contracts.descriptors import TerminalValue
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.settings import get_logger

FlatRecord = dict[str, Any]
Order = Literal["breadth", "depth"]

logger = get_logger(__name__)


def counting_stats(index: int, last_index: int) -> dict[str, Any]:
    """Return a row's position among its siblings."""
    return {
        "first": index == 0,
        "last": index == last_index,
        "index": index,
        "only": last_index == 0,
    }


@dataclass(frozen=True, slots=True)
class _Visit:
    """Context handed down to one traversal step."""

    depth: int
    stats: Mapping[str, Any] = field(default_factory=lambda: counting_stats(0, 0))
    parent: FlatRecord | None = None


def _terminal_hash(terminal: TerminalValue) -> FlatRecord:
    return {
        "label": terminal.label,
        "number": terminal.value,
        "identity": terminal.identity,
        "cause": terminal.cause_tag,
        "has_children": terminal.component_count > 1,
        **terminal.to_fragment(),
    }


def _own_record(item: Detail, visit: _Visit) -> FlatRecord:
    """Return the row for ``item`` without any parent fields."""
    base = item.as_hash() if isinstance(item, ExplanationNode) else _terminal_hash(item)
    return {**base, "depth": visit.depth, **visit.stats}


def _emit(own: FlatRecord, parent: FlatRecord | None) -> FlatRecord:
    if parent is None:
        return dict(own)
    return {**own, **{f"parent_{key}": value for key, value in parent.items()}}


# --------------------------------------------------------------------------- #
# Depth-first
# --------------------------------------------------------------------------- #


def _visit_depth_first(item: Detail, visit: _Visit, out: list[FlatRecord]) -> None:
    own = _own_record(item, visit)
    out.append(_emit(own, visit.parent))
    if not isinstance(item, ExplanationNode):
        return
    children = item.children
    last_index = len(children) - 1
    for index, child in enumerate(children):
        step = _Visit(visit.depth + 1, counting_stats(index, last_index), own)
        _visit_depth_first(child, step, out)


def flatten_depth_first(root: ExplanationNode) -> list[FlatRecord]:
    """Return one record per node/terminal under ``root``, in pre-order."""
    out: list[FlatRecord] = []
    _visit_depth_first(root, _Visit(0), out)
    logger.debug("Flattened %r depth-first into %d records", root.label, len(out))
    return out


# --------------------------------------------------------------------------- #
# Breadth-first
# --------------------------------------------------------------------------- #


def flatten_breadth_first(root: ExplanationNode) -> list[FlatRecord]:
    """Return one record per node/terminal under ``root``, grouped by level.

    Within a level, rows keep the order of their parents on the level above,
    and siblings keep their supplied order.
    """
    root_own = _own_record(root, _Visit(0))
    out: list[FlatRecord] = [_emit(root_own, None)]

    frontier: list[tuple[ExplanationNode, FlatRecord]] = [(root, root_own)]
    depth = 0
    while frontier:
        depth += 1
        next_frontier: list[tuple[ExplanationNode, FlatRecord]] = []
        for node, node_own in frontier:
            children = node.children
            last_index = len(children) - 1
            for index, child in enumerate(children):
                own = _own_record(child, _Visit(depth, counting_stats(index, last_index)))
                out.append(_emit(own, node_own))
                if isinstance(child, ExplanationNode) and child.children:
                    next_frontier.append((child, own))
        frontier = next_frontier

    logger.debug("Flattened %r breadth-first into %d records", root.label, len(out))
    return out


def flatten(root: ExplanationNode, order: Order = "breadth") -> list[FlatRecord]:
    """Dispatch to the breadth-first or depth-first flattener."""
    if order == "depth":
        return flatten_depth_first(root)
    if order == "breadth":
        return flatten_breadth_first(root)
    raise ValueError(f"Unknown traversal order {order!r}; expected 'breadth' or 'depth'")


__all__ = [
    "FlatRecord",
    "Order",
    "counting_stats",
    "flatten",
    "flatten_breadth_first",
    "flatten_depth_first",
]
