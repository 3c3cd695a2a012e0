"""JSON payloads <-> explanation trees.

Trees cross the CLI and HTTP boundaries as nested JSON objects. This module
defines the Pydantic v2 wire models for that shape and converts between them
and :class:`~dicetrail.core.contracts.node.ExplanationNode` trees.

Wire shape
----------
.. code-block:: json

    {
      "label": "3d6+6", "number": 18, "cause": "sum",
      "details": [
        {"label": "3d6", "number": 12, "cause": "sum", "details": [
          {"label": "d6", "number": 6, "cause": "roll", "die": {"sides": 6}},
          4,
          {"value": 2, "rolls": [1, 2], "reroll_type": "reroll_replace"}
        ]},
        {"label": "bonus", "number": 6, "cause": "constant",
         "constant": {"value": 6, "label": "bonus"}}
      ]
    }

- ``cause`` names a registered cause kind.
- Single-leaf causes carry the leaf under ``die``, ``constant`` or ``terminal``
  (whichever the cause accepts); sum-like causes carry ``details``.
- Inside ``details``, a bare integer or a ``{"value", ...}`` object is a
  terminal roll that needs no further explanation.

Integer fields are strict: JSON booleans and numeric strings fail validation
rather than being converted. Decoding goes through the public constructors, so
every construction rule applies. Leaf fields on a sum-like cause, ``details``
on a single-leaf cause, and payloads nested deeper than ``max_depth`` raise
``ShapeError``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from dicetrail.core.contracts.cause import DetailArity, get_cause
from dicetrail.core.contracts.descriptors import (
    ConstantDescriptor,
    DieDescriptor,
    RerollType,
    TerminalValue,
)
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.errors import ShapeError
from dicetrail.core.settings import get_logger, load_settings

logger = get_logger(__name__)

# ---- Wire models --------------------------------------------------------------


class DiePayload(BaseModel):
    """A die descriptor on the wire."""

    model_config = ConfigDict(extra="forbid")

    sides: StrictInt = Field(gt=0)
    label: str | None = None


class ConstantPayload(BaseModel):
    """A constant descriptor on the wire."""

    model_config = ConfigDict(extra="forbid")

    value: StrictInt
    label: str | None = None


class TerminalPayload(BaseModel):
    """A rolled value, possibly bundling several rolls, on the wire."""

    model_config = ConfigDict(extra="forbid")

    value: StrictInt
    rolls: list[StrictInt] = Field(default_factory=list)
    reroll_type: RerollType = "basic"
    label: str | None = None


class NodePayload(BaseModel):
    """One explanation node on the wire."""

    model_config = ConfigDict(extra="forbid")

    label: str
    number: StrictInt
    cause: str = Field(description="Registered cause tag, e.g. 'roll' or 'sum'")
    die: DiePayload | None = None
    constant: ConstantPayload | None = None
    terminal: TerminalPayload | None = None
    details: list[NodePayload | TerminalPayload | StrictInt] | None = None


NodePayload.model_rebuild()


# ---- Decoding -----------------------------------------------------------------


def _terminal(payload: TerminalPayload) -> TerminalValue:
    return TerminalValue(**payload.model_dump(exclude_none=True))


def _detail(item: NodePayload | TerminalPayload | int, depth: int, limit: int) -> Any:
    if isinstance(item, NodePayload):
        return _build(item, depth, limit)
    if isinstance(item, TerminalPayload):
        return _terminal(item)
    return item


def _leaf(payload: NodePayload, leaf_type: type | None) -> Any:
    """Return the single leaf a one-detail cause accepts, or ``None`` if absent."""
    if leaf_type is DieDescriptor and payload.die is not None:
        return DieDescriptor(**payload.die.model_dump(exclude_none=True))
    if leaf_type is ConstantDescriptor and payload.constant is not None:
        return ConstantDescriptor(**payload.constant.model_dump(exclude_none=True))
    if leaf_type is TerminalValue and payload.terminal is not None:
        return _terminal(payload.terminal)
    return None


def _build(payload: NodePayload, depth: int, limit: int) -> ExplanationNode:
    if depth > limit:
        raise ShapeError(f"Explanation payload is nested deeper than {limit} levels")

    cause = get_cause(payload.cause)
    leaf_fields = [
        name for name in ("die", "constant", "terminal") if getattr(payload, name) is not None
    ]
    details: Any
    if cause.arity is DetailArity.MANY:
        if leaf_fields:
            raise ShapeError(
                f"Cause {cause.tag!r} takes a details list, but the payload also "
                f"carries {', '.join(leaf_fields)}"
            )
        # Missing details are passed through so the cause reports the shape error.
        details = (
            None
            if payload.details is None
            else [_detail(item, depth + 1, limit) for item in payload.details]
        )
    else:
        if payload.details is not None:
            raise ShapeError(
                f"Cause {cause.tag!r} takes a single leaf, but the payload carries details"
            )
        details = _leaf(payload, cause.detail_type)

    return ExplanationNode(payload.label, payload.number, cause, details)


def load_tree(
    payload: Mapping[str, Any] | NodePayload, *, max_depth: int | None = None
) -> ExplanationNode:
    """Validate ``payload`` and build the explanation tree it describes.

    Raises
    ------
    pydantic.ValidationError
        ``payload`` does not match the wire shape.
    ExplanationError
        A node violates a construction rule, names an unknown cause, or the
        payload nests deeper than ``max_depth`` (default: settings).
    """
    model = payload if isinstance(payload, NodePayload) else NodePayload.model_validate(payload)
    limit = max_depth if max_depth is not None else load_settings().max_tree_depth
    return _build(model, 0, limit)


def read_tree(path: Path, *, max_depth: int | None = None) -> ExplanationNode:
    """Load an explanation tree from a UTF-8 JSON file."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    logger.debug("Loaded explanation payload from %s", path)
    return load_tree(data, max_depth=max_depth)


# ---- Encoding -----------------------------------------------------------------


def _dump_terminal(terminal: TerminalValue) -> dict[str, Any] | int:
    if not terminal.rolls and terminal.label == "die" and terminal.reroll_type == "basic":
        return terminal.value
    return {
        "value": terminal.value,
        "rolls": list(terminal.rolls),
        "reroll_type": terminal.reroll_type,
        "label": terminal.label,
    }


def dump_tree(node: ExplanationNode) -> dict[str, Any]:
    """Return the wire payload for ``node`` (the inverse of :func:`load_tree`)."""
    out: dict[str, Any] = {"label": node.label, "number": node.number, "cause": node.cause.tag}
    details = node.details
    if isinstance(details, tuple):
        out["details"] = [
            dump_tree(item) if isinstance(item, ExplanationNode) else _dump_terminal(item)
            for item in details
        ]
    elif isinstance(details, DieDescriptor):
        out["die"] = details.model_dump()
    elif isinstance(details, ConstantDescriptor):
        out["constant"] = details.model_dump()
    else:
        dumped = _dump_terminal(details)
        out["terminal"] = {"value": dumped} if isinstance(dumped, int) else dumped
    return out


__all__ = [
    "ConstantPayload",
    "DiePayload",
    "NodePayload",
    "TerminalPayload",
    "dump_tree",
    "load_tree",
    "read_tree",
]
