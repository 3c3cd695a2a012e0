"""ExplanationNode: one explained number and how it was calculated.

A node records a ``label`` ("3d6+6"), the ``number`` being explained (18), the
:class:`~dicetrail.core.contracts.cause.CauseKind` governing its details, and
the details themselves:

- ``ONE`` causes hold a single leaf (die / constant descriptor, or a
  :class:`TerminalValue` bundling several rolls);
- ``MANY`` causes hold a non-empty tuple of child nodes and terminal values,
  in the order they were supplied.

Trees are built bottom-up and are immutable afterwards. A node may sit in at
most one parent slot, which keeps trees acyclic and makes ``identity`` a safe
key for correlating parent and child rows in flattened output.

Example
-------
>>> d6 = DieDescriptor(sides=6)
>>> rolls = [ExplanationNode("d6", n, ROLLED_VALUE, d6) for n in (3, 4, 5)]
>>> node = ExplanationNode("3d6", 12, SUM_OF, rolls)
>>> [child.number for child in node.children]
[3, 4, 5]
"""

from __future__ import annotations

import operator
from typing import Any

from dicetrail.core.errors import ConstructionError, DetailTypeError, ExplanationError, ShapeError
from dicetrail.core.settings import get_logger

from .cause import CauseKind, Detail
from .descriptors import LeafDescriptor, new_identity

logger = get_logger(__name__)


def _coerce_label(label: Any) -> str:
    if label is None:
        raise ConstructionError("Label must not be None")
    text = str(label)
    if not text.strip():
        raise ConstructionError("Label must not be blank")
    return text


def _coerce_number(number: Any) -> int:
    if isinstance(number, bool):
        raise ConstructionError(f"Number must be an integer, but got {number!r}")
    if isinstance(number, float):
        if not number.is_integer():
            raise ConstructionError(f"Number must be an integer, but got {number!r}")
        return int(number)
    if isinstance(number, str):
        try:
            return int(number.strip())
        except ValueError as exc:
            raise ConstructionError(f"Number must be an integer, but got {number!r}") from exc
    try:
        return operator.index(number)
    except TypeError as exc:
        raise ConstructionError(f"Number must be an integer, but got {number!r}") from exc


class ExplanationNode:
    """An explained number: ``label``, ``number``, ``cause`` and ``details``.

    Parameters
    ----------
    label:
        Identifying text, e.g. ``"3d6"`` or ``"bonus"``.
    number:
        The integer being explained. Integral floats and numeric strings are
        accepted and converted.
    cause:
        The :class:`CauseKind` whose rules ``details`` must satisfy.
    details:
        A single leaf for ``ONE`` causes; a non-empty list of nodes,
        :class:`TerminalValue` records or plain ``int`` rolls for ``MANY``.

    Raises
    ------
    ConstructionError
        ``label`` is ``None``/blank or ``number`` is not integral.
    DetailTypeError
        ``cause`` is not a :class:`CauseKind`, or ``details`` has the wrong type.
    ShapeError
        ``MANY`` details are empty or not a list, or a child node already has
        a parent (or is listed twice).

    Notes
    -----
    ``copy.copy`` and ``copy.deepcopy`` return the node itself. To place the
    same explanation under another parent, build a fresh node.
    """

    __slots__ = ("_label", "_number", "_cause", "_details", "_identity", "_parent_identity")

    _label: str
    _number: int
    _cause: CauseKind
    _details: LeafDescriptor | tuple[Detail, ...]
    _identity: int
    _parent_identity: int | None

    def __init__(self, label: Any, number: Any, cause: CauseKind, details: Any) -> None:
        try:
            text = _coerce_label(label)
            value = _coerce_number(number)
            if not isinstance(cause, CauseKind):
                raise DetailTypeError(f"Cause must be a CauseKind, but got {cause!r}")
            normalized = cause.normalize(details)
            children = normalized if isinstance(normalized, tuple) else ()
            _check_unowned(children, cause)
        except ExplanationError as exc:
            logger.debug("Rejected explanation %r = %r: %s", label, number, exc)
            raise

        identity = new_identity()
        for child in children:
            if isinstance(child, ExplanationNode):
                object.__setattr__(child, "_parent_identity", identity)

        object.__setattr__(self, "_label", text)
        object.__setattr__(self, "_number", value)
        object.__setattr__(self, "_cause", cause)
        object.__setattr__(self, "_details", normalized)
        object.__setattr__(self, "_identity", identity)
        object.__setattr__(self, "_parent_identity", None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Immutable, and a duplicate would claim the same children twice.
    def __copy__(self) -> ExplanationNode:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> ExplanationNode:
        return self

    # ----- Read-only attributes -------------------------------------------------

    @property
    def label(self) -> str:
        return self._label

    @property
    def number(self) -> int:
        return self._number

    @property
    def cause(self) -> CauseKind:
        return self._cause

    @property
    def details(self) -> LeafDescriptor | tuple[Detail, ...]:
        """The leaf (``ONE``) or the ordered contributors (``MANY``)."""
        return self._details

    @property
    def identity(self) -> int:
        """Process-unique handle for this node instance."""
        return self._identity

    @property
    def children(self) -> tuple[Detail, ...]:
        """Contributors visited by traversal; empty for single-leaf causes."""
        if isinstance(self._details, tuple):
            return self._details
        return ()

    # ----- Projection ------------------------------------------------------------

    def as_hash(self) -> dict[str, Any]:
        """Represent this node (without its children) as a flat dict."""
        return {
            "label": self._label,
            "number": self._number,
            "identity": self._identity,
            **self._cause.to_fragment(self._details),
        }

    def __repr__(self) -> str:
        return (
            f"ExplanationNode(label={self._label!r}, number={self._number!r}, "
            f"cause={self._cause.tag!r})"
        )


def _check_unowned(children: tuple[Detail, ...], cause: CauseKind) -> None:
    """Reject child nodes that already belong to another parent or repeat."""
    seen: set[int] = set()
    for child in children:
        if not isinstance(child, ExplanationNode):
            continue
        if child._parent_identity is not None or child.identity in seen:
            raise ShapeError(
                f"Cause {cause.tag!r}: {child!r} is already a detail of another explanation"
            )
        seen.add(child.identity)


__all__ = ["ExplanationNode"]
