"""Cause kinds: what a number's details may contain, and how they project.

A :class:`CauseKind` describes a *type* of explanation, shared by many nodes:
"this number was rolled on a die", "this number is a constant", "this number
is the sum of other numbers". It binds

- a semantic ``tag`` (``"roll"``, ``"constant"``, ``"sum"``, ...),
- a detail ``arity`` (a single leaf vs. an ordered list of contributors),
- the leaf type allowed for single-detail kinds.

Kinds are plain data. New explanation semantics (a future "keep-best" kind,
say) are added by declaring and registering another instance, never by
subclassing nodes:

>>> KEPT = register_cause(CauseKind("keep_best", DetailArity.ONE, TerminalValue))
>>> get_cause("keep_best") is KEPT
True

Validation rules
----------------
``DetailArity.ONE``
    details must be an instance of exactly ``detail_type``
    (:class:`~dicetrail.core.errors.DetailTypeError` otherwise).
``DetailArity.MANY``
    details must be a non-empty ``list``/``tuple``
    (:class:`~dicetrail.core.errors.ShapeError` otherwise) whose elements are
    explanation nodes, :class:`TerminalValue` records, or plain ``int`` rolls
    (:class:`DetailElementError` otherwise).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

from dicetrail.core.errors import (
    DetailTypeError,
    DuplicateCauseError,
    ShapeError,
    UnknownCauseError,
)

from .descriptors import ConstantDescriptor, DieDescriptor, LeafDescriptor, TerminalValue

if TYPE_CHECKING:
    from .node import ExplanationNode

LeafType = type[DieDescriptor] | type[ConstantDescriptor] | type[TerminalValue]
Detail = Union["ExplanationNode", TerminalValue]

_LEAF_TYPES: tuple[type, ...] = (DieDescriptor, ConstantDescriptor, TerminalValue)


class DetailElementError(DetailTypeError, ShapeError):
    """An element of list-valued details is neither a node nor a terminal."""


class DetailArity(str, Enum):
    """How many details a cause carries."""

    ONE = "one"
    MANY = "many"


@dataclass(frozen=True, slots=True)
class CauseKind:
    """One way a number can be explained.

    Attributes
    ----------
    tag : str
        Semantic label copied into every record as ``cause``.
    arity : DetailArity
        ``ONE`` for a single leaf detail, ``MANY`` for an ordered list.
    detail_type : LeafType | None
        Leaf class accepted by ``ONE`` kinds; must be ``None`` for ``MANY``.
    description : str
        Free-form note for humans.
    """

    tag: str
    arity: DetailArity
    detail_type: LeafType | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.arity, DetailArity):
            raise DetailTypeError(f"Cause arity must be a DetailArity, but got {self.arity!r}")
        if self.arity is DetailArity.ONE:
            if self.detail_type not in _LEAF_TYPES:
                raise DetailTypeError(
                    f"Details class {self.detail_type!r} not allowed as explanation detail "
                    f"for cause {self.tag!r}"
                )
        elif self.detail_type is not None:
            raise DetailTypeError(
                f"Cause {self.tag!r} has many details; detail_type must be None, "
                f"but got {self.detail_type!r}"
            )

    @property
    def has_many_details(self) -> bool:
        return self.arity is DetailArity.MANY

    # ----- Validation ---------------------------------------------------------

    def validate(self, details: Any) -> None:
        """Raise if ``details`` cannot be used as details for this cause.

        Raises
        ------
        ShapeError
            ``MANY`` details that are not a non-empty list/tuple.
        DetailTypeError
            ``ONE`` details of the wrong type, or a bad ``MANY`` element
            (raised as :class:`DetailElementError`).
        """
        if self.arity is DetailArity.ONE:
            if type(details) is not self.detail_type:
                expected = self.detail_type.__name__ if self.detail_type else "None"
                raise DetailTypeError(
                    f"Cause {self.tag!r}: details should be a {expected}, but got {details!r}"
                )
            return

        if not isinstance(details, list | tuple):
            raise ShapeError(
                f"Cause {self.tag!r}: details should be a list, but got {details!r}"
            )
        if not details:
            raise ShapeError(f"Cause {self.tag!r}: details list is empty")

        from .node import ExplanationNode

        for item in details:
            if isinstance(item, ExplanationNode | TerminalValue):
                continue
            if isinstance(item, int) and not isinstance(item, bool):
                continue
            raise DetailElementError(
                f"Cause {self.tag!r}: details should be explanation nodes or rolled "
                f"values, but got {item!r}"
            )

    def normalize(self, details: Any) -> LeafDescriptor | tuple[Detail, ...]:
        """Validate ``details`` and return the immutable shape stored on a node.

        ``MANY`` details become a tuple in the order supplied, with plain
        ``int`` rolls wrapped as :class:`TerminalValue`.
        """
        self.validate(details)
        if self.arity is DetailArity.ONE:
            return details  # type: ignore[no-any-return]
        return tuple(
            TerminalValue(value=item) if isinstance(item, int) else item for item in details
        )

    # ----- Projection ---------------------------------------------------------

    def to_fragment(self, details: Any) -> dict[str, Any]:
        """Project this cause (and a single leaf detail) into a record fragment.

        ``MANY`` kinds always report ``has_children=True``. ``ONE`` kinds report
        it only when their leaf bundles more than one roll.
        """
        if self.arity is DetailArity.MANY:
            return {"cause": self.tag, "has_children": True}
        has_children = isinstance(details, TerminalValue) and details.component_count > 1
        return {"cause": self.tag, "has_children": has_children, **details.to_fragment()}


# --------------------------------------------------------------------------- #
# Registry
# --------------------------------------------------------------------------- #

_REGISTRY: dict[str, CauseKind] = {}


def register_cause(kind: CauseKind) -> CauseKind:
    """Add ``kind`` to the registry and return it.

    Re-registering an identical definition is a no-op; a different definition
    under an existing tag raises :class:`DuplicateCauseError`.
    """
    existing = _REGISTRY.get(kind.tag)
    if existing is not None:
        if existing != kind:
            raise DuplicateCauseError(
                f"A different cause is already registered as {kind.tag!r}"
            )
        return existing
    _REGISTRY[kind.tag] = kind
    return kind


def get_cause(tag: str) -> CauseKind:
    """Return the cause kind registered under ``tag``."""
    try:
        return _REGISTRY[tag]
    except KeyError:
        known = ", ".join(sorted(_REGISTRY))
        raise UnknownCauseError(f"Unknown cause {tag!r}; known causes: {known}") from None


def registered_causes() -> Mapping[str, CauseKind]:
    """Return a read-only view of the registry."""
    return MappingProxyType(_REGISTRY)


# ---- Well-known kinds -------------------------------------------------------------

#: A number caused directly by the roll of a die.
ROLLED_VALUE = register_cause(
    CauseKind("roll", DetailArity.ONE, DieDescriptor, "Rolled directly on a die")
)

#: A number that is a fixed modifier.
CONSTANT_VALUE = register_cause(
    CauseKind("constant", DetailArity.ONE, ConstantDescriptor, "Fixed modifier")
)

#: A number that is the sum of other explained numbers.
SUM_OF = register_cause(CauseKind("sum", DetailArity.MANY, None, "Sum of contributors"))

#: A die result that may have been rolled several times before it settled.
REROLLED_VALUE = register_cause(
    CauseKind("reroll", DetailArity.ONE, TerminalValue, "Die rolled more than once")
)

__all__ = [
    "CONSTANT_VALUE",
    "REROLLED_VALUE",
    "ROLLED_VALUE",
    "SUM_OF",
    "CauseKind",
    "Detail",
    "DetailArity",
    "DetailElementError",
    "get_cause",
    "register_cause",
    "registered_causes",
]
