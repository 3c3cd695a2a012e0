"""Error taxonomy for explanation-tree construction.

All errors are raised synchronously while a node is being built (or while a
payload is decoded into nodes). Traversal and rendering never raise for trees
that were constructed successfully.

Hierarchy
---------
- :class:`ExplanationError` (base)
    - :class:`DetailTypeError` (also a ``TypeError``): details of the wrong type.
    - :class:`ShapeError` (also a ``ValueError``): list-valued details that are
      not a sequence or are empty; payloads nested too deeply.
    - :class:`ConstructionError` (also a ``ValueError``): label/number coercion.
    - :class:`UnknownCauseError` (also a ``KeyError``): unregistered cause tag.
    - :class:`DuplicateCauseError` (also a ``ValueError``): conflicting registration.
"""

from __future__ import annotations


class ExplanationError(Exception):
    """Base class for every error raised by the explanation core."""


class DetailTypeError(ExplanationError, TypeError):
    """A cause kind rejected details (or an element of them) by runtime type."""


class ShapeError(ExplanationError, ValueError):
    """List-valued details were not a non-empty ordered sequence."""


class ConstructionError(ExplanationError, ValueError):
    """A node's label or number could not be coerced."""


class UnknownCauseError(ExplanationError, KeyError):
    """No cause kind is registered under the requested tag."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message.
        return str(self.args[0]) if self.args else ""


class DuplicateCauseError(ExplanationError, ValueError):
    """A different cause kind is already registered under the same tag."""


__all__ = [
    "ConstructionError",
    "DetailTypeError",
    "DuplicateCauseError",
    "ExplanationError",
    "ShapeError",
    "UnknownCauseError",
]
