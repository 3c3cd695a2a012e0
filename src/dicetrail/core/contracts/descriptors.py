"""Leaf contracts: the terminal contributors to an explained number.

This module defines three immutable Pydantic v2 models:

- `DieDescriptor`     : a die's number of sides and its short label (``"d6"``).
- `ConstantDescriptor`: a fixed modifier's value and label (``"bonus"``).
- `TerminalValue`     : an already-rolled number, optionally bundling every
  roll that led to it (rerolls, keep-best, ...). It is the "opaque terminal"
  that may appear directly inside a sum.

Fragments
---------
Each model projects to a flat ``dict`` fragment that renderers merge into the
records produced by the flatteners:

- die      -> ``{"die_sides", "die_label"}``
- constant -> ``{"constant_value", "constant_label"}``
- terminal -> ``{"rolls", "reroll_type", "rolls_text"}``

Notes
-----
- Models are frozen; descriptors are shared freely between nodes.
- Invalid fields raise ``pydantic.ValidationError`` at construction.
"""

from __future__ import annotations

import itertools
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, model_validator

# ---- Reroll markers ------------------------------------------------------------

RerollType = Literal[
    "basic",
    "reroll_add",
    "reroll_subtract",
    "reroll_replace",
    "reroll_use_best",
    "reroll_use_worst",
]

#: Reasons for rolling a die more than once, and the symbol used to join the
#: individual rolls when they are written out (``"2|5"`` for a replaced roll).
REROLL_TYPES: dict[str, str] = {
    "basic": ",",
    "reroll_add": "+",
    "reroll_subtract": "-",
    "reroll_replace": "|",
    "reroll_use_best": "/",
    "reroll_use_worst": "\\",
}

_identities = itertools.count(1)


def new_identity() -> int:
    """Return a process-unique integer handle for a tree element."""
    return next(_identities)


# ---- Descriptors -----------------------------------------------------------------


class DieDescriptor(BaseModel):
    """Description of a single die, separate from any roll of it."""

    model_config = ConfigDict(frozen=True)

    sides: int = Field(gt=0, description="Number of sides on the die")
    label: str = Field(default="", description="Short descriptive name, e.g. 'd6'")

    @model_validator(mode="before")
    @classmethod
    def _default_label(cls, data: Any) -> Any:
        """Fill ``label`` with ``"d<sides>"`` when it is missing or blank."""
        if isinstance(data, dict) and not data.get("label") and "sides" in data:
            return {**data, "label": f"d{data['sides']}"}
        return data

    def to_fragment(self) -> dict[str, Any]:
        return {"die_sides": self.sides, "die_label": self.label}


class ConstantDescriptor(BaseModel):
    """Description of a fixed contributor, such as a bonus or penalty."""

    model_config = ConfigDict(frozen=True)

    value: int = Field(description="The constant's value")
    label: str = Field(default="constant", description="Short descriptive name")

    def to_fragment(self) -> dict[str, Any]:
        return {"constant_value": self.value, "constant_label": self.label}


class TerminalValue(BaseModel):
    """A rolled number that needs no further explanation node.

    Fields
    ------
    value : int
        The number this terminal contributes.
    rolls : tuple[int, ...]
        Every roll bundled into ``value``, in roll order. Empty means the value
        was rolled once and ``value`` is the only component.
    reroll_type : RerollType
        Why the die was rolled more than once; picks the join symbol.
    label : str
        Row label used when the terminal is flattened.
    """

    model_config = ConfigDict(frozen=True)

    value: int
    rolls: tuple[int, ...] = Field(default=())
    reroll_type: RerollType = "basic"
    label: str = "die"

    _identity: int = PrivateAttr(default_factory=new_identity)

    @property
    def identity(self) -> int:
        return self._identity

    @property
    def components(self) -> tuple[int, ...]:
        """Return the individual rolls, falling back to ``(value,)``."""
        return self.rolls or (self.value,)

    @property
    def component_count(self) -> int:
        return len(self.components)

    @property
    def cause_tag(self) -> str:
        """Tag reported for this terminal when it is flattened as its own row."""
        return "complex_die" if self.component_count > 1 else "value"

    def to_fragment(self) -> dict[str, Any]:
        symbol = REROLL_TYPES[self.reroll_type]
        return {
            "rolls": list(self.components),
            "reroll_type": self.reroll_type,
            "rolls_text": symbol.join(str(r) for r in self.components),
        }


LeafDescriptor = DieDescriptor | ConstantDescriptor | TerminalValue

__all__ = [
    "REROLL_TYPES",
    "ConstantDescriptor",
    "DieDescriptor",
    "LeafDescriptor",
    "RerollType",
    "TerminalValue",
    "new_identity",
]
