"""Unit tests for the leaf contracts (die, constant, terminal value)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from dicetrail.core.contracts.descriptors import (
    REROLL_TYPES,
    ConstantDescriptor,
    DieDescriptor,
    TerminalValue,
)


def test_die_descriptor_defaults_label_from_sides() -> None:
    """A die built from sides alone is labelled ``d<sides>``."""
    dd = DieDescriptor(sides=6)
    assert dd.sides == 6
    assert dd.label == "d6"


def test_die_descriptor_accepts_custom_label() -> None:
    dd = DieDescriptor(sides=8, label="brutal-d8")
    assert dd.sides == 8
    assert dd.label == "brutal-d8"


def test_die_descriptor_rejects_non_positive_sides() -> None:
    with pytest.raises(ValidationError):
        DieDescriptor(sides=0)


def test_descriptors_are_frozen() -> None:
    """Descriptors are shared between nodes, so they must not change."""
    dd = DieDescriptor(sides=20)
    with pytest.raises(ValidationError):
        dd.sides = 12  # type: ignore[misc]


def test_constant_descriptor_defaults_and_fragment() -> None:
    assert ConstantDescriptor(value=3).label == "constant"
    assert ConstantDescriptor(value=6, label="bonus").to_fragment() == {
        "constant_value": 6,
        "constant_label": "bonus",
    }


def test_die_fragment() -> None:
    assert DieDescriptor(sides=20).to_fragment() == {"die_sides": 20, "die_label": "d20"}


def test_terminal_single_roll() -> None:
    """A terminal without recorded rolls has one component: its value."""
    tv = TerminalValue(value=4)
    assert tv.components == (4,)
    assert tv.component_count == 1
    assert tv.cause_tag == "value"
    assert tv.to_fragment() == {"rolls": [4], "reroll_type": "basic", "rolls_text": "4"}


def test_terminal_with_rerolls_uses_marker_symbol() -> None:
    tv = TerminalValue(value=5, rolls=(2, 5), reroll_type="reroll_replace")
    assert tv.component_count == 2
    assert tv.cause_tag == "complex_die"
    assert tv.to_fragment()["rolls_text"] == "2|5"


def test_terminal_rejects_unknown_reroll_type() -> None:
    with pytest.raises(ValidationError):
        TerminalValue(value=5, rolls=(2, 5), reroll_type="explode")  # type: ignore[arg-type]


def test_terminal_identities_are_unique() -> None:
    """Terminals with the same value are still distinct rows when flattened."""
    a, b = TerminalValue(value=3), TerminalValue(value=3)
    assert a.identity != b.identity


def test_reroll_markers_cover_every_reroll_type() -> None:
    assert REROLL_TYPES["basic"] == ","
    assert REROLL_TYPES["reroll_use_best"] == "/"
    assert REROLL_TYPES["reroll_use_worst"] == "\\"
    assert len(set(REROLL_TYPES.values())) == len(REROLL_TYPES)
