"""Tests for ExplanationNode construction, validation and projection."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from dicetrail.core.contracts.cause import CONSTANT_VALUE, REROLLED_VALUE, ROLLED_VALUE, SUM_OF
from dicetrail.core.contracts.descriptors import ConstantDescriptor, DieDescriptor, TerminalValue
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.errors import ConstructionError, DetailTypeError, ShapeError

D6 = DieDescriptor(sides=6)
D20 = DieDescriptor(sides=20)


def _roll(n: int) -> ExplanationNode:
    return ExplanationNode("d6", n, ROLLED_VALUE, D6)


def test_new_with_valid_parameters() -> None:
    valid_params: list[tuple[Any, ...]] = [
        ("d20", 12, ROLLED_VALUE, D20),
        ("2d6", 12, SUM_OF, [_roll(6), _roll(6)]),
        ("2d6", 7, SUM_OF, [3, 4]),
        ("bonus", 2, CONSTANT_VALUE, ConstantDescriptor(value=2, label="bonus")),
        ("d6 (reroll 1s)", 5, REROLLED_VALUE, TerminalValue(value=5, rolls=(1, 5))),
    ]
    for params in valid_params:
        assert isinstance(ExplanationNode(*params), ExplanationNode)


def test_sum_with_no_explanation_fails() -> None:
    with pytest.raises(ShapeError):
        ExplanationNode("2d6", 12, SUM_OF, [])


def test_roll_with_constant_descriptor_fails() -> None:
    with pytest.raises(TypeError):
        ExplanationNode("d6", 6, ROLLED_VALUE, ConstantDescriptor(value=6))


def test_cause_must_be_a_cause_kind() -> None:
    with pytest.raises(DetailTypeError):
        ExplanationNode("d6", 6, "roll", D6)  # type: ignore[arg-type]


@pytest.mark.parametrize("number", ["twelve", 12.5, None, True, [12]])
def test_non_integral_number_fails(number: Any) -> None:
    with pytest.raises(ConstructionError):
        ExplanationNode("d20", number, ROLLED_VALUE, D20)


@pytest.mark.parametrize("label", [None, "", "   "])
def test_unlabelable_label_fails(label: Any) -> None:
    with pytest.raises(ConstructionError):
        ExplanationNode(label, 12, ROLLED_VALUE, D20)


def test_label_and_number_are_coerced() -> None:
    node = ExplanationNode(20, "12", ROLLED_VALUE, D20)
    assert node.label == "20"
    assert node.number == 12
    assert ExplanationNode("d20", 12.0, ROLLED_VALUE, D20).number == 12


def test_details_keep_supplied_order_and_wrap_plain_rolls() -> None:
    first, last = _roll(6), _roll(1)
    node = ExplanationNode("3d6", 10, SUM_OF, [first, 3, last])
    assert node.children[0] is first
    assert isinstance(node.children[1], TerminalValue) and node.children[1].value == 3
    assert node.children[2] is last
    assert isinstance(node.details, tuple)


def test_single_leaf_nodes_have_no_children() -> None:
    node = ExplanationNode("d20", 12, ROLLED_VALUE, D20)
    assert node.children == ()
    assert node.details is D20


def test_nodes_are_immutable() -> None:
    node = _roll(3)
    with pytest.raises(AttributeError):
        node.number = 4  # type: ignore[misc]
    with pytest.raises(AttributeError):
        node._label = "d8"  # type: ignore[misc]


def test_child_cannot_have_two_parents() -> None:
    """A node sits in exactly one parent slot."""
    shared = _roll(6)
    ExplanationNode("1d6", 6, SUM_OF, [shared])
    with pytest.raises(ShapeError):
        ExplanationNode("again", 6, SUM_OF, [shared])


def test_child_cannot_repeat_in_one_list() -> None:
    twice = _roll(6)
    with pytest.raises(ShapeError):
        ExplanationNode("2d6", 12, SUM_OF, [twice, twice])
    # the failed construction claimed nothing
    assert isinstance(ExplanationNode("1d6", 6, SUM_OF, [twice]), ExplanationNode)


def test_failed_construction_leaves_children_unclaimed() -> None:
    child = _roll(4)
    with pytest.raises(ConstructionError):
        ExplanationNode("1d6", "four", SUM_OF, [child])
    assert ExplanationNode("1d6", 4, SUM_OF, [child]).children == (child,)


def test_as_hash_for_roll() -> None:
    node = ExplanationNode("1d20", 12, ROLLED_VALUE, D20)
    assert node.as_hash() == {
        "label": "1d20",
        "number": 12,
        "identity": node.identity,
        "cause": "roll",
        "has_children": False,
        "die_sides": 20,
        "die_label": "d20",
    }


def test_as_hash_for_sum() -> None:
    node = ExplanationNode("2d6", 7, SUM_OF, [3, 4])
    h = node.as_hash()
    assert h["cause"] == "sum"
    assert h["has_children"] is True
    assert "die_sides" not in h


def test_identities_are_unique_per_instance() -> None:
    a, b = _roll(3), _roll(3)
    assert a.identity != b.identity
    assert a != b


def test_repr_names_label_number_and_cause() -> None:
    assert repr(_roll(3)) == "ExplanationNode(label='d6', number=3, cause='roll')"


def test_copies_are_the_node_itself() -> None:
    """Copying never yields a second owner for the same children."""
    node = ExplanationNode("2d6", 7, SUM_OF, [_roll(3), _roll(4)])
    assert copy.copy(node) is node
    assert copy.deepcopy(node) is node
    assert copy.deepcopy([node])[0] is node
