"""Tests for the one-line text breakdown."""

from __future__ import annotations

from dicetrail.core.contracts.cause import CONSTANT_VALUE, REROLLED_VALUE, ROLLED_VALUE, SUM_OF
from dicetrail.core.contracts.descriptors import ConstantDescriptor, DieDescriptor, TerminalValue
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.explain.text import standard_text

D6 = DieDescriptor(sides=6)
D10 = DieDescriptor(sides=10)


def test_single_roll(ge_simple: ExplanationNode) -> None:
    assert standard_text(ge_simple) == "1d20: 12"


def test_single_d10() -> None:
    assert standard_text(ExplanationNode("1d10", 5, ROLLED_VALUE, D10)) == "1d10: 5"


def test_plain_sum(ge_three: ExplanationNode) -> None:
    assert standard_text(ge_three) == "3d6: 12  =  3 + 4 + 5 (d6)"


def test_sum_with_bonus(ge_bunch_plus: ExplanationNode) -> None:
    assert standard_text(ge_bunch_plus) == (
        "3d6+6: 18  =  12 (3d6) + 6 (bonus). 3d6: 12  =  6 + 4 + 2 (d6)"
    )


def test_attack_roll(ge_attack: ExplanationNode) -> None:
    assert standard_text(ge_attack) == "Attack: 17  =  12 (1d20) + 5 (modifier)"


def test_two_nested_sums(ge_2d8_add_2d6: ExplanationNode) -> None:
    """Every piece of a sum is written before any piece is broken down."""
    assert standard_text(ge_2d8_add_2d6) == (
        "2d8+2d6: 19  =  10 (2d8) + 9 (2d6). 2d8: 10  =  6 + 4 (d8). 2d6: 9  =  3 + 6 (d6)"
    )


def test_negative_contributions_are_subtracted() -> None:
    node = ExplanationNode(
        "1d6-2",
        1,
        SUM_OF,
        [
            ExplanationNode("1d6", 3, ROLLED_VALUE, D6),
            ExplanationNode("penalty", -2, CONSTANT_VALUE, ConstantDescriptor(value=-2)),
        ],
    )
    assert standard_text(node) == "1d6-2: 1  =  3 (1d6) - 2 (penalty)"


def test_negative_first_contribution() -> None:
    node = ExplanationNode(
        "shift",
        2,
        SUM_OF,
        [
            ExplanationNode("drain", -4, CONSTANT_VALUE, ConstantDescriptor(value=-4)),
            ExplanationNode("1d6", 6, ROLLED_VALUE, D6),
        ],
    )
    assert standard_text(node) == "shift: 2  =  -4 (drain) + 6 (1d6)"


def test_only_children_continue_inline() -> None:
    inner = ExplanationNode("1d6", 4, SUM_OF, [ExplanationNode("d6", 4, ROLLED_VALUE, D6)])
    node = ExplanationNode("total", 4, SUM_OF, [inner])
    assert standard_text(node) == "total: 4  =  4  =  4"


def test_terminal_values_use_their_label() -> None:
    node = ExplanationNode(
        "2d6",
        9,
        SUM_OF,
        [4, TerminalValue(value=5, rolls=(1, 5), reroll_type="reroll_replace")],
    )
    assert standard_text(node) == "2d6: 9  =  4 + 5 (die)"


def test_reroll_leaf_is_a_single_number() -> None:
    node = ExplanationNode("d6", 6, REROLLED_VALUE, TerminalValue(value=6, rolls=(1, 6)))
    assert standard_text(node) == "d6: 6"
