"""Shared explanation trees for the test suite.

Nodes may only sit in one parent slot, so every fixture builds a fresh tree.
Descriptors are value objects and are shared freely.

Trees
-----
- ``ge_simple``      : 1d20 -> 12, a single roll.
- ``ge_three``       : 3d6 -> 12 from rolls 3, 4, 5.
- ``ge_bunch_plus``  : 3d6+6 -> 18 from (3d6 -> 12 from 6, 4, 2) and bonus 6.
- ``ge_attack``      : Attack -> 17 from 1d20 -> 12 and modifier 5.
- ``ge_2d8_add_2d6`` : 2d8+2d6 -> 19 from (2d8 -> 10 from 6, 4) and (2d6 -> 9 from 3, 6).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import pytest

from dicetrail.core.contracts.cause import CONSTANT_VALUE, ROLLED_VALUE, SUM_OF
from dicetrail.core.contracts.descriptors import ConstantDescriptor, DieDescriptor
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.settings import load_settings

D6 = DieDescriptor(sides=6)
D8 = DieDescriptor(sides=8)
D20 = DieDescriptor(sides=20)
PLUS_5 = ConstantDescriptor(value=5, label="bonus")
PLUS_6 = ConstantDescriptor(value=6, label="bonus")


def _rolls(die: DieDescriptor, numbers: Sequence[int]) -> list[ExplanationNode]:
    return [ExplanationNode(die.label, n, ROLLED_VALUE, die) for n in numbers]


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Rebuild settings around every test so env tweaks never leak."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()


@pytest.fixture
def ge_simple() -> ExplanationNode:
    return ExplanationNode("1d20", 12, ROLLED_VALUE, D20)


@pytest.fixture
def ge_three() -> ExplanationNode:
    return ExplanationNode("3d6", 12, SUM_OF, _rolls(D6, [3, 4, 5]))


@pytest.fixture
def ge_bunch_plus() -> ExplanationNode:
    return ExplanationNode(
        "3d6+6",
        18,
        SUM_OF,
        [
            ExplanationNode("3d6", 12, SUM_OF, _rolls(D6, [6, 4, 2])),
            ExplanationNode("bonus", 6, CONSTANT_VALUE, PLUS_6),
        ],
    )


@pytest.fixture
def ge_attack() -> ExplanationNode:
    return ExplanationNode(
        "Attack",
        17,
        SUM_OF,
        [
            ExplanationNode("1d20", 12, ROLLED_VALUE, D20),
            ExplanationNode("modifier", 5, CONSTANT_VALUE, PLUS_5),
        ],
    )


@pytest.fixture
def ge_2d8_add_2d6() -> ExplanationNode:
    return ExplanationNode(
        "2d8+2d6",
        19,
        SUM_OF,
        [
            ExplanationNode("2d8", 10, SUM_OF, _rolls(D8, [6, 4])),
            ExplanationNode("2d6", 9, SUM_OF, _rolls(D6, [3, 6])),
        ],
    )
