"""dicetrail: explain how a dice result was calculated.

The package builds typed explanation trees (``ExplanationNode``) recording how a
number was derived from sums, die rolls and constants, flattens them into
template-friendly records, and renders a one-line breakdown string.

Example
-------
>>> from dicetrail import DieDescriptor, ExplanationNode, ROLLED_VALUE, standard_text
>>> d10 = DieDescriptor(sides=10)
>>> standard_text(ExplanationNode("1d10", 5, ROLLED_VALUE, d10))
'1d10: 5'
"""

from __future__ import annotations

from dicetrail.core.contracts.cause import (
    CONSTANT_VALUE,
    REROLLED_VALUE,
    ROLLED_VALUE,
    SUM_OF,
    CauseKind,
    DetailArity,
    get_cause,
    register_cause,
)
from dicetrail.core.contracts.descriptors import (
    REROLL_TYPES,
    ConstantDescriptor,
    DieDescriptor,
    TerminalValue,
)
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.errors import (
    ConstructionError,
    DetailTypeError,
    ExplanationError,
    ShapeError,
)
from dicetrail.core.explain.depth import depth_range, max_depth, min_depth
from dicetrail.core.explain.flatten import flatten_breadth_first, flatten_depth_first
from dicetrail.core.explain.text import standard_text

__all__ = [
    "__version__",
    "CONSTANT_VALUE",
    "REROLLED_VALUE",
    "REROLL_TYPES",
    "ROLLED_VALUE",
    "SUM_OF",
    "CauseKind",
    "ConstantDescriptor",
    "ConstructionError",
    "DetailArity",
    "DetailTypeError",
    "DieDescriptor",
    "ExplanationError",
    "ExplanationNode",
    "ShapeError",
    "TerminalValue",
    "depth_range",
    "flatten_breadth_first",
    "flatten_depth_first",
    "get_cause",
    "max_depth",
    "min_depth",
    "register_cause",
    "standard_text",
]
__version__ = "0.3.0"
