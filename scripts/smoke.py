# scripts/smoke.py
"""
Smoke Test Script for dicetrail.

Usage
-----
1. Explain the built-in sample trees:
    $ uv run python scripts/smoke.py

2. Explain a tree stored as JSON:
    $ uv run python scripts/smoke.py --file samples/attack.json
"""

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path

from dotenv import load_dotenv

from dicetrail import (
    CONSTANT_VALUE,
    ROLLED_VALUE,
    SUM_OF,
    ConstantDescriptor,
    DieDescriptor,
    ExplanationError,
    ExplanationNode,
    depth_range,
    flatten_breadth_first,
    standard_text,
)
from dicetrail.core.codec import read_tree

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
if env_path.exists():
    load_dotenv(env_path)
    print("✅ Loaded .env file")

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# --------------------------------------------------------------------------- #
# Sample Trees
# --------------------------------------------------------------------------- #


def _rolls(sides: int, numbers: list[int]) -> list[ExplanationNode]:
    die = DieDescriptor(sides=sides)
    return [ExplanationNode(die.label, n, ROLLED_VALUE, die) for n in numbers]


def sample_trees() -> list[ExplanationNode]:
    """Build fresh sample trees; nodes cannot be shared between parents."""
    return [
        ExplanationNode("1d20", 12, ROLLED_VALUE, DieDescriptor(sides=20)),
        ExplanationNode("3d6", 12, SUM_OF, _rolls(6, [3, 4, 5])),
        ExplanationNode(
            "3d6+6",
            18,
            SUM_OF,
            [
                ExplanationNode("3d6", 12, SUM_OF, _rolls(6, [6, 4, 2])),
                ExplanationNode("bonus", 6, CONSTANT_VALUE, ConstantDescriptor(value=6)),
            ],
        ),
        ExplanationNode(
            "2d8+2d6",
            19,
            SUM_OF,
            [
                ExplanationNode("2d8", 10, SUM_OF, _rolls(8, [6, 4])),
                ExplanationNode("2d6", 9, SUM_OF, _rolls(6, [3, 6])),
            ],
        ),
    ]


def main() -> None:
    """Execute the smoke test workflow."""
    parser = argparse.ArgumentParser(description="Run dicetrail Smoke Test")
    parser.add_argument("--file", "-f", type=str, help="Path to a JSON explanation tree")
    args = parser.parse_args()

    # 1. Prepare Input Trees
    try:
        if args.file:
            input_path = Path(args.file)
            if not input_path.exists():
                print(f"❌ File not found: {input_path}")
                return
            print(f"\n📂 Using input file: {input_path}")
            roots = [read_tree(input_path)]
        else:
            print("\n🎲 Using built-in sample trees (No --file provided)")
            roots = sample_trees()
    except ExplanationError as exc:
        print(f"\n❌ Invalid explanation: {exc}")
        traceback.print_exc()
        return

    # 2. Inspection Phase
    for root in roots:
        low, high = depth_range(root)
        print("\n" + "=" * 60)
        print(f"📝 {standard_text(root)}")
        print(f"📏 Depth: min={low} max={high}")
        for rec in flatten_breadth_first(root):
            print("  " * rec["depth"] + json.dumps({k: rec[k] for k in ("label", "number")}))


if __name__ == "__main__":
    main()
