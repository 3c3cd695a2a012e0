"""Render an explanation tree as a single human-readable line.

The renderer walks the breadth-first records once, so every sum is written out
with all of its pieces before any piece is itself broken down:

    3d6+6: 18  =  12 (3d6) + 6 (bonus). 3d6: 12  =  6 + 4 + 2 (d6)

Rules, per record:

1. The root writes ``"<label>: <number>"``.
2. The first row of a sibling group opens a clause
   ``". <parent label>: <parent number>  =  "``, unless the parent was the only
   row on its level, in which case the parent already ended with ``"  =  "``
   and the group continues inline.
3. Inside a group, a change of label closes the previous run of same-label
   rows with ``" (<previous label>)"``, so ``3 + 4 + 5 (d6)`` is tagged once.
4. Numbers are signed: ``"3"``/``"-3"`` first, then ``" + 3"``/``" - 3"``.
5. The last row of a group with several rows closes the final run with
   ``" (<label>)"``.
6. A row whose children follow inline (see rule 2) ends with ``"  =  "``.

Run labels equal to the parent's own label are never written, since they would
repeat the clause heading.
"""

from __future__ import annotations

from collections import Counter

from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.settings import get_logger

from .flatten import FlatRecord, flatten_breadth_first

logger = get_logger(__name__)

EQUALS = "  =  "


def _signed(number: int, first: bool) -> str:
    if first:
        return f"-{abs(number)}" if number < 0 else str(number)
    return f" - {abs(number)}" if number < 0 else f" + {number}"


def standard_text(root: ExplanationNode) -> str:
    """Return the one-line breakdown of ``root``.

    Examples
    --------
    ``"1d20: 12"`` for a single roll, ``"3d6: 12  =  3 + 4 + 5 (d6)"`` for a
    plain sum of three dice.
    """
    records = flatten_breadth_first(root)
    level_sizes = Counter(rec["depth"] for rec in records)
    expanded = {rec["parent_identity"] for rec in records if "parent_identity" in rec}

    def inline(rec: FlatRecord, prefix: str = "") -> bool:
        return bool(rec[f"{prefix}only"]) and level_sizes[rec[f"{prefix}depth"]] == 1

    parts: list[str] = []
    run_label: str | None = None
    for rec in records:
        if rec["depth"] == 0:
            parts.append(f"{rec['label']}: ")
        elif rec["first"]:
            if not inline(rec, "parent_"):
                parts.append(f". {rec['parent_label']}: {rec['parent_number']}{EQUALS}")
            run_label = None
        elif run_label is not None and rec["label"] != run_label:
            if run_label != rec["parent_label"]:
                parts.append(f" ({run_label})")

        parts.append(_signed(rec["number"], rec["first"]))
        run_label = rec["label"]

        if rec["depth"] > 0 and rec["last"] and not rec["only"]:
            if rec["label"] != rec["parent_label"]:
                parts.append(f" ({rec['label']})")
        if rec["identity"] in expanded and inline(rec):
            parts.append(EQUALS)

    text = "".join(parts)
    logger.debug("Rendered %r as %r", root.label, text)
    return text


__all__ = ["standard_text"]
