"""Core package initializer for dicetrail.

The explanation model lives in ``dicetrail.core.contracts`` and the tree
algorithms in ``dicetrail.core.explain``. Settings conveniences are imported
from their own module:
    from dicetrail.core.settings import settings, load_settings, Settings, get_logger
"""

from __future__ import annotations

__all__ = ["__doc__"]
