"""
API routes for explaining dice results.

Endpoints
---------
- `POST /explain`: Build a tree from its JSON payload and return the one-line
  breakdown, the depth range and the flattened records.

Construction errors surface as HTTP 400 through the handlers registered in
:func:`dicetrail.api.app.create_app`.
"""

from __future__ import annotations

from fastapi import APIRouter

from dicetrail.api.schemas import ExplainRequest, ExplainResponse
from dicetrail.core.codec import load_tree
from dicetrail.core.explain.depth import depth_range
from dicetrail.core.explain.flatten import flatten
from dicetrail.core.explain.text import standard_text
from dicetrail.core.settings import load_settings

router = APIRouter(tags=["Explanation"])


@router.post(
    "/explain",
    response_model=ExplainResponse,
    summary="Explain a dice result",
)
async def explain(request: ExplainRequest) -> ExplainResponse:
    """
    Explain the number described by ``request.tree``.

    The tree is rebuilt through the public constructors, so the same
    validation applies as for in-process callers.
    """
    root = load_tree(request.tree)
    order = request.order or load_settings().default_order
    low, high = depth_range(root)

    return ExplainResponse(
        text=standard_text(root),
        min_depth=low,
        max_depth=high,
        order=order,
        records=flatten(root, order),
    )


__all__ = ["router"]
