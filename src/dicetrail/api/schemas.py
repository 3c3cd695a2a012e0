"""Request/response models for the dicetrail HTTP API."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from dicetrail.core.codec import NodePayload


class ExplainRequest(BaseModel):
    """Body of ``POST /explain``."""

    tree: NodePayload = Field(description="Explanation tree, see dicetrail.core.codec")
    order: Literal["breadth", "depth"] | None = Field(
        default=None,
        description="Record order; defaults to the configured DICETRAIL_ORDER.",
    )


class ExplainResponse(BaseModel):
    """Everything a template renderer needs for one explained number."""

    text: str = Field(description="One-line breakdown of the tree")
    min_depth: int = Field(ge=0)
    max_depth: int = Field(ge=0)
    order: Literal["breadth", "depth"]
    records: list[dict[str, Any]] = Field(default_factory=list)


__all__ = ["ExplainRequest", "ExplainResponse"]
