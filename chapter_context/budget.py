# chapter_context/budget.py
"""Greedy, priority-ordered selection of context items under a token budget."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import structlog

from .context_models import BuiltContext, ContextItem

logger = structlog.get_logger(__name__)

TokenEstimator = Callable[[str], int]


def fit_to_budget(
    items: Sequence[ContextItem],
    budget: int,
    estimate_tokens: TokenEstimator,
) -> BuiltContext:
    """Select items highest priority first while the running total fits.

    The sort is stable, so equal priorities keep insertion order. An item that
    does not fit is skipped for good; smaller items after it may still be
    selected. Nothing is ever partially included.
    """
    ranked = sorted(items, key=lambda item: item.priority or 0, reverse=True)

    selected: list[ContextItem] = []
    total_tokens = 0
    truncated = False
    for item in ranked:
        item_tokens = estimate_tokens(item.content)
        if total_tokens + item_tokens <= budget:
            selected.append(item)
            total_tokens += item_tokens
        else:
            truncated = True
            logger.debug(
                "Dropped context item over budget",
                item_type=item.type.value,
                item_id=item.id,
                item_tokens=item_tokens,
                used_tokens=total_tokens,
                budget=budget,
            )

    return BuiltContext(
        items=selected,
        total_tokens=total_tokens,
        truncated=truncated,
        candidate_count=len(ranked),
    )
