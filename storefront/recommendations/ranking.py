from __future__ import annotations

import logging
from typing import Sequence

from .models import ScoredItem

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def rank(
    scored: Sequence[ScoredItem],
    threshold: float = 0.0,
    limit: int = DEFAULT_LIMIT,
) -> list[ScoredItem]:
    """
    Sort by score descending, drop scores at or below ``threshold``, keep ``limit``.

    The sort is stable, so equal scores keep the catalog provider's order.
    """
    ordered = sorted(scored, key=lambda s: s.score, reverse=True)

    if logger.isEnabledFor(logging.DEBUG):
        for i, s in enumerate(ordered, start=1):
            logger.debug("%d. %s - score %.4f - tags: %s", i, s.item.title, s.score, s.item.tags)

    kept = [s for s in ordered if s.score > threshold]
    return kept[:limit]
