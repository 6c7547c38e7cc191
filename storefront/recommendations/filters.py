from __future__ import annotations

import logging
from typing import Sequence

from ..catalog.models import CatalogItem
from .classify import contains_term, has_gender_marker
from .config import GenderPolicy

logger = logging.getLogger(__name__)

# Terms looked for, as whole words, in an item's product type, title and tags.
CATEGORY_MATCH_TERMS: dict[str, list[str]] = {
    "shoes": ["shoe", "sneaker", "footwear", "boot"],
    "shirts": ["shirt", "t-shirt", "tshirt", "top", "polo"],
    "jackets": ["jacket", "blazer", "coat"],
    "bottoms": ["bottom", "trouser", "cullot", "pant"],
    "dresses": ["dress", "blouse"],
    "sweatshirts": ["sweatshirt", "hoodie"],
}

_OPPOSITE = {"men": "women", "women": "men"}


def _searchable(item: CatalogItem) -> str:
    return " | ".join([
        (item.product_type or "").lower(),
        item.title.lower(),
        (item.tags or "").lower(),
    ])


def matches_category(item: CatalogItem, category: str) -> bool:
    terms = CATEGORY_MATCH_TERMS.get(category)
    if not terms:
        return False
    text = _searchable(item)
    return any(contains_term(text, term) for term in terms)


def filter_by_category(items: Sequence[CatalogItem], category: str) -> list[CatalogItem]:
    if category == "all":
        return list(items)
    return [item for item in items if matches_category(item, category)]


def filter_by_gender(
    items: Sequence[CatalogItem],
    gender: str,
    policy: GenderPolicy = GenderPolicy.strict,
) -> list[CatalogItem]:
    """
    Drop items marked for the opposite gender, then apply the neutral-item policy.

    Under ``strict`` only items carrying the requested marker survive; under
    ``permissive`` unmarked items are kept too.
    """
    if gender not in _OPPOSITE:
        return list(items)

    opposite = _OPPOSITE[gender]
    kept: list[CatalogItem] = []
    for item in items:
        text = _searchable(item)
        if has_gender_marker(text, opposite):
            continue
        if has_gender_marker(text, gender) or policy == GenderPolicy.permissive:
            kept.append(item)
    return kept


def filter_items(
    items: Sequence[CatalogItem],
    category: str,
    gender: str,
    policy: GenderPolicy = GenderPolicy.strict,
) -> tuple[list[CatalogItem], list[CatalogItem]]:
    """
    Category pass then gender pass, each narrowing the previous result.

    Returns ``(after_category, after_gender)`` so callers can report both counts.
    """
    after_category = filter_by_category(items, category)
    logger.debug("After category filter (%s): %d items", category, len(after_category))
    after_gender = filter_by_gender(after_category, gender, policy)
    logger.debug("After gender filter (%s, %s): %d items", gender, policy.value, len(after_gender))
    return after_category, after_gender
