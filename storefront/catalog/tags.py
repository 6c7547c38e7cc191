from __future__ import annotations

from collections import Counter
from typing import Any, Iterable

from .models import CatalogItem


def product_tags(item: CatalogItem) -> list[str]:
    """Trimmed tags of one product, original casing preserved."""
    if not item.tags:
        return []
    return [t.strip() for t in item.tags.split(",") if t.strip()]


def all_store_tags(items: Iterable[CatalogItem]) -> list[str]:
    """Unique tags across the catalog, sorted."""
    unique: set[str] = set()
    for item in items:
        unique.update(product_tags(item))
    return sorted(unique)


def all_product_types(items: Iterable[CatalogItem]) -> list[str]:
    return sorted({item.product_type.strip() for item in items if item.product_type and item.product_type.strip()})


def tag_usage(items: Iterable[CatalogItem]) -> list[dict[str, Any]]:
    """How many products carry each tag, most used first (ties alphabetical)."""
    counter: Counter[str] = Counter()
    for item in items:
        counter.update(set(product_tags(item)))
    ranked = sorted(counter.items(), key=lambda kv: (-kv[1], kv[0]))
    return [{"tag": tag, "count": count} for tag, count in ranked]
