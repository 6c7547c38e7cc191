from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd

from .models import CatalogItem

CANONICAL_COLUMNS: List[str] = [
    "id",
    "title",
    "product_type",
    "tags",
    "body_html",
]


def save_catalog(items: list[CatalogItem], path: Path) -> Path:
    """
    Persist a catalog page as CSV.

    The file always carries the canonical columns in order, even when the
    page is empty.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    df = pd.DataFrame([item.model_dump() for item in items], columns=CANONICAL_COLUMNS)
    df.to_csv(path, index=False)
    return path


def load_catalog(path: Path) -> list[CatalogItem]:
    """Read a CSV snapshot back into catalog items, in file order."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    # Older snapshots may lack optional columns
    for col in CANONICAL_COLUMNS:
        if col not in df.columns:
            df[col] = ""

    items: list[CatalogItem] = []
    for record in df[CANONICAL_COLUMNS].to_dict(orient="records"):
        items.append(CatalogItem(
            id=record["id"],
            title=record["title"],
            product_type=record["product_type"] or None,
            tags=record["tags"] or None,
            body_html=record["body_html"] or None,
        ))
    return items


if __name__ == "__main__":
    import sys

    from ..settings import load_settings
    from .shopify import ShopifyCatalog

    settings = load_settings()
    result = ShopifyCatalog(settings.catalog).fetch_catalog_page()
    if result.error:
        print(f"Catalog fetch failed: {result.error.detail}")
        sys.exit(1)
    out = save_catalog(result.items, settings.catalog_snapshot_path)
    print(f"Saved {len(result.items)} products to {out}")
