from __future__ import annotations

import re

import numpy as np

from ..catalog.models import CatalogItem
from .config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from .encoder import encode_batch

_TAG_RE = re.compile(r"<[^>]+>")
_GENDER_HINTS = ["men", "man", "women", "woman", "unisex", "men's", "women's"]


def _gender_hint(item: CatalogItem) -> str:
    title = item.title.lower()
    tags = (item.tags or "").lower()
    for hint in _GENDER_HINTS:
        if re.search(rf"\b{re.escape(hint)}\b", title) or re.search(rf"\b{re.escape(hint)}\b", tags):
            return hint
    return ""


def build_product_text(item: CatalogItem) -> str:
    """Title, type, gender hint, tags and plain-text description in one lowercase string."""
    description = _TAG_RE.sub("", item.body_html or "")
    parts = [item.title, item.product_type or "", _gender_hint(item), item.tags or "", description]
    return " ".join(p.strip() for p in parts if p and p.strip()).lower()


def generate_product_embeddings(
    items: list[CatalogItem],
    config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> dict[str, np.ndarray]:
    """Encode every item's product text in one batch, keyed by item id."""
    if not items:
        return {}
    vectors = encode_batch([build_product_text(item) for item in items], config=config)
    return {item.id: vectors[i] for i, item in enumerate(items)}
