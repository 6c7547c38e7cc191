from __future__ import annotations

from abc import ABC, abstractmethod
from functools import partial
from typing import Callable, Sequence

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity

from ..catalog.models import CatalogItem
from ..chat.models import Intent
from ..embeddings.config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from ..embeddings.encoder import encode_batch
from ..embeddings.product_text import build_product_text
from .config import StrategyName
from .similarity import similarity

FUZZY_CUTOFF = 0.8

TAG_WEIGHTS: dict[str, float] = {
    # Gender
    "men": 3, "women": 3, "man": 3, "woman": 3,
    # Product types
    "shoes": 6, "shirt": 6, "t-shirt": 6, "blazer": 6, "blazers": 6,
    "jacket": 6, "jackets": 6, "sweatshirt": 6, "dress": 6, "blouse": 6,
    "top": 6, "bottom": 6, "trouser": 6, "cullots": 6, "polo": 6,
    # Materials
    "cotton": 3, "denim": 3, "fleece": 3, "knit": 3, "suede": 3,
    "textured cotton": 3, "waffle knit": 3, "thermal": 3,
    # Styles
    "casual": 2, "formal": 2, "cross fit": 2, "lace up": 2,
    # Seasons
    "summer 25": 2, "winter 24": 2, "summer": 2, "winter": 2,
    # Brands
    "mishal apparel": 1, "adan textile": 1, "tailored aesthetics": 1,
    # Store categories
    "new arrival": 1, "best seller": 1, "sale": 1, "clearance": 1,
}
DEFAULT_TAG_WEIGHT = 1.0


def tag_weight(token: str) -> float:
    return TAG_WEIGHTS.get(token, DEFAULT_TAG_WEIGHT)


def score_fuzzy(item: CatalogItem, keywords: Sequence[str]) -> float:
    """
    Average per-keyword credit: exact tag 2, fuzzy tag 1.5, plus 1 for a fuzzy title hit.
    """
    if not keywords:
        return 0.0

    tags = item.tag_list
    title = item.title.lower()
    total = 0.0
    for kw in keywords:
        kw = kw.lower()
        if kw in tags:
            total += 2.0
        elif any(similarity(kw, tag) > FUZZY_CUTOFF for tag in tags):
            total += 1.5
        if similarity(kw, title) > FUZZY_CUTOFF:
            total += 1.0
    return total / len(keywords)


def score_weighted(ai_text: str, item_tags: str | None) -> float:
    """
    Weighted overlap between AI tag keywords and an item's comma-separated tags.

    Exact token/tag pairs count fully, containment either way counts half.
    The score is the mean of match density and weight density.
    """
    if not item_tags:
        return 0.0

    tokens = [w for w in ai_text.lower().split() if len(w) > 1]
    if not tokens:
        return 0.0
    # Empty tags would "contain" every token
    tags = [t.strip() for t in item_tags.lower().split(",") if t.strip()]

    match_count = 0.0
    total_weight = 0.0
    for token in tokens:
        for tag in tags:
            if tag == token:
                match_count += 1
                total_weight += tag_weight(token)
            elif token in tag or tag in token:
                match_count += 0.5
                total_weight += tag_weight(token) * 0.5

    base_score = match_count / len(tokens)
    weight_score = total_weight / len(tokens)
    return (base_score + weight_score) / 2


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------


class ScoringStrategy(ABC):
    """
    One way of scoring filtered candidates against an intent.

    Items whose score is not strictly above ``threshold`` are dropped at
    ranking time.
    """

    name: StrategyName
    threshold: float = 0.0
    # Which intent contract feeds this strategy
    uses_structured_intent: bool = False

    def prepare(self, intent: Intent, items: Sequence[CatalogItem]) -> None:
        """Hook for per-query batch work before ``score`` is called."""

    @abstractmethod
    def score(self, item: CatalogItem, intent: Intent) -> float:
        raise NotImplementedError


class FuzzyMatchStrategy(ScoringStrategy):
    name = StrategyName.fuzzy
    threshold = 0.0
    uses_structured_intent = True

    def score(self, item: CatalogItem, intent: Intent) -> float:
        return score_fuzzy(item, intent.keywords)


class WeightedTagOverlapStrategy(ScoringStrategy):
    name = StrategyName.weighted
    threshold = 0.1

    def score(self, item: CatalogItem, intent: Intent) -> float:
        return score_weighted(intent.text, item.tags)


class EmbeddingSimilarityStrategy(ScoringStrategy):
    """Cosine similarity between the intent text and each item's product text."""

    name = StrategyName.embedding

    def __init__(
        self,
        encoder: Callable[[list[str]], np.ndarray] | None = None,
        threshold: float = 0.0,
    ) -> None:
        self.encoder = encoder or encode_batch
        self.threshold = threshold
        self._scores: dict[str, float] = {}

    def prepare(self, intent: Intent, items: Sequence[CatalogItem]) -> None:
        self._scores = {}
        if not items or not intent.text.strip():
            return
        texts = [intent.text.lower()] + [build_product_text(item) for item in items]
        vectors = np.asarray(self.encoder(texts))
        sims = cosine_similarity(vectors[:1], vectors[1:]).flatten()
        self._scores = {item.id: float(sims[i]) for i, item in enumerate(items)}

    def score(self, item: CatalogItem, intent: Intent) -> float:
        return self._scores.get(item.id, 0.0)


def get_strategy(
    name: StrategyName | str,
    embedding_threshold: float = 0.0,
    embedding_config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
) -> ScoringStrategy:
    name = StrategyName(name)
    if name == StrategyName.fuzzy:
        return FuzzyMatchStrategy()
    if name == StrategyName.weighted:
        return WeightedTagOverlapStrategy()
    return EmbeddingSimilarityStrategy(
        encoder=partial(encode_batch, config=embedding_config),
        threshold=embedding_threshold,
    )
