from __future__ import annotations

from pydantic import BaseModel, Field

from ..catalog.models import CatalogItem
from ..chat.models import Intent
from ..errors import ComponentError
from .config import StrategyName


class Classification(BaseModel):
    category: str = "all"
    gender: str = "all"


class ScoredItem(BaseModel):
    item: CatalogItem
    score: float


class RankingDiagnostics(BaseModel):
    catalog_size: int = 0
    after_category: int = 0
    after_gender: int = 0
    scored: int = 0
    returned: int = 0


class RecommendationRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=500)
    strategy: StrategyName | None = None


class RecommendationResult(BaseModel):
    recommendations: list[ScoredItem] = Field(default_factory=list)
    intent: Intent = Field(default_factory=Intent.default)
    classification: Classification = Field(default_factory=Classification)
    strategy: StrategyName | None = None
    diagnostics: RankingDiagnostics = Field(default_factory=RankingDiagnostics)
    errors: list[ComponentError] = Field(default_factory=list)
