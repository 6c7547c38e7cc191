from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum


class GenderPolicy(str, Enum):
    # strict drops gender-neutral items when a gender is requested,
    # permissive keeps them
    strict = "strict"
    permissive = "permissive"


# Upper bound on results per query
MAX_RECOMMENDATIONS = 5


class StrategyName(str, Enum):
    fuzzy = "fuzzy"
    weighted = "weighted"
    embedding = "embedding"


@dataclass(frozen=True)
class EngineConfig:
    strategy: StrategyName = StrategyName.weighted
    gender_policy: GenderPolicy = GenderPolicy.strict
    limit: int = MAX_RECOMMENDATIONS
    external_timeout: float = 20.0
    embedding_threshold: float = 0.0
    history_max_turns: int | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        max_turns = os.getenv("HISTORY_MAX_TURNS")
        return cls(
            strategy=StrategyName(os.getenv("RECOMMENDER_STRATEGY", cls.strategy.value)),
            gender_policy=GenderPolicy(os.getenv("GENDER_POLICY", cls.gender_policy.value)),
            limit=int(os.getenv("RECOMMENDATION_LIMIT", cls.limit)),
            history_max_turns=int(max_turns) if max_turns else None,
        )


DEFAULT_ENGINE_CONFIG = EngineConfig()
