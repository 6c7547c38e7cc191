from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .catalog.config import CatalogConfig
from .embeddings.config import EmbeddingConfig
from .errors import ConfigurationError
from .llm.config import LLMConfig
from .recommendations.config import MAX_RECOMMENDATIONS, EngineConfig

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class Settings:
    llm: LLMConfig = field(default_factory=LLMConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    embeddings: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    session_secret: str = "storefront-secret-change-in-production"
    catalog_snapshot_path: Path = _PROJECT_ROOT / "data" / "catalog.csv"

    def missing_fields(self) -> list[str]:
        """Names of required settings that are unset or out of range."""
        missing: list[str] = []
        if self.llm.enabled and not self.llm.api_key:
            missing.append("GROQ_API_KEY")
        if not self.catalog.store_domain:
            missing.append("SHOPIFY_STORE_DOMAIN")
        if not self.catalog.access_token:
            missing.append("SHOPIFY_ACCESS_TOKEN")
        if self.catalog.page_size < 1 or self.catalog.page_size > 250:
            missing.append("SHOPIFY_PAGE_SIZE")
        if not 1 <= self.engine.limit <= MAX_RECOMMENDATIONS:
            missing.append("RECOMMENDATION_LIMIT")
        return missing

    def validate(self) -> "Settings":
        missing = self.missing_fields()
        if missing:
            raise ConfigurationError(missing)
        return self


def load_settings(env_file: Path | None = None) -> Settings:
    """
    Build settings from the environment, reading ``.env`` first.

    Malformed enum or number values raise ``ConfigurationError``; missing
    credentials are only reported by ``Settings.validate``.
    """
    load_dotenv(env_file or _PROJECT_ROOT / ".env")

    try:
        engine = EngineConfig.from_env()
    except ValueError as exc:
        raise ConfigurationError(
            ["RECOMMENDER_STRATEGY / GENDER_POLICY / RECOMMENDATION_LIMIT / HISTORY_MAX_TURNS"]
        ) from exc
    try:
        llm = LLMConfig.from_env()
    except ValueError as exc:
        raise ConfigurationError(["GROQ_TIMEOUT"]) from exc

    try:
        catalog = CatalogConfig.from_env()
    except ValueError as exc:
        raise ConfigurationError(["SHOPIFY_PAGE_SIZE"]) from exc

    snapshot = os.getenv("CATALOG_SNAPSHOT_PATH")
    return Settings(
        llm=llm,
        catalog=catalog,
        embeddings=EmbeddingConfig(),
        engine=engine,
        session_secret=os.getenv("SESSION_SECRET", Settings.session_secret),
        catalog_snapshot_path=Path(snapshot) if snapshot else Settings.catalog_snapshot_path,
    )
