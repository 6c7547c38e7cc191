from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from pydantic import ValidationError
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events
from .catalog.models import CatalogItem
from .catalog.shopify import ShopifyCatalog
from .catalog.tags import all_product_types, all_store_tags, tag_usage
from .chat.models import ConversationHistory
from .recommendations.engine import Recommender
from .recommendations.models import RecommendationRequest, RecommendationResult
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)

_HISTORY_KEY = "conversation"
# Signed cookies are capped at about 4 KB by browsers
SESSION_HISTORY_MAX_TURNS = 6


def _load_history(request: Request, max_turns: int | None) -> ConversationHistory:
    raw = request.session.get(_HISTORY_KEY)
    if not raw:
        return ConversationHistory(max_turns=max_turns)
    try:
        return ConversationHistory(turns=raw.get("turns", []), max_turns=max_turns)
    except (AttributeError, TypeError, ValidationError):
        logger.warning("Discarding unreadable conversation history from session")
        return ConversationHistory(max_turns=max_turns)


def create_app(
    settings: Settings | None = None,
    recommender: Recommender | None = None,
) -> FastAPI:
    """
    Build the API.

    Without an injected recommender the settings are validated here, once,
    and a Shopify-backed recommender is constructed from them.
    """
    settings = settings or load_settings()
    if recommender is None:
        settings.validate()
        catalog = ShopifyCatalog(settings.catalog)
        recommender = Recommender(
            llm_config=settings.llm,
            engine_config=settings.engine,
            fetch_catalog=catalog.fetch_catalog_page,
            embedding_config=settings.embeddings,
        )

    app = FastAPI(title="Storefront Recommendation API", version="1.0.0")
    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret)
    max_turns = settings.engine.history_max_turns or SESSION_HISTORY_MAX_TURNS

    def _current_catalog() -> list[CatalogItem]:
        if recommender.fetch_catalog is None:
            return []
        return recommender.fetch_catalog().items

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/metadata")
    def metadata() -> dict:
        items = _current_catalog()
        return {"tags": all_store_tags(items), "product_types": all_product_types(items)}

    @app.get("/tags/usage")
    def tags_usage() -> list[dict]:
        return tag_usage(_current_catalog())

    @app.post("/recommendations", response_model=RecommendationResult)
    def recommendations(body: RecommendationRequest, request: Request) -> RecommendationResult:
        history = _load_history(request, max_turns)
        result = recommender.recommend(body.query, history=history, strategy=body.strategy)
        request.session[_HISTORY_KEY] = history.model_dump()
        return result

    @app.post("/conversation/reset")
    def reset_conversation(request: Request) -> dict[str, str]:
        history = _load_history(request, max_turns)
        history.reset()
        request.session[_HISTORY_KEY] = history.model_dump()
        return {"status": "reset"}

    @app.get("/conversation")
    def conversation(request: Request) -> dict:
        return _load_history(request, max_turns).model_dump()

    @app.get("/analytics")
    def analytics() -> dict:
        return compute_analytics(get_events())

    return app
