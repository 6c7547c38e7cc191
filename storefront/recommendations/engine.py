from __future__ import annotations

import logging
import time
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FutureTimeoutError
from typing import Callable, Sequence

from ..analytics.store import record_event
from ..catalog.models import CatalogFetchResult, CatalogItem
from ..chat.intent import extract_structured_intent, extract_tag_keywords
from ..chat.models import ConversationHistory, Intent
from ..embeddings.config import DEFAULT_EMBEDDING_CONFIG, EmbeddingConfig
from ..errors import ComponentError, ErrorKind
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .classify import classify_intent
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig, GenderPolicy, StrategyName
from .filters import filter_items
from .models import RankingDiagnostics, RecommendationResult, ScoredItem
from .ranking import DEFAULT_LIMIT, rank
from .scoring import ScoringStrategy, get_strategy

logger = logging.getLogger(__name__)

_IO_EXECUTOR = ThreadPoolExecutor(max_workers=4, thread_name_prefix="storefront-io")


def rank_catalog(
    intent: Intent,
    catalog: Sequence[CatalogItem],
    strategy: ScoringStrategy,
    policy: GenderPolicy = GenderPolicy.strict,
    limit: int = DEFAULT_LIMIT,
) -> RecommendationResult:
    """
    Classify, filter, score and rank a catalog snapshot for one intent.

    Pure given the intent: the catalog sequence is never modified.
    """
    classification = classify_intent(intent)
    after_category, after_gender = filter_items(
        catalog, classification.category, classification.gender, policy,
    )

    strategy.prepare(intent, after_gender)
    scored = [ScoredItem(item=item, score=strategy.score(item, intent)) for item in after_gender]
    recommendations = rank(scored, threshold=strategy.threshold, limit=limit)

    if not recommendations:
        logger.info("No products matched intent %r", intent.text)

    return RecommendationResult(
        recommendations=recommendations,
        intent=intent,
        classification=classification,
        strategy=strategy.name,
        diagnostics=RankingDiagnostics(
            catalog_size=len(catalog),
            after_category=len(after_category),
            after_gender=len(after_gender),
            scored=len(scored),
            returned=len(recommendations),
        ),
    )


class Recommender:
    """
    Query-to-recommendations pipeline around the external parser and catalog.

    ``recommend`` never raises; failures are logged and reported in the
    result's ``errors`` list.
    """

    def __init__(
        self,
        llm_config: LLMConfig = DEFAULT_LLM_CONFIG,
        engine_config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        fetch_catalog: Callable[[], CatalogFetchResult] | None = None,
        embedding_config: EmbeddingConfig = DEFAULT_EMBEDDING_CONFIG,
    ) -> None:
        self.llm_config = llm_config
        self.engine_config = engine_config
        self.embedding_config = embedding_config
        self.fetch_catalog = fetch_catalog

    def _strategy(self, name: StrategyName | None) -> ScoringStrategy:
        return get_strategy(
            name or self.engine_config.strategy,
            embedding_threshold=self.engine_config.embedding_threshold,
            embedding_config=self.embedding_config,
        )

    def interpret(
        self,
        query: str,
        history: ConversationHistory,
        structured: bool,
    ) -> tuple[Intent, ComponentError | None]:
        if structured:
            result = extract_structured_intent(query, history, self.llm_config)
            return result.intent, result.error
        tag_result = extract_tag_keywords(query, history, self.llm_config)
        return Intent.from_tag_keywords(tag_result.text), tag_result.error

    def _await(self, future: Future, component: str):
        try:
            return future.result(timeout=self.engine_config.external_timeout), None
        except FutureTimeoutError:
            future.cancel()
            logger.warning("%s timed out after %.2gs", component, self.engine_config.external_timeout)
            return None, ComponentError(
                kind=ErrorKind.transport,
                component=component,
                detail=f"timed out after {self.engine_config.external_timeout}s",
            )

    def recommend(
        self,
        query: str,
        catalog: Sequence[CatalogItem] | None = None,
        history: ConversationHistory | None = None,
        strategy: StrategyName | None = None,
    ) -> RecommendationResult:
        start_time = time.time()
        if history is None:
            history = ConversationHistory(max_turns=self.engine_config.history_max_turns)

        try:
            result = self._recommend(query, catalog, history, self._strategy(strategy))
        except Exception as exc:
            logger.error("Recommendation failed for query %r", query, exc_info=True)
            result = RecommendationResult(errors=[ComponentError(
                kind=ErrorKind.internal, component="engine", detail=str(exc),
            )])

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        record_event("recommendation", {
            "query": query,
            "strategy": result.strategy.value if result.strategy else None,
            "category": result.classification.category,
            "gender": result.classification.gender,
            "catalog_size": result.diagnostics.catalog_size,
            "after_category": result.diagnostics.after_category,
            "after_gender": result.diagnostics.after_gender,
            "results_returned": len(result.recommendations),
            "error_kinds": [e.kind.value for e in result.errors],
            "response_time_ms": elapsed_ms,
        })
        return result

    def _recommend(
        self,
        query: str,
        catalog: Sequence[CatalogItem] | None,
        history: ConversationHistory,
        strategy: ScoringStrategy,
    ) -> RecommendationResult:
        errors: list[ComponentError] = []

        # Catalog fetch and intent parsing are independent; run them together.
        catalog_future = None
        if catalog is None and self.fetch_catalog is not None:
            catalog_future = _IO_EXECUTOR.submit(self.fetch_catalog)
        # The worker writes to its own copy; an abandoned call must not touch
        # the caller's history after recommend returns.
        working = history.model_copy(deep=True)
        intent_future = _IO_EXECUTOR.submit(
            self.interpret, query, working, strategy.uses_structured_intent,
        )

        interpreted, timeout_error = self._await(intent_future, "intent_parser")
        if timeout_error:
            errors.append(timeout_error)
            if strategy.uses_structured_intent:
                intent = Intent.default()
            else:
                # Same shape as a failed call: the user turn stays, no reply
                history.append("user", query)
                intent = Intent.from_tag_keywords("")
        else:
            history.turns[:] = working.turns
            intent, intent_error = interpreted
            if intent_error:
                errors.append(intent_error)

        if catalog_future is not None:
            fetched, timeout_error = self._await(catalog_future, "catalog")
            if timeout_error:
                errors.append(timeout_error)
                catalog = []
            else:
                catalog = fetched.items
                if fetched.error:
                    errors.append(fetched.error)
        elif catalog is None:
            catalog = []

        logger.info("Ranking %d catalog items with %s strategy", len(catalog), strategy.name.value)

        result = rank_catalog(
            intent,
            catalog,
            strategy,
            policy=self.engine_config.gender_policy,
            limit=self.engine_config.limit,
        )
        result.errors = errors
        return result
