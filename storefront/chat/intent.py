from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from ..errors import ComponentError, ErrorKind
from ..llm import groq_client
from ..llm.config import DEFAULT_LLM_CONFIG, LLMConfig
from .models import ConversationHistory, Intent, IntentResult, TagKeywordResult

logger = logging.getLogger(__name__)

_COMPONENT = "intent_parser"

# ---------------------------------------------------------------------------
# Store vocabulary
# ---------------------------------------------------------------------------

STORE_VOCABULARY = """\
- Gender: Men, Women, Man, Woman
- Product Types: Shoes, Shirt, T-Shirt, Blazer, Blazers, Jacket, Jackets & Coats, \
Sweatshirt, Sweatshirt & Hoodies, Dress, Blouse, Top, Bottom, Trouser, Cullots, Polo
- Materials: Cotton, Denim, Fleece, Knit, Knitted Fabric, Lycra Jersy, Suede, \
Textured Cotton, Waffle Knit, Thermal, Ottoman, Panama, Seer Sucker, Dobby
- Styles: Casual, Formal, Cross Fit, Lace Up
- Seasons: Summer 25, Winter 24
- Brands: Mishal Apparel, Adan Textile, MS APPAREL (BUTT), MWK Stitching, Tailored Aesthetics
- Categories: Bags, New Arrival, Best Seller, Sale, Clearance
- Collections: Drop-1, Drop-2 VOL 1, Drop-2 Vol-2, Perfect Duo, Perfect Duo's"""

# ---------------------------------------------------------------------------
# LLM Prompts
# ---------------------------------------------------------------------------

STRUCTURED_INTENT_PROMPT = f"""\
You are a precise product recommender for a clothing store. For the user query, \
extract search keywords, a product category and a gender.

Our store uses these tags:
{STORE_VOCABULARY}

Return ONLY valid JSON in this exact format:
{{"keywords": "key1,key2", "category": "bottoms", "gender": "men"}}

Rules:
- keywords: comma-separated, lowercase, corrected for typos
- category: one of shoes, shirts, jackets, bottoms, dresses, sweatshirts, all
- gender: one of men, women, all

Examples:
"cotton tshirt for men" -> {{"keywords": "cotton,tshirt", "category": "shirts", "gender": "men"}}
"womens denim jaket" -> {{"keywords": "denim,jacket", "category": "jackets", "gender": "women"}}
"something on sale" -> {{"keywords": "sale", "category": "all", "gender": "all"}}"""

TAG_KEYWORDS_PROMPT = f"""\
You are a product tag matcher. Convert user queries into tag keywords that match \
our store's actual tags.

Our store has these specific tags:
{STORE_VOCABULARY}

Guidelines:
- Return ONLY tag keywords that exist in our store
- Handle typos and variations
- Be specific and relevant
- Use exact tag names from our store

Examples:
"casual gents boots" -> "Men Shoes"
"summer tshirts" -> "Men T-Shirt Cotton Summer 25"
"winter jackets" -> "Men Jacket Winter 24"
"women sneakers" -> "Women Shoes"
"office blazers" -> "Women Blazer"

Return only the tag keywords, no explanations."""


def _error(kind: ErrorKind, detail: str) -> ComponentError:
    return ComponentError(kind=kind, component=_COMPONENT, detail=detail)


# ---------------------------------------------------------------------------
# Structured contract
# ---------------------------------------------------------------------------


def parse_structured_intent(content: str) -> Intent:
    """
    Strictly parse the LLM's JSON reply into an Intent.

    Raises ``ValueError`` for anything that is not a JSON object with
    usable fields.
    """
    parsed = json.loads(content)
    if not isinstance(parsed, dict):
        raise ValueError(f"expected a JSON object, got {type(parsed).__name__}")
    try:
        return Intent(
            keywords=parsed.get("keywords"),
            category=parsed.get("category"),
            gender=parsed.get("gender"),
        )
    except ValidationError as exc:
        raise ValueError(str(exc)) from exc


def extract_structured_intent(
    query: str,
    history: ConversationHistory | None = None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> IntentResult:
    """
    Ask the LLM for ``{keywords, category, gender}``.

    Fails soft to the default Intent on any error. The history, when given,
    is only read for context.
    """
    if not config.is_usable:
        return IntentResult(error=_error(ErrorKind.configuration, "LLM disabled or missing API key"))

    messages: list[dict[str, str]] = [{"role": "system", "content": STRUCTURED_INTENT_PROMPT}]
    if history is not None:
        messages.extend(history.as_messages()[-4:])  # Last 2 exchanges
    messages.append({"role": "user", "content": query})

    try:
        content = groq_client.chat_completion(messages, config=config, temperature=0.3, json_mode=True)
    except Exception as exc:
        logger.warning("Structured intent call failed, using default intent", exc_info=True)
        return IntentResult(error=_error(ErrorKind.transport, str(exc)))

    try:
        intent = parse_structured_intent(content)
    except ValueError as exc:
        logger.warning("Invalid structured intent from LLM: %r", content)
        return IntentResult(error=_error(ErrorKind.parse, str(exc)))

    logger.info("Structured intent: %s", intent.model_dump(exclude={"structured"}))
    return IntentResult(intent=intent)


# ---------------------------------------------------------------------------
# Tag-keyword contract
# ---------------------------------------------------------------------------


def extract_tag_keywords(
    query: str,
    history: ConversationHistory,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> TagKeywordResult:
    """
    Turn a query into store tag keywords, e.g. ``"Men T-Shirt Cotton Summer 25"``.

    The user turn is appended to ``history`` before the call and the reply
    after it, so follow-up queries see the whole conversation.
    """
    history.append("user", query)

    if not config.is_usable:
        return TagKeywordResult(error=_error(ErrorKind.configuration, "LLM disabled or missing API key"))

    messages = [{"role": "system", "content": TAG_KEYWORDS_PROMPT}, *history.as_messages()]

    try:
        content = groq_client.chat_completion(messages, config=config, temperature=0.5)
    except Exception as exc:
        logger.warning("Tag keyword call failed", exc_info=True)
        return TagKeywordResult(error=_error(ErrorKind.transport, str(exc)))

    text = content.strip()
    history.append("assistant", text)
    logger.info("AI tag keywords: %r", text)
    return TagKeywordResult(text=text)
