from __future__ import annotations

import re
from functools import lru_cache

from ..chat.models import Intent
from .models import Classification

# Checked in this order; the first category with any hit wins.
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "shoes": ["shoes", "shoe", "sneaker", "footwear", "boot"],
    "shirts": ["shirt", "t-shirt", "tshirt", "top", "polo"],
    "jackets": ["jacket", "blazer", "outerwear", "coat"],
    "bottoms": ["pants", "trouser", "bottom", "cullot"],
    "dresses": ["dress", "blouse"],
    "sweatshirts": ["sweatshirt", "hoodie"],
}

_GENDER_PATTERNS: dict[str, re.Pattern[str]] = {
    "women": re.compile(r"\b(?:women|woman|womens)\b"),
    "men": re.compile(r"\b(?:men|man|mens)\b"),
}


@lru_cache(maxsize=256)
def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(rf"\b{re.escape(term)}(?:s|es)?\b")


def contains_term(text: str, term: str) -> bool:
    """
    True when ``term`` appears in ``text`` as a whole word, plural allowed.

    "t-shirts" hits "shirt" but "sweatshirt" does not; "boots" hits "boot"
    but "bootcut" does not.
    """
    return _term_pattern(term).search(text) is not None


def has_gender_marker(text: str, gender: str) -> bool:
    pattern = _GENDER_PATTERNS.get(gender)
    return bool(pattern and pattern.search(text))


def detect_gender(text: str) -> str:
    lowered = text.lower()
    for gender in ("women", "men"):
        if has_gender_marker(lowered, gender):
            return gender
    return "all"


def detect_category(text: str) -> str:
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(contains_term(lowered, kw) for kw in keywords):
            return category
    return "all"


def classify(text: str) -> Classification:
    return Classification(category=detect_category(text), gender=detect_gender(text))


def classify_intent(intent: Intent) -> Classification:
    """
    Bucket an intent into a category and gender.

    Structured intents are classified field by field so a free-form LLM
    category such as "t-shirts" still lands on ``shirts``; tag-keyword
    intents are classified from their text.
    """
    if intent.structured:
        return Classification(
            category=detect_category(intent.category),
            gender=detect_gender(intent.gender),
        )
    return classify(intent.text)
