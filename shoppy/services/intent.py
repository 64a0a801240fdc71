# ==============================================================================
# INTENT DETECTION - Product Search vs. General Chat
# ==============================================================================

from __future__ import annotations

from typing import Optional

from shoppy.core.constants import IntentKeywords


def _contains_any(text: str, needles) -> bool:
    return any(needle in text for needle in needles)


def detect_product_search(message: str) -> bool:
    """
    Decide whether a chat message should trigger a storefront search.

    True when the message asks for products outright, carries detailed
    requirements, or answers a consultation question (budget ranges
    such as ``$500-800`` or ``Rp 2-3 juta`` count).
    All checks are case-insensitive substring checks.
    """
    lowered = message.lower()

    has_specific_intent = _contains_any(lowered, IntentKeywords.SEARCH_INDICATORS)

    has_detailed_requirements = (
        len(message) > IntentKeywords.DETAILED_MIN_LENGTH
        and _contains_any(lowered, IntentKeywords.REQUIREMENT_WORDS)
    )

    is_answering_questions = (
        _contains_any(lowered, IntentKeywords.ANSWER_WORDS)
        or ("$" in message and "-" in message)
        or ("rp" in lowered and ("-" in message or "juta" in lowered))
    )

    return has_specific_intent or has_detailed_requirements or is_answering_questions


def mentioned_product_type(message: str, default: str) -> str:
    """First known product type contained in ``message``, else ``default``."""
    lowered = message.lower()
    found: Optional[str] = next(
        (product for product in IntentKeywords.PRODUCT_TYPES if product in lowered),
        None,
    )
    return found or default
