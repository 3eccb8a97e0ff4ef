"""Recommendation Service - Gift recommendations from a profile analysis.

This module handles:
- Prompting the inference API for a fixed-size JSON array of gifts
- Defensive cleanup and parsing of the model's free-text reply
- Marketplace search links for each recommendation

Interface Contract:
- generate(age, budget, analysis) -> RecommendationResult
- Never raises on model or parse failure; returns a single fallback instead
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any
from urllib.parse import quote

from src.models import Recommendation, RecommendationResult

logger = logging.getLogger(__name__)

RECOMMENDATION_COUNT = 3
RECOMMENDATION_TEMPERATURE = 0.9
RECOMMENDATION_MAX_TOKENS = 800
RECOMMENDATION_TOP_P = 0.95

NO_ANALYSIS = "No profile analysis available."

AMAZON_SEARCH_URL = "https://www.amazon.com/s?k={query}"
ETSY_SEARCH_URL = "https://www.etsy.com/search?q={query}"

SYSTEM_PROMPT = (
    "You are a creative gift recommendation expert who specializes in unique, personalized "
    "gifts. Avoid common or generic suggestions like gift cards or passes. Instead, focus on "
    "specific items that match the person's exact interests and activities. Each "
    "recommendation should be distinct and tailored to different aspects of their lifestyle."
)

JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
PRICE_PATTERN = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

# Applied in order; the contraction fixups rely on quotes being unified first
_CLEANUP_STEPS: list[tuple[re.Pattern[str], str]] = [
    (re.compile("[“”]"), '"'),
    (re.compile("[‘’]"), "'"),
    (re.compile(r"\n"), " "),
    (re.compile(r",\s*}"), "}"),
    (re.compile(r",\s*\]"), "]"),
    (re.compile(r"\s+"), " "),
    (re.compile(r"\s*:\s*"), ":"),
    (re.compile(r"\s*,\s*"), ","),
    (re.compile(r"it's", re.I), "it is"),
    (re.compile(r"'s\s"), "s "),
    (re.compile(r"'re\s"), " are "),
    (re.compile(r"'t\s"), "t "),
]


class RecommendationServiceError(Exception):
    """Raised when a recommendation reply cannot be parsed."""
    pass


def encode_uri_component(value: str) -> str:
    """Percent-encode like JavaScript's encodeURIComponent."""
    return quote(value, safe="-_.!~*'()")


def build_marketplace_links(name: str) -> dict[str, str]:
    """Build the Amazon and Etsy search links for a gift name."""
    query = encode_uri_component(name or "")
    return {
        "amazon_link": AMAZON_SEARCH_URL.format(query=query),
        "etsy_link": ETSY_SEARCH_URL.format(query=query),
    }


def clean_recommendation_text(text: str) -> str:
    """Normalize a model reply so it has a better chance of parsing as JSON."""
    match = JSON_ARRAY_PATTERN.search(text)
    if match:
        text = match.group(0)
    for pattern, replacement in _CLEANUP_STEPS:
        text = pattern.sub(replacement, text)
    return text


def parse_price(value: Any, budget: float) -> float:
    """Numeric price from model output; currency symbols and separators are stripped."""
    if isinstance(value, bool):
        value = None
    if isinstance(value, (int, float)) and value:
        price = float(value)
    else:
        raw = str(value or budget).replace("$", "").replace(",", "")
        match = PRICE_PATTERN.match(raw)
        if not match:
            return float(budget)
        price = float(match.group(1))
    # NaN and Infinity have no JSON encoding
    if not math.isfinite(price):
        return float(budget)
    return price


def _format_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def fallback_recommendation(budget: float) -> Recommendation:
    """The single placeholder returned when no usable recommendations exist."""
    return Recommendation(
        name="No recommendations available",
        description="No personalized gift recommendations available.",
        price=float(budget),
        match_reason=NO_ANALYSIS,
        **build_marketplace_links("gift"),
    )


def parse_recommendations(text: str, budget: float) -> list[Recommendation]:
    """Parse a model reply into recommendations.

    Raises:
        RecommendationServiceError: If the reply is not a JSON array of objects
    """
    cleaned = clean_recommendation_text(text)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise RecommendationServiceError(f"Invalid JSON response: {e}") from e

    if not isinstance(data, list):
        raise RecommendationServiceError("Recommendation reply is not a JSON array")

    recommendations = []
    for item in data:
        if not isinstance(item, dict):
            continue
        name = str(item.get("name") or "Gift suggestion")
        recommendations.append(
            Recommendation(
                name=name,
                description=str(item.get("description") or ""),
                price=parse_price(item.get("price"), budget),
                match_reason=str(item.get("match_reason") or ""),
                **build_marketplace_links(str(item.get("name") or "")),
            )
        )
    return recommendations


class RecommendationService:
    """Service for generating gift recommendations."""

    def __init__(self, llm_service=None):
        """Initialize with optional dependencies.

        Args:
            llm_service: LLM service for generation. If None, uses default.
        """
        self._llm = llm_service

    @property
    def llm(self):
        """Lazy load LLM service."""
        if self._llm is None:
            from src.services.llm_service import LLMService
            self._llm = LLMService.get_instance()
        return self._llm

    def generate(self, age: float, budget: float, analysis: str) -> RecommendationResult:
        """Generate gift recommendations for a recipient.

        Args:
            age: Recipient's age in years
            budget: Budget in dollars
            analysis: Profile analysis text (may be empty)

        An empty or missing reply, an empty array and an array without object
        items all count as "no usable recommendations" and yield the single
        fallback rather than an empty list.

        Returns:
            RecommendationResult: Parsed recommendations, or one fallback
        """
        analysis = analysis or NO_ANALYSIS
        prompt = self._build_recommendation_prompt(age, budget, analysis)

        try:
            response = self.llm.call(
                prompt,
                system=SYSTEM_PROMPT,
                temperature=RECOMMENDATION_TEMPERATURE,
                max_tokens=RECOMMENDATION_MAX_TOKENS,
                top_p=RECOMMENDATION_TOP_P,
            )
            recommendations = parse_recommendations((response or "").strip() or "[]", budget)
        except Exception:
            logger.exception("[recommend] generation failed; using fallback")
            recommendations = []

        if not recommendations:
            logger.warning("[recommend] no usable recommendations budget=%s", budget)
            return RecommendationResult(
                recommendations=[fallback_recommendation(budget)],
                used_fallback=True,
                analysis=analysis,
            )

        logger.info("[recommend] generated=%d", len(recommendations))
        return RecommendationResult(recommendations=recommendations, analysis=analysis)

    def _build_recommendation_prompt(self, age: float, budget: float, analysis: str) -> str:
        """Build prompt for gift recommendations."""
        return f'''Based on this Instagram profile analysis:
{analysis}

Generate {RECOMMENDATION_COUNT} UNIQUE and SPECIFIC gift recommendations for a {_format_number(age)} year old with a budget of ${_format_number(budget)}.
Each gift should be different from the others and relate to different interests/activities shown in their profile.
Avoid generic items like passes, gift cards, or common accessories.

Format as JSON array: [{{"name": "Gift Name", "description": "Description", "price": number, "match_reason": "Reason"}}].
Keep descriptions concise and avoid apostrophes.'''
