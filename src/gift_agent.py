"""Request orchestration for gift recommendations and profile research.

Each call is single-shot: fetch what is needed, call the inference API in
sequence, and shape a JSON-friendly result. External failures are absorbed by
the services and show up here as empty analysis or fallback recommendations.
"""

from __future__ import annotations

import logging
from typing import Any

from src.models import RecommendationResult
from src.services.analysis_service import AnalysisService
from src.services.image_service import compress_image, fetch_image
from src.services.profile_service import extract_interests
from src.services.recommendation_service import RecommendationService
from src.web_scraper import InstagramScraper

logger = logging.getLogger(__name__)


def recommend_gifts(
    age: float,
    budget: float,
    *,
    image_bytes: bytes | None = None,
    image_url: str | None = None,
    analysis_service: AnalysisService | None = None,
    recommendation_service: RecommendationService | None = None,
) -> RecommendationResult:
    """Analyze an optional profile image, then generate recommendations.

    Args:
        age: Recipient's age
        budget: Budget in dollars
        image_bytes: Uploaded profile grid image, if any
        image_url: Image to download when no bytes were uploaded

    Returns:
        RecommendationResult with at least one recommendation
    """
    analysis_service = analysis_service or AnalysisService()
    recommendation_service = recommendation_service or RecommendationService()

    if not image_bytes and image_url:
        logger.info("[gifts] downloading profile image url=%s", image_url)
        image_bytes = fetch_image(image_url)

    profile_analysis = ""
    if image_bytes:
        logger.info("[gifts] processing profile image bytes=%d", len(image_bytes))
        base64_image = compress_image(image_bytes)
        profile_analysis = analysis_service.analyze_image(base64_image)
    else:
        logger.info("[gifts] no profile image provided")

    logger.info("[gifts] generating recommendations age=%s budget=%s", age, budget)
    result = recommendation_service.generate(age, budget, profile_analysis)
    logger.info(
        "[gifts] done recommendations=%d fallback=%s",
        len(result.recommendations), result.used_fallback,
    )
    return result


def research_profile(
    username: str,
    *,
    scraper: InstagramScraper | None = None,
    analysis_service: AnalysisService | None = None,
) -> dict[str, Any] | None:
    """Scrape a profile, analyze it and extract interest keywords.

    Returns:
        dict with profile, interests and analysis; None if scraping failed
    """
    scraper = scraper or InstagramScraper()
    analysis_service = analysis_service or AnalysisService()

    logger.info("[research] fetching profile username=%s", username)
    profile = scraper.scrape_profile(username)
    if profile is None:
        return None

    analysis = analysis_service.analyze_profile(profile)
    interests = extract_interests(profile)
    logger.info("[research] username=%s posts=%d interests=%d", username, len(profile.posts), len(interests))

    return {
        "profile": profile.to_dict(),
        "interests": interests,
        "analysis": analysis,
    }
