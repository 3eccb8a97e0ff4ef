"""Analysis Service - Lifestyle analysis of a profile via the inference API.

This module handles:
- Analysis of an uploaded profile grid image
- Analysis of a scraped profile (bio + posts) as a text summary

Interface Contract:
- analyze_image(base64_image) -> str
- analyze_profile(profile) -> str
- Both return "" on failure instead of raising
"""

from __future__ import annotations

import logging

from src.models import Profile

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert at analyzing Instagram profiles. Provide a detailed analysis of the "
    "person's lifestyle, activities, and preferences to help recommend thoughtful gifts."
)

ANALYSIS_QUESTIONS = """1. What activities and hobbies are shown?
2. What locations or environments appear?
3. What lifestyle elements are visible?
4. What appears to be their main interests?
5. What themes or patterns do you notice?

Provide a detailed analysis that could help recommend personalized gifts."""

ANALYSIS_TEMPERATURE = 0.5
ANALYSIS_MAX_TOKENS = 500


def build_profile_summary(profile: Profile) -> str:
    """Render a scraped profile as plain text for the analysis prompt."""
    post_blocks = []
    for i, post in enumerate(profile.posts, 1):
        likes = post.likes if post.likes is not None else "unknown"
        post_blocks.append(
            f"Post {i}:\n"
            f"Caption: {post.caption}\n"
            f"Hashtags: {', '.join(post.hashtags)}\n"
            f"Likes: {likes}\n"
        )

    return (
        f"Bio: {profile.bio}\n\n"
        "Posts Analysis:\n"
        + "\n".join(post_blocks)
    )


class AnalysisService:
    """Service for profile lifestyle analysis."""

    def __init__(self, llm_service=None):
        """Initialize with optional LLM service dependency.

        Args:
            llm_service: LLM service for analysis. If None, uses default.
        """
        self._llm = llm_service

    @property
    def llm(self):
        """Lazy load LLM service."""
        if self._llm is None:
            from src.services.llm_service import LLMService
            self._llm = LLMService.get_instance()
        return self._llm

    def analyze_image(self, base64_image: str) -> str:
        """Analyze a profile grid screenshot.

        Args:
            base64_image: Compressed base64 JPEG; may be empty

        Returns:
            str: Free-text analysis, or "" if the call failed
        """
        prompt = (
            "Analyze this Instagram profile grid and describe what you observe:\n"
            f"{ANALYSIS_QUESTIONS}"
        )
        images = [base64_image] if base64_image else None
        return self._analyze(prompt, images=images, tag="image")

    def analyze_profile(self, profile: Profile) -> str:
        """Analyze a scraped profile from its text summary.

        Returns:
            str: Free-text analysis, or "" if the call failed
        """
        prompt = (
            "Analyze this Instagram profile and describe what you observe:\n"
            f"{build_profile_summary(profile)}\n"
            f"{ANALYSIS_QUESTIONS}"
        )
        return self._analyze(prompt, tag="profile")

    def _analyze(self, prompt: str, *, images: list[str] | None = None, tag: str) -> str:
        logger.info("[analysis] start kind=%s images=%d", tag, len(images or []))
        try:
            analysis = self.llm.call(
                prompt,
                system=SYSTEM_PROMPT,
                images=images,
                temperature=ANALYSIS_TEMPERATURE,
                max_tokens=ANALYSIS_MAX_TOKENS,
            )
        except Exception:
            logger.exception("[analysis] %s analysis failed", tag)
            return ""
        analysis = analysis or ""
        logger.info("[analysis] kind=%s chars=%d", tag, len(analysis))
        logger.debug("[analysis] full analysis: %s", analysis)
        return analysis
