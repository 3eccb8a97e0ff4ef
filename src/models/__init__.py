"""Data models - Pure data structures with no business logic."""

from .profile import Post, Profile
from .recommendation import Recommendation, RecommendationResult

__all__ = [
    "Post",
    "Profile",
    "Recommendation",
    "RecommendationResult",
]
