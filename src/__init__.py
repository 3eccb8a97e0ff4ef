"""Gift Scout package."""

from .gift_agent import recommend_gifts, research_profile

__all__ = [
    "recommend_gifts",
    "research_profile",
]
