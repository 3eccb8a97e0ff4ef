"""Service layer - Business logic modules.

Each service module has a clear interface and can be developed/tested independently.
"""

from .llm_service import LLMService
from .analysis_service import AnalysisService
from .recommendation_service import RecommendationService

__all__ = [
    "LLMService",
    "AnalysisService",
    "RecommendationService",
]
