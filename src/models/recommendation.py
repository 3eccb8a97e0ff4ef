"""Recommendation data models.

Pure data structures for recommendation results.
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import Any


@dataclass
class Recommendation:
    """A single gift recommendation."""
    name: str
    description: str = ""
    price: float = 0.0
    match_reason: str = ""
    amazon_link: str = ""
    etsy_link: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "match_reason": self.match_reason,
            "amazon_link": self.amazon_link,
            "etsy_link": self.etsy_link,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recommendation":
        """Create from dictionary."""
        return cls(
            name=data.get("name", "Gift suggestion"),
            description=data.get("description", ""),
            price=float(data.get("price", 0) or 0),
            match_reason=data.get("match_reason", ""),
            amazon_link=data.get("amazon_link", ""),
            etsy_link=data.get("etsy_link", ""),
        )


@dataclass
class RecommendationResult:
    """Result of a recommendation request."""
    recommendations: list[Recommendation] = dataclass_field(default_factory=list)
    used_fallback: bool = False
    analysis: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to the response payload."""
        return {
            "recommendations": [r.to_dict() for r in self.recommendations],
        }
