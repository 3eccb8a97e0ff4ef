"""Profile data models.

Pure data structures with no business logic.
These can be safely used by any module.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field as dataclass_field
from typing import Any

HASHTAG_PATTERN = re.compile(r"#\w+")
MENTION_PATTERN = re.compile(r"@\w+")


@dataclass
class Post:
    """A single scraped post."""
    image_url: str | None = None
    caption: str = ""
    likes: int | None = None
    hashtags: list[str] = dataclass_field(default_factory=list)
    mentions: list[str] = dataclass_field(default_factory=list)

    @classmethod
    def from_caption(
        cls,
        caption: str | None,
        *,
        image_url: str | None = None,
        likes: int | None = None,
    ) -> "Post":
        """Create a post and derive hashtags/mentions from its caption."""
        text = caption or ""
        return cls(
            image_url=image_url,
            caption=text,
            likes=likes,
            hashtags=HASHTAG_PATTERN.findall(text),
            mentions=MENTION_PATTERN.findall(text),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (wire keys)."""
        return {
            "imageUrl": self.image_url,
            "caption": self.caption,
            "likes": self.likes,
            "hashtags": self.hashtags,
            "mentions": self.mentions,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Post":
        """Create from dictionary."""
        return cls(
            image_url=data.get("imageUrl"),
            caption=data.get("caption") or "",
            likes=data.get("likes"),
            hashtags=data.get("hashtags", []),
            mentions=data.get("mentions", []),
        )


@dataclass
class Profile:
    """Scraped representation of a social-media account."""
    username: str
    bio: str = ""
    posts: list[Post] = dataclass_field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "username": self.username,
            "bio": self.bio,
            "posts": [p.to_dict() for p in self.posts],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """Create from dictionary."""
        return cls(
            username=data.get("username", ""),
            bio=data.get("bio") or "",
            posts=[Post.from_dict(p) for p in data.get("posts", []) if isinstance(p, dict)],
        )
