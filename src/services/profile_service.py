"""Profile Service - Interest extraction from scraped profiles.

This module handles:
- Hashtag interests from captions
- Keyword extraction from captions and bios
- Username normalization for the scrape endpoint

Interface Contract:
- extract_interests(profile) -> list[str]
- normalize_username(raw) -> str, raises ProfileServiceError on bad input
"""

from __future__ import annotations

import re
from typing import Iterable

from src.models import Profile

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9._]{1,30}$")
PROFILE_URL_PATTERN = re.compile(r"^(?:https?://)?(?:www\.)?instagram\.com/([^/?#]+)", re.I)
WORD_SPLIT_PATTERN = re.compile(r"\W+")


class ProfileServiceError(Exception):
    """Raised when profile input is invalid."""
    pass


def extract_keywords(text: str | None, *, min_length: int = 4) -> list[str]:
    """Lowercase words of at least min_length characters, in order of appearance."""
    if not text:
        return []
    words = WORD_SPLIT_PATTERN.split(text.lower())
    return [w for w in words if len(w) >= min_length]


def _add_all(seen: dict[str, None], items: Iterable[str]) -> None:
    for item in items:
        if item:
            seen.setdefault(item, None)


def extract_interests(profile: Profile) -> list[str]:
    """Collect a deduplicated, ordered list of lowercase interest keywords.

    Sources, in order: hashtags (without '#'), caption words longer than three
    characters, then bio words longer than three characters.
    """
    seen: dict[str, None] = {}

    for post in profile.posts:
        _add_all(seen, (tag[1:].lower() for tag in post.hashtags))

    for post in profile.posts:
        _add_all(seen, extract_keywords(post.caption))

    _add_all(seen, extract_keywords(profile.bio))

    return list(seen)


def normalize_username(raw: str | None) -> str:
    """Return a bare username from user input.

    Accepts "name", "@name" or a pasted profile URL.

    Raises:
        ProfileServiceError: If the result is not a valid username
    """
    value = (raw or "").strip()
    match = PROFILE_URL_PATTERN.match(value)
    if match:
        value = match.group(1)
    value = value.lstrip("@")

    if not USERNAME_PATTERN.match(value):
        raise ProfileServiceError(f"Invalid username: {raw!r}")
    return value
