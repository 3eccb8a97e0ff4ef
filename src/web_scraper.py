"""Web scraper module for fetching recent posts and bio from an Instagram profile.

The browser is driven with Playwright; DOM extraction runs on the rendered HTML
with BeautifulSoup so the parsing functions can be exercised without a browser.
Instagram's markup is undocumented and changes often, so every selector lives
in a module constant.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urljoin

from bs4 import BeautifulSoup
from playwright.sync_api import sync_playwright

import config
from src.models import Post, Profile

logger = logging.getLogger(__name__)

PROFILE_URL = "https://www.instagram.com/{username}/"

POST_LINK_SELECTOR = "article a"
CAPTION_SELECTOR = "h1"
IMAGE_SELECTOR = "article img"
LIKES_SELECTOR = "section span"
BIO_SELECTOR = ".-vDIg span"

VIEWPORT = {"width": 1280, "height": 800}

LIKES_PATTERN = re.compile(r"\d[\d,]*")


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def parse_post_links(html: str, base_url: str, limit: int = config.MAX_POSTS) -> list[str]:
    """Extract up to `limit` absolute post URLs from a profile page."""
    soup = _soup(html)
    links: list[str] = []
    for a in soup.select(POST_LINK_SELECTOR):
        href = (a.get("href") or "").strip()
        if not href or href.startswith("#") or href.lower().startswith("javascript"):
            continue
        links.append(urljoin(base_url, href))
        if len(links) >= limit:
            break
    return links


def parse_like_count(text: str | None) -> int | None:
    """Leading integer in a like counter ("1,234 likes" -> 1234)."""
    if not text:
        return None
    match = LIKES_PATTERN.search(text)
    if not match:
        return None
    return int(match.group(0).replace(",", ""))


def parse_post(html: str, base_url: str = "") -> Post:
    """Extract caption, image and like count from a single post page."""
    soup = _soup(html)

    caption_elem = soup.select_one(CAPTION_SELECTOR)
    caption = caption_elem.get_text() if caption_elem else ""

    image_elem = soup.select_one(IMAGE_SELECTOR)
    image_url = None
    if image_elem and image_elem.get("src"):
        image_url = urljoin(base_url, image_elem["src"])

    likes_elem = soup.select_one(LIKES_SELECTOR)
    likes = parse_like_count(likes_elem.get_text() if likes_elem else None)

    return Post.from_caption(caption, image_url=image_url, likes=likes)


def parse_bio(html: str) -> str:
    soup = _soup(html)
    bio_elem = soup.select_one(BIO_SELECTOR)
    return bio_elem.get_text() if bio_elem else ""


class InstagramScraper:
    """Scraper for a public Instagram profile's recent posts."""

    def __init__(
        self,
        *,
        max_posts: int = config.MAX_POSTS,
        ready_timeout_ms: int = config.PAGE_READY_TIMEOUT_MS,
        headless: bool = config.HEADLESS,
    ):
        self.max_posts = max_posts
        self.ready_timeout_ms = ready_timeout_ms
        self.headless = headless

    def scrape_profile(self, username: str) -> Profile | None:
        """Scrape bio and recent posts; return None on any failure."""
        try:
            return self._scrape(username)
        except Exception:
            logger.exception("[scrape] failed username=%s", username)
            return None

    def _scrape(self, username: str) -> Profile:
        profile_url = PROFILE_URL.format(username=username)

        with sync_playwright() as p:
            logger.info("[scrape] launching browser headless=%s", self.headless)
            browser = p.chromium.launch(headless=self.headless)
            try:
                page = browser.new_page(viewport=VIEWPORT)

                logger.info("[scrape] navigating to %s", profile_url)
                page.goto(profile_url, wait_until="networkidle")
                page.wait_for_selector(POST_LINK_SELECTOR, timeout=self.ready_timeout_ms)

                post_urls = parse_post_links(page.content(), profile_url, self.max_posts)
                logger.info("[scrape] found %d posts to analyze", len(post_urls))

                posts: list[Post] = []
                for idx, url in enumerate(post_urls, 1):
                    page.goto(url, wait_until="networkidle")
                    post = parse_post(page.content(), base_url=url)
                    posts.append(post)
                    logger.info(
                        "[scrape] [%d/%d] post url=%s likes=%s hashtags=%d",
                        idx, len(post_urls), url, post.likes, len(post.hashtags),
                    )

                page.goto(profile_url)
                bio = parse_bio(page.content())
            finally:
                browser.close()

        return Profile(username=username, bio=bio, posts=posts)
