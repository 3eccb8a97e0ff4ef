"""Image Service - Normalize profile imagery before it is sent for analysis.

Interface Contract:
- compress_image(data) -> str (base64 JPEG, or "" on failure)
- fetch_image(url) -> bytes (or b"" on failure)
- Neither function raises; failures are logged and downgraded.
"""

from __future__ import annotations

import base64
import io
import logging

import requests
from PIL import Image

import config

logger = logging.getLogger(__name__)

# Browser-like headers so CDNs do not reject the download
DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
}


def compress_image(
    data: bytes,
    *,
    max_size: int = config.IMAGE_MAX_SIZE,
    quality: int = config.IMAGE_QUALITY,
    max_chars: int = config.IMAGE_MAX_CHARS,
) -> str:
    """Shrink an image to fit max_size x max_size and return it as base64 JPEG.

    The image is never enlarged. The encoded string is capped at max_chars.
    """
    if not data:
        logger.error("[image] Empty buffer received")
        return ""

    try:
        with Image.open(io.BytesIO(data)) as img:
            img = img.convert("RGB")
            img.thumbnail((max_size, max_size))

            buffer = io.BytesIO()
            img.save(
                buffer,
                format="JPEG",
                quality=quality,
                progressive=True,
                optimize=True,
                subsampling="4:2:0",
            )
    except Exception:
        logger.exception("[image] compression failed")
        return ""

    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    logger.info("[image] compressed bytes=%d -> chars=%d", len(data), len(encoded))
    return encoded[:max_chars]


def fetch_image(url: str, *, timeout: int = config.REQUEST_TIMEOUT) -> bytes:
    """Download an image; return b"" on any failure."""
    try:
        resp = requests.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
        resp.raise_for_status()
        return resp.content
    except requests.RequestException as e:
        logger.warning("[image] fetch failed url=%s error=%s", url, e)
        return b""
