"""Global configuration values."""

import os

# Inference provider: "openai" (any OpenAI-compatible endpoint, Groq by default) or "gemini"
LLM_PROVIDER = os.environ.get("LLM_PROVIDER", "openai").lower()

# OpenAI-compatible endpoint used for analysis and recommendations
LLM_BASE_URL = os.environ.get("LLM_BASE_URL", "https://api.groq.com/openai/v1")

# Default chat model (can be overridden via env)
DEFAULT_MODEL = os.environ.get("LLM_MODEL", "meta-llama/llama-4-scout-17b-16e-instruct")

# Default Gemini model when LLM_PROVIDER=gemini
GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.0-flash")

# Scraper limits
MAX_POSTS = int(os.environ.get("MAX_POSTS", "10"))
PAGE_READY_TIMEOUT_MS = int(os.environ.get("PAGE_READY_TIMEOUT_MS", "5000"))
HEADLESS = os.environ.get("HEADLESS", "true").lower() in ("1", "true", "yes")

# Image normalization
IMAGE_MAX_SIZE = int(os.environ.get("IMAGE_MAX_SIZE", "200"))
IMAGE_QUALITY = int(os.environ.get("IMAGE_QUALITY", "40"))
IMAGE_MAX_CHARS = int(os.environ.get("IMAGE_MAX_CHARS", "50000"))

# Outbound HTTP timeout (seconds) for image downloads
REQUEST_TIMEOUT = int(os.environ.get("REQUEST_TIMEOUT", "15"))

# Max upload size for the gifts form
MAX_UPLOAD_MB = int(os.environ.get("MAX_UPLOAD_MB", "16"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def get_llm_api_key() -> str | None:
    """Return the first configured inference API key."""
    return (
        os.environ.get("LLM_API_KEY")
        or os.environ.get("GROQ_API_KEY")
        or os.environ.get("OPENAI_API_KEY")
    )
