from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import config
from .gift_agent import recommend_gifts, research_profile
from .services.profile_service import ProfileServiceError, normalize_username

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Analyze an Instagram profile and suggest gifts within a budget via a hosted LLM."
        )
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    recommend = subparsers.add_parser("recommend", help="Generate gift recommendations")
    recommend.add_argument("--age", type=float, required=True, help="Recipient's age")
    recommend.add_argument("--budget", type=float, required=True, help="Budget in dollars")
    image_group = recommend.add_mutually_exclusive_group()
    image_group.add_argument("--image", type=Path, help="Path to a profile grid screenshot")
    image_group.add_argument("--image-url", help="URL of a profile grid screenshot")
    recommend.add_argument(
        "--show-analysis",
        action="store_true",
        help="Include the profile analysis and fallback flag in the output",
    )

    scrape = subparsers.add_parser("scrape", help="Scrape and analyze an Instagram profile")
    scrape.add_argument("username", help="Instagram username, @handle or profile URL")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == "recommend":
        if not args.age or not args.budget:
            raise SystemExit("--age and --budget must be non-zero")
        image_bytes = args.image.read_bytes() if args.image else None
        result = recommend_gifts(
            args.age,
            args.budget,
            image_bytes=image_bytes,
            image_url=args.image_url,
        )
        payload = result.to_dict()
        if args.show_analysis:
            payload["analysis"] = result.analysis
            payload["used_fallback"] = result.used_fallback
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    try:
        username = normalize_username(args.username)
    except ProfileServiceError as e:
        raise SystemExit(str(e))

    logger.info("[scrape] 🔍 Scraping Instagram profile '%s'...", username)
    result = research_profile(username)
    if result is None:
        raise SystemExit("Failed to fetch Instagram data")
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
