"""PublicDream Wiki CLI - fetch Wikipedia extracts, lead images and captions."""

import asyncio
import argparse
import logging
import sys

from publicdream_wiki.wikipedia.api import WikipediaClient
from publicdream_wiki.wikipedia.errors import FetchError


async def run_extract(title: str, strict: bool) -> int:
    """Print the plain-text extract for a single article."""
    async with WikipediaClient(strict=strict) as client:
        extract = await client.get_extract(title)

    if extract is None:
        print(f"No extract found for '{title}'")
        return 1
    print(extract)
    return 0


async def run_image(title: str, strict: bool) -> int:
    """Print the extract, lead image URL and caption for an article."""
    async with WikipediaClient(strict=strict) as client:
        article = await client.get_extract_with_image(title)

    if article.extract is None and article.image_url is None:
        print(f"Nothing found for '{title}'")
        return 1

    print(f"Image:   {article.image_url or '-'}")
    print(f"Caption: {article.image_caption or '-'}")
    print()
    print(article.extract or "")
    return 0


async def run_related(main_title: str, related_titles: list[str], strict: bool) -> int:
    """Print the main extract followed by extracts of related articles."""
    async with WikipediaClient(strict=strict) as client:
        content = await client.get_related_content(main_title, related_titles)

    if content is None:
        print(f"No content found for '{main_title}'")
        return 1
    print(content)
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="PublicDream Wiki - Wikipedia extracts and lead images"
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on network/API errors instead of treating them as 'not found'",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    extract_parser = subparsers.add_parser("extract", help="Fetch an article extract")
    extract_parser.add_argument("title", help="Article title")

    image_parser = subparsers.add_parser(
        "image", help="Fetch an extract with its lead image and caption"
    )
    image_parser.add_argument("title", help="Article title")

    related_parser = subparsers.add_parser(
        "related", help="Fetch an extract combined with related articles"
    )
    related_parser.add_argument("title", help="Main article title")
    related_parser.add_argument("related", nargs="*", help="Related article titles")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        if args.command == "extract":
            status = asyncio.run(run_extract(args.title, args.strict))
        elif args.command == "image":
            status = asyncio.run(run_image(args.title, args.strict))
        elif args.command == "related":
            status = asyncio.run(run_related(args.title, args.related, args.strict))
        else:
            parser.print_help()
            status = 2
    except FetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        status = 1

    sys.exit(status)


if __name__ == "__main__":
    main()
