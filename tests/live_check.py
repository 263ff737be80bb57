"""Live check against the real Wikipedia API - run by hand, not collected by pytest."""

import asyncio
import sys
sys.path.insert(0, '.')

from publicdream_wiki.wikipedia.api import WikipediaClient


async def main():
    print('Starting live check...', flush=True)

    async with WikipediaClient(strict=True) as client:
        print("\nFetching 'Zeus' extract...", flush=True)
        extract = await client.get_extract('Zeus')
        print(f'  Extract length: {len(extract or "")} chars', flush=True)
        print(f'  First 200 chars: {(extract or "")[:200]}...', flush=True)

        missing = await client.get_extract('Zzzz no such article qqqq')
        print(f'  Unknown title -> {missing!r}', flush=True)

        print("\nFetching 'Statue of Zeus at Olympia' with image...", flush=True)
        article = await client.get_extract_with_image('Statue of Zeus at Olympia')
        print(f'  Image:   {article.image_url}', flush=True)
        print(f'  Caption: {article.image_caption}', flush=True)

        print('\nFetching related content...', flush=True)
        content = await client.get_related_content('Zeus', ['Hera', 'Poseidon'])
        print(f'  Combined length: {len(content or "")} chars', flush=True)

    print('\nLive check done', flush=True)


if __name__ == '__main__':
    asyncio.run(main())
