"""MediaWiki API client for article extracts and lead images."""

import asyncio
import logging
import re
from typing import Optional
from urllib.parse import unquote, urlparse

import httpx

from publicdream_wiki.config import (
    EXTRACT_MAX_CHARS,
    REQUEST_TIMEOUT,
    THUMBNAIL_SIZE,
    USER_AGENT,
    WIKIPEDIA_API_URL,
)
from publicdream_wiki.wikipedia.captions import caption_from_imageinfo
from publicdream_wiki.wikipedia.errors import (
    FetchError,
    HttpStatusError,
    NetworkError,
    ParseError,
)
from publicdream_wiki.wikipedia.models import ArticleExtract, ArticleWithImage

logger = logging.getLogger(__name__)

THUMB_SIZE_PREFIX = re.compile(r"^\d+px-")


def filename_from_thumbnail(thumbnail_url: str) -> str:
    """Recover the original file name from a thumbnail URL.

    https://upload.wikimedia.org/.../thumb/a/ab/Zeus.jpg/600px-Zeus.jpg -> Zeus.jpg
    """
    segment = urlparse(thumbnail_url).path.rstrip("/").split("/")[-1]
    return unquote(THUMB_SIZE_PREFIX.sub("", segment))


def first_page(data: dict) -> Optional[dict]:
    """Return the single page object under query.pages, if any.

    Page IDs are opaque keys, so whichever comes first is the page.

    Raises:
        ParseError: When query, pages or the page is not a JSON object.
    """
    query = data.get("query")
    if not query:
        return None
    if not isinstance(query, dict):
        raise ParseError(f"Unexpected \"query\" in Wikipedia response: {type(query).__name__}")

    pages = query.get("pages")
    if not pages:
        return None
    if not isinstance(pages, dict):
        raise ParseError(f"Unexpected \"pages\" in Wikipedia response: {type(pages).__name__}")

    page = next(iter(pages.values()))
    if not isinstance(page, dict):
        raise ParseError(f"Unexpected page in Wikipedia response: {type(page).__name__}")
    return page


def page_field(page: Optional[dict], key: str, expected: type):
    """Read an optional field from a page, checking its JSON type."""
    if page is None:
        return None
    value = page.get(key)
    if value is None:
        return None
    if not isinstance(value, expected):
        raise ParseError(f"Unexpected \"{key}\" in Wikipedia response: {type(value).__name__}")
    return value


class WikipediaClient:
    """Async client for Wikipedia extracts, lead images and captions.

    Public methods never raise: failures are logged and come back as None
    (or an empty ArticleWithImage). Pass strict=True to have fetch failures
    raised as FetchError instead, so a missing article (None) can be told
    apart from an outage.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        api_url: str = WIKIPEDIA_API_URL,
        user_agent: str = USER_AGENT,
        timeout: Optional[float] = REQUEST_TIMEOUT,
        strict: bool = False,
    ):
        self.api_url = api_url
        self.strict = strict
        self.headers = {"User-Agent": user_agent}
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout)

    async def query(self, **params) -> dict:
        """Make a query to the MediaWiki API and return the decoded JSON.

        Raises:
            HttpStatusError: For any non-2xx response.
            NetworkError: When no usable response was received (connection,
                timeout, redirect loop, undecodable body).
            ParseError: When the body is not a JSON object.
        """
        params["action"] = "query"
        params["format"] = "json"
        params["origin"] = "*"

        try:
            response = await self.client.get(
                self.api_url, params=params, headers=self.headers
            )
        except httpx.HTTPError as e:
            raise NetworkError(f"Wikipedia API request failed: {e}") from e

        logger.debug(f"GET {response.url} -> {response.status_code}")
        if not response.is_success:
            raise HttpStatusError(response.status_code, str(response.url))

        try:
            data = response.json()
        except ValueError as e:
            raise ParseError(f"Invalid JSON from Wikipedia API: {e}") from e
        if not isinstance(data, dict):
            raise ParseError(f"Unexpected response from Wikipedia API: {type(data).__name__}")
        return data

    async def fetch_extract(self, title: str) -> ArticleExtract:
        """Fetch the plain-text extract for a title, recording any failure."""
        try:
            data = await self.query(
                prop="extracts",
                exintro="false",
                explaintext="true",
                exchars=str(EXTRACT_MAX_CHARS),
                titles=title,
            )
            text = page_field(first_page(data), "extract", str)
        except FetchError as e:
            logger.warning(f"Error fetching Wikipedia extract for '{title}': {e}")
            return ArticleExtract(title=title, error=e)

        return ArticleExtract(title=title, text=text or None)

    async def get_extract(self, title: str) -> Optional[str]:
        """Get the plain-text extract of an article, or None."""
        try:
            result = await self.fetch_extract(title)
        except Exception as e:
            if self.strict:
                raise
            logger.error(f"Unexpected error fetching Wikipedia extract for '{title}': {e}")
            return None

        if result.error is not None and self.strict:
            raise result.error
        return result.text

    async def get_extract_with_image(self, title: str) -> ArticleWithImage:
        """Get the extract, lead image thumbnail and a cleaned-up caption."""
        try:
            return await self._fetch_extract_with_image(title)
        except FetchError as e:
            if self.strict:
                raise
            logger.warning(f"Error fetching Wikipedia extract with image for '{title}': {e}")
            return ArticleWithImage()
        except Exception as e:
            if self.strict:
                raise
            logger.error(f"Unexpected error fetching Wikipedia extract with image for '{title}': {e}")
            return ArticleWithImage()

    async def _fetch_extract_with_image(self, title: str) -> ArticleWithImage:
        data = await self.query(
            prop="extracts|pageimages",
            exintro="false",
            explaintext="true",
            exchars=str(EXTRACT_MAX_CHARS),
            piprop="thumbnail",
            pithumbsize=str(THUMBNAIL_SIZE),
            titles=title,
        )

        page = first_page(data)
        if page is None:
            return ArticleWithImage()

        extract = page_field(page, "extract", str) or None
        thumbnail = page_field(page, "thumbnail", dict)
        image_url = page_field(thumbnail, "source", str) or None

        image_caption = None
        if image_url:
            image_caption = await self.get_image_caption(image_url)

        return ArticleWithImage(
            extract=extract, image_url=image_url, image_caption=image_caption
        )

    async def get_image_caption(self, thumbnail_url: str) -> Optional[str]:
        """Look up the File: page behind a thumbnail and build a caption.

        Best effort: any failure is logged and gives None.
        """
        filename = filename_from_thumbnail(thumbnail_url)
        if not filename:
            return None

        try:
            data = await self.query(
                titles=f"File:{filename}",
                prop="imageinfo",
                iiprop="extmetadata|comment|url",
            )
            imageinfo = page_field(first_page(data), "imageinfo", list)
            if not imageinfo:
                return None
            if not isinstance(imageinfo[0], dict):
                raise ParseError(f"Unexpected imageinfo entry: {type(imageinfo[0]).__name__}")
            return caption_from_imageinfo(imageinfo[0])
        except FetchError as e:
            logger.warning(f"Could not fetch image caption for '{filename}': {e}")
            return None
        except Exception as e:
            logger.error(f"Unexpected error building image caption for '{filename}': {e}")
            return None

    async def get_related_content(
        self, main_title: str, related_titles: Optional[list[str]] = None
    ) -> Optional[str]:
        """Combine the main extract with extracts of related articles.

        Related extracts are fetched concurrently but kept in request order.
        Falls back to the main extract when nothing else came back.
        """
        main_content = await self.get_extract(main_title)
        if not related_titles:
            return main_content

        related_contents = await asyncio.gather(
            *(self.get_extract(title) for title in related_titles)
        )

        all_content = "\n\n".join(
            content
            for content in [main_content, *related_contents]
            if content and content.strip()
        )
        return all_content or main_content

    async def close(self):
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
