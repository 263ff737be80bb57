"""Wikipedia API modules for fetching article extracts, lead images and captions."""

from publicdream_wiki.wikipedia.api import (
    WikipediaClient,
    filename_from_thumbnail,
    first_page,
)
from publicdream_wiki.wikipedia.captions import (
    CAPTION_STEPS,
    clean_caption,
    select_caption_candidate,
)
from publicdream_wiki.wikipedia.errors import (
    FetchError,
    HttpStatusError,
    NetworkError,
    ParseError,
)
from publicdream_wiki.wikipedia.models import ArticleExtract, ArticleWithImage

__all__ = [
    "WikipediaClient",
    "filename_from_thumbnail",
    "first_page",
    "CAPTION_STEPS",
    "clean_caption",
    "select_caption_candidate",
    "FetchError",
    "HttpStatusError",
    "NetworkError",
    "ParseError",
    "ArticleExtract",
    "ArticleWithImage",
]
