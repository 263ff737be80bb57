"""Result types returned by the Wikipedia client."""

from dataclasses import dataclass
from typing import Optional

from publicdream_wiki.wikipedia.errors import FetchError


@dataclass
class ArticleExtract:
    """Outcome of a single extract fetch.

    `text` is None both when the article does not exist and when the fetch
    failed; `error` tells the two apart.
    """

    title: str
    text: Optional[str] = None
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class ArticleWithImage:
    """Article extract plus its lead image and cleaned caption."""

    extract: Optional[str] = None
    image_url: Optional[str] = None
    image_caption: Optional[str] = None
