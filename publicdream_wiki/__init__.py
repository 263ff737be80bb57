"""PublicDream Wikipedia client: article extracts, lead images and captions."""

__version__ = "1.0.0"

from publicdream_wiki.wikipedia import ArticleWithImage, WikipediaClient

__all__ = ["ArticleWithImage", "WikipediaClient"]
