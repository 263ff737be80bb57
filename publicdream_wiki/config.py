# Constants, API endpoints, caption thresholds
import os


def float_from_env(name: str):
    """Read an optional float setting; unset or empty means None."""
    value = os.environ.get(name)
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from None


# Wikipedia settings
WIKIPEDIA_API_URL = os.environ.get(
    "PUBLICDREAM_WIKI_API_URL", "https://en.wikipedia.org/w/api.php"
)
# Wikipedia requires an identifying User-Agent header
USER_AGENT = os.environ.get(
    "PUBLICDREAM_WIKI_USER_AGENT", "PublicDream/1.0 (https://publicdream.world)"
)

# Request timeout in seconds; unset means requests wait indefinitely
REQUEST_TIMEOUT = float_from_env("PUBLICDREAM_WIKI_TIMEOUT")

# Extract settings
EXTRACT_MAX_CHARS = 5000
THUMBNAIL_SIZE = 600  # px

# Caption settings
MIN_CAPTION_LENGTH = 15
MIN_COMMENT_LENGTH = 20  # upload comments must be longer than this
MIN_SENTENCE_CHARS = 10  # non-space chars a fragment needs to count as a sentence
MAX_CAPTION_SENTENCES = 2
