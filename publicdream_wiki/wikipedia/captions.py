"""Pick and clean up image captions from Commons file metadata.

Descriptions on Commons are free-form HTML written by uploaders, so the
cleanup is a fixed, ordered list of regex substitutions. Each step is a plain
`str -> str` function; `clean_caption` runs them in order and then decides
whether what is left is worth showing.
"""

import logging
import re
from typing import Callable, Optional

from publicdream_wiki.config import (
    MAX_CAPTION_SENTENCES,
    MIN_CAPTION_LENGTH,
    MIN_COMMENT_LENGTH,
    MIN_SENTENCE_CHARS,
)

logger = logging.getLogger(__name__)

# extmetadata fields tried in order, first non-empty wins
DESCRIPTION_FIELDS = ("ImageDescription", "ObjectName", "ShortDescription")

HTML_TAG_PATTERN = re.compile(r"<[^>]*>")

# Decoded in this order: "&amp;quot;" stays "&quot;", but "&amp;lt;" ends up as "<"
HTML_ENTITIES = (
    ("&quot;", '"'),
    ("&#39;", "'"),
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
    ("&nbsp;", " "),
    ("&mdash;", "—"),
    ("&ndash;", "–"),
)

_MONTH = r"[A-Za-z]+"
UPLOAD_NOISE_PATTERNS = [
    re.compile(rf"uploaded on \d{{1,2}} {_MONTH} \d{{4}}", re.IGNORECASE),
    re.compile(rf"uploaded \d{{1,2}} {_MONTH} \d{{4}}", re.IGNORECASE),
    re.compile(r"uploaded:\s*\d{4}-\d{2}-\d{2}", re.IGNORECASE),
    re.compile(r"uploaded \d{4}-\d{2}-\d{2}", re.IGNORECASE),
    re.compile(r"[\[(]\s*uploaded[^\])]*[\])]", re.IGNORECASE),
    re.compile(r"uploaded by\s+[^.,;()\[\]\n]*", re.IGNORECASE),
    re.compile(r"uploaded at \d{1,2}:\d{2}", re.IGNORECASE),
]

TEMPLATE_PATTERN = re.compile(r"\{\{.*?\}\}", re.DOTALL)
PIPED_LINK_PATTERN = re.compile(r"\[\[[^\]|]*\|([^\]]*)\]\]")
PLAIN_LINK_PATTERN = re.compile(r"\[\[([^\]]*)\]\]")

DIMENSIONS_PATTERN = re.compile(r"\(\s*\d+\s*[×x]\s*\d+\s*pixels?\s*\)", re.IGNORECASE)
FILE_SIZE_PATTERN = re.compile(r"\(\s*[\d.,]+\s*(?:MB|KB|bytes)\s*\)", re.IGNORECASE)

FILE_TOKEN_PATTERN = re.compile(r"(?:File|Image):\S*")

GENERIC_NOUNS = (
    "image|photo|picture|illustration|depiction|representation|statue|"
    "sculpture|painting|drawing|engraving|relief|mosaic|fresco|carving|"
    "artifact|object"
)
# "This statue of", "A painting showing", or a bare leading "A"/"An"
LEADING_PHRASE_PATTERN = re.compile(
    rf"^\s*(?:(?:(?:this|an?)\s+)?(?:{GENERIC_NOUNS})\b"
    r"(?:\s+(?:of|showing|depicting|representing)\b)?|an?\b)\s*",
    re.IGNORECASE,
)

CROSS_REFERENCE_PATTERN = re.compile(
    r"\b(?:see also|see|more info|for more|additional information)\b.*",
    re.IGNORECASE | re.DOTALL,
)
ATTRIBUTION_PATTERN = re.compile(
    r"\b(?:source|credit|attribution|license|copyright)\b.*",
    re.IGNORECASE | re.DOTALL,
)

EDGE_PUNCTUATION_PATTERN = re.compile(r"^[\s.,;:!?\-–—]+|[\s.,;:!?\-–—]+$")
SENTENCE_SPLIT_PATTERN = re.compile(r"[.!?]")

BANNED_PREFIX_PATTERN = re.compile(r"^(?:image|photo|picture|file|upload)", re.IGNORECASE)


def strip_html_tags(text: str) -> str:
    return HTML_TAG_PATTERN.sub("", text)


def decode_entities(text: str) -> str:
    for entity, char in HTML_ENTITIES:
        text = text.replace(entity, char)
    return text


def remove_upload_noise(text: str) -> str:
    """Drop "uploaded on 3 May 2010", "[uploaded by Foo]" and similar."""
    for pattern in UPLOAD_NOISE_PATTERNS:
        text = pattern.sub("", text)
    return text


def strip_templates(text: str) -> str:
    return TEMPLATE_PATTERN.sub("", text)


def unwrap_wiki_links(text: str) -> str:
    """[[target|label]] -> label, [[text]] -> text."""
    text = PIPED_LINK_PATTERN.sub(r"\1", text)
    return PLAIN_LINK_PATTERN.sub(r"\1", text)


def remove_size_annotations(text: str) -> str:
    text = DIMENSIONS_PATTERN.sub("", text)
    return FILE_SIZE_PATTERN.sub("", text)


def remove_file_tokens(text: str) -> str:
    return FILE_TOKEN_PATTERN.sub("", text)


def strip_leading_phrase(text: str) -> str:
    """Strip generic lead-ins until none is left ("An image of a statue of X" -> "X")."""
    while True:
        stripped = LEADING_PHRASE_PATTERN.sub("", text, count=1)
        if stripped == text:
            return text
        text = stripped


def truncate_trailing_references(text: str) -> str:
    """Cut "see also ..." pointers and source/license boilerplate."""
    text = CROSS_REFERENCE_PATTERN.sub("", text)
    return ATTRIBUTION_PATTERN.sub("", text)


def collapse_repeats(text: str) -> str:
    text = re.sub(r"\s+", " ", text)
    text = re.sub(r"\.{2,}", ".", text)
    return re.sub(r",{2,}", ",", text)


def trim_edges(text: str) -> str:
    return EDGE_PUNCTUATION_PATTERN.sub("", text)


def capitalize_first(text: str) -> str:
    if not text:
        return text
    return text[0].upper() + text[1:]


def limit_sentences(text: str) -> str:
    """Keep at most two real sentences and make sure the result ends with one.

    Fragments with too few characters (initials, "c. 1500") don't count.
    If nothing qualifies the text is left alone.
    """
    fragments = [fragment.strip() for fragment in SENTENCE_SPLIT_PATTERN.split(text)]
    sentences = [
        fragment
        for fragment in fragments
        if len(re.sub(r"\s", "", fragment)) > MIN_SENTENCE_CHARS
    ]
    if not sentences:
        return text
    return ". ".join(sentences[:MAX_CAPTION_SENTENCES]) + "."


# Applied in this order; each step sees the previous step's output
CAPTION_STEPS: list[Callable[[str], str]] = [
    strip_html_tags,
    decode_entities,
    remove_upload_noise,
    strip_templates,
    unwrap_wiki_links,
    remove_size_annotations,
    remove_file_tokens,
    strip_leading_phrase,
    truncate_trailing_references,
    collapse_repeats,
    trim_edges,
    capitalize_first,
    limit_sentences,
]


def is_acceptable_caption(caption: str) -> bool:
    """Reject captions that are too short or just say "Image ..."."""
    if len(caption) < MIN_CAPTION_LENGTH:
        return False
    return not BANNED_PREFIX_PATTERN.match(caption)


def clean_caption(raw: str) -> Optional[str]:
    """Run the cleanup pipeline over a raw caption.

    Returns None when the cleaned caption is rejected.
    """
    caption = raw
    for step in CAPTION_STEPS:
        caption = step(caption)

    if not is_acceptable_caption(caption):
        logger.debug(f"Rejected caption {caption!r} (raw: {raw[:80]!r})")
        return None
    return caption


def _metadata_value(extmetadata: dict, field: str) -> str:
    entry = extmetadata.get(field)
    if not isinstance(entry, dict):
        return ""
    value = entry.get("value")
    if value is None:
        return ""
    return str(value).strip()


def select_caption_candidate(imageinfo: dict) -> Optional[str]:
    """Pick the raw caption text for an image, or None.

    Tries the description fields, then "Title by Artist", then the upload
    comment if it is long enough to be descriptive.
    """
    extmetadata = imageinfo.get("extmetadata") or {}

    for field in DESCRIPTION_FIELDS:
        value = _metadata_value(extmetadata, field)
        if value:
            return value

    title = _metadata_value(extmetadata, "Title")
    artist = _metadata_value(extmetadata, "Artist")
    if title and artist:
        return f"{title} by {artist}"

    comment = (imageinfo.get("comment") or "").strip()
    if len(comment) > MIN_COMMENT_LENGTH:
        return comment

    return None


def caption_from_imageinfo(imageinfo: dict) -> Optional[str]:
    """Select and clean a caption from one `imageinfo` entry."""
    candidate = select_caption_candidate(imageinfo)
    if candidate is None:
        return None
    return clean_caption(candidate)
