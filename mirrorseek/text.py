"""Text normalization shared by queries, titles and filter terms."""

import re
import unicodedata

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_query(text: str) -> str:
    """Lowercase, strip accents and collapse punctuation into single spaces.

    "Amélie.(2001).1080p" -> "amelie 2001 1080p"
    """
    if not text:
        return ""
    folded = unicodedata.normalize("NFKD", text)
    folded = "".join(c for c in folded if not unicodedata.combining(c))
    return _NON_ALNUM.sub(" ", folded.lower()).strip()
