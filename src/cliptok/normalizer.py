"""Text normalization applied before pre-tokenization."""

import html
import unicodedata

import regex as re

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize(text: str) -> str:
    """
    Canonicalize ``text`` for pre-tokenization.

    Steps, in order: unescape HTML entities, NFC-compose, collapse each run of
    unicode whitespace to a single space, strip, lowercase. Whitespace-only
    input normalizes to the empty string.
    """
    if "&" in text:
        text = html.unescape(text)
    text = unicodedata.normalize("NFC", text)
    text = _WHITESPACE_RUN.sub(" ", text).strip()
    return text.lower()


__all__ = ["normalize"]
