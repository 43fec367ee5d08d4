"""Unicode-aware splitting of normalized text into pre-tokens."""

import regex as re

from .pattern import CLIP_PATTERN, compile_pattern

_WHITESPACE = re.compile(r"\s")


class PreTokenizer:
    """Split text into the ordered substrings that BPE is applied to."""

    def __init__(self, pattern: str | None = None) -> None:
        """Use ``pattern`` if given, otherwise the CLIP split pattern."""
        self.pat: str = CLIP_PATTERN if pattern is None else pattern
        self.compiled_pat: re.Pattern[str] = compile_pattern(self.pat)

    def split(self, text: str) -> list[str]:
        """
        Return pre-tokens in order of appearance.

        Whitespace never becomes a pre-token. Any non-whitespace code point
        left unmatched by the pattern is kept as a pre-token of its own.
        """
        pre_tokens: list[str] = []
        pos = 0
        for m in self.compiled_pat.finditer(text):
            if m.start() > pos:
                pre_tokens.extend(_stray_chars(text[pos : m.start()]))
            if m.end() > m.start():
                pre_tokens.append(m.group(0))
            pos = max(pos, m.end())
        if pos < len(text):
            pre_tokens.extend(_stray_chars(text[pos:]))
        return pre_tokens


def _stray_chars(gap: str) -> list[str]:
    """Return the non-whitespace characters of an unmatched span, one per entry."""
    return [c for c in gap if not _WHITESPACE.match(c)]


__all__ = ["PreTokenizer"]
