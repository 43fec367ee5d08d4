"""Pre-tokenizer split pattern and its compilation."""

from typing import Final

import regex as re

from .errors import PatternError

SOT_TOKEN: Final[str] = "<|startoftext|>"
EOT_TOKEN: Final[str] = "<|endoftext|>"

# Source: https://github.com/openai/CLIP/blob/main/clip/simple_tokenizer.py
CLIP_PATTERN: Final[str] = (
    r"<\|startoftext\|>|<\|endoftext\|>|"
    r"'s|'t|'re|'ve|'m|'ll|'d|"
    r"[\p{L}]+|"
    r"[\p{N}]|"  # single digits, never grouped
    r"[^\s\p{L}\p{N}]+"
)


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """
    Compile a split pattern for case-insensitive matching.

    :param pattern: Regex pattern string to compile.
    :return: Compiled regex pattern.
    :raises PatternError: If pattern is invalid.
    """
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise PatternError("invalid regex pattern", pattern=pattern, regex_err=e) from e


__all__ = ["SOT_TOKEN", "EOT_TOKEN", "CLIP_PATTERN", "compile_pattern"]
