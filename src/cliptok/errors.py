"""Custom exception hierarchy for cliptok errors."""

import regex as re

from ._sanitise import render_text


class CliptokError(Exception):
    """Base exception for all cliptok errors."""


class ConfigLoadError(CliptokError):
    """Raised when vocabulary or merge data cannot be loaded or is malformed."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        line_no: int | None = None,
    ) -> None:
        """Initialize with optional path and line number that get appended to the message."""
        extra = " "
        if path:
            extra += f"(path: {path}) "
        if line_no is not None:
            extra += f"(line: {line_no}) "
        super().__init__((message + extra).rstrip())
        self.path = path
        self.line_no = line_no


class ConfigMismatchError(CliptokError):
    """Raised when a merged symbol has no entry in the vocabulary."""

    def __init__(
        self,
        message: str,
        *,
        symbol: str | None = None,
        pre_token: str | None = None,
    ) -> None:
        extra = " "
        if symbol is not None:
            extra += f"(symbol: {render_text(symbol)}) "
        if pre_token is not None:
            extra += f"(pre-token: {render_text(pre_token)}) "
        super().__init__((message + extra).rstrip())
        self.symbol = symbol
        self.pre_token = pre_token


class PatternError(CliptokError):
    """Raised when compiling a pre-tokenizer regex pattern fails."""

    def __init__(
        self,
        message: str,
        *,
        pattern: str | None = None,
        regex_err: re.error | None = None,
    ) -> None:
        """
        Initialize PatternError with pattern details.

        Args:
            message: Error message.
            pattern: The regex pattern that failed.
            regex_err: The underlying regex error from the regex library.
        """
        extra = " "
        if pattern:
            extra += f"(pattern: {pattern!r}) "
        if regex_err:
            extra += f"(reason: {regex_err}) "
        super().__init__((message + extra).rstrip())
        self.pattern = pattern
        self.regex_err = regex_err
