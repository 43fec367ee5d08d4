"""
Utilities for rendering text with control characters escaped.
"""

import unicodedata


def _escape_ctrl_chars(s: str) -> str:
    """Replace all Unicode control characters with their escape sequences."""
    cleaned = []
    for c in s:
        # control category codes vary: Cc, Cf, Cs etc.
        # so check via first character
        if unicodedata.category(c)[0] != "C":
            cleaned.append(c)
        else:
            cleaned.append(f"\\u{ord(c):04x}")
    return "".join(cleaned)


def render_text(s: str) -> str:
    """Return ``s`` quoted, with control characters escaped for log and error output."""
    return f'"{_escape_ctrl_chars(s)}"'
