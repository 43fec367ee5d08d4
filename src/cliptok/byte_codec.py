"""
Reversible mapping between raw bytes and printable unicode symbols.

BPE merges operate on strings, so every byte value needs a stand-in character
that is printable and never collides with another byte's stand-in. Printable
ASCII and most of Latin-1 map to themselves; the remaining 68 byte values
(controls, space, soft hyphen, ...) are assigned code points from U+0100
upward in byte order.
"""

from types import MappingProxyType
from collections.abc import Mapping
from typing import Final

from .types import Symbol

# byte ranges whose code point is already a printable character
_PRINTABLE_RANGES: Final[tuple[tuple[str, str], ...]] = (
    ("!", "~"),
    ("¡", "¬"),
    ("®", "ÿ"),
)


def _build_byte_table() -> tuple[list[int], list[str]]:
    """Return byte values and their symbols in canonical vocabulary order."""
    order = [
        b for lo, hi in _PRINTABLE_RANGES for b in range(ord(lo), ord(hi) + 1)
    ]
    symbols = [chr(b) for b in order]
    printable = set(order)
    n = 0
    for b in range(256):
        if b not in printable:
            order.append(b)
            symbols.append(chr(256 + n))
            n += 1
    return order, symbols


_order, _symbols = _build_byte_table()

# symbols in the order the base vocabulary assigns ids (printable bytes first)
BASE_SYMBOLS: Final[tuple[Symbol, ...]] = tuple(_symbols)
# indexed by byte value
BYTE_TO_SYMBOL: Final[tuple[Symbol, ...]] = tuple(
    sym for _, sym in sorted(zip(_order, _symbols))
)
SYMBOL_TO_BYTE: Final[Mapping[Symbol, int]] = MappingProxyType(
    {sym: b for b, sym in enumerate(BYTE_TO_SYMBOL)}
)

del _order, _symbols


def bytes_to_symbols(data: bytes) -> list[Symbol]:
    """Map each byte to its single-character symbol."""
    return [BYTE_TO_SYMBOL[b] for b in data]


def text_to_symbols(text: str) -> list[Symbol]:
    """
    Encode ``text`` as UTF-8 and map the bytes to symbols.

    Unpaired surrogates are encoded with ``surrogatepass`` so that any Python
    string has a byte representation.
    """
    return bytes_to_symbols(text.encode("utf-8", errors="surrogatepass"))


__all__ = [
    "BASE_SYMBOLS",
    "BYTE_TO_SYMBOL",
    "SYMBOL_TO_BYTE",
    "bytes_to_symbols",
    "text_to_symbols",
]
