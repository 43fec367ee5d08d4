"""
Byte pair merging of a single pre-token, memoized per tokenizer.
"""

import threading
from collections.abc import Mapping
from typing import Final

from .byte_codec import text_to_symbols
from .tables import MergeRankTable
from .types import Symbol, SymbolPair

# appended to the last symbol of every pre-token so merges never cross pre-tokens
WORD_END: Final[str] = "</w>"


class BpeCache:
    """
    Pre-token -> merged symbols, owned by a single tokenizer.

    Reads are plain dict lookups. Writes take a lock and never replace an
    existing entry, so concurrent computations of the same pre-token all end
    up returning the first stored value.
    """

    def __init__(self, seed: Mapping[str, tuple[Symbol, ...]] | None = None) -> None:
        self._entries: dict[str, tuple[Symbol, ...]] = dict(seed or {})
        self._lock = threading.Lock()

    def get(self, pre_token: str) -> tuple[Symbol, ...] | None:
        return self._entries.get(pre_token)

    def put(self, pre_token: str, symbols: tuple[Symbol, ...]) -> tuple[Symbol, ...]:
        """Store ``symbols`` unless an entry exists; return the stored value."""
        with self._lock:
            return self._entries.setdefault(pre_token, symbols)

    def __contains__(self, pre_token: object) -> bool:
        return pre_token in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def merge_pair(symbols: list[Symbol], target: SymbolPair) -> list[Symbol]:
    """
    Merge every non-overlapping occurrence of ``target``, scanning left to right.

    :param symbols: Current symbol sequence.
    :param target: The adjacent pair to merge.
    :return: New symbol list with each occurrence replaced by the concatenation.
    """
    merged = target[0] + target[1]
    newsyms: list[Symbol] = []

    i = 0
    n = len(symbols)
    while i < n:
        if i < n - 1 and symbols[i] == target[0] and symbols[i + 1] == target[1]:
            newsyms.append(merged)
            i += 2
        else:
            newsyms.append(symbols[i])
            i += 1

    return newsyms


def apply_merges(symbols: list[Symbol], ranks: MergeRankTable) -> list[Symbol]:
    """
    Repeatedly merge the lowest-ranked adjacent pair until none is mergeable.

    Ties on rank can only come from the same pair occurring more than once;
    the leftmost occurrence is found first and all occurrences merge together.
    """
    while len(symbols) > 1:
        best: SymbolPair | None = None
        best_rank: int | None = None
        for pair in zip(symbols, symbols[1:]):
            rank = ranks.rank(pair)
            if rank is not None and (best_rank is None or rank < best_rank):
                best, best_rank = pair, rank
        if best is None:
            break
        symbols = merge_pair(symbols, best)
    return symbols


class BpeEngine:
    """Turns one pre-token into its final vocabulary symbols."""

    def __init__(self, ranks: MergeRankTable, cache: BpeCache | None = None) -> None:
        self.ranks = ranks
        self.cache = cache if cache is not None else BpeCache()

    def bpe(self, pre_token: str) -> tuple[Symbol, ...]:
        """
        Return the merged symbols for ``pre_token``, computing them on a cache miss.

        The UTF-8 bytes are mapped to symbols, the last symbol gets the
        ``</w>`` marker, then merges are applied by rank.
        """
        cached = self.cache.get(pre_token)
        if cached is not None:
            return cached

        symbols = text_to_symbols(pre_token)
        if not symbols:
            return ()
        symbols[-1] += WORD_END

        result = tuple(apply_merges(symbols, self.ranks))
        return self.cache.put(pre_token, result)


__all__ = ["WORD_END", "BpeCache", "BpeEngine", "merge_pair", "apply_merges"]
