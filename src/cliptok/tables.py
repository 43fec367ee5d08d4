"""
Immutable lookup tables: merge ranks and vocabulary ids.

Both tables are validated once at construction and never change afterwards,
so they can be read from any number of threads without locking.
"""

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from ._sanitise import render_text
from .errors import ConfigLoadError, ConfigMismatchError
from .types import Symbol, SymbolPair, Token

log = logging.getLogger(__name__)


class MergeRankTable:
    """Rank of each mergeable symbol pair; lower rank merges first."""

    __slots__ = ("_ranks",)

    def __init__(self, merges: Iterable[SymbolPair]) -> None:
        """
        Build ranks from an ordered merge list.

        The position of a pair in ``merges`` is its rank. A pair listed twice
        keeps its first rank.

        :raises ConfigLoadError: If the list is empty or an entry is not a
            pair of non-empty strings.
        """
        ranks: dict[SymbolPair, int] = {}
        for rank, pair in enumerate(merges):
            # json-loaded merge lists arrive as lists
            if isinstance(pair, list):
                pair = tuple(pair)
            if (
                not isinstance(pair, tuple)
                or len(pair) != 2
                or not all(isinstance(s, str) and s for s in pair)
            ):
                raise ConfigLoadError(
                    f"merge rule {rank} must be a pair of non-empty strings, got {pair!r}"
                )
            ranks.setdefault(pair, rank)

        if not ranks:
            raise ConfigLoadError("merge list is empty")

        self._ranks: Mapping[SymbolPair, int] = MappingProxyType(ranks)
        log.debug(f"built merge rank table with {len(ranks)} rules")

    def rank(self, pair: SymbolPair) -> int | None:
        """Return the rank of ``pair``, or ``None`` if it never merges."""
        return self._ranks.get(pair)

    def __contains__(self, pair: object) -> bool:
        return pair in self._ranks

    def __len__(self) -> int:
        return len(self._ranks)


class VocabTable:
    """Maps finished symbols to their integer ids."""

    __slots__ = ("_ids",)

    def __init__(self, vocab: Mapping[Symbol, Token]) -> None:
        """
        :raises ConfigLoadError: If ``vocab`` is empty, a key is not a
            non-empty string, or an id is not a non-negative integer.
        """
        if not vocab:
            raise ConfigLoadError("vocabulary is empty")

        ids: dict[Symbol, Token] = {}
        for symbol, tok in vocab.items():
            if not isinstance(symbol, str) or not symbol:
                raise ConfigLoadError(f"invalid vocabulary symbol: {symbol!r}")
            # bool is an int subclass but never a valid id
            if isinstance(tok, bool) or not isinstance(tok, int) or tok < 0:
                raise ConfigLoadError(
                    f"invalid id for symbol {render_text(symbol)}: {tok!r}"
                )
            ids[symbol] = tok

        self._ids: Mapping[Symbol, Token] = MappingProxyType(ids)
        log.debug(f"built vocabulary table with {len(ids)} symbols")

    def lookup(self, symbol: Symbol, pre_token: str | None = None) -> Token:
        """
        Return the id of ``symbol``.

        :param pre_token: Pre-token the symbol came from, reported on a miss.
        :raises ConfigMismatchError: If the symbol is not in the vocabulary.
        """
        try:
            return self._ids[symbol]
        except KeyError:
            raise ConfigMismatchError(
                "merged symbol missing from vocabulary; "
                "vocabulary and merges were not built from the same source",
                symbol=symbol,
                pre_token=pre_token,
            ) from None

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._ids

    def __len__(self) -> int:
        return len(self._ids)


__all__ = ["MergeRankTable", "VocabTable"]
