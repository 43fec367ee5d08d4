"""CLIP byte-level BPE tokenizer."""

import logging
import os
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from math import ceil
from pathlib import Path
from typing import Self

from .bpe import BpeCache, BpeEngine
from .loader import load_bpe_file, load_merges_txt, load_vocab_json, SPECIAL_TOKENS
from .normalizer import normalize
from .pretokenizer import PreTokenizer
from .tables import MergeRankTable, VocabTable
from .types import Symbol, SymbolPair, Token

log = logging.getLogger(__name__)


class Tokenizer:
    """
    Encode text into CLIP token ids.

    Never inserts start/end tokens. The vocabulary and merge tables are fixed
    at construction; the only state that changes afterwards is the private
    BPE cache, which only ever gains entries.
    """

    def __init__(
        self,
        vocab: Mapping[Symbol, Token],
        merges: Iterable[SymbolPair],
        pattern: str | None = None,
    ) -> None:
        """
        Build the tables from loaded data.

        :param vocab: Symbol -> id mapping.
        :param merges: Merge pairs in rank order.
        :param pattern: Optional split pattern replacing the CLIP pattern.
        :raises ConfigLoadError: If either table is empty or malformed.
        :raises PatternError: If ``pattern`` does not compile.
        """
        self.vocab = VocabTable(vocab)
        self.ranks = MergeRankTable(merges)
        self.pretokenizer = PreTokenizer(pattern)

        # special tokens written literally in the text resolve to their own ids
        seed = {seq: (seq,) for seq in SPECIAL_TOKENS if seq in self.vocab}
        if seed:
            log.debug(f"seeding bpe cache with special tokens: {sorted(seed)}")
        self.engine = BpeEngine(self.ranks, BpeCache(seed))

    @classmethod
    def from_bpe_file(cls, path: str | Path, pattern: str | None = None) -> Self:
        """Build a tokenizer from a CLIP merges file (``.txt`` or ``.txt.gz``)."""
        vocab, merges = load_bpe_file(path)
        return cls(vocab, merges, pattern=pattern)

    @classmethod
    def from_files(
        cls,
        vocab_path: str | Path,
        merges_path: str | Path,
        pattern: str | None = None,
    ) -> Self:
        """Build a tokenizer from a ``vocab.json`` and ``merges.txt`` pair."""
        return cls(
            load_vocab_json(vocab_path), load_merges_txt(merges_path), pattern=pattern
        )

    def encode(self, text: str) -> list[Token]:
        """
        Encode text into a sequence of token ids.

        :param text: Text to encode.
        :returns: Token ids in pre-token order.
        :raises ConfigMismatchError: If a merged symbol is missing from the
            vocabulary. The tokenizer stays usable for other inputs.
        """
        tokens: list[Token] = []
        for pre_token in self.pretokenizer.split(normalize(text)):
            for symbol in self.engine.bpe(pre_token):
                tokens.append(self.vocab.lookup(symbol, pre_token))
        return tokens

    def count(self, text: str) -> int:
        """Return ``len(self.encode(text))``."""
        return len(self.encode(text))

    def encode_batch(
        self,
        texts: list[str],
        num_workers: int | None = None,
    ) -> list[list[Token]]:
        """
        Encode many texts on a thread pool.

        :param texts: Text inputs to encode.
        :param num_workers: Worker count; defaults to the CPU count.
        :returns: Encoded token sequences in input order.
        """
        if not texts:
            return []

        if num_workers is None:
            workers = os.cpu_count() or 1
        else:
            workers = max(1, num_workers)  # "0" interpreted as 1 worker

        if workers == 1 or len(texts) == 1:
            return [self.encode(text) for text in texts]

        # group texts to reduce task-scheduling overhead when the input
        # contains many documents
        target_tasks = min(len(texts), workers * 2)
        group_size = max(1, ceil(len(texts) / target_tasks))
        text_groups = [
            texts[idx : idx + group_size] for idx in range(0, len(texts), group_size)
        ]

        def encode_group(group: list[str]) -> list[list[Token]]:
            return [self.encode(text) for text in group]

        with ThreadPoolExecutor(max_workers=workers) as pool:
            encoded_groups = list(pool.map(encode_group, text_groups))
        return [encoded for group in encoded_groups for encoded in group]

    def vocab_size(self) -> int:
        """Return the number of tokens in the vocabulary."""
        return len(self.vocab)

    def cache_size(self) -> int:
        """Return the number of pre-tokens memoized so far."""
        return len(self.engine.cache)


__all__ = ["Tokenizer"]
