"""
Readers for the vocabulary and merge files CLIP data ships in.

Two layouts are supported:

- the CLIP merges file (``bpe_simple_vocab_16e6.txt.gz``), gzip-compressed or
  plain; the vocabulary is not stored and is derived from the merges;
- the Hugging Face pair ``vocab.json`` + ``merges.txt``.
"""

import gzip
import json
import logging
import zlib
from collections.abc import Iterable
from pathlib import Path
from typing import Final

from ._decorators import measure_time
from .bpe import WORD_END
from .byte_codec import BASE_SYMBOLS
from .errors import ConfigLoadError
from .pattern import EOT_TOKEN, SOT_TOKEN
from .types import MergeList, Vocabulary

# vocabulary size of the released CLIP models
CLIP_VOCAB_SIZE: Final[int] = 49408
SPECIAL_TOKENS: Final[tuple[str, ...]] = (SOT_TOKEN, EOT_TOKEN)

_GZIP_MAGIC: Final[bytes] = b"\x1f\x8b"

log = logging.getLogger(__name__)


def build_clip_vocab(
    merges: MergeList,
    special_tokens: Iterable[str] = SPECIAL_TOKENS,
) -> Vocabulary:
    """
    Derive the vocabulary the way CLIP does.

    Ids are assigned in order to: the 256 base symbols, the same symbols with
    the ``</w>`` marker, the concatenation of each merge in rank order, and
    finally the special tokens.
    """
    symbols = list(BASE_SYMBOLS)
    symbols.extend(sym + WORD_END for sym in BASE_SYMBOLS)
    symbols.extend(left + right for left, right in merges)
    symbols.extend(special_tokens)

    # a repeated symbol keeps its last id
    vocab: Vocabulary = {}
    for tok, sym in enumerate(symbols):
        vocab[sym] = tok

    log.debug(f"built vocabulary with {len(vocab)} tokens from {len(merges)} merges")
    return vocab


@measure_time
def load_bpe_file(
    path: str | Path,
    vocab_size: int | None = CLIP_VOCAB_SIZE,
) -> tuple[Vocabulary, MergeList]:
    """
    Load a CLIP merges file and derive its vocabulary.

    :param path: Path to the merges file, gzip-compressed or plain text.
    :param vocab_size: Total vocabulary size; merges beyond what fits are
        ignored. ``None`` keeps every merge.
    :return: ``(vocab, merges)`` with merges in rank order.
    :raises ConfigLoadError: If the file is unreadable, malformed, or holds no merges.
    """
    path = Path(path)
    limit = None
    if vocab_size is not None:
        limit = vocab_size - 2 * len(BASE_SYMBOLS) - len(SPECIAL_TOKENS)
        if limit <= 0:
            raise ConfigLoadError(
                f"vocab size {vocab_size} leaves no room for merges", path=str(path)
            )

    log.info(f"loading CLIP merges from {path}")
    lines = _read_lines(path)
    merges = _parse_merges(lines, path, limit=limit)
    vocab = build_clip_vocab(merges)

    log.info(f"loaded {len(merges)} merge rules, {len(vocab)} total tokens")
    return vocab, merges


@measure_time
def load_vocab_json(path: str | Path) -> Vocabulary:
    """
    Load a ``vocab.json`` mapping of symbol to id.

    :raises ConfigLoadError: If the file is unreadable, not JSON, or not an object.
    """
    path = Path(path)
    log.info(f"loading vocabulary from {path}")
    try:
        with path.open("r", encoding="utf-8") as f:
            vocab = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigLoadError(f"cannot read vocabulary: {e}", path=str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigLoadError(
            f"invalid vocabulary json: {e.msg}", path=str(path), line_no=e.lineno
        ) from e

    if not isinstance(vocab, dict):
        raise ConfigLoadError("vocabulary must be a json object", path=str(path))
    if not vocab:
        raise ConfigLoadError("vocabulary is empty", path=str(path))

    log.debug(f"loaded {len(vocab)} vocabulary entries")
    return vocab


@measure_time
def load_merges_txt(path: str | Path) -> MergeList:
    """
    Load a ``merges.txt`` file; line order is rank order.

    :raises ConfigLoadError: If the file is unreadable, malformed, or holds no merges.
    """
    path = Path(path)
    log.info(f"loading merges from {path}")
    merges = _parse_merges(_read_lines(path), path)
    log.debug(f"loaded {len(merges)} merge rules")
    return merges


def _read_lines(path: Path) -> list[str]:
    """Read all lines of a text file that may be gzip-compressed."""
    try:
        with path.open("rb") as f:
            raw = f.read()
        if raw[:2] == _GZIP_MAGIC:
            raw = gzip.decompress(raw)
        return raw.decode("utf-8").splitlines()
    except (OSError, EOFError, UnicodeDecodeError, zlib.error) as e:
        raise ConfigLoadError(f"cannot read merges: {e}", path=str(path)) from e


def _parse_merges(
    lines: list[str],
    path: Path,
    limit: int | None = None,
) -> MergeList:
    """
    Parse ``left right`` merge lines.

    The first line is skipped when it is a ``#version`` header. Blank lines are
    ignored. Parsing stops after ``limit`` merges.
    """
    merges: MergeList = []
    for line_no, line in enumerate(lines, start=1):
        if line_no == 1 and "#version" in line:
            continue
        if not line.strip():
            continue
        if limit is not None and len(merges) >= limit:
            break

        parts = line.split()
        if len(parts) != 2:
            raise ConfigLoadError(
                f"merge rule must have exactly two symbols: {line.strip()!r}",
                path=str(path),
                line_no=line_no,
            )
        merges.append((parts[0], parts[1]))

    if not merges:
        raise ConfigLoadError("no merge rules found", path=str(path))
    return merges


__all__ = [
    "CLIP_VOCAB_SIZE",
    "SPECIAL_TOKENS",
    "build_clip_vocab",
    "load_bpe_file",
    "load_vocab_json",
    "load_merges_txt",
]
