"""cliptok: CLIP byte-level BPE tokenization."""

from .bpe import WORD_END, BpeCache, BpeEngine
from .byte_codec import BYTE_TO_SYMBOL, SYMBOL_TO_BYTE, bytes_to_symbols
from .errors import CliptokError, ConfigLoadError, ConfigMismatchError, PatternError
from .factory import BPE_PATH_ENV, from_pretrained
from .loader import (
    CLIP_VOCAB_SIZE,
    build_clip_vocab,
    load_bpe_file,
    load_merges_txt,
    load_vocab_json,
)
from .normalizer import normalize
from .pattern import CLIP_PATTERN, EOT_TOKEN, SOT_TOKEN
from .pretokenizer import PreTokenizer
from .tables import MergeRankTable, VocabTable
from .tokenizer import Tokenizer

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("cliptok")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "Tokenizer",
    "PreTokenizer",
    "BpeEngine",
    "BpeCache",
    "MergeRankTable",
    "VocabTable",
    "CliptokError",
    "ConfigLoadError",
    "ConfigMismatchError",
    "PatternError",
    "BYTE_TO_SYMBOL",
    "SYMBOL_TO_BYTE",
    "WORD_END",
    "SOT_TOKEN",
    "EOT_TOKEN",
    "CLIP_PATTERN",
    "CLIP_VOCAB_SIZE",
    "BPE_PATH_ENV",
    "bytes_to_symbols",
    "normalize",
    "build_clip_vocab",
    "load_bpe_file",
    "load_vocab_json",
    "load_merges_txt",
    "from_pretrained",
]
