"""Factory function for creating tokenizers from data on disk."""

import logging
import os
from pathlib import Path
from typing import Final

from .errors import ConfigLoadError
from .tokenizer import Tokenizer

# environment variable consulted when no path is given
BPE_PATH_ENV: Final[str] = "CLIPTOK_BPE_PATH"

VOCAB_JSON: Final[str] = "vocab.json"
MERGES_TXT: Final[str] = "merges.txt"

log = logging.getLogger(__name__)


def from_pretrained(path: str | Path | None = None) -> Tokenizer:
    """
    Load a tokenizer, detecting the data layout from ``path``.

    A directory is read as a ``vocab.json`` + ``merges.txt`` pair; a ``.gz``
    or ``.txt`` file as a CLIP merges file.

    :param path: Data location. Defaults to ``$CLIPTOK_BPE_PATH``.
    :return: Loaded tokenizer.
    :raises ConfigLoadError: If no path is available, it does not exist, or
        its layout is not recognized.

    .. code-block:: python

        tokenizer = from_pretrained("bpe_simple_vocab_16e6.txt.gz")
        tokens = tokenizer.encode("a photo of a cat")
    """
    if path is None:
        env_path = os.environ.get(BPE_PATH_ENV, "").strip()
        if not env_path:
            raise ConfigLoadError(f"no data path given and ${BPE_PATH_ENV} is not set")
        path = env_path
        log.debug(f"using data path from ${BPE_PATH_ENV}: {path}")

    path = Path(path)
    if not path.exists():
        raise ConfigLoadError("data path does not exist", path=str(path))

    if path.is_dir():
        return Tokenizer.from_files(path / VOCAB_JSON, path / MERGES_TXT)

    if path.suffix in (".gz", ".txt"):
        return Tokenizer.from_bpe_file(path)

    raise ConfigLoadError("expected a directory, .txt or .gz file", path=str(path))


__all__ = ["BPE_PATH_ENV", "from_pretrained"]
