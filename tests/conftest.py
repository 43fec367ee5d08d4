"""Shared fixtures: a small synthetic merge list and, when available, the real CLIP data."""

import gzip
import os
from pathlib import Path

import pytest

import cliptok as ctok

# Ids follow the CLIP layout: 256 base symbols, 256 boundary-marked base
# symbols, then one id per merge starting at 512.
MERGES = [
    ("h", "e"),  # 512
    ("l", "l"),  # 513
    ("he", "ll"),  # 514
    ("hell", "o</w>"),  # 515 hello</w>
    ("o", "r"),  # 516
    ("w", "or"),  # 517
    ("l", "d</w>"),  # 518
    ("wor", "ld</w>"),  # 519 world</w>
    ("!", "!</w>"),  # 520 !!</w>
    ("c", "a"),  # 521
    ("ca", "t</w>"),  # 522 cat</w>
]


@pytest.fixture
def merges():
    """Return the synthetic merge list."""
    return list(MERGES)


@pytest.fixture
def vocab(merges):
    """Return the vocabulary derived from the synthetic merges."""
    return ctok.build_clip_vocab(merges)


@pytest.fixture
def tokenizer(vocab, merges):
    """Return a Tokenizer over the synthetic tables."""
    return ctok.Tokenizer(vocab, merges)


@pytest.fixture
def bpe_file(tmp_path):
    """Write the synthetic merges as a gzip CLIP merges file."""
    path = tmp_path / "bpe_test_vocab.txt.gz"
    body = "#version: 0.2\n" + "".join(f"{a} {b}\n" for a, b in MERGES)
    with gzip.open(path, "wt", encoding="utf-8") as f:
        f.write(body)
    return path


@pytest.fixture(scope="session")
def clip_tokenizer():
    """Return a Tokenizer over the real CLIP merges, or skip when unavailable."""
    env_path = os.environ.get(ctok.BPE_PATH_ENV, "").strip()
    if not env_path or not Path(env_path).exists():
        pytest.skip(f"set ${ctok.BPE_PATH_ENV} to the CLIP merges file to run")
    return ctok.from_pretrained(env_path)
