"""Tests for loading merge and vocabulary files and the from_pretrained factory."""

import json
import logging

import pytest

import cliptok as ctok
from cliptok.errors import ConfigLoadError


# build_clip_vocab
# ---------------------------------------------------------------------------


def test_build_clip_vocab_layout(merges):
    """Base symbols, boundary-marked symbols, merges, then special tokens."""
    vocab = ctok.build_clip_vocab(merges)
    assert vocab["!"] == 0
    assert vocab["a</w>"] == 320
    assert vocab["he"] == 512
    assert vocab["hello</w>"] == 515
    assert vocab[ctok.SOT_TOKEN] == 512 + len(merges)
    assert vocab[ctok.EOT_TOKEN] == 512 + len(merges) + 1
    assert len(vocab) == 512 + len(merges) + 2


# CLIP merges file
# ---------------------------------------------------------------------------


def test_load_gzip_bpe_file(bpe_file, merges):
    """A gzip merges file yields the merges in order and the derived vocab."""
    vocab, loaded = ctok.load_bpe_file(bpe_file)
    assert loaded == merges
    assert vocab == ctok.build_clip_vocab(merges)


def test_load_plain_bpe_file(tmp_path, merges):
    """An uncompressed merges file loads the same way."""
    path = tmp_path / "merges.txt"
    path.write_text(
        "#version: 0.2\n" + "".join(f"{a} {b}\n" for a, b in merges), encoding="utf-8"
    )
    _, loaded = ctok.load_bpe_file(path)
    assert loaded == merges


def test_vocab_size_limits_merges(bpe_file, merges):
    """Only the merges that fit in the vocabulary size are kept."""
    vocab, loaded = ctok.load_bpe_file(bpe_file, vocab_size=512 + 2 + 3)
    assert loaded == merges[:3]
    assert len(vocab) == 517


def test_vocab_size_too_small(bpe_file):
    """A vocabulary size without room for merges is rejected."""
    with pytest.raises(ConfigLoadError):
        ctok.load_bpe_file(bpe_file, vocab_size=100)


def test_missing_file(tmp_path):
    """A missing file raises ConfigLoadError carrying the path."""
    path = tmp_path / "nope.txt.gz"
    with pytest.raises(ConfigLoadError) as exc_info:
        ctok.load_bpe_file(path)
    assert exc_info.value.path == str(path)


def test_malformed_merge_line(tmp_path):
    """A line without exactly two symbols reports its line number."""
    path = tmp_path / "bad.txt"
    path.write_text("#version: 0.2\nh e\nbad line here\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError) as exc_info:
        ctok.load_bpe_file(path)
    assert exc_info.value.line_no == 3


def test_header_only_file(tmp_path):
    """A file with no merge rules is rejected."""
    path = tmp_path / "empty.txt"
    path.write_text("#version: 0.2\n\n", encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ctok.load_bpe_file(path)


def test_corrupt_gzip(tmp_path):
    """Corrupt gzip data is reported as a load error."""
    path = tmp_path / "corrupt.txt.gz"
    path.write_bytes(b"\x1f\x8bgarbage")
    with pytest.raises(ConfigLoadError):
        ctok.load_bpe_file(path)


def test_tokenizer_from_bpe_file(bpe_file):
    """A tokenizer built from the file encodes with the derived ids."""
    tok = ctok.Tokenizer.from_bpe_file(bpe_file)
    assert tok.encode("Hello World") == [515, 519]


# vocab.json + merges.txt
# ---------------------------------------------------------------------------


@pytest.fixture
def hf_dir(tmp_path, vocab, merges):
    """Write the synthetic tables as a vocab.json / merges.txt pair."""
    (tmp_path / "vocab.json").write_text(json.dumps(vocab), encoding="utf-8")
    (tmp_path / "merges.txt").write_text(
        "#version: 0.2\n" + "".join(f"{a} {b}\n" for a, b in merges), encoding="utf-8"
    )
    return tmp_path


def test_tokenizer_from_files(hf_dir):
    """The two-file layout loads into a working tokenizer."""
    tok = ctok.Tokenizer.from_files(hf_dir / "vocab.json", hf_dir / "merges.txt")
    assert tok.encode("hello world") == [515, 519]


def test_invalid_vocab_json(tmp_path):
    """Broken JSON reports its line number."""
    path = tmp_path / "vocab.json"
    path.write_text('{"a": 1,\n', encoding="utf-8")
    with pytest.raises(ConfigLoadError) as exc_info:
        ctok.load_vocab_json(path)
    assert exc_info.value.line_no is not None


@pytest.mark.parametrize("content", ["[1, 2]", "{}"])
def test_vocab_json_must_be_non_empty_object(tmp_path, content):
    """The vocabulary must be a non-empty JSON object."""
    path = tmp_path / "vocab.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigLoadError):
        ctok.load_vocab_json(path)


# from_pretrained
# ---------------------------------------------------------------------------


def test_from_pretrained_directory(hf_dir):
    """A directory is read as vocab.json + merges.txt."""
    assert ctok.from_pretrained(hf_dir).encode("cat") == [522]


def test_from_pretrained_gzip(bpe_file):
    """A .gz path is read as a CLIP merges file."""
    assert ctok.from_pretrained(bpe_file).encode("cat") == [522]


def test_from_pretrained_env_var(bpe_file, monkeypatch):
    """Without a path the environment variable is used."""
    monkeypatch.setenv(ctok.BPE_PATH_ENV, str(bpe_file))
    assert ctok.from_pretrained().encode("hello") == [515]


def test_from_pretrained_without_path(monkeypatch):
    """No path and no environment variable is a load error."""
    monkeypatch.delenv(ctok.BPE_PATH_ENV, raising=False)
    with pytest.raises(ConfigLoadError):
        ctok.from_pretrained()


def test_from_pretrained_missing_path(tmp_path):
    """A path that does not exist is a load error."""
    with pytest.raises(ConfigLoadError):
        ctok.from_pretrained(tmp_path / "missing.txt.gz")


def test_from_pretrained_unknown_suffix(tmp_path):
    """Files that are neither .txt nor .gz are rejected."""
    path = tmp_path / "vocab.bin"
    path.write_bytes(b"\x00")
    with pytest.raises(ConfigLoadError):
        ctok.from_pretrained(path)


def test_load_time_is_logged(bpe_file, caplog):
    """Loaders log their wall time."""
    with caplog.at_level(logging.INFO, logger="cliptok"):
        ctok.load_bpe_file(bpe_file)
    assert "load_bpe_file completed in" in caplog.text
