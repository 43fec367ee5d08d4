"""Benchmark encode() and encode_batch() throughput on synthetic text.

Outputs a row with the columns:
  Corpus Size | Vocab Size | Cold Encode | Warm Encode | Batch Encode | Tokens/Byte
"""

import argparse
import time

from cliptok import Tokenizer, from_pretrained

SEED_TEXT = (
    "A photo of a cat sitting on a windowsill at sunset. "
    "Привет мир, 你好世界! Emoji time 🌍🎉✨ with numbers 3.14159 and $100.00. "
    "Don't forget: the quick brown fox jumps over the lazy dog. "
)


def make_docs(target_kb: int, num_docs: int) -> list[str]:
    """Build `num_docs` deterministic documents totalling roughly `target_kb`."""
    target_bytes = target_kb * 1024
    repeat = max(1, target_bytes // len(SEED_TEXT.encode("utf-8")) // max(1, num_docs))
    return [f"doc {i}: " + SEED_TEXT * repeat for i in range(num_docs)]


def time_encode(tok: Tokenizer, docs: list[str]) -> tuple[float, int]:
    """Encode docs one by one; return (seconds, total tokens)."""
    start = time.perf_counter()
    total = sum(len(tok.encode(doc)) for doc in docs)
    return time.perf_counter() - start, total


def main() -> None:
    """Run the encode benchmark and print a markdown table row."""
    parser = argparse.ArgumentParser(description="Benchmark cliptok encoding.")
    parser.add_argument(
        "--data",
        type=str,
        default=None,
        help="CLIP merges file or vocab.json/merges.txt directory "
        "(default: $CLIPTOK_BPE_PATH).",
    )
    parser.add_argument(
        "--size-kb",
        type=int,
        default=1024,
        help="Approximate corpus size in KB (default: 1024).",
    )
    parser.add_argument(
        "--num-docs",
        type=int,
        default=64,
        help="Number of documents to split the corpus into (default: 64).",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Thread count for encode_batch (default: CPU count).",
    )
    args = parser.parse_args()

    tokenizer = from_pretrained(args.data)
    docs = make_docs(args.size_kb, args.num_docs)
    total_bytes = sum(len(d.encode("utf-8")) for d in docs)
    corpus_mb = total_bytes / (1024 * 1024)

    # --- Cold cache: every pre-token is merged for the first time ---
    cold_secs, total_tokens = time_encode(tokenizer, docs)

    # --- Warm cache: same text again, merges served from the cache ---
    warm_secs, _ = time_encode(tokenizer, docs)

    # --- Batch on a fresh instance so the cache starts empty again ---
    fresh = from_pretrained(args.data)
    t0 = time.perf_counter()
    fresh.encode_batch(docs, num_workers=args.workers)
    batch_secs = time.perf_counter() - t0

    def mbps(secs: float) -> str:
        return f"{total_bytes / secs / (1024 * 1024):.2f} MB/sec"

    print()
    header = (
        f"| {'Corpus Size':12} | {'Vocab Size':10} | {'Cold Encode':14} "
        f"| {'Warm Encode':14} | {'Batch Encode':14} | {'Tokens/Byte':11} |"
    )
    sep = (
        f"| {'-' * 12} | {'-' * 10} | {'-' * 14} "
        f"| {'-' * 14} | {'-' * 14} | {'-' * 11} |"
    )
    row = (
        f"| {f'{corpus_mb:.2f} MB':12} | {tokenizer.vocab_size():10,} "
        f"| {mbps(cold_secs):14} | {mbps(warm_secs):14} | {mbps(batch_secs):14} "
        f"| {total_tokens / total_bytes:11.3f} |"
    )
    print(header)
    print(sep)
    print(row)
    print()


if __name__ == "__main__":
    main()
