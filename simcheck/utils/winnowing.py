"""
Winnowing fingerprints over the token stream (MOSS-style document fingerprinting).

k-grams of tokens are hashed with blake2b so fingerprints are stable across
processes, then a sliding window of w hashes keeps its minimum (rightmost on
ties). A position is never recorded twice in a row.
"""

import hashlib
from typing import List, Set, Tuple

from nltk.util import ngrams


def kgram_hash(gram: Tuple[str, ...]) -> int:
    digest = hashlib.blake2b(" ".join(gram).encode("utf8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def kgram_hashes(tokens: List[str], k: int) -> List[int]:
    if len(tokens) < k:
        return []
    return [kgram_hash(gram) for gram in ngrams(tokens, k)]


def winnow(hashes: List[int], w: int) -> List[Tuple[int, int]]:
    """Select (hash, position) fingerprints from a k-gram hash sequence."""
    if not hashes:
        return []
    if w <= 1 or len(hashes) <= w:
        return [(h, i) for i, h in enumerate(hashes)]

    fps: List[Tuple[int, int]] = []
    last_min_abs = -1
    for i in range(0, len(hashes) - w + 1):
        min_hash, min_idx = None, 0
        for j in range(w):
            h = hashes[i + j]
            if min_hash is None or h <= min_hash:
                min_hash, min_idx = h, j
        abs_idx = i + min_idx
        if abs_idx != last_min_abs:
            fps.append((hashes[abs_idx], abs_idx))
            last_min_abs = abs_idx
    return fps


def fingerprint_set(tokens: List[str], k: int, w: int) -> Set[int]:
    return {h for h, _ in winnow(kgram_hashes(tokens, k), w)}


def fingerprint_overlap(a: Set[int], b: Set[int]) -> float:
    """Jaccard overlap of two fingerprint sets."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)
