"""
Algorithm suite: independent, stateless similarity scorers.

Each scorer takes two prepared documents plus the scoring context and returns
a score in [0, 1], or raises AlgorithmUnavailable when it cannot compute for
this pair. The suite runner walks the ALGORITHMS registry and keeps only the
scores that were produced, so a missing algorithm never counts as 0.
"""

import logging
import math
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Dict, List, NamedTuple, Optional, Tuple

import numpy as np
from rapidfuzz.distance import Levenshtein, LCSseq

from simcheck.config import DetectionConfig
from simcheck.utils.errors import AlgorithmUnavailable, ComputationOverflow
from simcheck.utils.semantic_utils import Embedder, semantic_similarity
from simcheck.utils.structural_utils import Fingerprinter, python_fingerprint, structural_similarity
from simcheck.utils.text_utils import normalize_text, token_jaccard, tokenize
from simcheck.utils.winnowing import fingerprint_overlap, fingerprint_set

logger = logging.getLogger("simcheck.algorithms")


class Document(NamedTuple):
    raw: str
    normalized: str
    tokens: List[str]


def prepare_document(text: str) -> Document:
    text = text or ""
    return Document(raw=text, normalized=normalize_text(text), tokens=tokenize(text))


@dataclass(frozen=True)
class ScoringContext:
    config: DetectionConfig
    fingerprinter: Optional[Fingerprinter] = python_fingerprint
    embedder: Optional[Embedder] = None


Scorer = Callable[[Document, Document, ScoringContext], float]


def _score(value: float) -> float:
    return round(min(max(float(value), 0.0), 1.0), 4)


def _check_length(name: str, a: Document, b: Document, ctx: ScoringContext) -> None:
    longest = max(len(a.normalized), len(b.normalized))
    if longest > ctx.config.max_document_length:
        raise ComputationOverflow(name, longest, ctx.config.max_document_length)


def _cosine(vec_a: np.ndarray, vec_b: np.ndarray) -> float:
    norm = np.linalg.norm(vec_a) * np.linalg.norm(vec_b)
    if norm == 0:
        return 0.0
    return float(np.dot(vec_a, vec_b) / norm)


def _term_vectors(a: Document, b: Document) -> Tuple[List[str], Counter, Counter]:
    tf_a, tf_b = Counter(a.tokens), Counter(b.tokens)
    vocabulary = sorted(set(tf_a) | set(tf_b))
    return vocabulary, tf_a, tf_b


# ───── Scorers ─────

def jaccard(a: Document, b: Document, ctx: ScoringContext) -> float:
    return _score(token_jaccard(a.tokens, b.tokens))


def cosine(a: Document, b: Document, ctx: ScoringContext) -> float:
    """Cosine of raw term-frequency vectors."""
    vocabulary, tf_a, tf_b = _term_vectors(a, b)
    if not vocabulary:
        return 0.0
    vec_a = np.array([tf_a[t] for t in vocabulary], dtype=float)
    vec_b = np.array([tf_b[t] for t in vocabulary], dtype=float)
    return _score(_cosine(vec_a, vec_b))


def tfidf(a: Document, b: Document, ctx: ScoringContext) -> float:
    """Cosine of TF-IDF vectors over the two-document corpus.

    IDF is smoothed, ln((1 + N) / (1 + df)) + 1, so terms shared by both
    documents keep a non-zero weight.
    """
    vocabulary, tf_a, tf_b = _term_vectors(a, b)
    if not vocabulary:
        return 0.0
    n_docs = 2
    idf = np.array([
        math.log((1 + n_docs) / (1 + (t in tf_a) + (t in tf_b))) + 1.0
        for t in vocabulary
    ])
    vec_a = np.array([tf_a[t] for t in vocabulary], dtype=float) * idf
    vec_b = np.array([tf_b[t] for t in vocabulary], dtype=float) * idf
    return _score(_cosine(vec_a, vec_b))


def levenshtein(a: Document, b: Document, ctx: ScoringContext) -> float:
    """(max_len - edit distance) / max_len over normalized strings."""
    _check_length("levenshtein", a, b, ctx)
    longest = max(len(a.normalized), len(b.normalized))
    if longest == 0:
        return 1.0
    distance = Levenshtein.distance(a.normalized, b.normalized)
    return _score((longest - distance) / longest)


def lcs(a: Document, b: Document, ctx: ScoringContext) -> float:
    """Longest common character subsequence over the longer length."""
    _check_length("lcs", a, b, ctx)
    longest = max(len(a.normalized), len(b.normalized))
    if longest == 0:
        return 1.0
    return _score(LCSseq.similarity(a.normalized, b.normalized) / longest)


def winnowing(a: Document, b: Document, ctx: ScoringContext) -> float:
    k = ctx.config.kgram_size
    if len(a.tokens) < k or len(b.tokens) < k:
        raise AlgorithmUnavailable("winnowing", f"fewer than {k} tokens to form a k-gram")
    fp_a = fingerprint_set(a.tokens, k, ctx.config.window_size)
    fp_b = fingerprint_set(b.tokens, k, ctx.config.window_size)
    return _score(fingerprint_overlap(fp_a, fp_b))


def ast_structure(a: Document, b: Document, ctx: ScoringContext) -> float:
    if ctx.fingerprinter is None:
        raise AlgorithmUnavailable("ast", "no structural fingerprinter configured")
    return _score(structural_similarity(ctx.fingerprinter(a.raw), ctx.fingerprinter(b.raw)))


def semantic(a: Document, b: Document, ctx: ScoringContext) -> float:
    if ctx.embedder is None:
        raise AlgorithmUnavailable("semantic", "no embedder configured")
    return _score(semantic_similarity(a.raw, b.raw, ctx.embedder))


ALGORITHMS: List[Tuple[str, Scorer]] = [
    ("jaccard", jaccard),
    ("cosine", cosine),
    ("tfidf", tfidf),
    ("levenshtein", levenshtein),
    ("lcs", lcs),
    ("winnowing", winnowing),
    ("ast", ast_structure),
    ("semantic", semantic),
]


def _run_one(name: str, scorer: Scorer, a: Document, b: Document, ctx: ScoringContext) -> Optional[float]:
    try:
        return scorer(a, b, ctx)
    except ComputationOverflow as e:
        logger.info(f"Skipping {name}: {e.reason}")
    except AlgorithmUnavailable as e:
        logger.debug(f"Omitting {name}: {e.reason}")
    return None


def run_algorithms(a: Document, b: Document, ctx: ScoringContext) -> Dict[str, float]:
    """Run every enabled scorer; unavailable ones are left out of the mapping."""
    enabled = [(name, scorer) for name, scorer in ALGORITHMS if name in ctx.config.algorithms]

    if ctx.config.parallel_algorithms and len(enabled) > 1:
        with ThreadPoolExecutor(max_workers=len(enabled)) as ex:
            futures = [(name, ex.submit(_run_one, name, scorer, a, b, ctx)) for name, scorer in enabled]
            results = [(name, fut.result()) for name, fut in futures]
    else:
        results = [(name, _run_one(name, scorer, a, b, ctx)) for name, scorer in enabled]

    return {name: score for name, score in results if score is not None}
