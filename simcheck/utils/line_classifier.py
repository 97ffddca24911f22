"""
Per-line classification of one submission against the other.

Every line gets the best Levenshtein similarity it reaches against any
non-empty line on the other side, a matched flag (best >= cutoff), a display
bucket and a highlight flag. Highlighting uses the dynamic token threshold:
pairs with a high overall score accept weaker per-line token overlap.
"""

from typing import List, Sequence, Tuple

from rapidfuzz.distance import Levenshtein

from simcheck.config import DetectionConfig
from simcheck.schemas.comparison_schemas import LineMatchRecord, MatchedSegment
from simcheck.utils.text_utils import exact_similarity, split_lines, token_jaccard, tokenize


def select_threshold(overall_score: float, table: Sequence[Tuple[float, float]]) -> float:
    """First row whose lower bound <= score; rows are ordered highest bound first."""
    for lower_bound, threshold in table:
        if overall_score >= lower_bound:
            return threshold
    return table[-1][1]


def categorize(similarity: float, buckets: Sequence[Tuple[float, str]]) -> str:
    if similarity <= 0:
        return "none"
    for lower_bound, label in buckets:
        if similarity >= lower_bound:
            return label
    return buckets[-1][1]


def line_similarity(a: str, b: str) -> float:
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return (longest - Levenshtein.distance(a, b)) / longest


def classify_lines(
    self_text: str,
    other_text: str,
    overall_score: float,
    segments: Sequence[MatchedSegment],
    side: str,
    config: DetectionConfig,
) -> List[LineMatchRecord]:
    """
    Build one LineMatchRecord per line of `self_text` (1-based, empty lines included).
    `side` says which span of each segment belongs to `self_text`: "a" or "b".
    """
    if side not in ("a", "b"):
        raise ValueError(f"side must be 'a' or 'b', got {side!r}")

    cutoff = config.line_match_cutoff
    threshold = select_threshold(overall_score, config.token_threshold_table)
    other_lines = [line.strip() for line in split_lines(other_text) if line.strip()]

    segment_tokens = []
    for seg in segments:
        span = seg.span_a if side == "a" else seg.span_b
        tokens = tokenize(span.text)
        if tokens:
            segment_tokens.append(tokens)

    records: List[LineMatchRecord] = []
    for idx, line in enumerate(split_lines(self_text), start=1):
        trimmed = line.strip()
        if not trimmed:
            records.append(LineMatchRecord(line=idx, similarity=0.0, matched=False))
            continue

        raw_best = max((line_similarity(trimmed, other) for other in other_lines), default=0.0)
        best = round(min(max(raw_best, 0.0), 1.0), 4)

        highlighted = any(exact_similarity(trimmed, other) >= cutoff for other in other_lines)
        if not highlighted:
            line_tokens = tokenize(trimmed)
            highlighted = bool(line_tokens) and any(
                token_jaccard(line_tokens, tokens) >= threshold for tokens in segment_tokens
            )

        records.append(LineMatchRecord(
            line=idx,
            similarity=best,
            matched=raw_best >= cutoff,
            highlighted=highlighted,
            category=categorize(best, config.similarity_buckets),
        ))
    return records
