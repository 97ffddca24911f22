"""
Segment matching between two submissions.

Phase 1 compares every non-empty line of A with every non-empty line of B by
normalized exact/containment similarity. Phase 2 gives the remaining pairs a
second chance through token-set Jaccard against the dynamic threshold, which
admits renamed or lightly paraphrased lines. Recorded line pairs that continue
each other diagonally are merged into multi-line segments.
"""

import logging
from typing import Dict, List, Tuple

from simcheck.schemas.comparison_schemas import MatchedSegment, TextSpan
from simcheck.utils.text_utils import exact_similarity, split_lines, token_jaccard, tokenize

logger = logging.getLogger("simcheck.segments")

# weakest first
_MATCH_STRENGTH = {"token": 0, "containment": 1, "exact": 2}

LinePair = Tuple[int, int]


def _non_empty_lines(text: str) -> List[Tuple[int, str, List[str]]]:
    return [
        (idx, line, tokenize(line))
        for idx, line in enumerate(split_lines(text), start=1)
        if line.strip()
    ]


def match_line_pairs(
    text_a: str,
    text_b: str,
    token_threshold: float,
    line_cutoff: float = 0.8,
) -> Dict[LinePair, Tuple[float, str]]:
    """Return {(line_a, line_b): (similarity, match_type)} for every matching pair."""
    lines_a = _non_empty_lines(text_a)
    lines_b = _non_empty_lines(text_b)
    pairs: Dict[LinePair, Tuple[float, str]] = {}

    # Phase 1: direct line matching
    for i, line_a, _ in lines_a:
        for j, line_b, _ in lines_b:
            sim = exact_similarity(line_a, line_b)
            if sim >= line_cutoff:
                pairs[(i, j)] = (sim, "exact" if sim == 1.0 else "containment")

    # Phase 2: token-window matching for what phase 1 missed
    for i, _, tokens_a in lines_a:
        if not tokens_a:
            continue
        for j, _, tokens_b in lines_b:
            if (i, j) in pairs or not tokens_b:
                continue
            sim = token_jaccard(tokens_a, tokens_b)
            if sim > 0 and sim >= token_threshold:
                pairs[(i, j)] = (sim, "token")

    return pairs


def _span(lines: List[str], start: int, end: int) -> TextSpan:
    return TextSpan(start_line=start, end_line=end, text="\n".join(lines[start - 1:end]))


def coalesce_pairs(
    pairs: Dict[LinePair, Tuple[float, str]],
    lines_a: List[str],
    lines_b: List[str],
) -> List[MatchedSegment]:
    """Merge diagonal runs (i, j), (i+1, j+1), ... into single segments."""
    segments: List[MatchedSegment] = []
    consumed = set()
    for (i, j) in sorted(pairs):
        if (i, j) in consumed:
            continue
        run = [(i, j)]
        while (run[-1][0] + 1, run[-1][1] + 1) in pairs:
            run.append((run[-1][0] + 1, run[-1][1] + 1))
        consumed.update(run)

        sims = [pairs[p][0] for p in run]
        match_type = min((pairs[p][1] for p in run), key=_MATCH_STRENGTH.get)
        segments.append(MatchedSegment(
            span_a=_span(lines_a, run[0][0], run[-1][0]),
            span_b=_span(lines_b, run[0][1], run[-1][1]),
            similarity=round(sum(sims) / len(sims), 4),
            match_type=match_type,
        ))
    return segments


def match_segments(
    text_a: str,
    text_b: str,
    token_threshold: float,
    line_cutoff: float = 0.8,
) -> List[MatchedSegment]:
    pairs = match_line_pairs(text_a, text_b, token_threshold, line_cutoff)
    segments = coalesce_pairs(pairs, split_lines(text_a), split_lines(text_b))
    logger.debug(f"Matched {len(pairs)} line pairs into {len(segments)} segments")
    return segments
