"""
Pairwise comparison pipeline.

submissions -> prepared documents -> algorithm suite -> aggregate score + flag
            -> segment matching (dynamic token threshold)
            -> per-line records and analytics for each side
"""

import logging
from typing import Optional

from simcheck.config import DetectionConfig
from simcheck.schemas.comparison_schemas import (
    ComparisonReport, PlagiarismMatch, SideReport, Submission,
)
from simcheck.utils.aggregator import aggregate, is_flagged
from simcheck.utils.algorithms import ScoringContext, prepare_document, run_algorithms
from simcheck.utils.analytics import build_line_analytics
from simcheck.utils.line_classifier import classify_lines, select_threshold
from simcheck.utils.segment_matcher import match_segments
from simcheck.utils.semantic_utils import Embedder
from simcheck.utils.structural_utils import Fingerprinter, python_fingerprint

logger = logging.getLogger("simcheck.comparison")


def score_pair(
    sub_a: Submission,
    sub_b: Submission,
    config: DetectionConfig,
    fingerprinter: Optional[Fingerprinter] = python_fingerprint,
    embedder: Optional[Embedder] = None,
) -> PlagiarismMatch:
    """Scores, overall score, flag and matched segments for one pair."""
    ctx = ScoringContext(config=config, fingerprinter=fingerprinter, embedder=embedder)
    doc_a = prepare_document(sub_a.content)
    doc_b = prepare_document(sub_b.content)

    scores = run_algorithms(doc_a, doc_b, ctx)
    overall = aggregate(scores, config.weights)
    threshold = select_threshold(overall, config.token_threshold_table)
    segments = match_segments(sub_a.content, sub_b.content, threshold, config.line_match_cutoff)

    match = PlagiarismMatch(
        submission_a=sub_a.id,
        submission_b=sub_b.id,
        author_a=sub_a.author,
        author_b=sub_b.author,
        overall_score=overall,
        algorithms=scores,
        segments=segments,
        flagged=is_flagged(overall, config.flag_threshold),
        flag_threshold=config.flag_threshold,
    )
    logger.debug(
        f"{sub_a.id} vs {sub_b.id}: overall={overall:.3f} flagged={match.flagged} "
        f"algorithms={len(scores)} segments={len(segments)}"
    )
    return match


def _side_report(self_sub: Submission, other_sub: Submission, match: PlagiarismMatch,
                 side: str, config: DetectionConfig) -> SideReport:
    records = classify_lines(
        self_sub.content, other_sub.content, match.overall_score, match.segments, side, config,
    )
    return SideReport(
        submission_id=self_sub.id,
        token_threshold=select_threshold(match.overall_score, config.token_threshold_table),
        lines=records,
        analytics=build_line_analytics(records, config.line_match_cutoff, config.similarity_buckets),
    )


def compare_submissions(
    sub_a: Submission,
    sub_b: Submission,
    config: DetectionConfig,
    fingerprinter: Optional[Fingerprinter] = python_fingerprint,
    embedder: Optional[Embedder] = None,
) -> ComparisonReport:
    """Full comparison: the match record plus line records and analytics for both sides."""
    match = score_pair(sub_a, sub_b, config, fingerprinter=fingerprinter, embedder=embedder)
    report = ComparisonReport(
        match=match,
        side_a=_side_report(sub_a, sub_b, match, "a", config),
        side_b=_side_report(sub_b, sub_a, match, "b", config),
    )
    logger.info(
        f"Compared {sub_a.id} vs {sub_b.id}: {match.overall_score * 100:.1f}% "
        f"({'flagged' if match.flagged else 'clear'}), "
        f"{report.side_a.analytics.matched_lines}/{report.side_a.analytics.total_lines} lines matched"
    )
    return report
