"""
Batch driver: every pair of a submission set, compared on a bounded thread pool.

A failing pair never aborts the batch; it is reported in `skipped` with the reason.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from itertools import combinations
from typing import List, Optional, Sequence

from simcheck.config import DetectionConfig
from simcheck.schemas.comparison_schemas import BatchResult, PlagiarismMatch, SkippedPair, Submission
from simcheck.utils.comparison import score_pair
from simcheck.utils.semantic_utils import Embedder
from simcheck.utils.structural_utils import Fingerprinter, python_fingerprint

logger = logging.getLogger("simcheck.batch")


def _processing_time(elapsed: float) -> str:
    return f"{int(elapsed // 60)}m {int(elapsed % 60):02d}s"


def run_batch(
    submissions: Sequence[Submission],
    config: DetectionConfig,
    fingerprinter: Optional[Fingerprinter] = python_fingerprint,
    embedder: Optional[Embedder] = None,
) -> BatchResult:
    t0 = time.time()
    pairs = list(combinations(submissions, 2))
    logger.info(f"Comparing {len(submissions)} submissions ({len(pairs)} pairs, {config.max_workers} workers)")

    matches: List[PlagiarismMatch] = []
    skipped: List[SkippedPair] = []

    with ThreadPoolExecutor(max_workers=config.max_workers) as ex:
        future_to_pair = {
            ex.submit(score_pair, a, b, config, fingerprinter, embedder): (a, b)
            for a, b in pairs
        }
        for fut in as_completed(future_to_pair):
            a, b = future_to_pair[fut]
            try:
                match = fut.result()
            except Exception as e:
                logger.warning(f"Skipping pair {a.id} vs {b.id}: {e}")
                skipped.append(SkippedPair(submission_a=a.id, submission_b=b.id, reason=str(e)))
                continue
            if match.overall_score >= config.min_report_score:
                matches.append(match)

    matches.sort(key=lambda m: (-m.overall_score, m.submission_a, m.submission_b))
    skipped.sort(key=lambda s: (s.submission_a, s.submission_b))
    elapsed = time.time() - t0

    flagged = sum(1 for m in matches if m.flagged)
    logger.info(
        f"Batch done in {elapsed:.2f}s: {len(matches)} reported, {flagged} flagged, {len(skipped)} skipped"
    )
    return BatchResult(
        total_pairs=len(pairs),
        matches=matches,
        skipped=skipped,
        processing_time=_processing_time(elapsed),
    )
