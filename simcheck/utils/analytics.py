from typing import Dict, List, Sequence, Tuple

from simcheck.schemas.comparison_schemas import (
    HeatmapCell, LineAnalytics, LineMatchRecord, SimilarityDistribution, TrendPoint,
)
from simcheck.utils.line_classifier import categorize

BUCKET_NAMES = ("exact", "high", "medium", "low", "none")

_HEATMAP_LABELS = {
    "exact": "Exact match",
    "high": "High similarity",
    "medium": "Medium similarity",
    "low": "Low similarity",
    "none": "No match",
}


def _percent(part: int, whole: int) -> float:
    if whole == 0:
        return 0.0
    return round(part / whole * 100.0, 1)


def build_distribution(
    records: Sequence[LineMatchRecord],
    buckets: Sequence[Tuple[float, str]],
) -> SimilarityDistribution:
    counts: Dict[str, int] = {name: 0 for name in BUCKET_NAMES}
    for record in records:
        counts[categorize(record.similarity, buckets)] += 1
    return SimilarityDistribution(**counts)


def build_heatmap(
    records: Sequence[LineMatchRecord],
    buckets: Sequence[Tuple[float, str]],
) -> List[HeatmapCell]:
    cells = []
    for record in records:
        category = categorize(record.similarity, buckets)
        label = f"Line {record.line}: {_HEATMAP_LABELS[category]} ({record.similarity * 100:.0f}%)"
        cells.append(HeatmapCell(
            line=record.line, similarity=record.similarity, category=category, label=label,
        ))
    return cells


def build_trend(records: Sequence[LineMatchRecord]) -> List[TrendPoint]:
    """Line-by-line similarity as (position %, similarity %) points."""
    n = len(records)
    return [
        TrendPoint(
            x=round(idx / (n - 1) * 100.0, 2) if n > 1 else 0.0,
            y=round(record.similarity * 100.0, 2),
        )
        for idx, record in enumerate(records)
    ]


def build_line_analytics(
    records: Sequence[LineMatchRecord],
    match_cutoff: float,
    buckets: Sequence[Tuple[float, str]],
) -> LineAnalytics:
    """Summary counts, bucket distribution, heatmap and trend for one side."""
    total = len(records)
    matched = sum(1 for r in records if r.matched)
    distribution = build_distribution(records, buckets)
    match_pct = _percent(matched, total)

    return LineAnalytics(
        total_lines=total,
        matched_lines=matched,
        unique_lines=total - matched,
        match_percentage=match_pct,
        unique_percentage=round(100.0 - match_pct, 1) if total else 0.0,
        match_cutoff=match_cutoff,
        distribution=distribution,
        distribution_percentages={
            name: _percent(getattr(distribution, name), total) for name in BUCKET_NAMES
        },
        heatmap=build_heatmap(records, buckets),
        trend=build_trend(records),
    )
