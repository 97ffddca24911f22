from typing import Dict, Optional


def aggregate(scores: Dict[str, float], weights: Optional[Dict[str, float]] = None) -> float:
    """Weighted mean of the available algorithm scores.

    Algorithms missing from `scores` are excluded from both numerator and
    denominator. Unlisted weights default to 1.0, which makes the default an
    arithmetic mean.
    """
    weights = weights or {}
    total = 0.0
    weight_sum = 0.0
    for name, score in scores.items():
        w = weights.get(name, 1.0)
        total += w * score
        weight_sum += w
    if weight_sum == 0:
        return 0.0
    return round(min(max(total / weight_sum, 0.0), 1.0), 4)


def is_flagged(overall_score: float, flag_threshold: float) -> bool:
    return overall_score >= flag_threshold
