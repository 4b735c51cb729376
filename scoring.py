from __future__ import annotations
import math
from typing import Optional, Sequence

from models import FeedbackTier, GroundTruth, LineKind, Placements

# Lower bounds (exclusive), best tier first.
FEEDBACK_THRESHOLDS = (
    (0.9, FeedbackTier.EXCELLENT),
    (0.7, FeedbackTier.GOOD),
    (0.5, FeedbackTier.FAIR),
)

def accuracy(diff: float, price_range: float) -> float:
    # A flat panel has no range to normalise by: exact hits score 1, anything else 0.
    if price_range == 0:
        return 1.0 if diff == 0 else 0.0
    return 1.0 - diff / price_range

def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def instant_feedback(kind: LineKind, placed_price: float, truth: GroundTruth) -> FeedbackTier:
    acc = accuracy(abs(placed_price - truth.for_kind(kind)), truth.price_range)
    for threshold, tier in FEEDBACK_THRESHOLDS:
        if acc > threshold:
            return tier
    return FeedbackTier.POOR

def panel_score(placements: Placements, truth: GroundTruth) -> int:
    """
    Best placement per line kind, summed, normalised by the ground-truth range
    and scaled to 0..100. Not clamped: wild placements can go negative.
    """
    total_diff = 0.0
    for kind in LineKind:
        placed = placements.for_kind(kind)
        if not placed:
            raise ValueError(f"No {kind.value} placement to score")
        target = truth.for_kind(kind)
        total_diff += min(abs(p - target) for p in placed)
    return _round_half_up(accuracy(total_diff, truth.price_range) * 100)

def average_score(scores: Sequence[int]) -> Optional[float]:
    if not scores:
        return None
    return sum(scores) / len(scores)

def format_average(scores: Sequence[int]) -> str:
    avg = average_score(scores)
    return "n/a" if avg is None else f"{avg:.2f}"
