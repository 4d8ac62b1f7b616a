from __future__ import annotations

from reelscore.models import FactorKind, FactorScore

LENGTH_MAX_POINTS = 25

# (exclusive upper bound in seconds, points); completion-rate priors per bucket.
LENGTH_BUCKETS: tuple[tuple[float, int], ...] = (
    (3.0, 2),
    (7.0, 12),
    (16.0, 25),
    (22.0, 22),
    (31.0, 18),
    (41.0, 13),
    (51.0, 8),
    (61.0, 4),
)
LONG_FORM_LIMIT_SECONDS = 90.0
LONG_FORM_POINTS = 2


def length_points(duration_seconds: float) -> int:
    for upper_bound, points in LENGTH_BUCKETS:
        if duration_seconds < upper_bound:
            return points
    if duration_seconds <= LONG_FORM_LIMIT_SECONDS:
        return LONG_FORM_POINTS
    return 0


def score_length(duration_seconds: float) -> FactorScore:
    return FactorScore(
        kind=FactorKind.LENGTH,
        raw_points=length_points(duration_seconds),
        max_points=LENGTH_MAX_POINTS,
    )


def adjust_length_for_retention(length: FactorScore, duration_seconds: float, pacing_points: int) -> FactorScore:
    """Reward short well-paced videos and punish long slow ones."""

    adjustment = 0
    if 7.0 <= duration_seconds <= 30.0 and pacing_points >= 12:
        adjustment += 3
    if duration_seconds > 45.0 and pacing_points < 7:
        adjustment -= 5
    if adjustment == 0:
        return length

    adjusted = max(0, min(length.max_points, length.raw_points + adjustment))
    return FactorScore(
        kind=length.kind,
        raw_points=adjusted,
        max_points=length.max_points,
        components={**length.components, "retention": adjusted - length.raw_points},
    )
