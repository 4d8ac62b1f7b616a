from __future__ import annotations

import math

from reelscore.models import DisplayScores, FactorKind, FactorScore

DISPLAY_MAX = 10

# Raw points are divided by these to land on the 0-10 scale.
DISPLAY_DIVISORS = {
    FactorKind.HOOK: 4.0,
    FactorKind.PACING: 2.0,
    FactorKind.LENGTH: 2.5,
    FactorKind.QUALITY: 1.0,
}


def to_display_scale(raw_points: int, divisor: float) -> int:
    """Round half up and clamp to 0..10."""

    return max(0, min(DISPLAY_MAX, math.floor(raw_points / divisor + 0.5)))


def display_scores(factors: list[FactorScore] | tuple[FactorScore, ...]) -> DisplayScores:
    points = {factor.kind: factor.raw_points for factor in factors}
    scaled = {
        kind: to_display_scale(points.get(kind, 0), divisor)
        for kind, divisor in DISPLAY_DIVISORS.items()
    }
    return DisplayScores(
        hook=scaled[FactorKind.HOOK],
        pacing=scaled[FactorKind.PACING],
        length=scaled[FactorKind.LENGTH],
        quality=scaled[FactorKind.QUALITY],
    )
