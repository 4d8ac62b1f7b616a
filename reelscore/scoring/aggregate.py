from __future__ import annotations

import random
from dataclasses import dataclass

from reelscore.models import FactorKind, FactorScore, PenaltyTally, SlideshowConfig
from reelscore.scoring.thresholds import DEFAULT_THRESHOLDS, Thresholds

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(slots=True)
class AggregationDetails:
    """Running total after each aggregation stage, for explainability."""

    summed: int
    penalized: int
    adjusted: int
    capped: int
    clamped: int
    jitter: int
    score: int


def aggregate_scores(
    factors: list[FactorScore] | tuple[FactorScore, ...],
    penalties: PenaltyTally,
    duration_seconds: float,
    *,
    slideshow: SlideshowConfig | None = None,
    rng: random.Random | None = None,
    jitter_amplitude: int = 2,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> AggregationDetails:
    """Combine factor points into the final 0-100 score.

    Stages run in a fixed order: sum, penalize, slideshow adjust, cap, clamp,
    jitter. The weak-hook cap runs after every additive step so nothing can
    lift a video with a poor opening above it. Pass ``rng=None`` to skip jitter.
    """

    points = {factor.kind: factor.raw_points for factor in factors}
    hook = points.get(FactorKind.HOOK, 0)
    pacing = points.get(FactorKind.PACING, 0)

    summed = sum(points.values())

    penalized = summed - (
        penalties.fatal * thresholds.fatal_points
        + penalties.major * thresholds.major_points
        + penalties.minor * thresholds.minor_points
    )

    adjusted = penalized
    if slideshow is not None:
        adjusted += slideshow.bonus - slideshow.penalty

    capped = adjusted
    if hook < thresholds.weak_hook:
        capped = min(capped, thresholds.weak_hook_cap)
    if pacing < thresholds.slow_pacing:
        capped -= thresholds.slow_pacing_points
    # Stacks with the slow-pacing deduction above.
    if duration_seconds > thresholds.long_video and pacing < thresholds.long_video_pacing:
        capped -= thresholds.long_video_points

    clamped = _clamp(capped)

    jitter = 0
    if rng is not None and jitter_amplitude > 0:
        jitter = rng.randint(-jitter_amplitude, jitter_amplitude)

    return AggregationDetails(
        summed=summed,
        penalized=penalized,
        adjusted=adjusted,
        capped=capped,
        clamped=clamped,
        jitter=jitter,
        score=_clamp(clamped + jitter),
    )


def _clamp(value: int, minimum: int = MIN_SCORE, maximum: int = MAX_SCORE) -> int:
    return max(minimum, min(maximum, value))
