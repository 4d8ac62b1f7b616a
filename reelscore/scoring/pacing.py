from __future__ import annotations

from reelscore.models import FactorKind, FactorScore
from reelscore.scoring.signals import FrameSignals
from reelscore.scoring.thresholds import DEFAULT_THRESHOLDS, Thresholds

PACING_MAX_POINTS = 20


def score_pacing(
    signals: FrameSignals,
    duration_seconds: float,
    *,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> FactorScore:
    """Score cut frequency across the whole video plus engagement bonuses."""

    if signals.sample_count < 4 or not duration_seconds > 0:
        return FactorScore(kind=FactorKind.PACING, raw_points=0, max_points=PACING_MAX_POINTS)

    cut_positions = [
        position for position, diff in enumerate(signals.differences, start=1) if diff > thresholds.cut
    ]
    cuts_per_10s = len(cut_positions) / max(1.0, duration_seconds) * 10.0

    components = {
        "cut_rate": _cut_rate_points(cuts_per_10s),
        "structure": _structure_bonus(signals.sample_count, cut_positions, thresholds),
        "distinct_scenes": _distinct_scene_bonus(signals, thresholds),
        "overlays": _overlay_bonus(signals, thresholds),
    }
    total = max(0, min(PACING_MAX_POINTS, sum(components.values())))
    return FactorScore(
        kind=FactorKind.PACING,
        raw_points=total,
        max_points=PACING_MAX_POINTS,
        components=components,
    )


def _cut_rate_points(cuts_per_10s: float) -> int:
    if cuts_per_10s >= 6:
        return 20
    if cuts_per_10s >= 4:
        return 16
    if cuts_per_10s >= 3:
        return 12
    if cuts_per_10s >= 2:
        return 7
    if cuts_per_10s >= 1:
        return 3
    return 0


def _structure_bonus(sample_count: int, cut_positions: list[int], thresholds: Thresholds) -> int:
    """+3 when cuts land in the beginning, middle and end thirds."""

    if sample_count < thresholds.structure_min_samples or len(cut_positions) < thresholds.structure_min_cuts:
        return 0

    third = sample_count // 3
    segments = [0, 0, 0]
    for position in cut_positions:
        if position < third:
            segments[0] += 1
        elif position < third * 2:
            segments[1] += 1
        else:
            segments[2] += 1
    return 3 if all(segments) else 0


def _distinct_scene_bonus(signals: FrameSignals, thresholds: Thresholds) -> int:
    major_cuts = sum(1 for diff in signals.differences if diff > thresholds.major_cut)
    return 2 if major_cuts >= thresholds.distinct_scene_cuts else 0


def _overlay_bonus(signals: FrameSignals, thresholds: Thresholds) -> int:
    # Many subtle changes usually mean text overlays or light edits.
    if signals.sample_count < 6:
        return 0

    subtle = sum(
        1
        for diff in signals.differences
        if thresholds.subtle_change_low < diff < thresholds.subtle_change_high
    )
    return 2 if subtle / len(signals.differences) > thresholds.subtle_change_ratio else 0
