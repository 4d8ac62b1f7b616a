from __future__ import annotations

from reelscore.models import FactorKind, FactorScore
from reelscore.scoring.signals import FrameSignals
from reelscore.scoring.thresholds import DEFAULT_THRESHOLDS, Thresholds

HOOK_MAX_POINTS = 40


def score_hook(signals: FrameSignals, *, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> FactorScore:
    """Score the opening ~3 seconds, where viewers decide whether to keep watching."""

    components = {
        "visual": _visual_points(signals, thresholds),
        "contrast": _contrast_points(signals, thresholds),
        "motion": _motion_points(signals, thresholds),
        "timing": _timing_points(signals, thresholds),
    }
    return FactorScore(
        kind=FactorKind.HOOK,
        raw_points=sum(components.values()),
        max_points=HOOK_MAX_POINTS,
        components=components,
    )


def _visual_points(signals: FrameSignals, thresholds: Thresholds) -> int:
    if signals.sample_count < 2:
        return 0

    window = signals.pair_window(thresholds.hook_window_samples)
    changes = sum(1 for diff in window if diff > thresholds.hook_change)
    if changes >= 5:
        return 15
    if changes >= 3:
        return 11
    if changes == 2:
        return 7
    if changes == 1:
        return 4
    return 0


def _contrast_points(signals: FrameSignals, thresholds: Thresholds) -> int:
    if signals.sample_count == 0:
        return 0

    brightness = signals.brightness[0]
    spread = signals.contrast[0]
    if brightness < thresholds.hook_dark or brightness > thresholds.hook_bright:
        return 0
    if spread > thresholds.hook_contrast_high:
        return 10
    if spread > thresholds.hook_contrast_mid:
        return 6
    if spread > thresholds.hook_contrast_low:
        return 2
    return 0


def _motion_points(signals: FrameSignals, thresholds: Thresholds) -> int:
    if signals.sample_count < 3:
        return 0

    window = signals.pair_window(thresholds.hook_window_samples)
    mean_motion = sum(window) / len(window)
    if mean_motion > thresholds.hook_motion_high:
        return 10
    if mean_motion > thresholds.hook_motion_mid:
        return 6
    if mean_motion > thresholds.hook_motion_low:
        return 3
    return 0


def _timing_points(signals: FrameSignals, thresholds: Thresholds) -> int:
    # Samples 0..2 cover the first second at the 0.5s stride.
    if signals.sample_count < 4:
        return 0

    if sum(signals.differences[0:2]) > thresholds.hook_first_second_sum:
        return 5
    if signals.sample_count >= 5 and sum(signals.differences[1:5]) > thresholds.hook_late_start_sum:
        return 2
    return 0
