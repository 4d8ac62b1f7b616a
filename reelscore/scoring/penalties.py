from __future__ import annotations

from reelscore.models import PenaltyTally, VideoMetadata
from reelscore.scoring.production import aspect_ratio
from reelscore.scoring.signals import FrameSignals
from reelscore.scoring.thresholds import DEFAULT_THRESHOLDS, Thresholds


def evaluate_penalties(
    signals: FrameSignals,
    metadata: VideoMetadata,
    *,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> PenaltyTally:
    """Flag fatal, major and minor issues; every check is independent."""

    fatal = [
        tag
        for tag, triggered in (
            ("fatal:landscape", metadata.width > metadata.height * thresholds.landscape_ratio),
            ("fatal:static_hook", _hook_is_static(signals, thresholds)),
            ("fatal:too_long", metadata.duration_seconds > thresholds.max_duration),
        )
        if triggered
    ]
    major = [
        tag
        for tag, triggered in (
            ("major:dark", _is_dark(signals, thresholds)),
            ("major:shaky", _is_shaky(signals, thresholds)),
            ("major:not_vertical", _is_not_vertical(metadata, thresholds)),
            ("major:no_cuts", _has_no_cuts(signals, thresholds)),
        )
        if triggered
    ]
    minor = [
        tag
        for tag, triggered in (
            ("minor:low_resolution", max(metadata.width, metadata.height) < thresholds.low_resolution),
            ("minor:slow_start", _starts_slowly(signals, thresholds)),
        )
        if triggered
    ]

    return PenaltyTally(
        fatal=len(fatal),
        major=len(major),
        minor=len(minor),
        reason_tags=tuple(fatal + major + minor),
    )


def _hook_is_static(signals: FrameSignals, thresholds: Thresholds) -> bool:
    if signals.sample_count < 4:
        return False
    window = signals.pair_window(thresholds.hook_window_samples)
    return all(diff <= thresholds.static_hook for diff in window)


def _is_dark(signals: FrameSignals, thresholds: Thresholds) -> bool:
    if signals.sample_count < 3:
        return False
    opening = signals.brightness[: thresholds.dark_frames]
    return sum(opening) / len(opening) < thresholds.dark_brightness


def _is_shaky(signals: FrameSignals, thresholds: Thresholds) -> bool:
    if signals.sample_count < 8:
        return False
    window = signals.pair_window(thresholds.shake_samples)
    heavy = sum(1 for diff in window if thresholds.heavy_shake_low < diff < thresholds.heavy_shake_high)
    return heavy / len(window) >= thresholds.heavy_shake_ratio


def _is_not_vertical(metadata: VideoMetadata, thresholds: Thresholds) -> bool:
    return aspect_ratio(metadata) > thresholds.square_aspect or metadata.width > metadata.height


def _has_no_cuts(signals: FrameSignals, thresholds: Thresholds) -> bool:
    if signals.sample_count < 6:
        return False
    return not any(diff > thresholds.any_cut for diff in signals.differences)


def _starts_slowly(signals: FrameSignals, thresholds: Thresholds) -> bool:
    if signals.sample_count < 11:
        return False
    window = signals.pair_window(thresholds.early_action_samples)
    return not any(diff > thresholds.any_cut for diff in window)
