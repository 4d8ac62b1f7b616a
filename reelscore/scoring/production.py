from __future__ import annotations

from reelscore.models import FactorKind, FactorScore, VideoMetadata
from reelscore.scoring.signals import FrameSignals
from reelscore.scoring.thresholds import DEFAULT_THRESHOLDS, Thresholds

QUALITY_MAX_POINTS = 10
TECHNICAL_MAX_POINTS = 5


def aspect_ratio(metadata: VideoMetadata) -> float:
    """Short side over long side; 0.0 for degenerate dimensions."""

    longest = max(metadata.width, metadata.height)
    if longest <= 0:
        return 0.0
    return min(metadata.width, metadata.height) / longest


def score_quality(
    signals: FrameSignals,
    metadata: VideoMetadata,
    *,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> FactorScore:
    """Resolution, vertical framing and camera steadiness."""

    components = {
        "resolution": _resolution_points(metadata, thresholds),
        "aspect": _aspect_points(metadata, thresholds),
        "stability": _stability_points(signals, thresholds),
    }
    return FactorScore(
        kind=FactorKind.QUALITY,
        raw_points=min(QUALITY_MAX_POINTS, sum(components.values())),
        max_points=QUALITY_MAX_POINTS,
        components=components,
    )


def score_technical(metadata: VideoMetadata, *, thresholds: Thresholds = DEFAULT_THRESHOLDS) -> FactorScore:
    components = {
        "compression": _compression_points(metadata, thresholds),
        "frame_rate": _frame_rate_points(metadata.frame_rate, thresholds),
    }
    return FactorScore(
        kind=FactorKind.TECHNICAL,
        raw_points=min(TECHNICAL_MAX_POINTS, sum(components.values())),
        max_points=TECHNICAL_MAX_POINTS,
        components=components,
    )


def _resolution_points(metadata: VideoMetadata, thresholds: Thresholds) -> int:
    longest = max(metadata.width, metadata.height)
    if longest >= thresholds.full_hd:
        return 5
    if longest >= thresholds.hd:
        return 3
    return 1


def _aspect_points(metadata: VideoMetadata, thresholds: Thresholds) -> int:
    aspect = aspect_ratio(metadata)
    if thresholds.vertical_aspect_low < aspect < thresholds.vertical_aspect_high:
        return 3
    if abs(aspect - thresholds.vertical_aspect) < thresholds.vertical_aspect_tolerance:
        return 2
    return 0


def _stability_points(signals: FrameSignals, thresholds: Thresholds) -> int:
    if signals.sample_count < 6:
        return 2

    window = signals.pair_window(thresholds.stability_samples)
    micro_shakes = sum(
        1 for diff in window if thresholds.micro_shake_low < diff < thresholds.micro_shake_high
    )
    shake_ratio = micro_shakes / max(1, len(window))
    if shake_ratio > thresholds.shaky_ratio:
        return 0
    if shake_ratio > thresholds.unsteady_ratio:
        return 1
    return 2


def _compression_points(metadata: VideoMetadata, thresholds: Thresholds) -> int:
    mb_per_second = metadata.file_size_bytes / 1_000_000.0 / max(1.0, metadata.duration_seconds)
    if thresholds.bitrate_optimal_low <= mb_per_second <= thresholds.bitrate_optimal_high:
        return 3
    if thresholds.bitrate_fair_low <= mb_per_second <= thresholds.bitrate_fair_high:
        return 1
    return 0


def _frame_rate_points(frame_rate: float, thresholds: Thresholds) -> int:
    tolerance = thresholds.frame_rate_tolerance
    if abs(frame_rate - 60.0) <= tolerance or abs(frame_rate - 30.0) <= tolerance:
        return 2
    if abs(frame_rate - 24.0) <= tolerance:
        return 1
    return 0
