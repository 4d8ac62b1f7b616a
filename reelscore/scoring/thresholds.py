from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Thresholds:
    """Tuned cut-offs for every heuristic in the scoring model.

    Difference values are normalized frame differences in [0, 1]; brightness
    and contrast are normalized luminance statistics.
    """

    # Hook window
    hook_window_samples: int = 7
    hook_change: float = 0.15
    hook_dark: float = 0.10
    hook_bright: float = 0.93
    hook_contrast_high: float = 0.25
    hook_contrast_mid: float = 0.15
    hook_contrast_low: float = 0.08
    hook_motion_high: float = 0.20
    hook_motion_mid: float = 0.12
    hook_motion_low: float = 0.05
    hook_first_second_sum: float = 0.25
    hook_late_start_sum: float = 0.20

    # Pacing
    cut: float = 0.20
    major_cut: float = 0.35
    subtle_change_low: float = 0.08
    subtle_change_high: float = 0.20
    subtle_change_ratio: float = 0.5
    structure_min_samples: int = 10
    structure_min_cuts: int = 3
    distinct_scene_cuts: int = 3

    # Quality
    full_hd: int = 1080
    hd: int = 720
    vertical_aspect: float = 0.5625
    vertical_aspect_low: float = 0.54
    vertical_aspect_high: float = 0.58
    vertical_aspect_tolerance: float = 0.03
    stability_samples: int = 12
    micro_shake_low: float = 0.03
    micro_shake_high: float = 0.08
    shaky_ratio: float = 0.7
    unsteady_ratio: float = 0.4

    # Technical
    bitrate_optimal_low: float = 0.3
    bitrate_optimal_high: float = 0.7
    bitrate_fair_low: float = 0.15
    bitrate_fair_high: float = 1.2
    frame_rate_tolerance: float = 1.0

    # Penalties
    landscape_ratio: float = 1.3
    static_hook: float = 0.05
    max_duration: float = 90.0
    dark_frames: int = 5
    dark_brightness: float = 0.12
    shake_samples: int = 16
    heavy_shake_low: float = 0.04
    heavy_shake_high: float = 0.09
    heavy_shake_ratio: float = 0.8
    square_aspect: float = 0.90
    any_cut: float = 0.15
    low_resolution: int = 480
    early_action_samples: int = 10

    # Aggregation
    fatal_points: int = 15
    major_points: int = 8
    minor_points: int = 3
    weak_hook: int = 15
    weak_hook_cap: int = 45
    slow_pacing: int = 7
    slow_pacing_points: int = 10
    long_video: float = 60.0
    long_video_pacing: int = 10
    long_video_points: int = 8


DEFAULT_THRESHOLDS = Thresholds()
