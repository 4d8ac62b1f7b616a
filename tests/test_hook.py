from __future__ import annotations

import pytest

from reelscore.models import FactorKind
from reelscore.scoring.hook import score_hook
from reelscore.scoring.signals import EMPTY_SIGNALS, FrameSignals


def _signals(differences: list[float], brightness: float = 0.5, contrast: float = 0.3) -> FrameSignals:
    count = len(differences) + 1
    return FrameSignals(
        sample_count=count,
        differences=tuple(differences),
        brightness=(brightness,) * count,
        contrast=(contrast,) * count,
    )


def test_dynamic_high_contrast_opening_scores_full_hook() -> None:
    score = score_hook(_signals([0.5] * 20))

    assert score.kind is FactorKind.HOOK
    assert score.raw_points == 40
    assert score.components == {"visual": 15, "contrast": 10, "motion": 10, "timing": 5}


@pytest.mark.parametrize(
    ("changes", "expected"),
    [(6, 15), (5, 15), (4, 11), (3, 11), (2, 7), (1, 4), (0, 0)],
)
def test_visual_points_follow_change_count(changes: int, expected: int) -> None:
    differences = [0.2] * changes + [0.0] * (10 - changes)

    assert score_hook(_signals(differences)).components["visual"] == expected


def test_changes_after_the_hook_window_are_ignored() -> None:
    differences = [0.0] * 6 + [0.9] * 10

    assert score_hook(_signals(differences)).components["visual"] == 0


@pytest.mark.parametrize(
    ("brightness", "contrast", "expected"),
    [
        (0.05, 0.4, 0),
        (0.95, 0.4, 0),
        (0.5, 0.3, 10),
        (0.5, 0.2, 6),
        (0.5, 0.1, 2),
        (0.5, 0.05, 0),
    ],
)
def test_contrast_points_use_first_frame(brightness: float, contrast: float, expected: int) -> None:
    assert score_hook(_signals([0.0] * 6, brightness, contrast)).components["contrast"] == expected


@pytest.mark.parametrize(("motion", "expected"), [(0.25, 10), (0.15, 6), (0.06, 3), (0.04, 0)])
def test_motion_points_use_mean_window_difference(motion: float, expected: int) -> None:
    assert score_hook(_signals([motion] * 6)).components["motion"] == expected


def test_timing_rewards_action_in_first_second() -> None:
    assert score_hook(_signals([0.2, 0.1, 0.0, 0.0])).components["timing"] == 5


def test_timing_gives_partial_credit_for_late_start() -> None:
    differences = [0.05, 0.05, 0.1, 0.1, 0.05, 0.0]

    assert score_hook(_signals(differences)).components["timing"] == 2


def test_timing_needs_four_frames() -> None:
    assert score_hook(_signals([0.9, 0.9])).components["timing"] == 0


def test_empty_sequence_scores_zero() -> None:
    assert score_hook(EMPTY_SIGNALS).raw_points == 0


def test_single_frame_only_scores_contrast() -> None:
    score = score_hook(_signals([]))

    assert score.components == {"visual": 0, "contrast": 10, "motion": 0, "timing": 0}
