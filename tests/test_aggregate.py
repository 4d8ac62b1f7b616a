from __future__ import annotations

import random

import pytest

from reelscore.models import FactorKind, FactorScore, PenaltyTally, SlideshowConfig, TransitionType
from reelscore.scoring.aggregate import aggregate_scores


class _FixedRandom(random.Random):
    def __init__(self, value: int) -> None:
        super().__init__(0)
        self.value = value

    def randint(self, a: int, b: int) -> int:
        return self.value


def _factors(hook: int = 40, length: int = 25, pacing: int = 20, quality: int = 10, technical: int = 5) -> list[FactorScore]:
    return [
        FactorScore(kind=FactorKind.HOOK, raw_points=hook, max_points=40),
        FactorScore(kind=FactorKind.LENGTH, raw_points=length, max_points=25),
        FactorScore(kind=FactorKind.PACING, raw_points=pacing, max_points=20),
        FactorScore(kind=FactorKind.QUALITY, raw_points=quality, max_points=10),
        FactorScore(kind=FactorKind.TECHNICAL, raw_points=technical, max_points=5),
    ]


def test_perfect_factors_clamp_to_one_hundred() -> None:
    details = aggregate_scores(_factors(), PenaltyTally(), 10.0)

    assert details.summed == 100
    assert details.clamped == 100
    assert details.jitter == 0
    assert details.score == 100


def test_penalties_are_weighted_by_tier() -> None:
    details = aggregate_scores(_factors(hook=30, length=20, pacing=15), PenaltyTally(fatal=1, major=1, minor=1), 10.0)

    assert details.summed == 80
    assert details.penalized == 80 - 15 - 8 - 3
    assert details.score == 54


@pytest.mark.parametrize("hook", [0, 7, 14])
@pytest.mark.parametrize("slideshow_images", [None, 5])
def test_weak_hook_caps_score_at_forty_five(hook: int, slideshow_images: int | None) -> None:
    slideshow = None
    if slideshow_images is not None:
        slideshow = SlideshowConfig(image_count=slideshow_images, duration_per_slide=2.5)

    details = aggregate_scores(_factors(hook=hook), PenaltyTally(), 10.0, slideshow=slideshow)

    assert details.clamped <= 45


def test_slideshow_adjustment_applies_before_caps() -> None:
    slideshow = SlideshowConfig(image_count=5, duration_per_slide=2.5, transition=TransitionType.FADE)

    details = aggregate_scores(_factors(hook=20, length=10, pacing=10), PenaltyTally(), 12.5, slideshow=slideshow)

    assert details.adjusted == details.penalized + 10
    assert details.clamped == 65


def test_slow_and_long_deductions_stack() -> None:
    slow = aggregate_scores(_factors(pacing=5), PenaltyTally(), 30.0)
    slow_and_long = aggregate_scores(_factors(pacing=5), PenaltyTally(), 70.0)

    assert slow.capped == slow.adjusted - 10
    assert slow_and_long.capped == slow_and_long.adjusted - 18


def test_negative_totals_clamp_to_zero() -> None:
    details = aggregate_scores(_factors(0, 0, 0, 0, 0), PenaltyTally(fatal=3, major=4, minor=2), 120.0)

    assert details.capped < 0
    assert details.score == 0


@pytest.mark.parametrize(
    ("jitter", "hook", "penalties", "expected"),
    [
        (2, 40, PenaltyTally(), 100),
        (-2, 40, PenaltyTally(), 98),
        (-2, 0, PenaltyTally(fatal=3, major=2), 0),
    ],
)
def test_jitter_is_clamped(jitter: int, hook: int, penalties: PenaltyTally, expected: int) -> None:
    details = aggregate_scores(_factors(hook=hook), penalties, 10.0, rng=_FixedRandom(jitter))

    assert details.jitter == jitter
    assert details.score == expected


def test_seeded_jitter_is_reproducible_and_bounded() -> None:
    first = aggregate_scores(_factors(hook=30), PenaltyTally(), 10.0, rng=random.Random(42))
    second = aggregate_scores(_factors(hook=30), PenaltyTally(), 10.0, rng=random.Random(42))

    assert first == second
    assert -2 <= first.jitter <= 2


def test_zero_amplitude_disables_jitter() -> None:
    details = aggregate_scores(_factors(hook=30), PenaltyTally(), 10.0, rng=_FixedRandom(2), jitter_amplitude=0)

    assert details.jitter == 0
