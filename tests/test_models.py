from __future__ import annotations

import numpy as np
import pytest

from reelscore.models import (
    FactorKind,
    FactorScore,
    Frame,
    FrameSequence,
    PenaltyTally,
    SlideshowConfig,
    TransitionType,
    VideoMetadata,
)


def _frame(index: int) -> Frame:
    return Frame(
        index=index,
        timestamp_seconds=index * 0.5,
        motion=np.zeros((32, 32, 3), dtype=np.uint8),
        tone=np.zeros((16, 16, 3), dtype=np.uint8),
    )


def test_slideshow_bonus_for_well_built_slideshow() -> None:
    config = SlideshowConfig(image_count=5, duration_per_slide=2.5, transition=TransitionType.FADE)

    assert config.bonus == 10
    assert config.penalty == 0
    assert config.total_duration == pytest.approx(12.5)


def test_slideshow_with_four_images_and_no_transition() -> None:
    config = SlideshowConfig(image_count=4, duration_per_slide=2.0, transition=TransitionType.NONE)

    assert config.bonus == 6


@pytest.mark.parametrize(
    ("images", "duration", "expected"),
    [(3, 0.5, 8), (6, 5.0, 5), (2, 2.0, 3), (6, 4.0, 0)],
)
def test_slideshow_penalty(images: int, duration: float, expected: int) -> None:
    assert SlideshowConfig(image_count=images, duration_per_slide=duration).penalty == expected


def test_factor_score_rejects_points_outside_range() -> None:
    with pytest.raises(ValueError, match="outside 0..40"):
        FactorScore(kind=FactorKind.HOOK, raw_points=41, max_points=40)
    with pytest.raises(ValueError):
        FactorScore(kind=FactorKind.PACING, raw_points=-1, max_points=20)


def test_penalty_tally_rejects_negative_counts() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        PenaltyTally(major=-1)


def test_frame_sequence_requires_increasing_indices() -> None:
    sequence = FrameSequence(frames=(_frame(0), _frame(2), _frame(3)))

    assert len(sequence) == 3
    assert sequence[1].index == 2
    with pytest.raises(ValueError, match="strictly increasing"):
        FrameSequence(frames=(_frame(1), _frame(1)))


def test_video_metadata_resolution_string() -> None:
    metadata = VideoMetadata(duration_seconds=12.0, width=1080, height=1920, frame_rate=30.0)

    assert metadata.resolution == "1080x1920"
    assert metadata.file_size_bytes == 0
