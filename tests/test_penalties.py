from __future__ import annotations

from reelscore.models import VideoMetadata
from reelscore.scoring.penalties import evaluate_penalties
from reelscore.scoring.signals import EMPTY_SIGNALS, FrameSignals


def _metadata(width: int = 1080, height: int = 1920, duration: float = 10.0) -> VideoMetadata:
    return VideoMetadata(duration_seconds=duration, width=width, height=height, frame_rate=30.0, file_size_bytes=5_000_000)


def _signals(differences: list[float], brightness: float = 0.5) -> FrameSignals:
    count = len(differences) + 1
    return FrameSignals(
        sample_count=count,
        differences=tuple(differences),
        brightness=(brightness,) * count,
        contrast=(0.3,) * count,
    )


def test_clean_vertical_video_has_no_penalties() -> None:
    tally = evaluate_penalties(_signals([0.5] * 20), _metadata())

    assert (tally.fatal, tally.major, tally.minor) == (0, 0, 0)
    assert tally.reason_tags == ()


def test_landscape_video_is_fatal_and_not_vertical() -> None:
    tally = evaluate_penalties(_signals([0.5] * 20), _metadata(1920, 1080))

    assert tally.reason_tags == ("fatal:landscape", "major:not_vertical")


def test_square_video_is_a_major_issue() -> None:
    tally = evaluate_penalties(_signals([0.5] * 20), _metadata(1080, 1080))

    assert (tally.fatal, tally.major, tally.minor) == (0, 1, 0)


def test_static_video_triggers_every_stillness_check() -> None:
    tally = evaluate_penalties(_signals([0.0] * 40), _metadata(duration=20.0))

    assert tally.reason_tags == ("fatal:static_hook", "major:no_cuts", "minor:slow_start")


def test_overlong_video_is_fatal() -> None:
    tally = evaluate_penalties(_signals([0.5] * 59), _metadata(duration=120.0))

    assert tally.reason_tags == ("fatal:too_long",)


def test_dark_opening_is_a_major_issue() -> None:
    tally = evaluate_penalties(_signals([0.5] * 20, brightness=0.05), _metadata())

    assert "major:dark" in tally.reason_tags


def test_heavy_shake_is_a_major_issue() -> None:
    tally = evaluate_penalties(_signals([0.06] * 15), _metadata())

    assert "major:shaky" in tally.reason_tags
    assert "fatal:static_hook" not in tally.reason_tags


def test_low_resolution_is_minor() -> None:
    tally = evaluate_penalties(_signals([0.5] * 20), _metadata(240, 426))

    assert tally.reason_tags == ("minor:low_resolution",)


def test_frame_checks_need_enough_samples() -> None:
    tally = evaluate_penalties(_signals([0.0, 0.0], brightness=0.0), _metadata())

    assert tally.reason_tags == ("major:dark",)
    assert evaluate_penalties(EMPTY_SIGNALS, _metadata()).reason_tags == ()
