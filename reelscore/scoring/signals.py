from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from reelscore.models import Frame
from reelscore.scoring.pixel_metrics import average_brightness, contrast, difference


@dataclass(frozen=True, slots=True)
class FrameSignals:
    """Per-frame measurements shared by every scorer.

    ``differences[i]`` compares sample ``i`` with sample ``i + 1``.
    """

    sample_count: int
    differences: tuple[float, ...]
    brightness: tuple[float, ...]
    contrast: tuple[float, ...]

    def pair_window(self, sample_limit: int) -> tuple[float, ...]:
        """Differences between consecutive samples among the first ``sample_limit``."""

        return self.differences[: max(min(sample_limit, self.sample_count) - 1, 0)]


EMPTY_SIGNALS = FrameSignals(sample_count=0, differences=(), brightness=(), contrast=())


def measure_frames(frames: Iterable[Frame]) -> FrameSignals:
    ordered = list(frames)
    return FrameSignals(
        sample_count=len(ordered),
        differences=tuple(difference(a, b) for a, b in zip(ordered, ordered[1:])),
        brightness=tuple(average_brightness(frame) for frame in ordered),
        contrast=tuple(contrast(frame) for frame in ordered),
    )
