from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

import numpy as np


@dataclass(frozen=True, slots=True)
class VideoMetadata:
    """Container-level facts captured once per analysis."""

    duration_seconds: float
    width: int
    height: int
    frame_rate: float
    file_size_bytes: int = 0

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True, slots=True, eq=False)
class Frame:
    """One sampled frame, downsampled twice for the two metric families."""

    index: int
    timestamp_seconds: float
    motion: np.ndarray
    tone: np.ndarray


@dataclass(frozen=True, slots=True)
class FrameSequence:
    frames: tuple[Frame, ...] = ()

    def __post_init__(self) -> None:
        indices = [frame.index for frame in self.frames]
        if any(later <= earlier for earlier, later in zip(indices, indices[1:])):
            raise ValueError("Frame sample indices must be strictly increasing.")

    def __len__(self) -> int:
        return len(self.frames)

    def __iter__(self):
        return iter(self.frames)

    def __getitem__(self, position: int) -> Frame:
        return self.frames[position]


class FactorKind(str, Enum):
    HOOK = "hook"
    LENGTH = "length"
    PACING = "pacing"
    QUALITY = "quality"
    TECHNICAL = "technical"


@dataclass(frozen=True, slots=True)
class FactorScore:
    """Points awarded by one factor scorer, with the parts that produced them."""

    kind: FactorKind
    raw_points: int
    max_points: int
    components: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not 0 <= self.raw_points <= self.max_points:
            raise ValueError(
                f"{self.kind.value} points {self.raw_points} outside 0..{self.max_points}"
            )


@dataclass(frozen=True, slots=True)
class PenaltyTally:
    fatal: int = 0
    major: int = 0
    minor: int = 0
    reason_tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if min(self.fatal, self.major, self.minor) < 0:
            raise ValueError("Penalty counts must be non-negative.")


class TransitionType(str, Enum):
    NONE = "none"
    FADE = "fade"
    SLIDE = "slide"
    ZOOM = "zoom"


@dataclass(frozen=True, slots=True)
class SlideshowConfig:
    """Settings an image slideshow was rendered with."""

    image_count: int
    duration_per_slide: float = 2.0
    transition: TransitionType = TransitionType.FADE

    @property
    def total_duration(self) -> float:
        return self.image_count * self.duration_per_slide

    @property
    def bonus(self) -> int:
        points = 0
        if self.image_count >= 5:
            points += 5
        elif self.image_count >= 4:
            points += 3
        if 2.0 <= self.duration_per_slide <= 3.0:
            points += 3
        if self.transition is not TransitionType.NONE:
            points += 2
        return points

    @property
    def penalty(self) -> int:
        points = 0
        if self.duration_per_slide < 1.0:
            points += 5
        if self.duration_per_slide > 4.0:
            points += 5
        if self.image_count <= 3:
            points += 3
        return points


@dataclass(frozen=True, slots=True)
class DisplayScores:
    """Sub-scores on the 0-10 scale shown to users."""

    hook: int
    pacing: int
    length: int
    quality: int


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Final, immutable outcome of one analysis."""

    analysis_id: str
    created_at: datetime
    score: int
    display: DisplayScores
    metadata: VideoMetadata
    factors: tuple[FactorScore, ...]
    penalties: PenaltyTally
    pre_jitter_score: int
    slideshow: SlideshowConfig | None = None
    thumbnail_jpeg: bytes | None = field(default=None, repr=False)

    @property
    def is_slideshow(self) -> bool:
        return self.slideshow is not None

    def factor(self, kind: FactorKind) -> FactorScore:
        for factor in self.factors:
            if factor.kind is kind:
                return factor
        raise KeyError(kind.value)

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis_id": self.analysis_id,
            "created_at": self.created_at.isoformat(),
            "score": self.score,
            "pre_jitter_score": self.pre_jitter_score,
            "display": asdict(self.display),
            "metadata": {**asdict(self.metadata), "resolution": self.metadata.resolution},
            "factors": [
                {
                    "kind": factor.kind.value,
                    "raw_points": factor.raw_points,
                    "max_points": factor.max_points,
                    "components": dict(factor.components),
                }
                for factor in self.factors
            ],
            "penalties": {
                "fatal": self.penalties.fatal,
                "major": self.penalties.major,
                "minor": self.penalties.minor,
                "reason_tags": list(self.penalties.reason_tags),
            },
            "is_slideshow": self.is_slideshow,
            "slideshow": None
            if self.slideshow is None
            else {
                "image_count": self.slideshow.image_count,
                "duration_per_slide": self.slideshow.duration_per_slide,
                "transition": self.slideshow.transition.value,
                "total_duration": self.slideshow.total_duration,
            },
            "has_thumbnail": self.thumbnail_jpeg is not None,
        }
