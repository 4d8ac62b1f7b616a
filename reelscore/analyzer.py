from __future__ import annotations

import asyncio
import logging
import random
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from reelscore.config import Settings
from reelscore.ingest.probe import probe_video
from reelscore.media.decoder import FrameDecoder, OpenCVFrameDecoder, encode_jpeg
from reelscore.media.sampling import sample_frames
from reelscore.models import (
    AnalysisResult,
    DisplayScores,
    FactorScore,
    FrameSequence,
    PenaltyTally,
    SlideshowConfig,
    VideoMetadata,
)
from reelscore.scoring.aggregate import AggregationDetails, aggregate_scores
from reelscore.scoring.display import display_scores
from reelscore.scoring.hook import score_hook
from reelscore.scoring.length import adjust_length_for_retention, score_length
from reelscore.scoring.pacing import score_pacing
from reelscore.scoring.penalties import evaluate_penalties
from reelscore.scoring.production import score_quality, score_technical
from reelscore.scoring.signals import measure_frames
from reelscore.scoring.thresholds import DEFAULT_THRESHOLDS, Thresholds

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ScoreBreakdown:
    """Everything the scoring pipeline produced for one frame sequence."""

    factors: tuple[FactorScore, ...]
    penalties: PenaltyTally
    aggregation: AggregationDetails
    display: DisplayScores

    @property
    def score(self) -> int:
        return self.aggregation.score


def score_frames(
    frames: FrameSequence,
    metadata: VideoMetadata,
    slideshow: SlideshowConfig | None = None,
    *,
    rng: random.Random | None = None,
    jitter_amplitude: int = 2,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> ScoreBreakdown:
    """Run every scorer over an already-sampled frame sequence."""

    signals = measure_frames(frames)
    duration = metadata.duration_seconds

    hook = score_hook(signals, thresholds=thresholds)
    pacing = score_pacing(signals, duration, thresholds=thresholds)
    length = adjust_length_for_retention(score_length(duration), duration, pacing.raw_points)
    quality = score_quality(signals, metadata, thresholds=thresholds)
    technical = score_technical(metadata, thresholds=thresholds)
    factors = (hook, length, pacing, quality, technical)

    penalties = evaluate_penalties(signals, metadata, thresholds=thresholds)
    aggregation = aggregate_scores(
        factors,
        penalties,
        duration,
        slideshow=slideshow,
        rng=rng,
        jitter_amplitude=jitter_amplitude,
        thresholds=thresholds,
    )
    logger.debug(
        "Scored %d samples: factors=%s penalties=%s stages=%s",
        len(frames),
        {factor.kind.value: factor.raw_points for factor in factors},
        penalties.reason_tags,
        aggregation,
    )
    return ScoreBreakdown(
        factors=factors,
        penalties=penalties,
        aggregation=aggregation,
        display=display_scores(factors),
    )


def analyze(
    decoder: FrameDecoder,
    metadata: VideoMetadata,
    slideshow: SlideshowConfig | None = None,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> AnalysisResult:
    """Sample, score and package one video.

    ``rng`` overrides the configured jitter source; it is ignored when jitter
    is disabled in settings.
    """

    settings = settings or Settings()
    sampling = settings.sampling

    frames = sample_frames(
        decoder,
        metadata.duration_seconds,
        stride_seconds=sampling.stride_seconds,
        max_samples=sampling.max_samples,
        motion_size=sampling.motion_size,
        tone_size=sampling.tone_size,
    )
    if not len(frames):
        logger.warning("No frames could be decoded; scoring from metadata only.")

    breakdown = score_frames(
        frames,
        metadata,
        slideshow,
        rng=_resolve_rng(settings, rng),
        jitter_amplitude=settings.scoring.jitter_amplitude,
        thresholds=thresholds,
    )

    result = AnalysisResult(
        analysis_id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc),
        score=breakdown.score,
        display=breakdown.display,
        metadata=metadata,
        factors=breakdown.factors,
        penalties=breakdown.penalties,
        pre_jitter_score=breakdown.aggregation.clamped,
        slideshow=slideshow,
        thumbnail_jpeg=_thumbnail(decoder, settings),
    )
    logger.info("Analysis %s scored %d/100 (%d samples)", result.analysis_id, result.score, len(frames))
    return result


def analyze_path(
    video_path: str | Path,
    slideshow: SlideshowConfig | None = None,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> AnalysisResult:
    settings = settings or Settings()
    metadata = probe_video(video_path)
    with OpenCVFrameDecoder(
        video_path,
        thumbnail_timestamp_seconds=settings.thumbnail.timestamp_seconds,
        thumbnail_max_dimension=settings.thumbnail.max_dimension,
    ) as decoder:
        return analyze(decoder, metadata, slideshow, settings=settings, rng=rng, thresholds=thresholds)


async def analyze_path_async(
    video_path: str | Path,
    slideshow: SlideshowConfig | None = None,
    *,
    settings: Settings | None = None,
    rng: random.Random | None = None,
    thresholds: Thresholds = DEFAULT_THRESHOLDS,
) -> AnalysisResult:
    """Run ``analyze_path`` in a worker thread so the event loop stays responsive."""

    return await asyncio.to_thread(
        analyze_path,
        video_path,
        slideshow,
        settings=settings,
        rng=rng,
        thresholds=thresholds,
    )


def _resolve_rng(settings: Settings, rng: random.Random | None) -> random.Random | None:
    if not settings.scoring.jitter_enabled:
        return None
    if rng is not None:
        return rng
    return random.Random(settings.scoring.seed)


def _thumbnail(decoder: FrameDecoder, settings: Settings) -> bytes | None:
    try:
        image = decoder.extract_thumbnail()
    except (OSError, ValueError, RuntimeError) as exc:
        logger.warning("Thumbnail extraction failed: %s", exc)
        return None
    if image is None:
        logger.debug("Decoder produced no thumbnail image.")
        return None
    return encode_jpeg(image, quality=settings.thumbnail.jpeg_quality)
