from __future__ import annotations

import logging
import math
from typing import Any

import numpy as np

from reelscore.media.decoder import FrameDecoder
from reelscore.models import Frame, FrameSequence

logger = logging.getLogger(__name__)

DEFAULT_STRIDE_SECONDS = 0.5
DEFAULT_MAX_SAMPLES = 60
MOTION_SIZE = 32
TONE_SIZE = 16


def sample_timestamps(
    duration_seconds: float,
    stride_seconds: float = DEFAULT_STRIDE_SECONDS,
    max_samples: int = DEFAULT_MAX_SAMPLES,
) -> list[float]:
    """Evenly spaced timestamps from t=0, inclusive of the first sample."""

    if not duration_seconds >= 0 or stride_seconds <= 0 or max_samples <= 0:
        return []
    count = min(math.floor(duration_seconds / stride_seconds) + 1, max_samples)
    return [index * stride_seconds for index in range(count)]


def sample_frames(
    decoder: FrameDecoder,
    duration_seconds: float,
    *,
    stride_seconds: float = DEFAULT_STRIDE_SECONDS,
    max_samples: int = DEFAULT_MAX_SAMPLES,
    motion_size: int = MOTION_SIZE,
    tone_size: int = TONE_SIZE,
    cv2_module: Any | None = None,
) -> FrameSequence:
    """Decode and downsample frames at a fixed stride; failed timestamps are skipped."""

    if cv2_module is None:
        import cv2 as cv2_module

    recoverable = (OSError, ValueError, RuntimeError, getattr(cv2_module, "error", RuntimeError))

    frames: list[Frame] = []
    timestamps = sample_timestamps(duration_seconds, stride_seconds, max_samples)
    for index, timestamp in enumerate(timestamps):
        try:
            image = decoder.decode_frame(timestamp)
            if image is None:
                logger.debug("Skipping sample %d at %.2fs: decode returned no frame", index, timestamp)
                continue
            frame = build_frame(
                index=index,
                timestamp_seconds=timestamp,
                image=image,
                motion_size=motion_size,
                tone_size=tone_size,
                cv2_module=cv2_module,
            )
        except recoverable as exc:
            logger.debug("Skipping sample %d at %.2fs: %s", index, timestamp, exc)
            continue
        frames.append(frame)

    if len(frames) < len(timestamps):
        logger.warning("Decoded %d of %d requested samples", len(frames), len(timestamps))
    return FrameSequence(frames=tuple(frames))


def build_frame(
    *,
    index: int,
    timestamp_seconds: float,
    image: np.ndarray,
    motion_size: int = MOTION_SIZE,
    tone_size: int = TONE_SIZE,
    cv2_module: Any | None = None,
) -> Frame:
    rgb = _as_rgb(image)
    motion = _downsample(rgb, motion_size, cv2_module=cv2_module)
    tone = _downsample(rgb, tone_size, cv2_module=cv2_module)
    motion.setflags(write=False)
    tone.setflags(write=False)
    return Frame(index=index, timestamp_seconds=timestamp_seconds, motion=motion, tone=tone)


def _downsample(image: np.ndarray, size: int, cv2_module: Any | None = None) -> np.ndarray:
    if image.shape[0] == size and image.shape[1] == size:
        return image.copy()

    if cv2_module is None:
        import cv2 as cv2_module

    return cv2_module.resize(image, (size, size), interpolation=cv2_module.INTER_AREA)


def _as_rgb(image: np.ndarray) -> np.ndarray:
    pixels = np.asarray(image)
    if pixels.size == 0:
        raise ValueError(f"Frame image is empty (shape {pixels.shape}).")
    if pixels.ndim not in (2, 3):
        raise ValueError(f"Frame image must be 2-D or 3-D, got shape {pixels.shape}.")
    if pixels.dtype != np.uint8:
        pixels = np.clip(pixels, 0, 255).astype(np.uint8)
    if pixels.ndim == 2:
        return np.repeat(pixels[:, :, np.newaxis], 3, axis=2)
    if pixels.shape[2] == 1:
        return np.repeat(pixels, 3, axis=2)
    return np.ascontiguousarray(pixels[:, :, :3])
