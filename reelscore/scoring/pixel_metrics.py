from __future__ import annotations

import numpy as np

from reelscore.models import Frame

LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)


def difference(a: Frame, b: Frame) -> float:
    """Mean absolute per-channel difference of the motion buffers, in [0, 1]."""

    delta = np.abs(a.motion.astype(np.int16) - b.motion.astype(np.int16))
    return float(np.mean(delta) / 255.0)


def average_brightness(frame: Frame) -> float:
    return float(np.mean(_luminance(frame.tone)))


def contrast(frame: Frame) -> float:
    """Population standard deviation of normalized luminance."""

    return float(np.std(_luminance(frame.tone)))


def _luminance(pixels: np.ndarray) -> np.ndarray:
    return (pixels[..., :3].astype(np.float64) @ LUMA_WEIGHTS) / 255.0
