from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import numpy as np

from reelscore.exceptions import NoVideoTrackError

logger = logging.getLogger(__name__)


class FrameDecoder(Protocol):
    """Decode collaborator: returns RGB uint8 images or ``None`` when a timestamp fails."""

    def decode_frame(self, timestamp_seconds: float) -> np.ndarray | None: ...

    def extract_thumbnail(self) -> np.ndarray | None: ...


class OpenCVFrameDecoder:
    """Seek-and-read decoder over ``cv2.VideoCapture``."""

    def __init__(
        self,
        video_path: str | Path,
        *,
        thumbnail_timestamp_seconds: float = 0.5,
        thumbnail_max_dimension: int = 400,
        cv2_module: Any | None = None,
    ) -> None:
        if cv2_module is None:
            import cv2 as cv2_module

        self._cv2 = cv2_module
        self.video_path = Path(video_path).expanduser().resolve()
        if not self.video_path.exists():
            raise FileNotFoundError(f"Video file not found: {self.video_path}")

        self.thumbnail_timestamp_seconds = thumbnail_timestamp_seconds
        self.thumbnail_max_dimension = thumbnail_max_dimension
        self._capture = cv2_module.VideoCapture(str(self.video_path))
        if not self._capture.isOpened():
            self._capture.release()
            raise NoVideoTrackError(f"Unable to open a video stream in: {self.video_path}")

    def __enter__(self) -> OpenCVFrameDecoder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._capture.release()

    def decode_frame(self, timestamp_seconds: float) -> np.ndarray | None:
        try:
            self._capture.set(self._cv2.CAP_PROP_POS_MSEC, max(timestamp_seconds, 0.0) * 1000.0)
            ok, frame = self._capture.read()
        except self._cv2.error as exc:
            logger.debug("Decode failed at %.2fs in %s: %s", timestamp_seconds, self.video_path, exc)
            return None

        if not ok or frame is None:
            return None
        return self._cv2.cvtColor(frame, self._cv2.COLOR_BGR2RGB)

    def extract_thumbnail(self) -> np.ndarray | None:
        image = self.decode_frame(self.thumbnail_timestamp_seconds)
        if image is None:
            image = self.decode_frame(0.0)
        if image is None:
            return None
        return fit_within(image, self.thumbnail_max_dimension, cv2_module=self._cv2)


def fit_within(image: np.ndarray, max_dimension: int, cv2_module: Any | None = None) -> np.ndarray:
    """Shrink ``image`` so its longest side is at most ``max_dimension``."""

    height, width = image.shape[:2]
    longest = max(height, width)
    if max_dimension <= 0 or longest <= max_dimension:
        return image

    if cv2_module is None:
        import cv2 as cv2_module

    scale = max_dimension / float(longest)
    target = (max(int(round(width * scale)), 1), max(int(round(height * scale)), 1))
    return cv2_module.resize(image, target, interpolation=cv2_module.INTER_AREA)


def encode_jpeg(image: np.ndarray, quality: int = 60, cv2_module: Any | None = None) -> bytes | None:
    """Encode an RGB image as JPEG bytes, or ``None`` if the encoder refuses it."""

    if cv2_module is None:
        import cv2 as cv2_module

    try:
        bgr = cv2_module.cvtColor(image, cv2_module.COLOR_RGB2BGR)
        ok, buffer = cv2_module.imencode(".jpg", bgr, [int(cv2_module.IMWRITE_JPEG_QUALITY), int(quality)])
    except cv2_module.error as exc:
        logger.warning("JPEG encoding failed: %s", exc)
        return None
    if not ok:
        return None
    return buffer.tobytes()
