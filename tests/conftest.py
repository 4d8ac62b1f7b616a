from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
import pytest


class SyntheticDecoder:
    """Serves pre-built RGB images at a fixed stride; ``None`` entries fail to decode."""

    def __init__(self, images: Sequence[np.ndarray | None], stride_seconds: float = 0.5) -> None:
        self.images = list(images)
        self.stride_seconds = stride_seconds
        self.requested: list[float] = []

    def __enter__(self) -> SyntheticDecoder:
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def decode_frame(self, timestamp_seconds: float) -> np.ndarray | None:
        self.requested.append(timestamp_seconds)
        index = int(round(timestamp_seconds / self.stride_seconds))
        if index >= len(self.images):
            return None
        return self.images[index]

    def extract_thumbnail(self) -> np.ndarray | None:
        return next((image for image in self.images if image is not None), None)


def solid_image(value: int, size: int = 64) -> np.ndarray:
    return np.full((size, size, 3), value, dtype=np.uint8)


def split_image(left: int, right: int, size: int = 64) -> np.ndarray:
    image = np.empty((size, size, 3), dtype=np.uint8)
    image[:, : size // 2] = left
    image[:, size // 2 :] = right
    return image


@pytest.fixture
def make_decoder() -> Callable[..., SyntheticDecoder]:
    return SyntheticDecoder


@pytest.fixture
def solid() -> Callable[..., np.ndarray]:
    return solid_image


@pytest.fixture
def split() -> Callable[..., np.ndarray]:
    return split_image
