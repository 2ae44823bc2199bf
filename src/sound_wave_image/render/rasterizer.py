"""Map samples onto canvas columns and draw them as mirrored vertical strokes."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import InvalidDimensionsError
from ..utils.logging import get_logger
from .amplitude import as_sample_buffer
from .canvas import Canvas, as_color, interpolate

__all__ = ["column_for_sample", "endpoint_for_sample", "rasterize"]

LOGGER = get_logger(__name__)


def column_for_sample(index: int, total: int, width: int) -> int:
    """Return ``floor(width * index / total)`` clamped to ``[0, width - 1]``."""
    column = (width * index) // total
    return max(0, min(width - 1, column))


def endpoint_for_sample(index: int, value: float, scale: float, height: int) -> int:
    """Return the row a sample's stroke ends on.

    Even indices extend below the centre row and odd indices above it for a
    positive scaled value, which mirrors the trace around the centre line.
    """
    centre = height // 2
    offset = (height / 2.0) * (value * scale)
    row = centre + offset if index % 2 == 0 else centre - offset
    return max(0, min(height - 1, math.floor(row + 0.5)))


def rasterize(
    samples: ArrayLike | Sequence[float],
    scale: float,
    dimensions: tuple[int, int],
    wave_color: Sequence[int],
    canvas: Canvas,
) -> None:
    """Draw one anti-aliased stroke per sample from the centre row into ``canvas``.

    Every stroke is vertical and starts on the centre row, so the strokes that
    share a column are drawn together as the single span they cover.
    """
    width, height = dimensions
    if (width, height) != canvas.size:
        raise InvalidDimensionsError(
            f"Dimensions {width}x{height} do not match the "
            f"{canvas.width}x{canvas.height} canvas."
        )
    if not math.isfinite(scale):
        raise ValueError(f"Scale factor must be finite, got {scale!r}.")

    buffer = as_sample_buffer(samples)
    color = as_color(wave_color)
    total = int(buffer.size)
    centre = height // 2

    if total == 0:
        return

    columns, ends = _columns_and_endpoints(buffer, scale, width, height)
    starts = np.flatnonzero(np.r_[True, columns[1:] != columns[:-1]])
    tops = np.minimum(np.minimum.reduceat(ends, starts), centre)
    bottoms = np.maximum(np.maximum.reduceat(ends, starts), centre)

    for x, top, bottom in zip(columns[starts].tolist(), tops.tolist(), bottoms.tolist()):
        canvas.draw_line((x, top), (x, bottom), color, interpolate)

    LOGGER.debug("Rasterized %d samples onto a %dx%d canvas", total, width, height)


def _columns_and_endpoints(
    buffer: NDArray[np.float32],
    scale: float,
    width: int,
    height: int,
) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Vectorized :func:`column_for_sample` and :func:`endpoint_for_sample`."""
    total = buffer.size
    indices = np.arange(total, dtype=np.int64)
    columns = np.clip((width * indices) // total, 0, width - 1)

    centre = height // 2
    offsets = (height / 2.0) * (buffer.astype(np.float64) * scale)
    rows = np.where(indices % 2 == 0, centre + offsets, centre - offsets)
    ends = np.clip(np.floor(rows + 0.5), 0, height - 1).astype(np.int64)
    return columns, ends
