"""Sample buffer normalization and peak-amplitude scaling."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from ..exceptions import DegenerateAmplitudeError, EmptyInputError, InvalidSampleError
from ..utils.logging import get_logger

__all__ = ["SampleBuffer", "as_sample_buffer", "compute_scale", "find_highest_sample"]

SampleBuffer = NDArray[np.float32]

LOGGER = get_logger(__name__)

PCM_DTYPES = (np.dtype(np.int8), np.dtype(np.int16), np.dtype(np.int32))


def as_sample_buffer(samples: ArrayLike | Sequence[float]) -> SampleBuffer:
    """Convert decoder output into the canonical one-dimensional float32 buffer.

    Signed integer PCM arrays (``int8``, ``int16``, ``int32``) are scaled by
    their full-scale value so they land in ``[-1, 1)``. Anything else, plain
    Python numbers included, is taken as is.
    """
    is_pcm = isinstance(samples, np.ndarray) and samples.dtype in PCM_DTYPES
    array = np.asarray(samples)
    if array.ndim != 1:
        raise ValueError(f"Sample buffer must be one-dimensional, got shape {array.shape}.")

    if is_pcm:
        info = np.iinfo(array.dtype)
        full_scale = float(max(abs(info.min), info.max))
        buffer = (array.astype(np.float64) / full_scale).astype(np.float32)
    else:
        buffer = np.asarray(array, dtype=np.float32)

    if buffer.size and not np.all(np.isfinite(buffer)):
        raise InvalidSampleError("Sample buffer contains NaN or infinite values.")
    return buffer


def find_highest_sample(samples: SampleBuffer) -> float:
    """Return the accumulated record amplitude of ``samples``.

    Whenever a sample strictly exceeds the running value it is added to it
    rather than replacing it, so ``[1, 5, 2, 8]`` yields ``14``, not ``8``.
    Rendered images depend on this exact value. The sum is kept in float32
    and may overflow to ``inf``.

    Each record at least doubles the running value, so the scan jumps from
    one record to the next instead of visiting every sample.
    """
    buffer = np.asarray(samples, dtype=np.float32)
    highest = np.float32(0.0)
    position = 0
    with np.errstate(over="ignore"):
        while position < buffer.size:
            above = buffer[position:] > highest
            offset = int(np.argmax(above))
            if not above[offset]:
                break
            position += offset
            highest = np.float32(highest + buffer[position])
            position += 1
    return float(highest)


def compute_scale(samples: ArrayLike | Sequence[float]) -> float:
    """Return ``1 / highest`` for the buffer.

    Raises:
        EmptyInputError: the buffer has no samples.
        DegenerateAmplitudeError: the accumulated peak is zero (silence or
            no positive sample) or overflowed float32, so no usable scale
            exists.
    """
    buffer = as_sample_buffer(samples)
    if buffer.size == 0:
        raise EmptyInputError("Cannot compute a scale factor for an empty sample buffer.")

    highest = find_highest_sample(buffer)
    if highest <= 0.0 or not math.isfinite(highest):
        raise DegenerateAmplitudeError(highest)

    scale = 1.0 / highest
    LOGGER.debug("Accumulated peak %.6f over %d samples; scale %.6f", highest, buffer.size, scale)
    return scale
