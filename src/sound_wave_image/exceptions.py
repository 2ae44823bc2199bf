"""Exception types for sound-wave-image."""

from __future__ import annotations

__all__ = [
    "AllocationError",
    "AudioDecodeError",
    "DegenerateAmplitudeError",
    "EmptyInputError",
    "ImageSaveError",
    "InvalidDimensionsError",
    "InvalidSampleError",
    "PixelOutOfRangeError",
    "WaveformError",
]


class WaveformError(Exception):
    """Base class for every error raised while producing a waveform image."""


class EmptyInputError(WaveformError, ValueError):
    """Raised when the sample buffer holds no samples."""


class DegenerateAmplitudeError(WaveformError, ValueError):
    """
    Raised when the accumulated peak amplitude is zero, e.g. for silent audio
    or a buffer without a single positive sample, or when it overflows
    float32. No finite non-zero scale factor exists, so nothing is drawn.
    """

    def __init__(self, highest: float) -> None:
        super().__init__(f"Peak amplitude is {highest!r}; cannot derive a scale factor.")
        self.highest = highest


class InvalidSampleError(WaveformError, ValueError):
    """Raised when the sample buffer contains NaN or infinite values."""


class InvalidDimensionsError(WaveformError, ValueError):
    """Raised when a canvas cannot be allocated for the requested size."""


# Name used for canvas allocation failures
AllocationError = InvalidDimensionsError


class PixelOutOfRangeError(WaveformError, IndexError):
    """Raised by direct pixel access outside the canvas."""


class AudioDecodeError(WaveformError):
    """Raised when an audio file cannot be opened or decoded."""


class ImageSaveError(WaveformError):
    """Raised when a rendered image cannot be encoded or written."""
