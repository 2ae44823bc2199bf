"""Render static waveform images from decoded audio samples."""

from __future__ import annotations

from .exceptions import (
    AllocationError,
    AudioDecodeError,
    DegenerateAmplitudeError,
    EmptyInputError,
    ImageSaveError,
    InvalidDimensionsError,
    InvalidSampleError,
    PixelOutOfRangeError,
    WaveformError,
)
from .render import Canvas, WaveformImage, compute_scale, rasterize, render_waveform

__all__ = [
    "AllocationError",
    "AudioDecodeError",
    "Canvas",
    "DegenerateAmplitudeError",
    "EmptyInputError",
    "ImageSaveError",
    "InvalidDimensionsError",
    "InvalidSampleError",
    "PixelOutOfRangeError",
    "WaveformError",
    "WaveformImage",
    "compute_scale",
    "rasterize",
    "render_waveform",
]

__version__ = "0.1.0"
