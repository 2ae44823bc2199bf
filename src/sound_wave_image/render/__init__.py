"""Waveform rendering: amplitude scaling, rasterization and the pixel canvas."""

from __future__ import annotations

from .amplitude import SampleBuffer, as_sample_buffer, compute_scale, find_highest_sample
from .canvas import Canvas, ColorRGB, as_color, interpolate
from .rasterizer import column_for_sample, endpoint_for_sample, rasterize
from .view import WaveformImage, render_from_settings, render_waveform

__all__ = [
    "Canvas",
    "ColorRGB",
    "SampleBuffer",
    "WaveformImage",
    "as_color",
    "as_sample_buffer",
    "column_for_sample",
    "compute_scale",
    "endpoint_for_sample",
    "find_highest_sample",
    "interpolate",
    "rasterize",
    "render_from_settings",
    "render_waveform",
]
