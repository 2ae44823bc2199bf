"""In-memory RGB pixel buffer with anti-aliased line drawing."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import numpy as np
from numpy.typing import NDArray

from ..exceptions import ImageSaveError, InvalidDimensionsError, PixelOutOfRangeError

__all__ = ["BlendFunction", "Canvas", "ColorRGB", "Point", "as_color", "interpolate"]

ColorRGB = tuple[int, int, int]
Point = tuple[int, int]
BlendFunction = Callable[[ColorRGB, ColorRGB, float], ColorRGB]

CHANNELS = 3
MAX_BUFFER_BYTES = sys.maxsize


def as_color(value: Sequence[int]) -> ColorRGB:
    """Validate an RGB triple of 8-bit channel values."""
    channels = tuple(value)
    if len(channels) != CHANNELS:
        raise ValueError(f"Colour must have exactly three channels, got {channels!r}.")
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, (int, np.integer)):
            raise ValueError(f"Colour channels must be integers, got {channels!r}.")
        if not 0 <= channel <= 255:
            raise ValueError(f"Colour channels must be within 0..255, got {channels!r}.")
    return (int(channels[0]), int(channels[1]), int(channels[2]))


def interpolate(line_color: ColorRGB, original: ColorRGB, weight: float) -> ColorRGB:
    """Blend ``line_color`` over ``original`` with ``weight`` as the line coverage."""
    inverse = 1.0 - weight
    return (
        _clamp_channel(line_color[0] * weight + original[0] * inverse),
        _clamp_channel(line_color[1] * weight + original[1] * inverse),
        _clamp_channel(line_color[2] * weight + original[2] * inverse),
    )


def _clamp_channel(value: float) -> int:
    if value < 0.0:
        return 0
    if value > 255.0:
        return 255
    return int(value)


class Canvas:
    """Fixed-size RGB raster, row-major with interleaved channels.

    Build instances with :meth:`create`; the pixel grid keeps the size it was
    allocated with and is only changed through :meth:`set_pixel` and
    :meth:`draw_line`.
    """

    __slots__ = ("_pixels",)

    def __init__(self, pixels: NDArray[np.uint8]) -> None:
        if pixels.ndim != 3 or pixels.shape[2] != CHANNELS or pixels.dtype != np.uint8:
            raise InvalidDimensionsError(
                f"Canvas pixels must be a (height, width, 3) uint8 array, got {pixels.shape}."
            )
        self._pixels = pixels

    @classmethod
    def create(cls, width: int, height: int, background_color: Sequence[int]) -> Canvas:
        """Allocate a ``width`` x ``height`` canvas filled with ``background_color``."""
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise InvalidDimensionsError(f"Canvas {name} must be an integer, got {value!r}.")
            if value <= 0:
                raise InvalidDimensionsError(f"Canvas {name} must be positive, got {value}.")

        if int(width) * int(height) * CHANNELS > MAX_BUFFER_BYTES:
            raise InvalidDimensionsError(
                f"Canvas of {width}x{height} exceeds the addressable buffer size."
            )

        background = as_color(background_color)
        try:
            pixels = np.empty((int(height), int(width), CHANNELS), dtype=np.uint8)
        except (MemoryError, ValueError) as exc:
            raise InvalidDimensionsError(
                f"Unable to allocate a {width}x{height} canvas: {exc}"
            ) from exc
        pixels[:, :] = background
        return cls(pixels)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> ColorRGB:
        self._check_bounds(x, y)
        red, green, blue = self._pixels[y, x]
        return (int(red), int(green), int(blue))

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> None:
        self._check_bounds(x, y)
        self._pixels[y, x] = as_color(color)

    def draw_line(
        self,
        start: Point,
        end: Point,
        color: Sequence[int],
        blend: BlendFunction = interpolate,
    ) -> None:
        """Draw an anti-aliased segment between two integer points (Xiaolin Wu).

        The segment is walked along its major axis. At each step the two pixels
        straddling the exact minor-axis position are blended with ``color``
        in proportion to their coverage. Plots falling outside the canvas are
        dropped.

        Vertical segments drawn with :func:`interpolate` cover whole pixels
        only, so they are filled as a single column slice.
        """
        line_color = as_color(color)
        x0, y0 = int(start[0]), int(start[1])
        x1, y1 = int(end[0]), int(end[1])

        if x0 == x1 and blend is interpolate:
            self._fill_column(x0, min(y0, y1), max(y0, y1), line_color)
        elif abs(y1 - y0) > abs(x1 - x0):
            if y0 > y1:
                x0, y0, x1, y1 = x1, y1, x0, y0
            self._plot_wu_line((y0, x0), (y1, x1), line_color, blend, steep=True)
        else:
            if x0 > x1:
                x0, y0, x1, y1 = x1, y1, x0, y0
            self._plot_wu_line((x0, y0), (x1, y1), line_color, blend, steep=False)

    def raw_bytes(self) -> bytes:
        """Return ``width * height * 3`` bytes: rows top to bottom, R, G, B per pixel."""
        return self._pixels.tobytes(order="C")

    def as_array(self) -> NDArray[np.uint8]:
        """Return a read-only ``(height, width, 3)`` view of the pixels."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def persist_to(self, path: str | Path, *, image_format: str | None = None) -> Path:
        """Encode the canvas with Pillow and write it to ``path``."""
        try:
            from PIL import Image
        except ImportError as exc:  # pragma: no cover - optional dependency
            raise ImageSaveError("Pillow is required to save waveform images.") from exc

        target = Path(path)
        image = Image.frombytes("RGB", self.size, self.raw_bytes())
        try:
            image.save(target, format=image_format)
        except (OSError, ValueError, KeyError) as exc:
            raise ImageSaveError(f"Failed to save waveform image to {target}: {exc}") from exc
        return target

    def _fill_column(self, x: int, top: int, bottom: int, color: ColorRGB) -> None:
        if not 0 <= x < self.width:
            return
        top = max(top, 0)
        bottom = min(bottom, self.height - 1)
        if top > bottom:
            return
        self._pixels[top : bottom + 1, x] = color

    def _plot_wu_line(
        self,
        start: Point,
        end: Point,
        color: ColorRGB,
        blend: BlendFunction,
        *,
        steep: bool,
    ) -> None:
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        gradient = dy / dx if dx else 0.0
        minor = float(start[1])
        for major in range(start[0], end[0] + 1):
            base = math.floor(minor)
            coverage = minor - base
            self._plot(major, base, color, 1.0 - coverage, blend, steep)
            self._plot(major, base + 1, color, coverage, blend, steep)
            minor += gradient

    def _plot(
        self,
        major: int,
        minor: int,
        color: ColorRGB,
        weight: float,
        blend: BlendFunction,
        steep: bool,
    ) -> None:
        x, y = (minor, major) if steep else (major, minor)
        if not self.in_bounds(x, y):
            return
        red, green, blue = self._pixels[y, x]
        original = (int(red), int(green), int(blue))
        self._pixels[y, x] = blend(color, original, weight)

    def _check_bounds(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise PixelOutOfRangeError(
                f"Pixel ({x}, {y}) lies outside the {self.width}x{self.height} canvas."
            )
