"""Render entrypoint and the resulting waveform image."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from numpy.typing import ArrayLike

from ..exceptions import DegenerateAmplitudeError, InvalidDimensionsError
from ..utils.logging import get_logger
from .amplitude import as_sample_buffer, compute_scale
from .canvas import Canvas, as_color
from .rasterizer import rasterize

if TYPE_CHECKING:
    from PIL import Image

    from ..config.render_settings import RenderSettings

__all__ = ["WaveformImage", "render_from_settings", "render_waveform"]

LOGGER = get_logger(__name__)

T = TypeVar("T")


class WaveformImage:
    """A finished waveform render.

    Holds the canvas produced by :func:`render_waveform` and exposes it only
    for reading: raw RGB bytes, a caller supplied conversion, or an encoded
    file written through Pillow.
    """

    __slots__ = ("_canvas",)

    def __init__(self, canvas: Canvas) -> None:
        self._canvas = canvas

    @property
    def width(self) -> int:
        return self._canvas.width

    @property
    def height(self) -> int:
        return self._canvas.height

    @property
    def size(self) -> tuple[int, int]:
        return self._canvas.size

    def as_bytes(self) -> bytes:
        """Row-major RGB bytes, ``width * height * 3`` long."""
        return self._canvas.raw_bytes()

    def to_bytes(self) -> bytearray:
        """Mutable copy of :meth:`as_bytes`."""
        return bytearray(self._canvas.raw_bytes())

    def convert(self, convert: Callable[[bytes, tuple[int, int]], T]) -> T:
        """Hand the raw bytes and ``(width, height)`` to ``convert`` and return its result."""
        return convert(self._canvas.raw_bytes(), self.size)

    def to_pil(self) -> Image.Image:
        from PIL import Image

        return Image.frombytes("RGB", self.size, self._canvas.raw_bytes())

    def save(self, path: str | Path, *, image_format: str | None = None) -> Path:
        """Encode the image (format picked from the suffix unless given) and write it."""
        target = self._canvas.persist_to(path, image_format=image_format)
        LOGGER.info("Saved %dx%d waveform image to %s", self.width, self.height, target)
        return target


def render_waveform(
    samples: ArrayLike | Sequence[float],
    desired_size: Sequence[int],
    wave_color: Sequence[int],
    background_color: Sequence[int],
    *,
    allow_silence: bool = False,
) -> WaveformImage:
    """Render ``samples`` as a mirrored waveform on a fresh canvas.

    Args:
        samples: mono or interleaved amplitude samples, any numeric dtype.
        desired_size: ``(width, height)`` of the output in pixels.
        wave_color: RGB colour of the strokes.
        background_color: RGB fill colour.
        allow_silence: draw a flat centre line instead of raising
            :class:`DegenerateAmplitudeError` when the peak amplitude is zero.

    Raises:
        EmptyInputError, DegenerateAmplitudeError, InvalidSampleError,
        InvalidDimensionsError, ValueError (bad colours).
    """
    if len(desired_size) != 2:
        raise InvalidDimensionsError(f"desired_size must be (width, height), got {desired_size!r}.")
    width, height = desired_size
    wave = as_color(wave_color)
    background = as_color(background_color)
    buffer = as_sample_buffer(samples)

    try:
        scale = compute_scale(buffer)
    except DegenerateAmplitudeError as exc:
        if not allow_silence:
            raise
        LOGGER.warning("%s Rendering a flat centre line.", exc)
        scale = 0.0

    canvas = Canvas.create(width, height, background)
    rasterize(buffer, scale, (canvas.width, canvas.height), wave, canvas)
    return WaveformImage(canvas)


def render_from_settings(
    samples: ArrayLike | Sequence[float],
    settings: RenderSettings,
    *,
    allow_silence: bool = False,
) -> WaveformImage:
    """Render with the size and colours taken from ``settings``."""
    return render_waveform(
        samples,
        (settings.width, settings.height),
        settings.wave_color,
        settings.background_color,
        allow_silence=allow_silence,
    )
