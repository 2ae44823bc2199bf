"""Tests for the sample-to-pixel mapping and waveform rasterization."""

from __future__ import annotations

import math

import numpy as np
import pytest

from sound_wave_image.exceptions import InvalidDimensionsError
from sound_wave_image.render.amplitude import compute_scale
from sound_wave_image.render.canvas import Canvas, interpolate
from sound_wave_image.render.rasterizer import (
    column_for_sample,
    endpoint_for_sample,
    rasterize,
)

BLACK = (0, 0, 0)
GREEN = (0, 200, 0)


@pytest.mark.parametrize(("total", "width"), [(7, 5), (2, 4), (1000, 37), (3, 3)])
def test_column_matches_floor_and_is_monotonic(total: int, width: int) -> None:
    columns = [column_for_sample(i, total, width) for i in range(total)]
    assert columns == [math.floor(width * i / total) for i in range(total)]
    assert columns == sorted(columns)
    assert columns[-1] < width


def test_endpoint_alternates_around_centre() -> None:
    assert endpoint_for_sample(0, 0.25, 1.0, 100) == 63
    assert endpoint_for_sample(1, 0.25, 1.0, 100) == 38
    assert endpoint_for_sample(2, -0.25, 1.0, 100) == 38


def test_endpoint_is_clamped_to_canvas() -> None:
    assert endpoint_for_sample(0, 1.0, 2.0, 4) == 3
    assert endpoint_for_sample(1, 1.0, 2.0, 4) == 0
    assert endpoint_for_sample(1, -1.0, 2.0, 4) == 3


def test_zero_scale_stays_on_centre_row() -> None:
    assert endpoint_for_sample(0, 0.9, 0.0, 9) == 4
    assert endpoint_for_sample(1, -0.9, 0.0, 9) == 4


def _expected_stroke_pixels(samples: np.ndarray, scale: float, width: int, height: int):
    pixels = set()
    centre = height // 2
    for index, value in enumerate(samples.tolist()):
        x = column_for_sample(index, samples.size, width)
        end = endpoint_for_sample(index, value, scale, height)
        for y in range(min(centre, end), max(centre, end) + 1):
            pixels.add((x, y))
    return pixels


def test_pixels_off_the_strokes_keep_background() -> None:
    rng = np.random.default_rng(1234)
    samples = rng.uniform(-1.0, 1.0, size=300).astype(np.float32)
    width, height = 64, 32
    scale = compute_scale(samples)
    canvas = Canvas.create(width, height, BLACK)

    rasterize(samples, scale, (width, height), GREEN, canvas)

    strokes = _expected_stroke_pixels(samples, scale, width, height)
    for y in range(height):
        for x in range(width):
            expected = GREEN if (x, y) in strokes else BLACK
            assert canvas.get_pixel(x, y) == expected, (x, y)


def test_rasterize_rejects_mismatched_dimensions() -> None:
    canvas = Canvas.create(4, 4, BLACK)
    with pytest.raises(InvalidDimensionsError):
        rasterize([0.5], 2.0, (8, 4), GREEN, canvas)


def test_rasterize_rejects_infinite_scale() -> None:
    canvas = Canvas.create(4, 4, BLACK)
    with pytest.raises(ValueError):
        rasterize([0.0], math.inf, (4, 4), GREEN, canvas)


def _draw_each_sample(samples: np.ndarray, scale: float, width: int, height: int) -> Canvas:
    canvas = Canvas.create(width, height, BLACK)
    centre = height // 2

    def blend(line, original, weight):
        return interpolate(line, original, weight)

    for index, value in enumerate(samples.tolist()):
        x = column_for_sample(index, samples.size, width)
        end = endpoint_for_sample(index, value, scale, height)
        canvas.draw_line((x, centre), (x, end), GREEN, blend)
    return canvas


@pytest.mark.parametrize(("width", "height", "count"), [(64, 32, 300), (10, 7, 9), (50, 11, 20)])
def test_column_spans_match_per_sample_strokes(width: int, height: int, count: int) -> None:
    rng = np.random.default_rng(count)
    samples = rng.uniform(-1.0, 1.0, size=count).astype(np.float32)
    scale = compute_scale(samples)
    canvas = Canvas.create(width, height, BLACK)

    rasterize(samples, scale, (width, height), GREEN, canvas)

    assert canvas.raw_bytes() == _draw_each_sample(samples, scale, width, height).raw_bytes()


def test_rasterize_handles_long_buffers() -> None:
    rng = np.random.default_rng(99)
    samples = rng.uniform(-1.0, 1.0, size=200_000).astype(np.float32)
    canvas = Canvas.create(1600, 400, BLACK)

    rasterize(samples, compute_scale(samples), (1600, 400), GREEN, canvas)

    pixels = canvas.as_array()
    assert np.all(pixels[200, :] == np.asarray(GREEN, dtype=np.uint8))
