"""Tests for amplitude accumulation and scale computation."""

from __future__ import annotations

import math

import numpy as np
import pytest

from sound_wave_image.exceptions import (
    DegenerateAmplitudeError,
    EmptyInputError,
    InvalidSampleError,
)
from sound_wave_image.render.amplitude import (
    as_sample_buffer,
    compute_scale,
    find_highest_sample,
)


def test_highest_accumulates_record_samples() -> None:
    buffer = as_sample_buffer([1, 5, 2, 8])
    assert buffer.dtype == np.float32
    # 0 -> 1 -> 6 -> 6 -> 14, not the true maximum of 8
    assert find_highest_sample(buffer) == 14.0


def test_highest_depends_on_order() -> None:
    ascending = np.asarray([0.1, 0.2, 0.4], dtype=np.float32)
    descending = ascending[::-1].copy()
    assert find_highest_sample(descending) == pytest.approx(0.4)
    assert find_highest_sample(ascending) == pytest.approx(0.1 + 0.2 + 0.4)


def test_compute_scale_is_reciprocal_of_highest() -> None:
    assert compute_scale([0.5, -0.5]) == pytest.approx(2.0)
    assert compute_scale([1.0, 5.0, 2.0, 8.0]) == pytest.approx(1.0 / 14.0)


def test_compute_scale_rejects_empty_buffer() -> None:
    with pytest.raises(EmptyInputError):
        compute_scale([])


@pytest.mark.parametrize("samples", [[0.0, 0.0, 0.0], [-0.5, -0.1, -0.9]])
def test_compute_scale_rejects_zero_peak(samples: list[float]) -> None:
    with pytest.raises(DegenerateAmplitudeError) as excinfo:
        compute_scale(samples)
    assert excinfo.value.highest == 0.0
    assert isinstance(excinfo.value, ValueError)


def test_integer_pcm_is_scaled_to_unit_range() -> None:
    buffer = as_sample_buffer(np.asarray([16384, -32768, 0], dtype=np.int16))
    np.testing.assert_allclose(buffer, [0.5, -1.0, 0.0])


def test_non_finite_samples_are_rejected() -> None:
    with pytest.raises(InvalidSampleError):
        as_sample_buffer([0.1, math.nan])
    with pytest.raises(InvalidSampleError):
        compute_scale([math.inf, 0.2])


def test_multichannel_arrays_are_rejected() -> None:
    with pytest.raises(ValueError):
        as_sample_buffer(np.zeros((2, 4), dtype=np.float32))


def test_input_is_not_mutated(sine_samples: np.ndarray) -> None:
    before = sine_samples.copy()
    compute_scale(sine_samples)
    np.testing.assert_array_equal(sine_samples, before)


def test_compute_scale_rejects_overflowing_peak() -> None:
    # 1.7e38 + 3.0e38 exceeds float32 and accumulates to inf
    with pytest.raises(DegenerateAmplitudeError) as excinfo:
        compute_scale([1.7e38, 3.0e38])
    assert math.isinf(excinfo.value.highest)


def test_record_scan_matches_sample_by_sample_accumulation() -> None:
    rng = np.random.default_rng(7)
    samples = rng.normal(0.0, 0.3, size=5000).astype(np.float32)
    samples[::97] *= 4.0

    expected = np.float32(0.0)
    for sample in samples:
        if sample > expected:
            expected += sample

    assert find_highest_sample(samples) == float(expected)
