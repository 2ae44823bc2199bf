"""Tests for audio decoding helpers."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import pytest

from sound_wave_image.exceptions import AudioDecodeError
from sound_wave_image.utils.audio_io import DecodedAudio, ensure_mono, load_samples


def test_stereo_frames_are_interleaved(write_wav) -> None:
    frames = np.asarray([[0.5, -0.5], [0.25, -0.25]], dtype=np.float32)
    audio = load_samples(write_wav(frames))

    assert audio.channels == 2
    assert audio.sample_rate == 8000
    assert audio.samples.dtype == np.float32
    np.testing.assert_allclose(audio.samples, [0.5, -0.5, 0.25, -0.25])


def test_mono_option_averages_channels(write_wav) -> None:
    frames = np.asarray([[0.5, -0.5], [0.5, 0.0]], dtype=np.float32)
    audio = load_samples(write_wav(frames), mono=True)

    assert audio.channels == 1
    np.testing.assert_allclose(audio.samples, [0.0, 0.25])


def test_duration_and_suggested_width(write_wav) -> None:
    frames = np.zeros((8000 * 3, 2), dtype=np.float32)
    audio = load_samples(write_wav(frames))

    assert audio.samples.size == 48000
    assert audio.duration == 3
    assert audio.duration_seconds == pytest.approx(3.0)
    assert audio.suggested_width() == 480


def test_suggested_width_is_at_least_one() -> None:
    audio = DecodedAudio(samples=np.zeros(5, dtype=np.float32), sample_rate=8000, channels=1)
    assert audio.suggested_width() == 1
    assert audio.duration == 0


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(AudioDecodeError):
        load_samples(tmp_path / "nothing.wav")


def test_undecodable_file_raises(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.wav"
    bogus.write_bytes(b"definitely not audio")
    with pytest.raises(AudioDecodeError):
        load_samples(bogus)


def test_ensure_mono_passes_through_one_dimensional() -> None:
    waveform = np.asarray([0.1, 0.2], dtype=np.float32)
    result = ensure_mono(waveform)
    np.testing.assert_array_equal(result, waveform)
    assert result is not waveform
