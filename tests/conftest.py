"""Global pytest fixtures for sound-wave-image."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
import soundfile as sf


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep local SOUND_WAVE_IMAGE_* variables from leaking into tests."""
    for key in list(os.environ):
        if key.startswith("SOUND_WAVE_IMAGE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sine_samples() -> np.ndarray:
    t = np.linspace(0, 0.05, 800, endpoint=False)
    return (0.8 * np.sin(2 * np.pi * 440 * t)).astype(np.float32)


@pytest.fixture
def write_wav(tmp_path: Path) -> Callable[..., Path]:
    """Write ``frames`` (frames x channels, or 1-D mono) to a 16-bit WAV under tmp_path."""

    def _write(frames: np.ndarray, *, name: str = "clip.wav", sample_rate: int = 8000) -> Path:
        path = tmp_path / name
        sf.write(str(path), frames, sample_rate, subtype="PCM_16")
        return path

    return _write
