"""Audio decoding helpers producing flat sample buffers."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike, NDArray

try:  # pragma: no cover - optional dependency
    import soundfile as sf
except ModuleNotFoundError as exc:  # pragma: no cover - handled at runtime
    raise RuntimeError("soundfile is required for audio decoding.") from exc

from ..exceptions import AudioDecodeError
from .logging import get_logger

__all__ = ["DecodedAudio", "ensure_mono", "load_samples"]

LOGGER = get_logger(__name__)

SAMPLES_PER_COLUMN = 100


def _ensure_waveform(array: ArrayLike, *, copy: bool = False) -> NDArray[np.float32]:
    result = np.asarray(array, dtype=np.float32)
    if copy:
        result = result.copy()
    return result


@dataclass(slots=True)
class DecodedAudio:
    """Decoded PCM samples, interleaved frame by frame when ``channels > 1``."""

    samples: NDArray[np.float32]
    sample_rate: int
    channels: int

    @property
    def duration(self) -> int:
        """Whole seconds of audio, truncated."""
        if self.sample_rate <= 0 or self.channels <= 0:
            return 0
        return (self.samples.size // self.sample_rate) // self.channels

    @property
    def duration_seconds(self) -> float:
        if self.samples.size == 0 or self.sample_rate <= 0 or self.channels <= 0:
            return 0.0
        return self.samples.size / float(self.sample_rate * self.channels)

    def suggested_width(self) -> int:
        """Image width giving one column per hundred samples."""
        return max(1, self.samples.size // SAMPLES_PER_COLUMN)


def load_samples(path: str | Path, *, mono: bool = False) -> DecodedAudio:
    """Decode an audio file into a flat float32 buffer.

    Multi-channel frames are interleaved (``L R L R ...``) unless ``mono`` is
    set, in which case the channels are averaged.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise AudioDecodeError(f"Audio file not found: {file_path}")

    try:
        data, sample_rate = sf.read(str(file_path), dtype="float32", always_2d=True)
    except (RuntimeError, OSError, TypeError) as exc:
        raise AudioDecodeError(f"Unable to decode {file_path}: {exc}") from exc

    frames = _ensure_waveform(data)
    channels = int(frames.shape[1])
    if mono and channels > 1:
        samples = ensure_mono(frames.T)
        channels = 1
    else:
        samples = _ensure_waveform(frames.reshape(-1), copy=True)

    LOGGER.debug(
        "Decoded %s: %d samples, %d Hz, %d channel(s)",
        file_path,
        samples.size,
        sample_rate,
        channels,
    )
    return DecodedAudio(samples=samples, sample_rate=int(sample_rate), channels=channels)


def ensure_mono(waveform: NDArray[np.float32]) -> NDArray[np.float32]:
    """Convert a channel-first waveform to mono by averaging channels if necessary."""
    if waveform.ndim == 1:
        return _ensure_waveform(waveform, copy=True)
    return _ensure_waveform(waveform.mean(axis=0, dtype=np.float32))
