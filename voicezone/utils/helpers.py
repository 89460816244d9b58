"""Utility helpers shared by multiple voicezone subsystems."""
from __future__ import annotations

from pathlib import Path
from typing import Tuple

import numpy as np


FloatArray = np.ndarray


def ensure_mono(signal: FloatArray) -> FloatArray:
    """Ensure waveform is mono by averaging channels if necessary."""
    if signal.ndim == 1:
        return signal
    return signal.mean(axis=1)


def load_audio(path: str | Path, target_sr: int) -> Tuple[FloatArray, int]:
    """Load an audio file and optionally resample using librosa."""
    import soundfile as sf

    data, sr = sf.read(str(path), always_2d=False)
    data = ensure_mono(data.astype(np.float32))
    if sr == target_sr:
        return data, sr
    # Lazy import to avoid librosa dependency unless resampling needed.
    import librosa

    resampled = librosa.resample(y=data, orig_sr=sr, target_sr=target_sr)
    return resampled.astype(np.float32), target_sr


def clamp(value: float, low: float, high: float) -> float:
    """Limit *value* to the closed range [low, high]."""
    return max(low, min(high, value))


def clamp01(value: float) -> float:
    """Limit *value* to [0, 1]."""
    return clamp(value, 0.0, 1.0)


def inverse_lerp(a: float, b: float, value: float) -> float:
    """Position of *value* between *a* and *b*, clamped to [0, 1]."""
    if a == b:
        return 0.0
    return clamp01((value - a) / (b - a))


def lerp(a: float, b: float, t: float) -> float:
    """Linear blend from *a* (t=0) to *b* (t=1)."""
    return a + (b - a) * t


def move_toward(current: float, target: float, max_delta: float) -> float:
    """Step *current* toward *target* by at most *max_delta* without overshooting."""
    if abs(target - current) <= max_delta:
        return target
    if target > current:
        return current + max_delta
    return current - max_delta


def window_rms(window: FloatArray) -> float:
    """Root-mean-square energy of a sample window, 0 for an empty one."""
    if len(window) == 0:
        return 0.0
    window = np.asarray(window, dtype=np.float64)
    return float(np.sqrt(np.mean(window * window)))


def sine_wave(
    frequency_hz: float,
    length: int,
    sample_rate: int,
    amplitude: float = 1.0,
) -> FloatArray:
    """Synthesize a float32 sine tone starting at phase 0."""
    t = np.arange(length) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency_hz * t)).astype(np.float32)
