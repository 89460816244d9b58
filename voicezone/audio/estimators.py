"""Raw level estimation: RMS energy and autocorrelation pitch."""
from __future__ import annotations

from typing import Tuple

import numpy as np

from voicezone.system.config import DetectorConfig
from voicezone.utils.helpers import clamp01, inverse_lerp, window_rms


def noise_gate(raw: float, floor: float) -> float:
    """Treat anything under *floor* as silence."""
    return 0.0 if raw < floor else raw


def lag_bounds(sample_rate: int, window_size: int, min_pitch_hz: float, max_pitch_hz: float) -> Tuple[int, int]:
    min_lag = max(1, int(sample_rate / max_pitch_hz))
    max_lag = min(int(sample_rate / min_pitch_hz), window_size // 2)
    return min_lag, max_lag


def detect_pitch(
    window: np.ndarray,
    sample_rate: int,
    min_pitch_hz: float,
    max_pitch_hz: float,
    gate: float = 0.0,
) -> float:
    """Dominant frequency of *window* in Hz, or 0.0 for silence.

    Near-silent windows are skipped before correlating; pitch locks on the
    noise floor are unstable. Lags are scanned upward and a later lag only
    wins with a strictly larger correlation.
    """
    samples = np.asarray(window, dtype=np.float64)
    if window_rms(samples) < gate:
        return 0.0

    n = len(samples)
    min_lag, max_lag = lag_bounds(sample_rate, n, min_pitch_hz, max_pitch_hz)

    best_correlation = 0.0
    best_lag = -1
    for lag in range(min_lag, max_lag + 1):
        correlation = float(np.dot(samples[: n - lag], samples[lag:]))
        if correlation > best_correlation:
            best_correlation = correlation
            best_lag = lag

    if best_lag <= 0:
        return 0.0
    return sample_rate / best_lag


def pitch_to_level(pitch_hz: float, min_pitch_hz: float, max_pitch_hz: float) -> float:
    if pitch_hz <= 0.0:
        return 0.0
    return inverse_lerp(min_pitch_hz, max_pitch_hz, pitch_hz)


def volume_to_level(raw_rms: float, gate: float, sensitivity: float) -> float:
    return clamp01(noise_gate(raw_rms, gate) * sensitivity)


class LevelEstimator:
    """Turns a sample window into a ``(target, pitch_hz)`` pair for the configured mode."""

    def __init__(self, sample_rate: int) -> None:
        self.sample_rate = sample_rate

    def estimate(self, window: np.ndarray, cfg: DetectorConfig) -> Tuple[float, float]:
        if cfg.uses_pitch:
            pitch = detect_pitch(
                window,
                self.sample_rate,
                cfg.min_pitch_hz,
                cfg.max_pitch_hz,
                gate=cfg.noise_gate,
            )
            return pitch_to_level(pitch, cfg.min_pitch_hz, cfg.max_pitch_hz), pitch
        return volume_to_level(window_rms(window), cfg.noise_gate, cfg.sensitivity), 0.0
