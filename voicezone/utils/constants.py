"""Global constants shared across voicezone modules."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AudioConstants:
    sample_rate: int = 44100
    window_size: int = 2048
    loop_seconds: int = 10
    chunk_size: int = 512


@dataclass(frozen=True)
class DetectorDefaults:
    sensitivity: float = 45.0
    noise_gate: float = 0.005
    min_pitch_hz: float = 80.0
    max_pitch_hz: float = 800.0
    rise_speed: float = 10.0
    fall_speed: float = 5.0
    smoothing_factor: float = 0.5
    smoothing_window_size: int = 5
    yellow_threshold: float = 0.33
    red_threshold: float = 0.66
    hysteresis: float = 0.0


@dataclass(frozen=True)
class ConfigLimits:
    sensitivity: tuple[float, float] = (1.0, 200.0)
    noise_gate: tuple[float, float] = (0.0, 0.05)
    speed: tuple[float, float] = (1.0, 30.0)
    smoothing_factor: tuple[float, float] = (0.0, 0.99)
    smoothing_window_size: tuple[int, int] = (1, 30)
    hysteresis: tuple[float, float] = (0.0, 0.2)
    min_pitch_hz: float = 1.0
    max_pitch_hz: float = 20000.0
    min_threshold_gap: float = 0.01


AUDIO = AudioConstants()
DETECTOR = DetectorDefaults()
LIMITS = ConfigLimits()
