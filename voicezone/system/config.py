"""Detector configuration with clamped, never-failing writes."""
from __future__ import annotations

import math
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Dict, Mapping

from voicezone.utils.constants import DETECTOR, LIMITS
from voicezone.utils.helpers import clamp


def _bounded(value: Any, low: float, high: float) -> float:
    """Clamp *value* into [low, high]; NaN maps to *low*, infinities to the nearest bound."""
    value = float(value)
    if math.isnan(value):
        return low
    return float(clamp(value, low, high))


class DetectorMode(str, Enum):
    VOLUME = "volume"
    PITCH = "pitch"


class EnvelopeStrategy(str, Enum):
    RISE_FALL = "rise_fall"
    EXPONENTIAL = "exponential"


@dataclass
class DetectorConfig:
    """Settings read by the engine on every tick.

    Bounded fields are clamped whenever they are written, from the constructor
    or from a settings panel between ticks, so an out-of-range value never
    reaches the pipeline and a write never raises. Paired fields (pitch range,
    thresholds) are clamped against their partner to keep their ordering.
    """

    mode: DetectorMode = DetectorMode.VOLUME
    sensitivity: float = DETECTOR.sensitivity
    noise_gate: float = DETECTOR.noise_gate
    min_pitch_hz: float = DETECTOR.min_pitch_hz
    max_pitch_hz: float = DETECTOR.max_pitch_hz
    rise_speed: float = DETECTOR.rise_speed
    fall_speed: float = DETECTOR.fall_speed
    envelope_strategy: EnvelopeStrategy = EnvelopeStrategy.RISE_FALL
    smoothing_factor: float = DETECTOR.smoothing_factor
    smoothing_window_size: int = DETECTOR.smoothing_window_size
    yellow_threshold: float = DETECTOR.yellow_threshold
    red_threshold: float = DETECTOR.red_threshold
    hysteresis: float = DETECTOR.hysteresis
    debug_override_active: bool = False

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, self._coerce(name, value))

    def _coerce(self, name: str, value: Any) -> Any:
        current = self.__dict__
        gap = LIMITS.min_threshold_gap
        if name == "mode":
            return DetectorMode(value)
        if name == "envelope_strategy":
            return EnvelopeStrategy(value)
        if name == "debug_override_active":
            return bool(value)
        if name == "smoothing_window_size":
            low, high = LIMITS.smoothing_window_size
            return int(round(_bounded(value, low, high)))
        if name == "sensitivity":
            return _bounded(value, *LIMITS.sensitivity)
        if name == "noise_gate":
            return _bounded(value, *LIMITS.noise_gate)
        if name in ("rise_speed", "fall_speed"):
            return _bounded(value, *LIMITS.speed)
        if name == "smoothing_factor":
            return _bounded(value, *LIMITS.smoothing_factor)
        if name == "hysteresis":
            return _bounded(value, *LIMITS.hysteresis)
        if name == "min_pitch_hz":
            upper = current.get("max_pitch_hz", LIMITS.max_pitch_hz) - 1.0
            return _bounded(value, LIMITS.min_pitch_hz, upper)
        if name == "max_pitch_hz":
            lower = current.get("min_pitch_hz", LIMITS.min_pitch_hz) + 1.0
            return _bounded(value, lower, LIMITS.max_pitch_hz)
        if name == "yellow_threshold":
            return _bounded(value, gap, current.get("red_threshold", 1.0) - gap)
        if name == "red_threshold":
            return _bounded(value, current.get("yellow_threshold", 0.0) + gap, 1.0)
        return value

    @property
    def uses_pitch(self) -> bool:
        return self.mode is DetectorMode.PITCH

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "DetectorConfig":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown detector settings: {sorted(unknown)}")
        return cls(**values)

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["mode"] = self.mode.value
        data["envelope_strategy"] = self.envelope_strategy.value
        return data
