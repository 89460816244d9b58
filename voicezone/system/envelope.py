"""Envelope shaping: rolling mean of targets followed by a level follower."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from voicezone.system.config import DetectorConfig, EnvelopeStrategy
from voicezone.utils.constants import LIMITS
from voicezone.utils.helpers import clamp01, lerp, move_toward

RING_CAPACITY = LIMITS.smoothing_window_size[1]


@dataclass
class EnvelopeState:
    current_level: float = 0.0
    ring: np.ndarray = field(default_factory=lambda: np.zeros(RING_CAPACITY, dtype=np.float64))
    cursor: int = 0

    @property
    def capacity(self) -> int:
        return len(self.ring)

    def push(self, value: float) -> None:
        self.ring[self.cursor % self.capacity] = value
        self.cursor += 1

    def recent_mean(self, window: int) -> float:
        """Mean of the last *window* pushed values (unwritten slots count as zero)."""
        window = max(1, min(window, self.capacity))
        idx = (self.cursor - 1 - np.arange(window)) % self.capacity
        return float(np.mean(self.ring[idx]))


class EnvelopeShaper:
    """Owns the envelope state of one engine; not shared between threads."""

    def __init__(self) -> None:
        self.state = EnvelopeState()

    @property
    def level(self) -> float:
        return self.state.current_level

    def smooth(self, target: float, cfg: DetectorConfig) -> float:
        self.state.push(target)
        return self.state.recent_mean(cfg.smoothing_window_size)

    def follow(self, target: float, delta_time: float, cfg: DetectorConfig) -> float:
        level = self.state.current_level
        if cfg.envelope_strategy is EnvelopeStrategy.EXPONENTIAL:
            level = lerp(target, level, cfg.smoothing_factor)
        else:
            speed = cfg.rise_speed if target > level else cfg.fall_speed
            level = move_toward(level, target, speed * max(delta_time, 0.0))
        self.state.current_level = clamp01(level)
        return self.state.current_level

    def update(self, target: float, delta_time: float, cfg: DetectorConfig) -> float:
        return self.follow(self.smooth(clamp01(target), cfg), delta_time, cfg)

    def reset(self) -> None:
        self.state = EnvelopeState()
