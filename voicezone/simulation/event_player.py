"""Scenario and tone event simulation utilities."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

import numpy as np

from voicezone.audio.mic_stream import MicStream
from voicezone.utils.constants import AUDIO
from voicezone.utils.helpers import sine_wave


@dataclass
class ToneEvent:
    start_s: float
    duration_s: float
    frequency_hz: float = 220.0
    amplitude: float = 0.5


@dataclass
class Scenario:
    name: str
    length_s: float
    noise_level: float
    events: List[ToneEvent] = field(default_factory=list)


class EventPlayer:
    def __init__(self, scenario: Scenario, sample_rate: int = AUDIO.sample_rate, seed: Optional[int] = 0) -> None:
        self.scenario = scenario
        self.sample_rate = sample_rate
        self._rng = np.random.default_rng(seed)
        self._timeline = self._synthesize()

    @property
    def timeline(self) -> np.ndarray:
        return self._timeline

    def _synthesize(self) -> np.ndarray:
        num_samples = int(self.scenario.length_s * self.sample_rate)
        if self.scenario.noise_level > 0:
            timeline = self._rng.normal(scale=self.scenario.noise_level, size=num_samples).astype(np.float32)
        else:
            timeline = np.zeros(num_samples, dtype=np.float32)
        for event in self.scenario.events:
            start = int(event.start_s * self.sample_rate)
            length = int(event.duration_s * self.sample_rate)
            end = min(start + length, num_samples)
            if end <= start:
                continue
            tone = sine_wave(event.frequency_hz, end - start, self.sample_rate, event.amplitude)
            timeline[start:end] += tone
        return timeline

    def stream(self, chunk_size: int = AUDIO.chunk_size, realtime: bool = False) -> Iterable[np.ndarray]:
        mic = MicStream(self.sample_rate, chunk_size, realtime=realtime)
        return mic.from_array(self._timeline)

    def expected_events(self, at_s: float) -> List[ToneEvent]:
        return [e for e in self.scenario.events if e.start_s <= at_s < e.start_s + e.duration_s]
