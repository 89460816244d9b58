"""Drive a ZoneEngine from a synthetic scenario or an audio file and collect the zone timeline."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np

from voicezone.audio.capture import BufferedCapture, SampleSource
from voicezone.audio.mic_stream import MicStream
from voicezone.simulation.event_player import EventPlayer, Scenario
from voicezone.system.config import DetectorConfig
from voicezone.system.engine import ClassificationResult, ZoneEngine
from voicezone.utils.constants import AUDIO


@dataclass
class ZoneRun:
    times: List[float]
    results: List[ClassificationResult]

    def zone_at(self, at_s: float) -> int:
        idx = int(np.searchsorted(self.times, at_s, side="right")) - 1
        return self.results[max(idx, 0)].zone

    def zone_changes(self) -> int:
        zones = [r.zone for r in self.results]
        return sum(1 for a, b in zip(zones, zones[1:]) if a != b)

    def summary(self) -> Dict[int, float]:
        """Fraction of ticks spent in each zone."""
        if not self.results:
            return {}
        zones = np.array([r.zone for r in self.results])
        return {zone: float(np.mean(zones == zone)) for zone in (0, 1, 2)}


class ZoneTester:
    """Feeds chunks into a :class:`BufferedCapture` and ticks the engine once per chunk.

    Chunks come from a synthetic :class:`Scenario` (:meth:`run`) or from an
    audio file (:meth:`run_wav`).
    """

    def __init__(
        self,
        scenario: Optional[Scenario] = None,
        config: Optional[DetectorConfig] = None,
        window_size: int = AUDIO.window_size,
        sample_rate: int = AUDIO.sample_rate,
    ) -> None:
        self.sample_rate = sample_rate
        self.player = EventPlayer(scenario, sample_rate=sample_rate) if scenario is not None else None
        self.capture = BufferedCapture(sample_rate=sample_rate)
        self.engine = ZoneEngine(config=config, source=SampleSource(self.capture, window_size))

    def run(self, chunk_size: int = AUDIO.chunk_size) -> ZoneRun:
        if self.player is None:
            raise ValueError("ZoneTester.run needs a scenario; use run_wav for audio files")
        return self._drive(self.player.stream(chunk_size), chunk_size)

    def run_wav(self, path: str | Path, chunk_size: int = AUDIO.chunk_size) -> ZoneRun:
        """Replay an audio file, resampled to the engine's sample rate."""
        mic = MicStream(self.sample_rate, chunk_size)
        return self._drive(mic.from_wav(path), chunk_size)

    def _drive(self, chunks: Iterable[np.ndarray], chunk_size: int) -> ZoneRun:
        delta_time = chunk_size / self.sample_rate
        times: List[float] = []
        results: List[ClassificationResult] = []
        processed_samples = 0
        with self.engine:
            for chunk in chunks:
                self.capture.feed(chunk)
                processed_samples += len(chunk)
                times.append(processed_samples / self.sample_rate)
                results.append(self.engine.tick(delta_time))
        return ZoneRun(times=times, results=results)
