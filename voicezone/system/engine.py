"""Per-tick orchestrator: capture window -> estimate -> envelope -> zone."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from voicezone.audio.capture import DeviceUnavailable, SampleSource
from voicezone.audio.estimators import LevelEstimator
from voicezone.system.config import DetectorConfig
from voicezone.system.debug_override import DebugOverride
from voicezone.system.envelope import EnvelopeShaper
from voicezone.system.zones import GREEN, ZoneClassifier
from voicezone.utils.constants import AUDIO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    level: float = 0.0
    zone: int = GREEN
    pitch_hz: float = 0.0
    debug_active: bool = False
    available: bool = True


class ZoneEngine:
    """Turns the live microphone into a ``(level, zone)`` pair once per tick.

    A host loop calls :meth:`tick` with the elapsed time since the previous
    call; consumers read :attr:`result` (or the shortcut properties). The
    engine never blocks and holds no locks: the capture device writes its ring
    buffer on its own timeline and the engine only reads behind the cursor.

    Without a ``source`` the engine is fed explicitly through ``tick(dt,
    window=...)`` or :meth:`process_window`, which is how tests drive it.
    """

    def __init__(
        self,
        config: Optional[DetectorConfig] = None,
        source: Optional[SampleSource] = None,
        debug: Optional[DebugOverride] = None,
        sample_rate: Optional[int] = None,
    ) -> None:
        self.config = config or DetectorConfig()
        self.source = source
        self.debug = debug or DebugOverride()
        if sample_rate is None:
            sample_rate = source.sample_rate if source is not None else AUDIO.sample_rate
        self.estimator = LevelEstimator(sample_rate)
        self.envelope = EnvelopeShaper()
        self.classifier = ZoneClassifier()
        self.available = True
        self._started = False
        self._result = ClassificationResult()

    # published state

    @property
    def result(self) -> ClassificationResult:
        return self._result

    @property
    def level(self) -> float:
        return self._result.level

    @property
    def zone(self) -> int:
        return self._result.zone

    @property
    def pitch_hz(self) -> float:
        return self._result.pitch_hz

    @property
    def yellow_threshold(self) -> float:
        return self.config.yellow_threshold

    @property
    def red_threshold(self) -> float:
        return self.config.red_threshold

    # lifecycle

    def start(self) -> None:
        """Start capture; a missing device disables the engine for the session."""
        if self.source is None or self._started or not self.available:
            return
        try:
            self.source.start()
        except DeviceUnavailable as exc:
            self.available = False
            self._result = ClassificationResult(available=False)
            logger.warning("Zone engine disabled, no microphone: %s", exc)
            return
        self._started = True

    def close(self) -> None:
        if self.source is not None:
            self.source.stop()
        self._started = False

    def __enter__(self) -> "ZoneEngine":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # per-tick update

    def tick(self, delta_time: float, window: Optional[np.ndarray] = None) -> ClassificationResult:
        if not self.available:
            return self._result

        cfg = self.config
        debug_active = cfg.debug_override_active
        if debug_active:
            target, pitch = self.debug.target(cfg), 0.0
        else:
            if window is None:
                if self.source is None or not self._started:
                    return self._result
                window = self.source.current_window()
            target, pitch = self.estimator.estimate(window, cfg)

        level = self.envelope.update(target, delta_time, cfg)
        self.classifier.hysteresis = cfg.hysteresis
        zone = self.classifier.classify(level, cfg.yellow_threshold, cfg.red_threshold)
        self._result = ClassificationResult(
            level=level,
            zone=zone,
            pitch_hz=pitch,
            debug_active=debug_active,
        )
        return self._result

    def process_window(self, window: np.ndarray, delta_time: float) -> ClassificationResult:
        return self.tick(delta_time, window=window)

    def reset(self) -> None:
        self.envelope.reset()
        self.classifier.reset()
        self._result = ClassificationResult(available=self.available)
