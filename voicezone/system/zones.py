"""Threshold classification of the shaped level into zones 0/1/2."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

GREEN = 0
YELLOW = 1
RED = 2


def classify_zone(level: float, yellow_threshold: float, red_threshold: float) -> int:
    if level >= red_threshold:
        return RED
    if level >= yellow_threshold:
        return YELLOW
    return GREEN


@dataclass
class ZoneClassifier:
    """Zone classification with an optional hysteresis band.

    With ``hysteresis == 0`` every tick is classified fresh, so a level sitting
    exactly on a threshold may flip zones from one tick to the next. A positive
    margin keeps the previous zone until the level has moved that far past the
    boundary.
    """

    hysteresis: float = 0.0
    _zone: Optional[int] = None

    def classify(self, level: float, yellow_threshold: float, red_threshold: float) -> int:
        fresh = classify_zone(level, yellow_threshold, red_threshold)
        if self.hysteresis <= 0.0 or self._zone is None or fresh == self._zone:
            self._zone = fresh
            return fresh
        if fresh > self._zone:
            shifted = classify_zone(
                level - self.hysteresis, yellow_threshold, red_threshold
            )
            self._zone = max(self._zone, shifted)
        else:
            shifted = classify_zone(
                level + self.hysteresis, yellow_threshold, red_threshold
            )
            self._zone = min(self._zone, shifted)
        return self._zone

    def reset(self) -> None:
        self._zone = None
