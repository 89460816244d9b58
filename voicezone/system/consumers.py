"""Read-only consumers of the published zone."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from voicezone.system.engine import ClassificationResult


@dataclass
class ZoneChangeWatcher:
    """Calls ``callback(zone)`` only when the zone differs from the last one seen."""

    callback: Callable[[int], None]
    last_zone: Optional[int] = None

    def update(self, result: ClassificationResult) -> bool:
        if result.zone == self.last_zone:
            return False
        self.last_zone = result.zone
        self.callback(result.zone)
        return True


@dataclass
class ZoneSequence:
    """Hold each zone of ``sequence`` for ``confirm_duration`` seconds, in order."""

    sequence: Sequence[int]
    confirm_duration: float = 0.5
    current_step: int = 0
    complete: bool = False
    _match_timer: float = 0.0
    confirmed: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.sequence:
            raise ValueError("ZoneSequence needs at least one step")
        if any(zone not in (0, 1, 2) for zone in self.sequence):
            raise ValueError(f"zones must be 0, 1 or 2: {list(self.sequence)}")

    @property
    def target_zone(self) -> Optional[int]:
        if self.complete:
            return None
        return self.sequence[self.current_step]

    @property
    def progress(self) -> float:
        """Fraction of the current step's hold time already accumulated."""
        if self.complete:
            return 1.0
        return min(1.0, self._match_timer / self.confirm_duration) if self.confirm_duration > 0 else 0.0

    def update(self, zone: int, delta_time: float) -> bool:
        """Advance the hold timer; returns True on the tick a step is confirmed."""
        if self.complete:
            return False
        if zone != self.sequence[self.current_step]:
            self._match_timer = 0.0
            return False
        self._match_timer += delta_time
        if self._match_timer < self.confirm_duration:
            return False
        self._match_timer = 0.0
        self.confirmed.append(zone)
        self.current_step += 1
        if self.current_step >= len(self.sequence):
            self.complete = True
        return True

    def reset(self) -> None:
        self.current_step = 0
        self.complete = False
        self._match_timer = 0.0
        self.confirmed.clear()
