"""Operator-held synthetic targets used in place of the microphone."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from voicezone.system.config import DetectorConfig


class DebugControl(str, Enum):
    NONE = "none"
    MEDIUM = "medium"  # held "," key
    HIGH = "high"  # held "." key


@dataclass
class DebugOverride:
    control: DebugControl = DebugControl.NONE

    def hold(self, control: DebugControl | str) -> None:
        self.control = DebugControl(control)

    def release(self) -> None:
        self.control = DebugControl.NONE

    def target(self, config: DetectorConfig) -> float:
        """Middle of the yellow band for MEDIUM, middle of the red band for HIGH."""
        if self.control is DebugControl.HIGH:
            return (config.red_threshold + 1.0) / 2.0
        if self.control is DebugControl.MEDIUM:
            return (config.yellow_threshold + config.red_threshold) / 2.0
        return 0.0
