"""Built-in scenarios: quiet room, loud bursts, and a rising hum."""
from __future__ import annotations

from typing import Callable, Dict

from voicezone.simulation.event_player import Scenario, ToneEvent


def silence() -> Scenario:
    return Scenario(name="silence", length_s=3.0, noise_level=0.001)


def shout() -> Scenario:
    events = [
        ToneEvent(start_s=0.5, duration_s=1.0, frequency_hz=300.0, amplitude=0.012),
        ToneEvent(start_s=2.0, duration_s=1.0, frequency_hz=300.0, amplitude=0.05),
    ]
    return Scenario(name="shout", length_s=4.0, noise_level=0.002, events=events)


def hum() -> Scenario:
    events = [
        ToneEvent(start_s=0.5, duration_s=1.0, frequency_hz=147.0, amplitude=0.4),
        ToneEvent(start_s=2.0, duration_s=1.0, frequency_hz=441.0, amplitude=0.4),
        ToneEvent(start_s=3.5, duration_s=1.0, frequency_hz=735.0, amplitude=0.4),
    ]
    return Scenario(name="hum", length_s=5.0, noise_level=0.0, events=events)


SCENARIOS: Dict[str, Callable[[], Scenario]] = {
    "silence": silence,
    "shout": shout,
    "hum": hum,
}
