"""Run voicezone scenario simulations."""
from __future__ import annotations

import argparse

from voicezone.simulation.scenarios import SCENARIOS
from voicezone.simulation.zone_tester import ZoneTester
from voicezone.system.config import DetectorConfig, DetectorMode


def main() -> None:
    parser = argparse.ArgumentParser(description="Run voicezone simulations.")
    parser.add_argument("scenario", nargs="?", choices=SCENARIOS.keys(), help="Scenario name")
    parser.add_argument("--wav", default=None, help="Replay an audio file instead of a scenario")
    parser.add_argument("--pitch", action="store_true", help="Pitch mode instead of volume mode")
    parser.add_argument("--step", type=float, default=0.25, help="Timeline print interval in seconds")
    args = parser.parse_args()

    if (args.scenario is None) == (args.wav is None):
        parser.error("give either a scenario name or --wav")

    config = DetectorConfig(mode=DetectorMode.PITCH if args.pitch else DetectorMode.VOLUME)
    if args.wav is not None:
        run = ZoneTester(config=config).run_wav(args.wav)
    else:
        run = ZoneTester(SCENARIOS[args.scenario](), config=config).run()

    next_print = 0.0
    for at_s, result in zip(run.times, run.results):
        if at_s < next_print:
            continue
        next_print += args.step
        print(f"t={at_s:5.2f}s level={result.level:.3f} zone={result.zone} pitch={result.pitch_hz:.1f}")
    print(f"Zone changes: {run.zone_changes()}")
    print(f"Time per zone: {run.summary()}")


if __name__ == "__main__":
    main()
