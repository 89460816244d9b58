from __future__ import annotations

import argparse
import logging
import time

from voicezone.audio.capture import SampleSource, SoundDeviceCapture, list_input_devices
from voicezone.system.config import DetectorConfig, DetectorMode
from voicezone.system.debug_override import DebugControl, DebugOverride
from voicezone.system.engine import ZoneEngine
from voicezone.utils.constants import AUDIO

ZONE_NAMES = ("green", "yellow", "red")
BAR_WIDTH = 40


def render(level: float, zone: int, pitch_hz: float, yellow: float, red: float) -> str:
    filled = int(round(level * BAR_WIDTH))
    bar = "".join(
        "|" if i in (int(yellow * BAR_WIDTH), int(red * BAR_WIDTH)) else ("#" if i < filled else ".")
        for i in range(BAR_WIDTH)
    )
    pitch = f" | pitch={pitch_hz:6.1f} Hz" if pitch_hz > 0 else ""
    return f"[{bar}] level={level:.2f} zone={ZONE_NAMES[zone]:<6}{pitch}"


def main() -> None:
    parser = argparse.ArgumentParser(description="Live microphone zone meter.")
    parser.add_argument("--device", type=int, default=0, help="Index into the input device list")
    parser.add_argument("--list-devices", action="store_true", help="Print input devices and exit")
    parser.add_argument("--pitch", action="store_true", help="Pitch mode instead of volume mode")
    parser.add_argument("--sensitivity", type=float, default=None)
    parser.add_argument("--noise-gate", type=float, default=None)
    parser.add_argument("--smoothing", type=int, default=None)
    parser.add_argument(
        "--debug",
        choices=[c.value for c in DebugControl],
        default=None,
        help="Ignore the microphone and hold a synthetic level",
    )
    parser.add_argument("--fps", type=float, default=60.0, help="Engine ticks per second")
    parser.add_argument("--print-hz", type=float, default=10.0)
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.list_devices:
        for idx, (device_id, name) in enumerate(list_input_devices()):
            print(f"[{idx}] {name} (device id {device_id})")
        return

    config = DetectorConfig(mode=DetectorMode.PITCH if args.pitch else DetectorMode.VOLUME)
    if args.sensitivity is not None:
        config.sensitivity = args.sensitivity
    if args.noise_gate is not None:
        config.noise_gate = args.noise_gate
    if args.smoothing is not None:
        config.smoothing_window_size = args.smoothing

    debug = DebugOverride()
    if args.debug is not None:
        config.debug_override_active = True
        debug.hold(args.debug)

    source = SampleSource(SoundDeviceCapture(device_index=args.device), AUDIO.window_size)
    engine = ZoneEngine(config=config, source=source, debug=debug)

    print("Listening... Ctrl+C to stop")
    frame = 1.0 / args.fps
    last_print = 0.0
    with engine:
        if not engine.available:
            return
        previous = time.monotonic()
        try:
            while True:
                time.sleep(frame)
                now = time.monotonic()
                result = engine.tick(now - previous)
                previous = now
                if now - last_print >= 1.0 / args.print_hz:
                    last_print = now
                    print(
                        render(result.level, result.zone, result.pitch_hz, config.yellow_threshold, config.red_threshold),
                        end="\r",
                        flush=True,
                    )
        except KeyboardInterrupt:
            print()


if __name__ == "__main__":
    main()
