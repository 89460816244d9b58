"""Capture backends feeding a looping ring buffer, and the window reader on top."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from voicezone.audio.ring_buffer import RingBuffer
from voicezone.utils.constants import AUDIO

logger = logging.getLogger(__name__)


class VoiceZoneError(Exception):
    """Base class for voicezone errors."""


class DeviceUnavailable(VoiceZoneError):
    """No usable capture device exists for this session."""


class CaptureBackend:
    """Looping capture into a ring buffer.

    The device side writes into ``ring_buffer`` on its own timeline; readers
    only look at samples behind the cursor and never take a lock.
    """

    def __init__(self, sample_rate: int, buffer_length: int) -> None:
        self.sample_rate = sample_rate
        self.ring_buffer = RingBuffer(buffer_length)

    @property
    def buffer_length(self) -> int:
        return self.ring_buffer.size

    @property
    def is_recording(self) -> bool:
        return False

    def start(self) -> None:
        raise NotImplementedError

    def stop(self) -> None:
        raise NotImplementedError

    def position(self) -> int:
        """Index of the most recently captured sample."""
        return (self.ring_buffer.write_pos - 1) % self.ring_buffer.size

    def read(self, position: int, length: int) -> np.ndarray:
        return self.ring_buffer.read_ending_at(position, length)


class BufferedCapture(CaptureBackend):
    """In-process backend: callers push chunks with :meth:`feed`.

    Used by the simulation layer and tests. ``available=False`` behaves like a
    machine without a microphone.
    """

    def __init__(
        self,
        sample_rate: int = AUDIO.sample_rate,
        buffer_length: Optional[int] = None,
        available: bool = True,
    ) -> None:
        super().__init__(sample_rate, buffer_length or sample_rate * AUDIO.loop_seconds)
        self.available = available
        self._recording = False

    @property
    def is_recording(self) -> bool:
        return self._recording

    def start(self) -> None:
        if not self.available:
            raise DeviceUnavailable("no capture device attached")
        self._recording = True

    def stop(self) -> None:
        self._recording = False

    def feed(self, chunk: np.ndarray) -> None:
        self.ring_buffer.write(chunk)


def list_input_devices() -> List[Tuple[int, str]]:
    """Return ``(device_id, name)`` for every device with input channels."""
    try:
        import sounddevice as sd
    except OSError as exc:  # PortAudio shared library missing
        raise DeviceUnavailable(f"audio backend unavailable: {exc}") from exc

    devices = []
    for idx, info in enumerate(sd.query_devices()):
        if info["max_input_channels"] > 0:
            devices.append((idx, info["name"]))
    return devices


class SoundDeviceCapture(CaptureBackend):
    """Microphone capture through a ``sounddevice.InputStream`` callback."""

    def __init__(
        self,
        device_index: int = 0,
        sample_rate: int = AUDIO.sample_rate,
        loop_seconds: int = AUDIO.loop_seconds,
        blocksize: int = AUDIO.chunk_size,
    ) -> None:
        super().__init__(sample_rate, sample_rate * loop_seconds)
        self.device_index = device_index
        self.blocksize = blocksize
        self.device_name: Optional[str] = None
        self._stream = None

    @property
    def is_recording(self) -> bool:
        return self._stream is not None and self._stream.active

    def _callback(self, indata, frames, time_info, status) -> None:
        if status:
            logger.debug("input stream status: %s", status)
        self.ring_buffer.write(indata[:, 0])

    def start(self) -> None:
        if self._stream is not None:
            return
        devices = list_input_devices()
        if not devices:
            raise DeviceUnavailable("no microphone detected")
        for idx, (_, name) in enumerate(devices):
            logger.info("input device [%d] %s", idx, name)

        self.device_index = max(0, min(self.device_index, len(devices) - 1))
        device_id, self.device_name = devices[self.device_index]

        import sounddevice as sd

        try:
            stream = sd.InputStream(
                device=device_id,
                channels=1,
                samplerate=self.sample_rate,
                blocksize=self.blocksize,
                dtype="float32",
                callback=self._callback,
            )
            stream.start()
        except sd.PortAudioError as exc:
            raise DeviceUnavailable(f"cannot open {self.device_name!r}: {exc}") from exc
        self._stream = stream
        logger.info("using input device [%d] %r", self.device_index, self.device_name)

    def stop(self) -> None:
        if self._stream is None:
            return
        stream, self._stream = self._stream, None
        stream.stop()
        stream.close()


@dataclass
class SampleSource:
    """Most recent ``window_size`` samples ending at the capture cursor."""

    backend: CaptureBackend
    window_size: int = AUDIO.window_size

    def __post_init__(self) -> None:
        if not 0 < self.window_size <= self.backend.buffer_length:
            raise ValueError(
                f"window_size must be in 1..{self.backend.buffer_length}, got {self.window_size}"
            )

    @property
    def sample_rate(self) -> int:
        return self.backend.sample_rate

    def start(self) -> None:
        self.backend.start()

    def stop(self) -> None:
        self.backend.stop()

    def current_window(self) -> np.ndarray:
        window = self.backend.read(self.backend.position(), self.window_size)
        window.setflags(write=False)
        return window
