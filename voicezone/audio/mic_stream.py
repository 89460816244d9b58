"""Simulated microphone stream that feeds data to a capture buffer."""
from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, Iterable

import numpy as np

from voicezone.utils.helpers import load_audio


@dataclass
class MicStream:
    sample_rate: int
    chunk_size: int
    realtime: bool = False
    sleep_factor: float = 1.0

    def from_array(self, data: np.ndarray) -> Generator[np.ndarray, None, None]:
        data = np.asarray(data, dtype=np.float32)
        total = len(data)
        for idx in range(0, total, self.chunk_size):
            chunk = data[idx : idx + self.chunk_size]
            if len(chunk) < self.chunk_size:
                pad = np.zeros(self.chunk_size - len(chunk), dtype=np.float32)
                chunk = np.concatenate((chunk, pad))
            if self.realtime:
                time.sleep(self.chunk_size / self.sample_rate * self.sleep_factor)
            yield chunk

    def from_wav(self, path: str | Path) -> Generator[np.ndarray, None, None]:
        data, _ = load_audio(path, self.sample_rate)
        return self.from_array(data)


def feed_stream(stream: Iterable[np.ndarray], capture: "BufferedCapture") -> None:
    """Continuously write chunks into an in-process capture backend."""
    from voicezone.audio.capture import BufferedCapture

    if not isinstance(capture, BufferedCapture):
        raise TypeError("capture must be a BufferedCapture instance")
    for chunk in stream:
        capture.feed(chunk)
