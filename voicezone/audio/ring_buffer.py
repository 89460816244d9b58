"""Circular buffer for streaming audio."""
from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass
class RingBuffer:
    size: int
    dtype: type = np.float32
    buffer: np.ndarray = field(init=False)
    write_pos: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.size <= 0:
            raise ValueError("RingBuffer size must be positive")
        self.buffer = np.zeros(self.size, dtype=self.dtype)

    def write(self, data: np.ndarray) -> None:
        """Append *data*; the cursor always advances by ``len(data)``.

        Chunks longer than the buffer keep only their newest ``size`` samples,
        laid out so the last one sits just behind the new cursor.
        """
        data = np.asarray(data, dtype=self.dtype)
        n = len(data)
        end = self.write_pos + n
        new_pos = end % self.size
        if n >= self.size:
            idx = (new_pos + np.arange(self.size)) % self.size
            self.buffer[idx] = data[-self.size :]
        elif end < self.size:
            self.buffer[self.write_pos:end] = data
        else:
            first = self.size - self.write_pos
            self.buffer[self.write_pos:] = data[:first]
            self.buffer[:new_pos] = data[first:]
        self.write_pos = new_pos

    def read_ending_at(self, position: int, length: int) -> np.ndarray:
        """Return *length* samples whose last sample sits at index *position*.

        The start index may be negative before wrapping; Python's modulo
        folds it back into the buffer.
        """
        if length > self.size:
            raise ValueError(f"cannot read {length} samples from a buffer of {self.size}")
        start = (position - length + 1) % self.size
        if start + length <= self.size:
            return self.buffer[start : start + length].copy()
        first = self.size - start
        return np.concatenate((self.buffer[start:], self.buffer[: length - first])).copy()
