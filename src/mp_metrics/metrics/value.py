"""Metrics – AtomicFloat, the numeric cell behind every value metric."""
from __future__ import annotations

import struct
import threading

_DOUBLE = struct.Struct("<d")
_BITS = struct.Struct("<Q")


def float_to_bits(value: float) -> int:
    """Return the IEEE-754 binary64 bit pattern of *value* as an int."""
    return _BITS.unpack(_DOUBLE.pack(value))[0]


def bits_to_float(bits: int) -> float:
    return _DOUBLE.unpack(_BITS.pack(bits))[0]


class AtomicFloat:
    """A float cell that many threads may ``add`` to without losing updates.

    The cell stores the bit pattern of the value. ``add`` is a
    compare-and-retry loop: it reads the bits, computes the new value outside
    any lock, and publishes it only if the bits did not change in between.
    The compare-and-swap step is the only serialised section and its lock
    belongs to this cell alone.

    Reads never take the lock: replacing ``_bits`` is a single reference
    store, so a reader sees either the old or the new pattern, never a mix.
    """

    __slots__ = ("_bits", "_swap_lock")

    def __init__(self, initial: float = 0.0) -> None:
        self._bits = float_to_bits(float(initial))
        self._swap_lock = threading.Lock()

    def get(self) -> float:
        return bits_to_float(self._bits)

    def set(self, value: float) -> None:
        self._bits = float_to_bits(float(value))

    def add(self, delta: float) -> None:
        while True:
            old_bits = self._bits
            new_bits = float_to_bits(bits_to_float(old_bits) + delta)
            if self.compare_and_swap(old_bits, new_bits):
                return

    def compare_and_swap(self, expected_bits: int, new_bits: int) -> bool:
        """Store *new_bits* iff the cell still holds *expected_bits*."""
        with self._swap_lock:
            if self._bits != expected_bits:
                return False
            self._bits = new_bits
            return True

    def __repr__(self) -> str:
        return f"AtomicFloat({self.get()!r})"


__all__ = ["AtomicFloat", "bits_to_float", "float_to_bits"]
