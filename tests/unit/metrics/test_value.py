"""Unit tests for AtomicFloat."""

from __future__ import annotations

import math
import random
import threading

import pytest

from mp_metrics.metrics.value import AtomicFloat, bits_to_float, float_to_bits


class TestBitConversion:
    @pytest.mark.parametrize("value", [0.0, -0.0, 1.5, -273.15, 1e308, 5e-324, math.inf])
    def test_bits_preserve_value(self, value: float) -> None:
        assert bits_to_float(float_to_bits(value)) == value

    def test_negative_zero_has_sign_bit(self) -> None:
        assert float_to_bits(-0.0) == 1 << 63

    def test_one_bit_pattern(self) -> None:
        assert float_to_bits(1.0) == 0x3FF0000000000000


class TestAtomicFloat:
    def test_starts_at_zero(self) -> None:
        assert AtomicFloat().get() == 0.0

    def test_initial_value(self) -> None:
        assert AtomicFloat(42).get() == 42.0

    def test_set_replaces(self) -> None:
        cell = AtomicFloat(3.0)
        cell.set(-7.25)
        assert cell.get() == -7.25

    def test_add_accumulates(self) -> None:
        cell = AtomicFloat()
        cell.add(1.5)
        cell.add(-0.5)
        assert cell.get() == 1.0

    def test_compare_and_swap_succeeds_on_expected_bits(self) -> None:
        cell = AtomicFloat(1.0)
        assert cell.compare_and_swap(float_to_bits(1.0), float_to_bits(2.0)) is True
        assert cell.get() == 2.0

    def test_compare_and_swap_fails_on_stale_bits(self) -> None:
        cell = AtomicFloat(1.0)
        assert cell.compare_and_swap(float_to_bits(5.0), float_to_bits(2.0)) is False
        assert cell.get() == 1.0

    def test_repr(self) -> None:
        assert repr(AtomicFloat(2.5)) == "AtomicFloat(2.5)"


class TestAtomicFloatConcurrency:
    def test_no_lost_updates(self) -> None:
        cell = AtomicFloat()
        threads_n, per_thread = 8, 2_000
        start = threading.Barrier(threads_n)
        streams = [[random.random() - 0.5 for _ in range(per_thread)] for _ in range(threads_n)]

        def worker(values: list[float]) -> None:
            start.wait()
            for v in values:
                cell.add(v)

        threads = [threading.Thread(target=worker, args=(s,)) for s in streams]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = sum(sum(s) for s in streams)
        assert math.isclose(cell.get(), expected, abs_tol=1e-6)

    def test_integer_increments_are_exact(self) -> None:
        cell = AtomicFloat()
        threads = [
            threading.Thread(target=lambda: [cell.add(1) for _ in range(5_000)]) for _ in range(6)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert cell.get() == 30_000.0
