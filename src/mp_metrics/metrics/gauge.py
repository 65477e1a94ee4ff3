"""Metrics – Gauge and the adjustable mutation surface it shares with Untyped."""
from __future__ import annotations

import time

from mp_metrics.metrics.base import ValueMetric
from mp_metrics.metrics.model import MetricType


class AdjustableMetric(ValueMetric):
    """A value metric that may be set and moved in both directions."""

    __slots__ = ()

    def set(self, value: float) -> None:
        self._value.set(value)

    def inc(self) -> None:
        self._value.add(1.0)

    def dec(self) -> None:
        self._value.add(-1.0)

    def add(self, delta: float) -> None:
        self._value.add(delta)

    def sub(self, delta: float) -> None:
        self._value.add(-delta)


class Gauge(AdjustableMetric):
    """A value that goes up and down: temperatures, queue depth, live workers."""

    metric_type = MetricType.GAUGE

    __slots__ = ()

    def set_to_current_time(self) -> None:
        """Set the gauge to the current Unix time in seconds."""
        self._value.set(time.time())


__all__ = ["AdjustableMetric", "Gauge"]
