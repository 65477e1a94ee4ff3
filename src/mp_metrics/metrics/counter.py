"""Metrics – Counter."""
from __future__ import annotations

from mp_metrics.metrics.base import ValueMetric
from mp_metrics.metrics.errors import NegativeCounterDeltaError
from mp_metrics.metrics.model import MetricType


class Counter(ValueMetric):
    """Monotonically increasing value, e.g. requests served or errors seen.

    ``add`` rejects negative deltas with :class:`NegativeCounterDeltaError`
    and leaves the value untouched.
    """

    metric_type = MetricType.COUNTER

    __slots__ = ()

    def inc(self) -> None:
        self._value.add(1.0)

    def add(self, delta: float) -> None:
        if delta < 0:
            raise NegativeCounterDeltaError(self._desc.fq_name, delta)
        self._value.add(delta)


__all__ = ["Counter"]
