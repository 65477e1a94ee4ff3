"""Metrics – Untyped."""
from __future__ import annotations

from mp_metrics.metrics.gauge import AdjustableMetric
from mp_metrics.metrics.model import MetricType


class Untyped(AdjustableMetric):
    """Gauge-like value exported without a type, for values of unknown semantics."""

    metric_type = MetricType.UNTYPED

    __slots__ = ()


__all__ = ["Untyped"]
