"""Metrics – CounterFunc, GaugeFunc, UntypedFunc.

The value is not stored but read from a callable each time the metric is
collected, e.g. the size of a queue owned by someone else.
"""
from __future__ import annotations

from typing import Callable, Iterable

from mp_metrics.metrics.base import check_label_values, make_sample
from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.model import MetricType, Sample
from mp_metrics.metrics.opts import MetricOpts
from mp_metrics.metrics.ports import Collector, Metric


class ValueFunc(Metric, Collector):
    metric_type = MetricType.UNTYPED

    def __init__(self, opts: MetricOpts | Desc, function: Callable[[], float]) -> None:
        self._desc = opts if isinstance(opts, Desc) else opts.describe()
        check_label_values(self._desc, ())
        self._function = function

    def get(self) -> float:
        return float(self._function())

    def desc(self) -> Desc:
        return self._desc

    def write(self) -> Sample:
        return make_sample(self._desc, self.get())

    def describe(self) -> Iterable[Desc]:
        return [self._desc]

    def collect(self) -> Iterable[Metric]:
        return [self]


class CounterFunc(ValueFunc):
    """The callable must return a monotonically increasing value."""

    metric_type = MetricType.COUNTER


class GaugeFunc(ValueFunc):
    metric_type = MetricType.GAUGE


class UntypedFunc(ValueFunc):
    metric_type = MetricType.UNTYPED


__all__ = ["CounterFunc", "GaugeFunc", "UntypedFunc", "ValueFunc"]
