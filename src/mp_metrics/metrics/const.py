"""Metrics – constant metrics for hand-written collectors.

A collector that mirrors values owned elsewhere (a connection pool, the OS)
builds fresh metrics on every ``collect`` call::

    class PoolCollector(Collector):
        size = Desc("pool_connections", "Open connections by state.", ("state",))

        def describe(self):
            return [self.size]

        def collect(self):
            for state, count in pool.stats().items():
                yield new_const_metric(self.size, MetricType.GAUGE, count, state)
"""
from __future__ import annotations

from datetime import datetime

from mp_metrics.metrics.base import check_label_values, make_sample
from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.model import MetricType, Sample
from mp_metrics.metrics.ports import Metric


class ConstMetric(Metric):
    """Immutable metric; build it through :func:`new_const_metric`."""

    def __init__(
        self,
        desc: Desc,
        metric_type: MetricType,
        value: float,
        label_values: tuple[str, ...],
        timestamp_ms: int | None = None,
    ) -> None:
        self._desc = desc
        self.metric_type = metric_type
        self._value = float(value)
        self._label_values = label_values
        self._timestamp_ms = timestamp_ms

    @property
    def label_values(self) -> tuple[str, ...]:
        return self._label_values

    @property
    def timestamp_ms(self) -> int | None:
        return self._timestamp_ms

    def get(self) -> float:
        return self._value

    def desc(self) -> Desc:
        return self._desc

    def write(self) -> Sample:
        return make_sample(self._desc, self._value, self._label_values, self._timestamp_ms)


def new_const_metric(
    desc: Desc,
    metric_type: MetricType,
    value: float,
    *label_values: str,
) -> ConstMetric:
    """Return a metric with a fixed value.

    Raises
    ------
    InvalidDescriptorError
        *desc* was built from invalid input.
    UnmatchedLabelsError
        The number of *label_values* differs from ``desc.variable_labels``.
    """
    desc.result.unwrap()
    values = tuple(str(v) for v in label_values)
    check_label_values(desc, values)
    return ConstMetric(desc, metric_type, value, values)


def with_timestamp(metric: ConstMetric, timestamp: datetime | float) -> ConstMetric:
    """Return a copy of *metric* carrying an explicit timestamp.

    *timestamp* is a :class:`datetime` or Unix time in seconds.
    """
    seconds = timestamp.timestamp() if isinstance(timestamp, datetime) else float(timestamp)
    return ConstMetric(
        metric.desc(),
        metric.metric_type,
        metric.get(),
        metric.label_values,
        timestamp_ms=int(round(seconds * 1000)),
    )


__all__ = ["ConstMetric", "new_const_metric", "with_timestamp"]
