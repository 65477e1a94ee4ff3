"""Metrics – ValueMetric, the shared body of counters, gauges and untyped metrics."""
from __future__ import annotations

from typing import Iterable, Sequence

from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.errors import UnmatchedLabelsError
from mp_metrics.metrics.model import LabelPair, MetricType, Sample
from mp_metrics.metrics.opts import MetricOpts
from mp_metrics.metrics.ports import Collector, Metric
from mp_metrics.metrics.value import AtomicFloat


def make_sample(
    desc: Desc,
    value: float,
    label_values: Sequence[str] = (),
    timestamp_ms: int | None = None,
) -> Sample:
    """Render *value* with the const and variable labels of *desc*, sorted by name."""
    pairs = list(desc.const_label_pairs)
    pairs.extend(LabelPair(n, v) for n, v in zip(desc.variable_labels, label_values))
    pairs.sort()
    return Sample(labels=tuple(pairs), value=value, timestamp_ms=timestamp_ms)


def check_label_values(desc: Desc, label_values: tuple[str, ...]) -> None:
    """Raise :class:`UnmatchedLabelsError` unless there is one value per variable label."""
    if len(label_values) != len(desc.variable_labels):
        raise UnmatchedLabelsError(
            f"Metric '{desc.fq_name}' expects {len(desc.variable_labels)} label value(s), "
            f"got {len(label_values)}",
            expected=desc.variable_labels,
            got=label_values,
        )


class ValueMetric(Metric, Collector):
    """A metric backed by one :class:`AtomicFloat`.

    Standalone instances collect themselves, so they can be registered
    directly. Vectors create instances with ``label_values`` filled in.
    """

    metric_type = MetricType.UNTYPED

    __slots__ = ("_desc", "_label_values", "_value")

    def __init__(self, opts: MetricOpts | Desc, label_values: Sequence[str] = ()) -> None:
        self._desc = opts if isinstance(opts, Desc) else opts.describe()
        self._label_values = tuple(label_values)
        check_label_values(self._desc, self._label_values)
        self._value = AtomicFloat()

    @property
    def label_values(self) -> tuple[str, ...]:
        return self._label_values

    def get(self) -> float:
        return self._value.get()

    def desc(self) -> Desc:
        return self._desc

    def write(self) -> Sample:
        return make_sample(self._desc, self._value.get(), self._label_values)

    def describe(self) -> Iterable[Desc]:
        return [self._desc]

    def collect(self) -> Iterable[Metric]:
        return [self]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._desc.fq_name!r}, "
            f"labels={list(self._label_values)!r}, value={self.get()!r})"
        )


__all__ = ["ValueMetric", "check_label_values", "make_sample"]
