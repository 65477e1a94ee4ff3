"""Metrics – MetricVec and its typed flavours (CounterVec, GaugeVec, UntypedVec).

A vector is one descriptor with variable labels plus a lazily filled map from
label-value tuple to child metric::

    deletes = GaugeVec(
        MetricOpts(name="deletes", help="Deletes by corpus and qos."),
        ["corpus", "qos"],
    )
    deletes.get_or_create("profile-pictures", "immediate").set(4)
    deletes.get_or_create_by_name({"qos": "lazy", "corpus": "cat-memes"}).set(1)

Lookups of an existing child take no lock. Creating a child takes the
vector's own lock for the insertion only.
"""
from __future__ import annotations

import copy
import threading
from typing import ClassVar, Generic, Iterable, Mapping, Sequence, TypeVar

from mp_metrics.metrics.base import ValueMetric
from mp_metrics.metrics.counter import Counter
from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.errors import UnmatchedLabelsError
from mp_metrics.metrics.gauge import Gauge
from mp_metrics.metrics.opts import MetricOpts
from mp_metrics.metrics.ports import Collector, Metric
from mp_metrics.metrics.untyped import Untyped

M = TypeVar("M", bound=ValueMetric)


class _Children(Generic[M]):
    """Children of one vector, shared by every curried view of it."""

    def __init__(self, desc: Desc, metric_class: type[M]) -> None:
        self.desc = desc
        self._metric_class = metric_class
        self._children: dict[tuple[str, ...], M] = {}
        self._lock = threading.Lock()

    def get_or_create(self, values: tuple[str, ...]) -> M:
        child = self._children.get(values)
        if child is not None:
            return child
        with self._lock:
            child = self._children.get(values)
            if child is None:
                child = self._metric_class(self.desc, values)
                self._children[values] = child
            return child

    def delete(self, values: tuple[str, ...]) -> bool:
        with self._lock:
            return self._children.pop(values, None) is not None

    def snapshot(self) -> list[M]:
        with self._lock:
            return list(self._children.values())

    def clear(self) -> None:
        with self._lock:
            self._children.clear()


class MetricVec(Collector, Generic[M]):
    """Collector of all children of one descriptor, keyed by label values.

    Parameters
    ----------
    opts:
        :class:`MetricOpts` (combined with *variable_labels*) or a ready
        :class:`Desc`.
    variable_labels:
        Label names whose values are chosen per child. Order matters for
        :meth:`get_or_create`.
    """

    metric_class: ClassVar[type[ValueMetric]] = ValueMetric

    def __init__(self, opts: MetricOpts | Desc, variable_labels: Sequence[str] = ()) -> None:
        if isinstance(opts, Desc):
            if variable_labels:
                raise TypeError("variable_labels must not be passed together with a Desc")
            desc = opts
        else:
            desc = opts.describe(variable_labels)
        self._children: _Children[M] = _Children(desc, self.metric_class)  # type: ignore[arg-type]
        # Position in desc.variable_labels -> fixed value, ascending by position.
        self._curried: tuple[tuple[int, str], ...] = ()

    # ------------------------------------------------------------------
    # Label resolution
    # ------------------------------------------------------------------

    @property
    def variable_labels(self) -> tuple[str, ...]:
        """Label names still to be supplied by callers of this view."""
        curried = {i for i, _ in self._curried}
        return tuple(n for i, n in enumerate(self.desc().variable_labels) if i not in curried)

    def _values_from_sequence(self, label_values: Sequence[str]) -> tuple[str, ...]:
        all_labels = self.desc().variable_labels
        if len(label_values) + len(self._curried) != len(all_labels):
            expected = self.variable_labels
            raise UnmatchedLabelsError(
                f"Metric '{self.desc().fq_name}' expects {len(expected)} label value(s), "
                f"got {len(label_values)}",
                expected=expected,
                got=[str(v) for v in label_values],
            )
        if not self._curried:
            return tuple(str(v) for v in label_values)
        remaining = iter(label_values)
        curried = dict(self._curried)
        return tuple(
            curried[i] if i in curried else str(next(remaining))
            for i in range(len(all_labels))
        )

    def _values_from_mapping(self, labels: Mapping[str, str]) -> tuple[str, ...]:
        expected = self.variable_labels
        if set(labels) != set(expected):
            raise UnmatchedLabelsError(
                f"Metric '{self.desc().fq_name}' expects labels {sorted(expected)}, "
                f"got {sorted(labels)}",
                expected=expected,
                got=list(labels),
            )
        return self._values_from_sequence([labels[name] for name in expected])

    # ------------------------------------------------------------------
    # Public contract
    # ------------------------------------------------------------------

    def get_or_create(self, *label_values: str) -> M:
        """Return the child for *label_values*, creating it zero-valued if absent."""
        return self._children.get_or_create(self._values_from_sequence(label_values))

    def get_or_create_by_name(self, labels: Mapping[str, str]) -> M:
        """Like :meth:`get_or_create` but keyed by label name, in any order."""
        return self._children.get_or_create(self._values_from_mapping(labels))

    def delete_by_values(self, *label_values: str) -> bool:
        """Drop the child for *label_values*; return whether one existed."""
        return self._children.delete(self._values_from_sequence(label_values))

    def delete_by_name(self, labels: Mapping[str, str]) -> bool:
        return self._children.delete(self._values_from_mapping(labels))

    def curry(self, labels: Mapping[str, str]) -> MetricVec[M]:
        """Return a view with *labels* fixed, sharing this vector's children.

        Children created through the view are visible from the original.
        """
        all_labels = self.desc().variable_labels
        already = {all_labels[i] for i, _ in self._curried}
        unknown = [n for n in labels if n not in all_labels]
        if unknown:
            raise UnmatchedLabelsError(
                f"Unknown label(s) {sorted(unknown)} while currying '{self.desc().fq_name}'",
                expected=self.variable_labels,
                got=list(labels),
            )
        repeated = [n for n in labels if n in already]
        if repeated:
            raise UnmatchedLabelsError(
                f"Label(s) {sorted(repeated)} of '{self.desc().fq_name}' are already curried",
                expected=self.variable_labels,
                got=list(labels),
            )
        curried = dict(self._curried)
        curried.update((all_labels.index(n), str(v)) for n, v in labels.items())
        view = copy.copy(self)
        view._curried = tuple(sorted(curried.items()))
        return view

    def collect_all(self) -> list[M]:
        """Snapshot of every child, taken under one brief lock."""
        return self._children.snapshot()

    def reset(self) -> None:
        """Delete every child."""
        self._children.clear()

    # ------------------------------------------------------------------
    # Collector
    # ------------------------------------------------------------------

    def desc(self) -> Desc:
        return self._children.desc

    def describe(self) -> Iterable[Desc]:
        return [self._children.desc]

    def collect(self) -> Iterable[Metric]:
        return self.collect_all()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.desc().fq_name!r}, labels={list(self.variable_labels)!r})"


class CounterVec(MetricVec[Counter]):
    metric_class = Counter


class GaugeVec(MetricVec[Gauge]):
    metric_class = Gauge


class UntypedVec(MetricVec[Untyped]):
    metric_class = Untyped


__all__ = ["CounterVec", "GaugeVec", "MetricVec", "UntypedVec"]
