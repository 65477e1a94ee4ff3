"""Metrics – Metric and Collector ports."""
from __future__ import annotations

import abc
from typing import Iterable

from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.model import MetricType, Sample


class Metric(abc.ABC):
    """A single time series that can render itself into a :class:`Sample`."""

    metric_type: MetricType

    @abc.abstractmethod
    def desc(self) -> Desc: ...

    @abc.abstractmethod
    def write(self) -> Sample: ...


class Collector(abc.ABC):
    """Port: anything the registry can describe and collect.

    ``describe`` must return the same descriptors every time it is called.
    ``collect`` may run concurrently with itself and must tolerate that.
    """

    @abc.abstractmethod
    def describe(self) -> Iterable[Desc]: ...

    @abc.abstractmethod
    def collect(self) -> Iterable[Metric]: ...


__all__ = ["Collector", "Metric"]
