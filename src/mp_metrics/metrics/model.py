"""Metrics – gather-time snapshot model (MetricType, LabelPair, Sample, MetricFamily)."""
from __future__ import annotations

import dataclasses
import enum
from typing import Any


class MetricType(enum.Enum):
    COUNTER = "counter"
    GAUGE = "gauge"
    UNTYPED = "untyped"
    SUMMARY = "summary"
    HISTOGRAM = "histogram"


@dataclasses.dataclass(frozen=True, order=True)
class LabelPair:
    name: str
    value: str


@dataclasses.dataclass(frozen=True)
class Sample:
    """One rendered time series: its labels, its value and an optional timestamp.

    ``labels`` holds const and variable labels together, sorted by name, which
    is all an encoder needs to reproduce the series deterministically.
    """

    labels: tuple[LabelPair, ...]
    value: float
    timestamp_ms: int | None = None

    @property
    def label_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.labels)

    @property
    def label_values(self) -> tuple[str, ...]:
        return tuple(p.value for p in self.labels)

    def label_dict(self) -> dict[str, str]:
        return {p.name: p.value for p in self.labels}

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"labels": self.label_dict(), "value": self.value}
        if self.timestamp_ms is not None:
            payload["timestamp_ms"] = self.timestamp_ms
        return payload


@dataclasses.dataclass(frozen=True)
class MetricFamily:
    """All samples gathered under one metric name."""

    name: str
    help: str
    type: MetricType
    samples: tuple[Sample, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "help": self.help,
            "type": self.type.value,
            "samples": [s.to_dict() for s in self.samples],
        }


__all__ = ["LabelPair", "MetricFamily", "MetricType", "Sample"]
