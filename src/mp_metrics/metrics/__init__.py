"""Metrics – primitives, vectors, descriptors and the Collector port."""
from mp_metrics.metrics.base import ValueMetric, make_sample
from mp_metrics.metrics.const import ConstMetric, new_const_metric, with_timestamp
from mp_metrics.metrics.counter import Counter
from mp_metrics.metrics.desc import Desc
from mp_metrics.metrics.errors import (
    AlreadyRegisteredError,
    CollectorError,
    DuplicateDescriptorError,
    GatherError,
    GatherTimeoutError,
    InconsistentDimensionsError,
    InconsistentMetricError,
    InvalidDescriptorError,
    MetricsError,
    NegativeCounterDeltaError,
    UnmatchedLabelsError,
)
from mp_metrics.metrics.func import CounterFunc, GaugeFunc, UntypedFunc
from mp_metrics.metrics.gauge import Gauge
from mp_metrics.metrics.model import LabelPair, MetricFamily, MetricType, Sample
from mp_metrics.metrics.opts import MetricOpts, build_fq_name
from mp_metrics.metrics.ports import Collector, Metric
from mp_metrics.metrics.untyped import Untyped
from mp_metrics.metrics.value import AtomicFloat
from mp_metrics.metrics.vec import CounterVec, GaugeVec, MetricVec, UntypedVec

__all__ = [
    "AlreadyRegisteredError",
    "AtomicFloat",
    "Collector",
    "CollectorError",
    "ConstMetric",
    "Counter",
    "CounterFunc",
    "CounterVec",
    "Desc",
    "DuplicateDescriptorError",
    "Gauge",
    "GaugeFunc",
    "GaugeVec",
    "GatherError",
    "GatherTimeoutError",
    "InconsistentDimensionsError",
    "InconsistentMetricError",
    "InvalidDescriptorError",
    "LabelPair",
    "Metric",
    "MetricFamily",
    "MetricOpts",
    "MetricType",
    "MetricVec",
    "MetricsError",
    "NegativeCounterDeltaError",
    "Sample",
    "UnmatchedLabelsError",
    "Untyped",
    "UntypedFunc",
    "UntypedVec",
    "ValueMetric",
    "build_fq_name",
    "make_sample",
    "new_const_metric",
    "with_timestamp",
]
