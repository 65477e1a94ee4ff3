"""Testing support – fake collectors and Hypothesis strategies.

Strategies import hypothesis lazily, so importing this package does not
require it.
"""

from mp_metrics.testing.fakes import BlockingCollector, FailingCollector, StaticCollector
from mp_metrics.testing.generators import (
    delta_strategy,
    label_name_strategy,
    label_names_strategy,
    label_values_strategy,
    metric_name_strategy,
)

__all__ = [
    "BlockingCollector",
    "FailingCollector",
    "StaticCollector",
    "delta_strategy",
    "label_name_strategy",
    "label_names_strategy",
    "label_values_strategy",
    "metric_name_strategy",
]
