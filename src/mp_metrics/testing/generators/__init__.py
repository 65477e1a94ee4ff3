"""Testing generators – Hypothesis strategies."""
from mp_metrics.testing.generators.strategies import (
    delta_strategy,
    label_name_strategy,
    label_names_strategy,
    label_values_strategy,
    metric_name_strategy,
)

__all__ = [
    "delta_strategy",
    "label_name_strategy",
    "label_names_strategy",
    "label_values_strategy",
    "metric_name_strategy",
]
