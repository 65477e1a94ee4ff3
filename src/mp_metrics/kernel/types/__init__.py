"""Kernel value types."""

from mp_metrics.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
