"""Kernel – framework-agnostic building blocks shared by every layer."""

from mp_metrics.kernel.errors import ApplicationError, BaseError, DomainError
from mp_metrics.kernel.types import Err, Ok, Result

__all__ = ["ApplicationError", "BaseError", "DomainError", "Err", "Ok", "Result"]
