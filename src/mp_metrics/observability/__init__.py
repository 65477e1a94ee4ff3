"""Observability – logging for the library itself."""

from mp_metrics.observability.logging import ErrorDetailProcessor, JsonLoggerFactory, get_logger

__all__ = ["ErrorDetailProcessor", "JsonLoggerFactory", "get_logger"]
