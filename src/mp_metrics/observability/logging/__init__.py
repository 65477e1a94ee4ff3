"""Observability – structured logging helpers."""
from mp_metrics.observability.logging.factory import JsonLoggerFactory
from mp_metrics.observability.logging.processors import ErrorDetailProcessor, get_logger

__all__ = ["ErrorDetailProcessor", "JsonLoggerFactory", "get_logger"]
