"""Metrics errors – descriptor, registration, labelling and gather failures."""

from __future__ import annotations

from typing import Any, Sequence

from mp_metrics.kernel.errors import DomainError


class MetricsError(DomainError):
    """Root of every error raised or reported by the metrics layer."""

    default_code = "metrics_error"


class InvalidDescriptorError(MetricsError):
    """A descriptor was built from a malformed name, help text or label set."""

    default_code = "invalid_descriptor"

    def __init__(self, message: str, *, fq_name: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("fq_name", fq_name)
        self.fq_name = fq_name


class DuplicateDescriptorError(MetricsError):
    """A descriptor with the same identity is already registered."""

    default_code = "duplicate_descriptor"

    def __init__(self, message: str, *, fq_name: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("fq_name", fq_name)
        self.fq_name = fq_name


class AlreadyRegisteredError(DuplicateDescriptorError):
    """The very same collector (same descriptor set) is already registered.

    ``existing_collector`` is the instance that holds the registration, so
    callers can reuse it instead of their duplicate.
    """

    default_code = "already_registered"

    def __init__(self, existing_collector: Any, new_collector: Any) -> None:
        super().__init__(
            "Duplicate metrics collector registration attempted",
            detail={"existing": repr(existing_collector)},
        )
        self.existing_collector = existing_collector
        self.new_collector = new_collector


class InconsistentDimensionsError(MetricsError):
    """The same metric name is used with a different label shape."""

    default_code = "inconsistent_dimensions"

    def __init__(self, message: str, *, fq_name: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("fq_name", fq_name)
        self.fq_name = fq_name


class UnmatchedLabelsError(MetricsError):
    """Label values or names do not line up with a vector's variable labels."""

    default_code = "unmatched_labels"

    def __init__(
        self,
        message: str,
        *,
        expected: Sequence[str] = (),
        got: Sequence[str] = (),
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("expected", list(expected))
        self.detail.setdefault("got", list(got))
        self.expected = tuple(expected)
        self.got = tuple(got)


class NegativeCounterDeltaError(MetricsError):
    """A counter was asked to decrease."""

    default_code = "negative_counter_delta"

    def __init__(self, fq_name: str, delta: float) -> None:
        super().__init__(
            f"Counter '{fq_name}' cannot decrease (delta={delta!r})",
            detail={"fq_name": fq_name, "delta": delta},
        )
        self.fq_name = fq_name
        self.delta = delta


class InconsistentMetricError(MetricsError):
    """A collected metric disagrees with its family (help, type, duplicate)."""

    default_code = "inconsistent_metric"

    def __init__(self, message: str, *, fq_name: str = "", **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.detail.setdefault("fq_name", fq_name)
        self.fq_name = fq_name


class CollectorError(MetricsError):
    """A collector raised while being collected."""

    default_code = "collector_error"

    def __init__(self, collector: Any, cause: BaseException) -> None:
        super().__init__(
            f"Collector {collector!r} failed: {cause}",
            detail={"collector": repr(collector)},
            cause=cause,
        )
        self.collector = collector


class GatherTimeoutError(MetricsError):
    """A collector did not finish within the gather timeout."""

    default_code = "gather_timeout"

    def __init__(self, collector: Any, timeout: float) -> None:
        super().__init__(
            f"Collector {collector!r} did not finish within {timeout}s",
            detail={"collector": repr(collector), "timeout_seconds": timeout},
        )
        self.collector = collector
        self.timeout = timeout


class GatherError(MetricsError):
    """Aggregate of every error reported by one gather."""

    default_code = "gather_error"

    def __init__(self, errors: Sequence[MetricsError]) -> None:
        noun = "error" if len(errors) == 1 else "errors"
        super().__init__(
            f"{len(errors)} {noun} occurred during gathering",
            detail={"errors": [e.to_dict() for e in errors]},
        )
        self.errors: list[MetricsError] = list(errors)


__all__ = [
    "AlreadyRegisteredError",
    "CollectorError",
    "DuplicateDescriptorError",
    "GatherError",
    "GatherTimeoutError",
    "InconsistentDimensionsError",
    "InconsistentMetricError",
    "InvalidDescriptorError",
    "MetricsError",
    "NegativeCounterDeltaError",
    "UnmatchedLabelsError",
]
