"""Kernel error hierarchy.

Hierarchy::

    BaseError
    ├── DomainError          misuse of the instrumentation model
    │   └── MetricsError     (mp_metrics.metrics.errors)
    └── ApplicationError     cross-cutting concerns (configuration, ...)
        └── ConfigError      (mp_metrics.config.validation)
"""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of the error hierarchy.

    Args:
        message: Human-readable description.
        code: Machine-readable slug (defaults to ``default_code``).
        detail: Arbitrary extra context (serialisable dict).
        cause: Original exception that triggered this error.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = detail or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a plain dict (safe for logging and scrape error pages)."""
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload


class DomainError(BaseError):
    """The instrumentation model was used in a way it does not allow."""

    default_code = "domain_error"


class ApplicationError(BaseError):
    """Cross-cutting concern outside the metric model itself."""

    default_code = "application_error"


__all__ = ["ApplicationError", "BaseError", "DomainError"]
