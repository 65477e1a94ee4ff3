"""Registry – GatherReport."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator

from mp_metrics.metrics.errors import GatherError, MetricsError
from mp_metrics.metrics.model import MetricFamily

__all__ = ["GatherReport"]


@dataclass
class GatherReport:
    """Outcome of one gather: the families that were assembled and every error.

    Unpacks like a pair::

        families, errors = registry.gather()
    """

    families: list[MetricFamily] = field(default_factory=list)
    errors: list[MetricsError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def family(self, name: str) -> MetricFamily | None:
        for family in self.families:
            if family.name == name:
                return family
        return None

    def raise_for_errors(self) -> None:
        """Raise :class:`GatherError` if anything went wrong."""
        if self.errors:
            raise GatherError(self.errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "families": [f.to_dict() for f in self.families],
            "errors": [e.to_dict() for e in self.errors],
        }

    def __iter__(self) -> Iterator[Any]:
        yield self.families
        yield self.errors
