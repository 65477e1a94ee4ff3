"""Config settings – MetricsSettings."""
from __future__ import annotations

import dataclasses

from mp_metrics.config.settings.base import Settings
from mp_metrics.config.validation import InvalidSettingValueError


@dataclasses.dataclass
class MetricsSettings(Settings):
    """Tuning knobs for a :class:`~mp_metrics.registry.Registry`.

    Read from ``MP_METRICS_*`` environment variables by
    :class:`~mp_metrics.config.settings.loaders.EnvSettingsLoader`.
    """

    _prefix: dataclasses.ClassVar[str] = "MP_METRICS"

    gather_max_workers: int = 8
    # 0 disables the bound: gather waits for every collector.
    gather_timeout_seconds: float = 0.0
    pedantic: bool = False

    def _validate(self) -> None:
        if self.gather_max_workers < 1:
            raise InvalidSettingValueError(
                "gather_max_workers", self.gather_max_workers, "must be at least 1"
            )
        if self.gather_timeout_seconds < 0:
            raise InvalidSettingValueError(
                "gather_timeout_seconds", self.gather_timeout_seconds, "must not be negative"
            )

    @property
    def gather_timeout(self) -> float | None:
        return self.gather_timeout_seconds or None


__all__ = ["MetricsSettings"]
