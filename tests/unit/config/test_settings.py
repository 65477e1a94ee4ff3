"""Unit tests for config settings & validation."""

from dataclasses import dataclass, field
from typing import ClassVar

import pytest

from mp_metrics.config import load_settings
from mp_metrics.config.settings import EnvSettingsLoader, MetricsSettings, Settings
from mp_metrics.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)


# ---------------------------------------------------------------------------
# Concrete settings classes used across tests
# ---------------------------------------------------------------------------


@dataclass
class AppSettings(Settings):
    _prefix: ClassVar[str] = "APP"

    host: str = "localhost"
    port: int = 8080
    debug: bool = False
    allowed_origins: list[str] = field(default_factory=list)


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"

    token: str


@dataclass
class ExplodingSettings(Settings):
    _prefix: ClassVar[str] = "BOOM"

    value: str = "x"

    def _validate(self) -> None:
        raise RuntimeError("cannot build")


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_loads_string(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("APP_HOST", "example.com")
        assert EnvSettingsLoader().load(AppSettings).host == "example.com"

    def test_loads_int(self) -> None:
        settings = EnvSettingsLoader({"APP_PORT": "9000"}).load(AppSettings)
        assert settings.port == 9000

    def test_loads_bool_true(self) -> None:
        for truthy in ("true", "True", "1", "yes", "on"):
            assert EnvSettingsLoader({"APP_DEBUG": truthy}).load(AppSettings).debug is True

    def test_loads_bool_false(self) -> None:
        for falsy in ("false", "False", "0", "no", "off"):
            assert EnvSettingsLoader({"APP_DEBUG": falsy}).load(AppSettings).debug is False

    def test_loads_list(self) -> None:
        environ = {"APP_ALLOWED_ORIGINS": "http://a.com, http://b.com,"}
        settings = EnvSettingsLoader(environ).load(AppSettings)
        assert settings.allowed_origins == ["http://a.com", "http://b.com"]

    def test_defaults_preserved_when_env_absent(self) -> None:
        settings = EnvSettingsLoader({}).load(AppSettings)
        assert settings == AppSettings()

    def test_invalid_int(self) -> None:
        with pytest.raises(InvalidSettingValueError) as excinfo:
            EnvSettingsLoader({"APP_PORT": "eighty"}).load(AppSettings)
        assert excinfo.value.setting_name == "APP_PORT"
        assert excinfo.value.value == "eighty"

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as excinfo:
            EnvSettingsLoader({}).load(RequiredSettings)
        assert excinfo.value.setting_name == "REQ_TOKEN"

    def test_required_present(self) -> None:
        assert EnvSettingsLoader({"REQ_TOKEN": "t"}).load(RequiredSettings).token == "t"

    def test_unexpected_failure_wrapped(self) -> None:
        with pytest.raises(ConfigError) as excinfo:
            EnvSettingsLoader({}).load(ExplodingSettings)
        assert isinstance(excinfo.value.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# MetricsSettings
# ---------------------------------------------------------------------------


class TestMetricsSettings:
    def test_defaults(self) -> None:
        settings = MetricsSettings()
        assert settings.gather_max_workers == 8
        assert settings.gather_timeout_seconds == 0.0
        assert settings.pedantic is False
        assert settings.gather_timeout is None

    def test_timeout_property(self) -> None:
        assert MetricsSettings(gather_timeout_seconds=2.5).gather_timeout == 2.5

    def test_from_environment(self) -> None:
        environ = {
            "MP_METRICS_GATHER_MAX_WORKERS": "3",
            "MP_METRICS_GATHER_TIMEOUT_SECONDS": "0.5",
            "MP_METRICS_PEDANTIC": "yes",
        }
        settings = EnvSettingsLoader(environ).load(MetricsSettings)
        assert settings == MetricsSettings(
            gather_max_workers=3, gather_timeout_seconds=0.5, pedantic=True
        )

    def test_zero_workers_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError) as excinfo:
            MetricsSettings(gather_max_workers=0)
        assert excinfo.value.setting_name == "gather_max_workers"

    def test_negative_timeout_rejected(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            MetricsSettings(gather_timeout_seconds=-1)

    def test_invalid_environment_value_keeps_code(self) -> None:
        with pytest.raises(InvalidSettingValueError) as excinfo:
            EnvSettingsLoader({"MP_METRICS_GATHER_MAX_WORKERS": "0"}).load(MetricsSettings)
        assert excinfo.value.code == "invalid_setting_value"

    def test_load_settings_reads_process_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("MP_METRICS_PEDANTIC", "true")
        assert load_settings().pedantic is True
