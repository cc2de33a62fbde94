"""Unit tests for config settings, loaders and ExportSettings."""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import pytest

from exportkit.application.export import ExportSettings
from exportkit.application.export.limits import MAX_DATA_ROWS_PER_SHEET
from exportkit.config import (
    ConfigError,
    EnvSettingsLoader,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    Settings,
    SettingsFactory,
)


# ---------------------------------------------------------------------------
# Settings classes used across tests
# ---------------------------------------------------------------------------


@dataclass
class RequiredSettings(Settings):
    _prefix: ClassVar[str] = "REQ"
    api_key: str  # no default → required
    retries: int = 3


# ---------------------------------------------------------------------------
# ExportSettings defaults & validation
# ---------------------------------------------------------------------------


class TestExportSettings:
    def test_defaults(self) -> None:
        settings = ExportSettings()
        assert settings.max_rows_per_book == MAX_DATA_ROWS_PER_SHEET
        assert settings.max_rows_per_sheet == MAX_DATA_ROWS_PER_SHEET
        assert settings.max_rows_per_fetch == 10_000
        assert settings.max_parallel_books == 1
        assert settings.storage == "memory"
        assert settings.csv_delimiter == ","
        assert settings.strict_fields is False

    @pytest.mark.parametrize(
        "field_name", ["max_rows_per_book", "max_rows_per_fetch", "max_rows_per_sheet", "max_parallel_books"]
    )
    def test_limits_must_be_positive(self, field_name: str) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            ExportSettings(**{field_name: 0})
        assert exc_info.value.field_name == field_name
        assert exc_info.value.setting_name == f"EXPORTS_{field_name.upper()}"

    def test_sheet_limit_capped(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ExportSettings(max_rows_per_sheet=MAX_DATA_ROWS_PER_SHEET + 1)

    def test_unknown_storage(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            ExportSettings(storage="s3")
        assert exc_info.value.setting_name == "EXPORTS_STORAGE"
        assert exc_info.value.reason == "expected one of 'memory', 'file'"

    def test_delimiter_single_char(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ExportSettings(csv_delimiter=";;")

    def test_blank_sheet_prefix(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            ExportSettings(sheet_name_prefix=" ")

    def test_invalid_value_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            ExportSettings(storage="nope")


# ---------------------------------------------------------------------------
# EnvSettingsLoader
# ---------------------------------------------------------------------------


class TestEnvSettingsLoader:
    def test_reads_prefixed_variables(self) -> None:
        environ = {
            "EXPORTS_MAX_ROWS_PER_BOOK": "5000",
            "EXPORTS_CSV_BOM": "true",
            "EXPORTS_STORAGE": "file",
            "EXPORTS_WORK_DIRECTORY": "/var/exports",
        }
        settings = EnvSettingsLoader(environ).load(ExportSettings)
        assert settings.max_rows_per_book == 5000
        assert settings.csv_bom is True
        assert settings.storage == "file"
        assert settings.work_directory == "/var/exports"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("EXPORTS_MAX_PARALLEL_BOOKS", "4")
        assert EnvSettingsLoader().load(ExportSettings).max_parallel_books == 4

    @pytest.mark.parametrize("falsy", ["false", "0", "no", "off"])
    def test_bool_false(self, falsy: str) -> None:
        settings = EnvSettingsLoader({"EXPORTS_STRICT_FIELDS": falsy}).load(ExportSettings)
        assert settings.strict_fields is False

    def test_defaults_when_absent(self) -> None:
        assert EnvSettingsLoader({}).load(ExportSettings) == ExportSettings()

    def test_unparseable_int(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"EXPORTS_MAX_ROWS_PER_FETCH": "lots"}).load(ExportSettings)
        assert exc_info.value.setting_name == "EXPORTS_MAX_ROWS_PER_FETCH"

    def test_validation_error_propagates(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"EXPORTS_MAX_ROWS_PER_BOOK": "0"}).load(ExportSettings)

    def test_missing_required(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            EnvSettingsLoader({}).load(RequiredSettings)
        assert exc_info.value.setting_name == "REQ_API_KEY"
        assert exc_info.value.field_name == "api_key"


# ---------------------------------------------------------------------------
# Settings.env_key
# ---------------------------------------------------------------------------


class TestSettingsEnvKey:
    def test_prefixed(self) -> None:
        assert ExportSettings.env_key("csv_bom") == "EXPORTS_CSV_BOM"

    def test_no_prefix(self) -> None:
        @dataclass
        class Plain(Settings):
            debug: bool = False

        assert Plain.env_key("debug") == "DEBUG"


# ---------------------------------------------------------------------------
# SettingsFactory
# ---------------------------------------------------------------------------


class TestSettingsFactory:
    def test_no_loaders_uses_defaults(self) -> None:
        assert SettingsFactory.create(ExportSettings) == ExportSettings()

    def test_overrides_win(self) -> None:
        loader = EnvSettingsLoader({"EXPORTS_MAX_ROWS_PER_FETCH": "50"})
        settings = SettingsFactory.create(ExportSettings, [loader], {"max_rows_per_fetch": 25})
        assert settings.max_rows_per_fetch == 25

    def test_later_loader_wins(self) -> None:
        first = EnvSettingsLoader({"EXPORTS_CSV_DELIMITER": ";"})
        second = EnvSettingsLoader({"EXPORTS_CSV_DELIMITER": "|"})
        assert SettingsFactory.create(ExportSettings, [first, second]).csv_delimiter == "|"

    def test_loader_missing_required_is_skipped(self) -> None:
        settings = SettingsFactory.create(
            RequiredSettings,
            [EnvSettingsLoader({})],
            {"api_key": "secret"},
        )
        assert settings.api_key == "secret"
        assert settings.retries == 3

    def test_missing_after_merge(self) -> None:
        with pytest.raises(MissingRequiredSettingError) as exc_info:
            SettingsFactory.create(RequiredSettings, [EnvSettingsLoader({})])
        assert exc_info.value.setting_name == "REQ_API_KEY"

    def test_invalid_override(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            SettingsFactory.create(ExportSettings, overrides={"storage": "tape"})

    def test_unknown_field_is_config_error(self) -> None:
        with pytest.raises(ConfigError):
            SettingsFactory.create(ExportSettings, overrides={"colour": "blue"})
