import json

import pytest

from src.applog.config.logger_settings import (
    KEY_COLUMN_DELIMITER,
    KEY_INCLUDE_LOG_TYPE,
    KEY_NETWORK_FILTERS,
    KEY_ROW_DELIMITER,
    KEY_TARGET,
    KEY_TYPES,
    LoggerSettings,
    SettingsError,
    build_log_manager,
)
from src.applog.sanitize.network_sanitizer import NetworkFilterRule
from src.applog.targets.log_target import TargetKind


def test_defaults() -> None:
    settings = LoggerSettings.from_mapping({})
    assert settings.types == ("developer", "error", "network")
    assert settings.target == ""
    assert settings.column_delimiter == (9,)
    assert settings.row_delimiter == (10,)
    assert settings.include_log_type is True
    assert settings.network_filters == ()


def test_from_mapping_parses_values() -> None:
    settings = LoggerSettings.from_mapping({
        KEY_TYPES: "developer, audit ,error",
        KEY_TARGET: " console ",
        KEY_COLUMN_DELIMITER: "124",
        KEY_ROW_DELIMITER: "13+10",
        KEY_INCLUDE_LOG_TYPE: "false",
        KEY_NETWORK_FILTERS: "token=\\w+\ttoken=<hidden>",
    })
    assert settings.types == ("developer", "audit", "error")
    assert settings.target == "console"
    assert settings.column_delimiter == (124,)
    assert settings.row_delimiter == (13, 10)
    assert settings.include_log_type is False
    assert settings.network_filters == (NetworkFilterRule("token=\\w+", "token=<hidden>"),)


def test_numeric_and_list_values() -> None:
    settings = LoggerSettings.from_mapping({
        KEY_COLUMN_DELIMITER: 9,
        KEY_ROW_DELIMITER: [13, 10],
        KEY_TYPES: ["all"],
        KEY_INCLUDE_LOG_TYPE: True,
    })
    assert settings.column_delimiter == (9,)
    assert settings.row_delimiter == (13, 10)
    assert settings.types == ("all",)


@pytest.mark.parametrize(
    "key,value",
    [
        (KEY_ROW_DELIMITER, "13+lf"),
        (KEY_COLUMN_DELIMITER, "-5"),
        (KEY_INCLUDE_LOG_TYPE, "maybe"),
    ],
)
def test_malformed_values(key, value) -> None:
    with pytest.raises(SettingsError):
        LoggerSettings.from_mapping({key: value})


def test_mapping_round_trip() -> None:
    settings = LoggerSettings(
        types=("error",),
        target="logs/app.log",
        row_delimiter=(13, 10),
        include_log_type=False,
        network_filters=(NetworkFilterRule("a", "b"),),
    )
    assert LoggerSettings.from_mapping(settings.to_mapping()) == settings


def test_from_json_file(tmp_path) -> None:
    path = tmp_path / "logger.json"
    path.write_text(json.dumps({KEY_TYPES: "all", KEY_TARGET: "console"}), encoding="utf-8")
    settings = LoggerSettings.from_json_file(path)
    assert settings.types == ("all",)
    assert settings.target == "console"


def test_from_json_file_errors(tmp_path) -> None:
    with pytest.raises(SettingsError):
        LoggerSettings.from_json_file(tmp_path / "missing.json")

    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(SettingsError):
        LoggerSettings.from_json_file(path)


def test_build_log_manager_applies_settings(tmp_path) -> None:
    log_path = tmp_path / "app.log"
    settings = LoggerSettings.from_mapping({
        KEY_TYPES: "error",
        KEY_TARGET: str(log_path),
        KEY_ROW_DELIMITER: "13+10",
        KEY_INCLUDE_LOG_TYPE: "no",
    })
    manager = build_log_manager(settings)

    assert manager.get_types() == ["error"]
    assert manager.get_target_kind() == TargetKind.FILE
    assert manager.log("ignored").ok
    assert manager.log("kept", "error").written
    assert log_path.read_bytes().decode("utf-8").endswith("]\tkept\r\n")


def test_build_log_manager_without_settings_is_unconfigured() -> None:
    manager = build_log_manager()
    assert manager.get_target() == ""
    assert manager.get_types() == ["developer", "error", "network"]
