import pytest

from src.applog.types.log_type_registry import (
    BUILTIN_LOG_TYPES,
    InvalidLogTypeError,
    LogTypeRegistry,
    to_log_type,
)


def test_default_types() -> None:
    registry = LogTypeRegistry()
    assert registry.enabled_types() == ["developer", "error", "network"]


def test_set_types_all_enables_builtins_and_customs() -> None:
    registry = LogTypeRegistry()
    registry.set_types(["all", "zeta", "audit", "audit"])
    assert registry.enabled_types() == sorted(set(BUILTIN_LOG_TYPES) | {"zeta", "audit"})
    assert "all" not in registry.enabled_types()


def test_set_types_without_all_disables_unlisted_builtins() -> None:
    registry = LogTypeRegistry(["all"])
    registry.set_types(["error", "audit"])
    assert registry.enabled_types() == ["audit", "error"]
    assert not registry.is_enabled("developer")
    assert not registry.is_enabled("network")


def test_set_types_drops_previous_customs() -> None:
    registry = LogTypeRegistry(["audit"])
    registry.set_types(["developer"])
    assert registry.enabled_types() == ["developer"]


def test_lookup_is_case_sensitive() -> None:
    registry = LogTypeRegistry(["developer"])
    assert registry.is_enabled("developer")
    assert not registry.is_enabled("Developer")


def test_unknown_type_is_disabled() -> None:
    registry = LogTypeRegistry()
    assert registry.is_enabled("never-registered") is False


def test_add_then_remove_restores_enabled_set() -> None:
    registry = LogTypeRegistry(["developer", "custom"])
    before = registry.enabled_types()
    registry.add_type("extensions")
    assert "extensions" in registry.enabled_types()
    registry.remove_type("extensions")
    assert registry.enabled_types() == before


def test_blank_names_are_skipped_by_set_types() -> None:
    registry = LogTypeRegistry()
    registry.set_types(["", "  ", "error"])
    assert registry.enabled_types() == ["error"]


def test_set_types_splits_comma_separated_string() -> None:
    registry = LogTypeRegistry()
    registry.set_types("developer, error,,audit")
    assert registry.enabled_types() == ["audit", "developer", "error"]
    assert not registry.is_enabled("d")


def test_add_type_rejects_blank_name() -> None:
    registry = LogTypeRegistry()
    with pytest.raises(InvalidLogTypeError):
        registry.add_type("")


def test_to_log_type_keeps_case() -> None:
    assert to_log_type("Audit") == "Audit"
    with pytest.raises(ValueError):
        to_log_type(None)  # type: ignore[arg-type]
