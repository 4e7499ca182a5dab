"""Tests for settings loading and validation."""

from __future__ import annotations

from pathlib import Path
import textwrap

import pytest

from trace_registry.core.settings import SettingsError, load_settings


def _write_yaml(path: Path, content: str) -> None:
    path.write_text(textwrap.dedent(content).strip() + "\n", encoding="utf-8")


def test_load_settings_success(tmp_path: Path) -> None:
    config = """
    registry:
      on_config_mismatch: overwrite
    observability:
      log_level: debug
      structured_logging: true
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    settings = load_settings(settings_path)

    assert settings.registry.on_config_mismatch == "overwrite"
    assert settings.observability.log_level == "DEBUG"
    assert settings.observability.structured_logging is True


def test_defaults_applied(tmp_path: Path) -> None:
    config = """
    registry: {}
    observability:
      log_level: INFO
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    settings = load_settings(settings_path)

    assert settings.registry.on_config_mismatch == "reject"
    assert settings.observability.structured_logging is False


def test_shipped_settings_file_loads() -> None:
    settings = load_settings(Path(__file__).resolve().parents[2] / "config" / "settings.yaml")

    assert settings.registry.on_config_mismatch == "reject"


def test_missing_required_field_raises_error(tmp_path: Path) -> None:
    config = """
    registry:
      on_config_mismatch: reject
    observability:
      structured_logging: false
    """
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, config)

    with pytest.raises(SettingsError, match="observability.log_level"):
        load_settings(settings_path)


def test_missing_section_raises_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.yaml"
    _write_yaml(settings_path, "observability:\n  log_level: INFO\n")

    with pytest.raises(SettingsError, match="Missing required section: registry"):
        load_settings(settings_path)


@pytest.mark.parametrize(
    "config, field",
    [
        ("registry:\n  on_config_mismatch: ignore\nobservability:\n  log_level: INFO\n", "registry.on_config_mismatch"),
        ("registry: {}\nobservability:\n  log_level: LOUD\n", "observability.log_level"),
        ("registry: {}\nobservability:\n  log_level: INFO\n  structured_logging: 'yes'\n", "observability.structured_logging"),
    ],
)
def test_invalid_values_raise_error(tmp_path: Path, config: str, field: str) -> None:
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text(config, encoding="utf-8")

    with pytest.raises(SettingsError, match=field):
        load_settings(settings_path)


def test_missing_file_raises_error(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="not found"):
        load_settings(tmp_path / "nope.yaml")


def test_invalid_yaml_raises_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text("registry: [unclosed\n", encoding="utf-8")

    with pytest.raises(SettingsError, match="Invalid YAML"):
        load_settings(settings_path)


def test_non_mapping_root_raises_error(tmp_path: Path) -> None:
    settings_path = tmp_path / "settings.yaml"
    settings_path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(SettingsError, match="expected mapping"):
        load_settings(settings_path)
