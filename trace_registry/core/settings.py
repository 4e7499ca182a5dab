"""Settings loading and validation.

This module provides a minimal, type-safe configuration loader for the registry.

Design principles:
- Fail-fast: missing required fields raise a readable error that includes field path
- No side effects: this module only parses/validates configuration
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Sequence

import yaml

from trace_registry.core.trace.registry import MISMATCH_POLICIES, MISMATCH_REJECT

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(ValueError):
    """Raised when settings are missing or invalid."""


@dataclass(frozen=True)
class RegistrySettings:
    on_config_mismatch: str


@dataclass(frozen=True)
class ObservabilitySettings:
    log_level: str
    structured_logging: bool


@dataclass(frozen=True)
class Settings:
    registry: RegistrySettings
    observability: ObservabilitySettings


def _require_section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = raw.get(key)
    if value is None or not isinstance(value, Mapping):
        raise SettingsError(f"Missing required section: {key}")
    return value


def _require(raw: Mapping[str, Any], key: str, path: str) -> Any:
    if key not in raw:
        raise SettingsError(f"Missing required field: {path}")
    return raw[key]


def _as_str(value: Any, path: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"Invalid value for {path}: expected non-empty string")
    return value


def _as_bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise SettingsError(f"Invalid value for {path}: expected bool")
    return value


def _as_choice(value: Any, path: str, choices: Sequence[str], upper: bool = False) -> str:
    text = _as_str(value, path).strip()
    normalized = text.upper() if upper else text.lower()
    if normalized not in choices:
        raise SettingsError(
            f"Invalid value for {path}: '{text}' (expected one of: {', '.join(choices)})"
        )
    return normalized


def validate_settings(settings: Settings) -> None:
    """Validate required fields and basic invariants."""

    if settings.registry.on_config_mismatch not in MISMATCH_POLICIES:
        raise SettingsError("Invalid value for registry.on_config_mismatch")
    if settings.observability.log_level not in LOG_LEVELS:
        raise SettingsError("Invalid value for observability.log_level")


def load_settings(path: str | Path) -> Settings:
    """Load settings from a YAML file."""

    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        raw_obj = yaml.safe_load(settings_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in settings file: {settings_path}") from e

    if raw_obj is None or not isinstance(raw_obj, Mapping):
        raise SettingsError(f"Invalid settings root: expected mapping in {settings_path}")

    registry_raw = _require_section(raw_obj, "registry")
    observability_raw = _require_section(raw_obj, "observability")

    registry = RegistrySettings(
        on_config_mismatch=_as_choice(
            registry_raw.get("on_config_mismatch", MISMATCH_REJECT),
            "registry.on_config_mismatch",
            MISMATCH_POLICIES,
        ),
    )

    observability = ObservabilitySettings(
        log_level=_as_choice(
            _require(observability_raw, "log_level", "observability.log_level"),
            "observability.log_level",
            LOG_LEVELS,
            upper=True,
        ),
        structured_logging=_as_bool(
            observability_raw.get("structured_logging", False),
            "observability.structured_logging",
        ),
    )

    settings = Settings(registry=registry, observability=observability)

    validate_settings(settings)
    return settings
