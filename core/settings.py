"""Tool settings loading and validation.

Environment variables are loaded from a .env file at module import time via
python-dotenv. Settings come from an optional YAML/JSON file and the
``ARSENAL_*`` environment overrides. In non-strict mode a missing
or malformed file logs a warning and falls back to defaults; strict mode
raises ``ConfigValidationError`` instead.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from extraction.config import CONFIG_EXTENSIONS, DEFAULT_SECTION_KEYWORD

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Load .env file (idempotent; does nothing if already loaded or missing)
# ---------------------------------------------------------------------------
load_dotenv()

DEFAULT_SETTINGS_PATH: str = "arsenal.yml"


class ConfigValidationError(RuntimeError):
    """Raised when strict settings validation fails."""


@dataclass(frozen=True)
class ToolSettings:
    """Resolved settings shared by the command-line tools."""

    section_keyword: str = DEFAULT_SECTION_KEYWORD
    extra_excluded_classes: frozenset[str] = frozenset()
    config_extensions: frozenset[str] = field(
        default_factory=lambda: frozenset(CONFIG_EXTENSIONS)
    )
    data_dir: str = "data_arsenal"
    loadouts_dir: str = "data_loadouts"
    output_dir: str = "output"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def _fail(msg: str, strict: bool, exc: Exception | None = None) -> None:
    if strict:
        raise ConfigValidationError(msg) from exc
    logger.warning("%s; continuing with defaults", msg)


def load_settings_payload(path: str, strict: bool = False) -> dict[str, Any]:
    """Load and parse a settings file.

    In non-strict mode this returns an empty dict on read/parse failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    settings_path = Path(path)
    try:
        text = settings_path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        _fail(f"Settings file not found: {path}", strict, exc)
        return {}

    try:
        if settings_path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = yaml.safe_load(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        _fail(f"Failed to parse settings at {path}: {exc}", strict, exc)
        return {}

    if payload is None:
        _fail(f"Settings file is empty: {path}", strict)
        return {}

    if not isinstance(payload, dict):
        _fail(f"Unexpected settings payload type: {type(payload).__name__}", strict)
        return {}

    return payload


def _string_set(payload: dict[str, Any], key: str, strict: bool) -> frozenset[str] | None:
    raw = payload.get(key)
    if raw is None:
        return None
    if not isinstance(raw, list):
        _fail(f"settings.{key} must be a list", strict)
        return None
    values = [str(item).strip() for item in raw]
    if any(not value for value in values):
        _fail(f"settings.{key} contains an empty entry", strict)
        return None
    return frozenset(values)


def parse_settings(payload: dict[str, Any], strict: bool = False) -> ToolSettings:
    """Build ``ToolSettings`` from a parsed payload, validating field types."""
    settings = ToolSettings()
    updates: dict[str, Any] = {}

    if "section_keyword" in payload:
        raw = payload["section_keyword"]
        # Empty/null keyword disables the section restriction
        updates["section_keyword"] = "" if raw is None else str(raw).strip()

    excluded = _string_set(payload, "extra_excluded_classes", strict)
    if excluded is not None:
        updates["extra_excluded_classes"] = excluded

    extensions = _string_set(payload, "config_extensions", strict)
    if extensions is not None:
        normalized = set()
        for ext in extensions:
            normalized.add(ext.lower() if ext.startswith(".") else f".{ext.lower()}")
        updates["config_extensions"] = frozenset(normalized)

    for key in ("data_dir", "loadouts_dir", "output_dir"):
        if key not in payload:
            continue
        value = str(payload[key] or "").strip()
        if not value:
            _fail(f"settings.{key} must be a non-empty path", strict)
            continue
        updates[key] = value

    unknown = set(payload) - {
        "section_keyword",
        "extra_excluded_classes",
        "config_extensions",
        "data_dir",
        "loadouts_dir",
        "output_dir",
    }
    if unknown:
        logger.warning("Ignoring unknown settings keys: %s", ", ".join(sorted(unknown)))

    return replace(settings, **updates)


def load_settings(path: str | None = None, strict: bool | None = None) -> ToolSettings:
    """Load tool settings with environment overrides applied.

    Args:
        path: Settings file. Defaults to ``ARSENAL_SETTINGS_PATH`` or
            ``arsenal.yml``. A missing default file is not an error.
        strict: Strict validation; defaults to ``STRICT_CONFIG_VALIDATION``.

    Returns:
        Resolved ``ToolSettings``.
    """
    if strict is None:
        strict = resolve_strict_config_validation(default=False)

    explicit = path is not None or os.getenv("ARSENAL_SETTINGS_PATH") is not None
    resolved_path = path or os.getenv("ARSENAL_SETTINGS_PATH") or DEFAULT_SETTINGS_PATH

    if not explicit and not os.path.isfile(resolved_path):
        payload: dict[str, Any] = {}
    else:
        payload = load_settings_payload(resolved_path, strict=strict)

    settings = parse_settings(payload, strict=strict)

    env_overrides: dict[str, Any] = {}
    for key, env_name in (
        ("data_dir", "ARSENAL_DATA_DIR"),
        ("loadouts_dir", "ARSENAL_LOADOUTS_DIR"),
        ("output_dir", "ARSENAL_OUTPUT_DIR"),
    ):
        value = os.getenv(env_name, "").strip()
        if value:
            env_overrides[key] = value
    if env_overrides:
        settings = replace(settings, **env_overrides)

    logger.debug("Resolved settings: %s", settings)
    return settings
