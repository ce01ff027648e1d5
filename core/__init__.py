"""Core shared utilities: logging context, atomic artifacts, settings."""

from core.structured_logging import (
    configure_structured_logging,
    document_scope,
    get_run_id,
    phase_scope,
    set_run_id,
)
from core.artifacts import (
    atomic_write_text,
    write_json_array,
    write_run_report,
)
from core.settings import (
    ConfigValidationError,
    ToolSettings,
    load_settings,
    resolve_strict_config_validation,
)

__all__ = [
    "configure_structured_logging",
    "document_scope",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "atomic_write_text",
    "write_json_array",
    "write_run_report",
    "ConfigValidationError",
    "ToolSettings",
    "load_settings",
    "resolve_strict_config_validation",
]
