"""Core shared utilities: logging, runtime configuration and run artifacts."""

from core.structured_logging import (
    configure_structured_logging,
    get_phase,
    get_run_id,
    parse_log_level,
    phase_scope,
    set_run_id,
)
from core.runtime_config import (
    ConfigValidationError,
    ExtractorSettings,
    load_config_file,
    load_settings,
    resolve_strict_config_validation,
)
from core.run_artifacts import build_extraction_report, write_run_report

__all__ = [
    "configure_structured_logging",
    "get_phase",
    "get_run_id",
    "parse_log_level",
    "phase_scope",
    "set_run_id",
    "ConfigValidationError",
    "ExtractorSettings",
    "load_config_file",
    "load_settings",
    "resolve_strict_config_validation",
    "build_extraction_report",
    "write_run_report",
]
