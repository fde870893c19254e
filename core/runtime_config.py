"""Runtime configuration for the extractor.

Settings come from an optional YAML file named by ``RUST_SURFACE_CONFIG``
and are overridden by individual environment variables. A ``.env`` file is
loaded at import time via python-dotenv; variables already set win.

In non-strict mode a broken settings file is logged and ignored; with
``STRICT_CONFIG_VALIDATION`` enabled it raises ``ConfigValidationError``.

Example settings file::

    log_level: info
    allow_syntax_errors: false
    report_dir: output/run_reports
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from core.structured_logging import parse_log_level

load_dotenv()

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "RUST_SURFACE_CONFIG"
LOG_LEVEL_ENV = "RUST_SURFACE_LOG_LEVEL"
ALLOW_SYNTAX_ERRORS_ENV = "RUST_SURFACE_ALLOW_SYNTAX_ERRORS"
REPORT_DIR_ENV = "RUST_SURFACE_REPORT_DIR"
STRICT_ENV = "STRICT_CONFIG_VALIDATION"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_KNOWN_KEYS = {"log_level", "allow_syntax_errors", "report_dir"}


class ConfigValidationError(RuntimeError):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class ExtractorSettings:
    """Resolved extractor settings.

    Attributes:
        log_level: Root logging level; WARNING keeps successful runs silent.
        allow_syntax_errors: Extract from files with syntax errors instead
            of aborting.
        report_dir: Directory for JSON run reports, or None to skip them.
    """

    log_level: int = logging.WARNING
    allow_syntax_errors: bool = False
    report_dir: Optional[str] = None


def _env_flag(name: str, default: bool = False, env: Mapping[str, str] | None = None) -> bool:
    source = os.environ if env is None else env
    raw = source.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def resolve_strict_config_validation(
    default: bool = False,
    env: Mapping[str, str] | None = None,
) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag(STRICT_ENV, default=default, env=env)


def load_config_file(config_path: str, strict: bool = False) -> dict[str, Any]:
    """Load and parse a YAML settings file.

    In non-strict mode this returns an empty dict on read/parse failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Settings file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except yaml.YAMLError as exc:
        msg = f"Failed to parse settings YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        msg = f"Unexpected settings payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    unknown = sorted(set(payload) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown settings keys in {config_path}: {', '.join(unknown)}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring them", msg)
    return {k: v for k, v in payload.items() if k in _KNOWN_KEYS}


def load_settings(env: Mapping[str, str] | None = None) -> ExtractorSettings:
    """Resolve settings from the optional YAML file and environment overrides."""
    source = os.environ if env is None else env
    strict = resolve_strict_config_validation(env=source)

    values: dict[str, Any] = {}
    config_path = source.get(CONFIG_PATH_ENV)
    if config_path:
        values.update(load_config_file(config_path, strict=strict))

    if source.get(LOG_LEVEL_ENV):
        values["log_level"] = source[LOG_LEVEL_ENV]
    if source.get(ALLOW_SYNTAX_ERRORS_ENV) is not None:
        values["allow_syntax_errors"] = _env_flag(ALLOW_SYNTAX_ERRORS_ENV, env=source)
    if source.get(REPORT_DIR_ENV):
        values["report_dir"] = source[REPORT_DIR_ENV]

    raw_level = values.get("log_level")
    if raw_level not in (None, "") and parse_log_level(raw_level, default=-1) == -1:
        msg = f"Unknown log level {raw_level!r}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; using WARNING", msg)
    level = parse_log_level(raw_level)

    report_dir = values.get("report_dir")
    return ExtractorSettings(
        log_level=level,
        allow_syntax_errors=_as_bool(values.get("allow_syntax_errors", False)),
        report_dir=str(report_dir) if report_dir else None,
    )
