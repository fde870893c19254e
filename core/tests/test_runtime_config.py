"""Tests for runtime settings resolution."""

import logging
import tempfile
import unittest
from pathlib import Path

from core.runtime_config import (
    ConfigValidationError,
    ExtractorSettings,
    load_config_file,
    load_settings,
    resolve_strict_config_validation,
)


class TestRuntimeConfig(unittest.TestCase):
    def _write_settings(self, content: str) -> str:
        handle = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
        handle.write(content)
        handle.flush()
        handle.close()
        self.addCleanup(Path(handle.name).unlink, missing_ok=True)
        return handle.name

    def test_defaults_without_environment(self) -> None:
        self.assertEqual(load_settings(env={}), ExtractorSettings())

    def test_strict_flag(self) -> None:
        self.assertTrue(resolve_strict_config_validation(env={"STRICT_CONFIG_VALIDATION": "true"}))
        self.assertFalse(resolve_strict_config_validation(env={"STRICT_CONFIG_VALIDATION": "0"}))
        self.assertTrue(resolve_strict_config_validation(default=True, env={}))

    def test_load_non_strict_missing_returns_empty(self) -> None:
        payload = load_config_file("/definitely/missing.yaml", strict=False)
        self.assertEqual(payload, {})

    def test_load_strict_missing_raises(self) -> None:
        with self.assertRaises(ConfigValidationError):
            load_config_file("/definitely/missing.yaml", strict=True)

    def test_load_strict_invalid_yaml_raises(self) -> None:
        path = self._write_settings("log_level: [unclosed\n")
        with self.assertRaises(ConfigValidationError):
            load_config_file(path, strict=True)

    def test_unknown_keys_dropped_or_rejected(self) -> None:
        path = self._write_settings("log_level: info\nqdrant_url: http://x\n")
        self.assertEqual(load_config_file(path, strict=False), {"log_level": "info"})
        with self.assertRaises(ConfigValidationError):
            load_config_file(path, strict=True)

    def test_file_values_and_env_overrides(self) -> None:
        path = self._write_settings(
            "log_level: info\nallow_syntax_errors: true\nreport_dir: reports\n"
        )
        settings = load_settings(env={"RUST_SURFACE_CONFIG": path})
        self.assertEqual(settings.log_level, logging.INFO)
        self.assertTrue(settings.allow_syntax_errors)
        self.assertEqual(settings.report_dir, "reports")

        settings = load_settings(
            env={
                "RUST_SURFACE_CONFIG": path,
                "RUST_SURFACE_LOG_LEVEL": "debug",
                "RUST_SURFACE_ALLOW_SYNTAX_ERRORS": "no",
            }
        )
        self.assertEqual(settings.log_level, logging.DEBUG)
        self.assertFalse(settings.allow_syntax_errors)

    def test_unknown_log_level(self) -> None:
        settings = load_settings(env={"RUST_SURFACE_LOG_LEVEL": "chatty"})
        self.assertEqual(settings.log_level, logging.WARNING)
        with self.assertRaises(ConfigValidationError):
            load_settings(
                env={"RUST_SURFACE_LOG_LEVEL": "chatty", "STRICT_CONFIG_VALIDATION": "1"}
            )

    def test_numeric_log_level(self) -> None:
        settings = load_settings(env={"RUST_SURFACE_LOG_LEVEL": "10"})
        self.assertEqual(settings.log_level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
