"""Tests for the command-line entry point."""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch

import run_extractor

FIXTURES = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")

CLEAN_ENV = {"PATH": os.environ.get("PATH", "")}


def run_main(argv, env=None):
    stdout, stderr = io.StringIO(), io.StringIO()
    with patch.dict(os.environ, env or CLEAN_ENV, clear=True):
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                code = run_extractor.main(argv)
            except SystemExit as e:
                code = e.code
    return code, stdout.getvalue(), stderr.getvalue()


class TestUsage(unittest.TestCase):
    """Wrong argument counts print one usage line and exit 1."""

    def test_no_arguments(self):
        """Test that no arguments is a usage error."""
        code, out, err = run_main([])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err, "Usage: rust-surface <manifest-path>\n")

    def test_too_many_arguments(self):
        """Test that two arguments is a usage error."""
        code, out, err = run_main(["a/Cargo.toml", "b/Cargo.toml"])
        self.assertEqual(code, 1)
        self.assertEqual(err.count("\n"), 1)
        self.assertTrue(err.startswith("Usage:"))

    def test_help_flag_is_a_usage_error(self):
        """Test that help flags do not print anything to stdout."""
        for flag in ("--help", "-h"):
            code, out, err = run_main([flag])
            self.assertEqual(code, 1)
            self.assertEqual(out, "")
            self.assertEqual(err, "Usage: rust-surface <manifest-path>\n")


class TestRun(unittest.TestCase):

    def test_success_writes_document(self):
        """Test that a successful run writes only the document."""
        code, out, err = run_main([os.path.join(FIXTURES, "simple", "Cargo.toml")])
        self.assertEqual(code, 0)
        self.assertEqual(err, "")
        self.assertTrue(out.endswith("\n"))
        payload = json.loads(out)
        self.assertEqual(payload["schema"], 1)
        self.assertEqual([m["parts"] for m in payload["modules"]], [[], ["math"]])

    def test_missing_root_is_one_stderr_line(self):
        """Test that a fatal error prints one stderr line and no document."""
        code, out, err = run_main([os.path.join(FIXTURES, "missing_root", "Cargo.toml")])
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertEqual(err.count("\n"), 1)
        self.assertIn("src/lib.rs", err)

    def test_run_report_written(self):
        """Test that a run report is written when configured."""
        with tempfile.TemporaryDirectory() as tmpdir:
            env = dict(CLEAN_ENV, RUST_SURFACE_REPORT_DIR=tmpdir)
            code, _, _ = run_main([os.path.join(FIXTURES, "layout", "Cargo.toml")], env=env)
            self.assertEqual(code, 0)
            reports = os.listdir(tmpdir)
            self.assertEqual(len(reports), 1)
            with open(os.path.join(tmpdir, reports[0]), encoding="utf-8") as f:
                report = json.load(f)
        self.assertEqual(report["status"], "success")
        self.assertEqual(report["stats"]["modules"], 7)

    def test_strict_config_failure(self):
        """Test that a strict settings failure exits 1."""
        env = dict(
            CLEAN_ENV,
            RUST_SURFACE_CONFIG="/nonexistent/settings.yaml",
            STRICT_CONFIG_VALIDATION="1",
        )
        code, out, err = run_main([os.path.join(FIXTURES, "simple", "Cargo.toml")], env=env)
        self.assertEqual(code, 1)
        self.assertEqual(out, "")
        self.assertIn("Settings file not found", err)


if __name__ == "__main__":
    unittest.main()
