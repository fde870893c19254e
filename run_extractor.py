#!/usr/bin/env python3
"""
Command-line entry point for Rust crate surface extraction.

Reads a crate manifest path, extracts the public API of the library rooted at
``src/lib.rs`` and writes one JSON document to stdout. Any fatal condition
prints a single line to stderr and exits with status 1.

Usage:
    python run_extractor.py path/to/crate/Cargo.toml
    RUST_SURFACE_LOG_LEVEL=info python run_extractor.py Cargo.toml > surface.json

Environment:
    RUST_SURFACE_CONFIG               YAML settings file
    RUST_SURFACE_LOG_LEVEL            log level (default: warning)
    RUST_SURFACE_ALLOW_SYNTAX_ERRORS  extract from files with syntax errors
    RUST_SURFACE_REPORT_DIR           write a JSON run report here
"""

import argparse
import logging
import sys
from typing import List, NoReturn, Optional

from core.run_artifacts import build_extraction_report, write_run_report
from core.runtime_config import ConfigValidationError, ExtractorSettings, load_settings
from core.structured_logging import configure_structured_logging, phase_scope, set_run_id
from surface.assembler import serialize_output
from surface.errors import ExtractionError
from surface.extractor import extract_crate

logger = logging.getLogger(__name__)

PROG = "rust-surface"
USAGE = f"Usage: {PROG} <manifest-path>"


class _UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports misuse as one line and exit status 1."""

    def error(self, message: str) -> NoReturn:
        logger.debug("Invalid invocation: %s", message)
        self.exit(1, USAGE + "\n")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace with ``manifest_path``.
    """
    # no -h/--help: stdout carries only the document
    parser = _UsageArgumentParser(
        prog=PROG,
        usage="%(prog)s <manifest-path>",
        add_help=False,
    )
    parser.add_argument(
        "manifest_path",
        help="Path to the crate's Cargo.toml.",
    )
    return parser.parse_args(argv)


def _report(settings: ExtractorSettings, run_id: str, report: dict) -> None:
    if not settings.report_dir:
        return
    try:
        path = write_run_report(report, run_id=run_id, output_dir=settings.report_dir)
        logger.info("Wrote run report to %s", path)
    except OSError as e:
        logger.warning("Could not write run report to %s: %s", settings.report_dir, e)


def run(manifest_path: str, settings: ExtractorSettings, run_id: str) -> int:
    """Extract ``manifest_path`` and write the document to stdout.

    Returns:
        Process exit status.
    """
    try:
        output, stats = extract_crate(
            manifest_path,
            allow_syntax_errors=settings.allow_syntax_errors,
        )
        with phase_scope("emit"):
            document = serialize_output(output)
    except ExtractionError as e:
        logger.debug("Extraction failed", exc_info=True)
        print(str(e), file=sys.stderr)
        _report(settings, run_id, build_extraction_report(manifest_path, "failed", error=str(e)))
        return 1
    except Exception as e:
        logger.debug("Unexpected extractor failure", exc_info=True)
        print(f"Unexpected extractor failure: {e}", file=sys.stderr)
        _report(settings, run_id, build_extraction_report(manifest_path, "failed", error=str(e)))
        return 1

    sys.stdout.write(document + "\n")
    sys.stdout.flush()
    _report(
        settings,
        run_id,
        build_extraction_report(manifest_path, "success", stats=stats.to_dict()),
    )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the extractor."""
    args = parse_args(argv)

    try:
        settings = load_settings()
    except ConfigValidationError as e:
        print(str(e), file=sys.stderr)
        return 1

    configure_structured_logging(settings.log_level)
    run_id = set_run_id()
    logger.info("Extracting %s (run %s)", args.manifest_path, run_id)
    return run(args.manifest_path, settings, run_id)


if __name__ == "__main__":
    sys.exit(main())
