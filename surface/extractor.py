"""
High-level orchestrator for crate surface extraction.

This module provides the main entry points: resolve the library root from a
manifest path, walk the module tree and assemble the output document.
"""

import logging
import os
from typing import Any, Dict, List, Set, Tuple

from core.structured_logging import phase_scope
from surface.assembler import ExtractionStats, assemble_output, serialize_output
from surface.config import LIBRARY_ROOT_PARTS
from surface.errors import MissingRootModuleError
from surface.models import ExtractOutput, ModuleRecord
from surface.walker import collect_module_file

logger = logging.getLogger(__name__)


def library_root_for_manifest(manifest_path: str) -> str:
    """Return ``<crate root>/src/lib.rs`` for a ``Cargo.toml`` path.

    Raises:
        MissingRootModuleError: If the library root does not exist.
    """
    crate_root = os.path.dirname(manifest_path)
    root_file = os.path.join(crate_root, *LIBRARY_ROOT_PARTS)
    if not os.path.isfile(root_file):
        raise MissingRootModuleError(
            f"Missing library root {root_file} (expected src/lib.rs)."
        )
    return root_file


def extract_modules(
    manifest_path: str,
    allow_syntax_errors: bool = False,
) -> List[ModuleRecord]:
    """Walk the crate's module tree and return unordered module records.

    Args:
        manifest_path: Path to the crate's ``Cargo.toml``.
        allow_syntax_errors: Extract from partially parsed files instead of
            failing on syntax errors.

    Raises:
        ExtractionError: On the first fatal structural problem.
    """
    with phase_scope("resolve"):
        root_file = library_root_for_manifest(manifest_path)
        logger.info("Library root: %s", os.path.abspath(root_file))

    modules: List[ModuleRecord] = []
    seen_files: Set[str] = set()
    with phase_scope("extract"):
        collect_module_file(
            root_file,
            [],
            modules,
            seen_files,
            allow_syntax_errors=allow_syntax_errors,
        )
    logger.info("Visited %d files, %d modules", len(seen_files), len(modules))
    return modules


def extract_crate(
    manifest_path: str,
    allow_syntax_errors: bool = False,
) -> Tuple[ExtractOutput, ExtractionStats]:
    """Extract the public surface of a crate.

    Example:
        >>> output, stats = extract_crate("path/to/crate/Cargo.toml")
        >>> [m.parts for m in output.modules]
        [[], ['math']]
    """
    modules = extract_modules(manifest_path, allow_syntax_errors=allow_syntax_errors)
    with phase_scope("assemble"):
        output = assemble_output(modules)
        stats = ExtractionStats.from_modules(output.modules)
    logger.info("Extraction complete: %s", stats)
    return output, stats


def extract_to_dict(manifest_path: str, allow_syntax_errors: bool = False) -> Dict[str, Any]:
    """Extract a crate and return the JSON-ready document."""
    output, _ = extract_crate(manifest_path, allow_syntax_errors=allow_syntax_errors)
    return output.to_dict()


def extract_to_json(manifest_path: str, allow_syntax_errors: bool = False) -> str:
    """Extract a crate and return the serialized document."""
    output, _ = extract_crate(manifest_path, allow_syntax_errors=allow_syntax_errors)
    with phase_scope("emit"):
        return serialize_output(output)
