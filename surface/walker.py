"""
Module tree traversal.

Starting from the crate root, every public ``mod`` declaration is followed to
its file (or inline body) and the items found there are classified into one
``ModuleRecord`` per module. Files are visited at most once, keyed by their
canonical absolute path.
"""

import logging
import os
from typing import List, Sequence, Set

from tree_sitter import Node

from surface.config import (
    MOD_ITEM,
    MODULE_ROOT_FILES,
    NESTED_MODULE_FILE,
    RUST_EXTENSION,
)
from surface.errors import ModuleReadError, UnresolvedModuleError
from surface.items import classify_item
from surface.models import ModuleRecord
from surface.parser import parse_file
from surface.render import is_public, node_text

logger = logging.getLogger(__name__)


def resolve_child_module_file(base_dir: str, module_name: str) -> str:
    """Locate the file behind ``pub mod <module_name>;``.

    Tries ``<base_dir>/<name>.rs`` first, then ``<base_dir>/<name>/mod.rs``.

    Raises:
        UnresolvedModuleError: If neither file exists.
    """
    direct = os.path.join(base_dir, module_name + RUST_EXTENSION)
    if os.path.exists(direct):
        return direct
    nested = os.path.join(base_dir, module_name, NESTED_MODULE_FILE)
    if os.path.exists(nested):
        return nested
    raise UnresolvedModuleError(
        f"Could not resolve pub mod '{module_name}' from base directory {base_dir}."
    )


def module_base_dir_for_file(file_path: str) -> str:
    """Directory against which a file's own child modules are resolved.

    ``lib.rs``, ``main.rs`` and ``mod.rs`` own their directory; any other
    ``foo.rs`` keeps its children in a sibling ``foo/`` directory.
    """
    parent = os.path.dirname(file_path)
    name = os.path.basename(file_path)
    if name in MODULE_ROOT_FILES:
        return parent
    stem = os.path.splitext(name)[0] or "module"
    return os.path.join(parent, stem)


def collect_module_items(
    file_label: str,
    parts: Sequence[str],
    base_dir: str,
    items: Sequence[Node],
    out: List[ModuleRecord],
    seen_files: Set[str],
    allow_syntax_errors: bool = False,
) -> None:
    """Build the record for one module body and descend into its public children.

    Args:
        file_label: Canonical path of the file the items come from.
        parts: Module path from the crate root.
        base_dir: Directory used to resolve ``pub mod name;`` declarations.
        items: Top-level item nodes of the module body.
        out: Accumulator for every module record produced by the traversal.
        seen_files: Canonical paths already visited.
        allow_syntax_errors: Forwarded to the parser for child files.

    Raises:
        ExtractionError: On the first unresolvable or unreadable child module.
    """
    module = ModuleRecord(file=file_label, parts=list(parts))

    for item in items:
        if item.type != MOD_ITEM:
            classify_item(item, module)
            continue
        if not is_public(item):
            continue

        name = node_text(item.child_by_field_name("name"))
        child_parts = list(parts) + [name]
        body = item.child_by_field_name("body")
        if body is not None:
            collect_module_items(
                file_label,
                child_parts,
                os.path.join(base_dir, name),
                body.named_children,
                out,
                seen_files,
                allow_syntax_errors=allow_syntax_errors,
            )
            continue

        child_file = resolve_child_module_file(base_dir, name)
        collect_module_file(
            child_file,
            child_parts,
            out,
            seen_files,
            allow_syntax_errors=allow_syntax_errors,
        )

    logger.debug(
        "Module %s: %d consts, %d enums, %d structs, %d traits, %d functions, "
        "%d impl groups, %d issues",
        module.path_key or "<root>",
        len(module.consts),
        len(module.enums),
        len(module.structs),
        len(module.traits),
        len(module.functions),
        len(module.pending_methods),
        len(module.issues),
    )
    out.append(module)


def collect_module_file(
    file_path: str,
    parts: Sequence[str],
    out: List[ModuleRecord],
    seen_files: Set[str],
    allow_syntax_errors: bool = False,
) -> None:
    """Parse one module file and collect it, unless it was already visited.

    Raises:
        ModuleReadError: If the file cannot be canonicalized or read.
        ModuleParseError: If the file does not parse.
    """
    try:
        canonical = os.path.realpath(file_path, strict=True)
    except OSError as e:
        raise ModuleReadError(
            f"Failed to canonicalize module path {file_path}: {e}"
        ) from e

    if canonical in seen_files:
        logger.debug("Skipping already visited module file %s", canonical)
        return
    seen_files.add(canonical)

    logger.info("Extracting module %s from %s", "::".join(parts) or "<root>", canonical)
    tree, _ = parse_file(canonical, allow_syntax_errors=allow_syntax_errors)
    collect_module_items(
        canonical,
        parts,
        module_base_dir_for_file(canonical),
        tree.root_node.named_children,
        out,
        seen_files,
        allow_syntax_errors=allow_syntax_errors,
    )
