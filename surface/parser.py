"""
Tree-sitter parser initialization and file parsing utilities.

This module provides functions to initialize the Rust parser and parse
module files.
"""

import logging
from typing import Tuple

import tree_sitter_rust as tsrust
from tree_sitter import Language, Node, Parser, Tree

from surface.errors import ModuleParseError, ModuleReadError

logger = logging.getLogger(__name__)

# Module-level language constant
RUST_LANGUAGE = Language(tsrust.language())


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Rust.

    Returns:
        A Parser instance configured with the Rust language.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"pub fn main() {}")
    """
    parser = Parser(RUST_LANGUAGE)
    logger.debug("Created tree-sitter Rust parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Rust source code.

    Args:
        source: UTF-8 encoded bytes of Rust source code.

    Returns:
        A Tree object representing the parsed syntax tree.

    Raises:
        TypeError: If source is not bytes.

    Example:
        >>> tree = parse_bytes(b"pub const A: i32 = 1;")
        >>> tree.root_node.type
        'source_file'
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    parser = create_parser()
    tree = parser.parse(source)

    logger.debug("Parsed %d bytes of Rust code", len(source))
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack = [tree.root_node]
    while stack:
        node: Node = stack.pop()
        if node.is_error or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def parse_file(file_path: str, allow_syntax_errors: bool = False) -> Tuple[Tree, bytes]:
    """Parse a Rust module file from disk.

    Args:
        file_path: Path to the ``.rs`` file.
        allow_syntax_errors: When False, a tree containing error nodes is
            rejected. When True the partial tree is returned with a warning.

    Returns:
        A tuple of (Tree, source_bytes).

    Raises:
        ModuleReadError: If the file cannot be read or is not valid UTF-8.
        ModuleParseError: If the file contains syntax errors and
            ``allow_syntax_errors`` is False.
    """
    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
        source_bytes.decode("utf-8")
    except OSError as e:
        raise ModuleReadError(f"Failed to read module file {file_path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ModuleReadError(
            f"Failed to read module file {file_path}: not valid UTF-8 ({e.reason})"
        ) from e

    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        error_count = count_error_nodes(tree)
        if not allow_syntax_errors:
            raise ModuleParseError(
                f"Failed to parse Rust module {file_path}: "
                f"{error_count} syntax error node(s)"
            )
        logger.warning(
            "File %s contains syntax errors (%d error nodes); extracting partial tree",
            file_path,
            error_count,
        )

    logger.debug("Successfully parsed file: %s", file_path)
    return tree, source_bytes
