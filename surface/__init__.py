"""
Rust crate public-surface extraction engine.

Tree-sitter-based module walker that turns a crate's public API (consts,
functions, structs, enums, traits, inherent methods and exported macros)
into a deterministic, schema-tagged JSON document.
"""

from surface.models import (
    ExtractedEnum,
    ExtractedField,
    ExtractedFunction,
    ExtractedStruct,
    ExtractedTrait,
    ExtractOutput,
    ModuleRecord,
    PendingMethods,
    SkipIssue,
)
from surface.errors import (
    ExtractionError,
    MissingRootModuleError,
    ModuleParseError,
    ModuleReadError,
    OutputSerializationError,
    UnresolvedModuleError,
    UnsupportedSchemaError,
)
from surface.parser import create_parser, parse_bytes, parse_file, count_error_nodes
from surface.walker import (
    collect_module_file,
    collect_module_items,
    module_base_dir_for_file,
    resolve_child_module_file,
)
from surface.assembler import (
    ExtractionStats,
    assemble_output,
    load_output,
    serialize_output,
    sort_modules,
)
from surface.extractor import (
    extract_crate,
    extract_modules,
    extract_to_dict,
    extract_to_json,
    library_root_for_manifest,
)

__all__ = [
    # Data models
    "ExtractedEnum",
    "ExtractedField",
    "ExtractedFunction",
    "ExtractedStruct",
    "ExtractedTrait",
    "ExtractOutput",
    "ModuleRecord",
    "PendingMethods",
    "SkipIssue",
    # Errors
    "ExtractionError",
    "MissingRootModuleError",
    "ModuleParseError",
    "ModuleReadError",
    "OutputSerializationError",
    "UnresolvedModuleError",
    "UnsupportedSchemaError",
    # Low-level parsing
    "create_parser",
    "parse_bytes",
    "parse_file",
    "count_error_nodes",
    # Module traversal
    "collect_module_file",
    "collect_module_items",
    "module_base_dir_for_file",
    "resolve_child_module_file",
    # Output
    "ExtractionStats",
    "assemble_output",
    "load_output",
    "serialize_output",
    "sort_modules",
    # High-level orchestration
    "extract_crate",
    "extract_modules",
    "extract_to_dict",
    "extract_to_json",
    "library_root_for_manifest",
]
