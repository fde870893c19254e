"""
Configuration constants for Rust public-surface extraction.

Defines the tree-sitter node type strings, module layout conventions and
output sentinels used by the extractor.
"""

from typing import FrozenSet, Set

# Output contract version
SCHEMA_VERSION: int = 1

# Crate layout
LIBRARY_ROOT_PARTS: tuple = ("src", "lib.rs")
RUST_EXTENSION: str = ".rs"
NESTED_MODULE_FILE: str = "mod.rs"

# Files that resolve child modules from their own directory
MODULE_ROOT_FILES: FrozenSet[str] = frozenset({"mod.rs", "lib.rs", "main.rs"})

# Item node types
MOD_ITEM: str = "mod_item"
CONST_ITEM: str = "const_item"
FUNCTION_ITEM: str = "function_item"
FUNCTION_SIGNATURE_ITEM: str = "function_signature_item"
STRUCT_ITEM: str = "struct_item"
ENUM_ITEM: str = "enum_item"
TRAIT_ITEM: str = "trait_item"
IMPL_ITEM: str = "impl_item"
MACRO_DEFINITION: str = "macro_definition"
MACRO_INVOCATION: str = "macro_invocation"
ASSOCIATED_TYPE: str = "associated_type"

VISIBILITY_MODIFIER: str = "visibility_modifier"

# Nodes that sit between items but are not items themselves
ATTRIBUTE_NODES: Set[str] = {
    "attribute_item",
    "inner_attribute_item",
}
COMMENT_NODES: Set[str] = {
    "line_comment",
    "block_comment",
}

# Stray `;` left after a macro call in item position
EMPTY_STATEMENT: str = "empty_statement"

# Struct / variant bodies
NAMED_FIELDS: str = "field_declaration_list"
TUPLE_FIELDS: str = "ordered_field_declaration_list"
FIELD_DECLARATION: str = "field_declaration"
ENUM_VARIANT: str = "enum_variant"

# Trait members extracted as methods
TRAIT_METHOD_TYPES: Set[str] = {
    FUNCTION_SIGNATURE_ITEM,
    FUNCTION_ITEM,
}

# Generic parameter node types (older and newer tree-sitter-rust grammars)
LIFETIME_PARAM_TYPES: Set[str] = {"lifetime", "lifetime_parameter"}
CONST_PARAM_TYPES: Set[str] = {"const_parameter"}
TYPE_PARAM_TYPES: Set[str] = {
    "type_identifier",
    "type_parameter",
    "constrained_type_parameter",
    "optional_type_parameter",
}

# Parameter node types
SELF_PARAMETER: str = "self_parameter"
PARAMETER: str = "parameter"
PLAIN_PATTERN_TYPES: Set[str] = {"identifier"}

# Impl self types that name a nominal type
NOMINAL_TYPE_NODES: Set[str] = {
    "type_identifier",
    "scoped_type_identifier",
    "generic_type",
    "primitive_type",
}

# Tokens rendered verbatim even though tree-sitter splits them further
ATOMIC_TOKEN_NODES: Set[str] = {
    "lifetime",
    "string_literal",
    "raw_string_literal",
    "char_literal",
}

# Attribute path that marks a macro for cross-crate export
MACRO_EXPORT_ATTRIBUTE: str = "macro_export"

# Sentinels
SELF_TYPE_MARKER: str = "self"
RECEIVER_BY_VALUE: str = "self"
RECEIVER_BY_REF: str = "&self"
RECEIVER_BY_MUT_REF: str = "&mut self"
UNSUPPORTED_PARAM_NAME: str = "unsupported"
UNIT_TYPE_TEXT: str = "()"
MACRO_TOKENS_PARAM: str = "tokens"
MACRO_TOKENS_TYPE: str = "Tokens"

# Issue kinds
ISSUE_GENERIC: str = "generic"
ISSUE_PARAM: str = "param"
ISSUE_STRUCT: str = "struct"
ISSUE_ENUM: str = "enum"
ISSUE_TRAIT: str = "trait"
ISSUE_IMPL: str = "impl"
ISSUE_MACRO: str = "macro"
