"""
Per-item classification for one module body.

Every top-level item of a file (or of an inline ``mod`` block) is filtered by
visibility and dispatched to the matching handler. Handlers append extracted
records to the module and report unsupported constructs as issues on it.
"""

import logging
from typing import List, Optional

from tree_sitter import Node

from surface.config import (
    ASSOCIATED_TYPE,
    ATTRIBUTE_NODES,
    COMMENT_NODES,
    CONST_ITEM,
    EMPTY_STATEMENT,
    ENUM_ITEM,
    ENUM_VARIANT,
    FIELD_DECLARATION,
    FUNCTION_ITEM,
    IMPL_ITEM,
    ISSUE_ENUM,
    ISSUE_MACRO,
    ISSUE_STRUCT,
    ISSUE_TRAIT,
    MACRO_DEFINITION,
    MACRO_EXPORT_ATTRIBUTE,
    MACRO_INVOCATION,
    MACRO_TOKENS_PARAM,
    MACRO_TOKENS_TYPE,
    NAMED_FIELDS,
    STRUCT_ITEM,
    TRAIT_ITEM,
    TRAIT_METHOD_TYPES,
    TUPLE_FIELDS,
)
from surface.impls import collect_impl
from surface.models import (
    ExtractedEnum,
    ExtractedField,
    ExtractedFunction,
    ExtractedStruct,
    ExtractedTrait,
    ModuleRecord,
)
from surface.render import (
    is_public,
    node_text,
    render_bounds,
    render_tokens,
    render_type,
)
from surface.signatures import collect_type_params, extract_signature

logger = logging.getLogger(__name__)


def preceding_attributes(node: Node) -> List[Node]:
    """Collect the ``#[...]`` attributes written directly above ``node``.

    Tree-sitter keeps outer attributes as sibling nodes, so this walks
    backward over attributes and comments until the previous item.
    """
    attributes = []
    sibling = node.prev_named_sibling
    while sibling is not None and (
        sibling.type in ATTRIBUTE_NODES or sibling.type in COMMENT_NODES
    ):
        if sibling.type == "attribute_item":
            attributes.append(sibling)
        sibling = sibling.prev_named_sibling
    attributes.reverse()
    return attributes


def attribute_path(attribute_item: Node) -> str:
    """Return the path of an attribute (``macro_export`` for ``#[macro_export(...)]``)."""
    for child in attribute_item.named_children:
        if child.type == "attribute":
            path = child.named_children[0] if child.named_children else None
            return render_tokens(path)
    return ""


def has_macro_export(node: Node) -> bool:
    return any(
        attribute_path(attr) == MACRO_EXPORT_ATTRIBUTE
        for attr in preceding_attributes(node)
    )


def _first_child_of_type(node: Node, node_type: str) -> Optional[Node]:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def extract_const(node: Node) -> ExtractedField:
    return ExtractedField(
        name=node_text(node.child_by_field_name("name")),
        type_text=render_type(node.child_by_field_name("type")),
    )


def extract_struct(node: Node, module: ModuleRecord) -> ExtractedStruct:
    """Extract a struct with its public named fields.

    Tuple structs are emitted without fields plus one ``struct`` issue;
    unit structs simply have no fields.
    """
    name = node_text(node.child_by_field_name("name"))
    type_params = collect_type_params(
        node.child_by_field_name("type_parameters"), module, "Struct", name
    )
    fields: List[ExtractedField] = []

    named = _first_child_of_type(node, NAMED_FIELDS)
    if named is not None:
        for decl in named.named_children:
            if decl.type != FIELD_DECLARATION or not is_public(decl):
                continue
            fields.append(
                ExtractedField(
                    name=node_text(decl.child_by_field_name("name")),
                    type_text=render_type(decl.child_by_field_name("type")),
                )
            )
    elif _first_child_of_type(node, TUPLE_FIELDS) is not None:
        module.add_issue(
            ISSUE_STRUCT,
            name,
            "Tuple structs are not representable as facade class fields and "
            "were emitted without fields.",
        )

    return ExtractedStruct(name=name, type_params=type_params, fields=fields)


def extract_enum(node: Node, module: ModuleRecord) -> ExtractedEnum:
    """Extract an enum as its ordered variant names.

    Variants carrying tuple or struct payloads keep their name and add one
    ``enum`` issue each.
    """
    name = node_text(node.child_by_field_name("name"))
    type_params = collect_type_params(
        node.child_by_field_name("type_parameters"), module, "Enum", name
    )
    variants: List[str] = []

    body = node.child_by_field_name("body")
    for variant in body.named_children if body is not None else []:
        if variant.type != ENUM_VARIANT:
            continue
        variant_name = node_text(variant.child_by_field_name("name"))
        has_payload = any(
            child.type in (NAMED_FIELDS, TUPLE_FIELDS) for child in variant.children
        )
        if has_payload:
            module.add_issue(
                ISSUE_ENUM,
                variant_name,
                "Enum variants with payload fields are currently represented as "
                "unit variants in generated facades.",
            )
        variants.append(variant_name)

    return ExtractedEnum(name=name, type_params=type_params, variants=variants)


def extract_trait(node: Node, module: ModuleRecord) -> ExtractedTrait:
    """Extract a trait's generics, associated types, supertraits and methods."""
    name = node_text(node.child_by_field_name("name"))
    type_params = collect_type_params(
        node.child_by_field_name("type_parameters"), module, "Trait", name
    )
    methods: List[ExtractedFunction] = []

    body = node.child_by_field_name("body")
    for member in body.named_children if body is not None else []:
        if member.type in ATTRIBUTE_NODES or member.type in COMMENT_NODES:
            continue
        if member.type == EMPTY_STATEMENT:
            # trailing `;` of a member macro call
            continue
        if member.type in TRAIT_METHOD_TYPES:
            methods.append(extract_signature(member, module))
        elif member.type == ASSOCIATED_TYPE:
            assoc = node_text(member.child_by_field_name("name"))
            if assoc and assoc not in type_params:
                type_params.append(assoc)
        else:
            module.add_issue(
                ISSUE_TRAIT,
                render_tokens(member),
                "Unsupported trait member kind was skipped.",
            )

    return ExtractedTrait(
        name=name,
        type_params=type_params,
        super_traits=render_bounds(node.child_by_field_name("bounds")),
        methods=methods,
    )


def macro_stub(name: str) -> ExtractedFunction:
    """Opaque function record standing in for an exported ``macro_rules!``."""
    return ExtractedFunction(
        name=name,
        type_params=[],
        params=[ExtractedField(MACRO_TOKENS_PARAM, MACRO_TOKENS_TYPE)],
        return_type=MACRO_TOKENS_TYPE,
    )


def _classify_exported_macro(node: Node, module: ModuleRecord) -> None:
    name = ""
    if node.type == MACRO_DEFINITION:
        name = node_text(node.child_by_field_name("name"))
    if name:
        module.functions.append(macro_stub(name))
        return
    module.add_issue(
        ISSUE_MACRO,
        render_tokens(node),
        "Encountered #[macro_export] macro without a stable name.",
    )


def classify_item(node: Node, module: ModuleRecord) -> None:
    """Dispatch one item to its handler, appending results to ``module``.

    Module declarations are handled by the walker; item kinds with no
    place in the output (``use``, statics, type aliases, ...) are ignored.
    """
    kind = node.type

    if kind == "expression_statement":
        inner = node.named_children
        if len(inner) != 1 or inner[0].type != MACRO_INVOCATION:
            return
        # ``foo! { ... }`` in item position; attributes stay on the statement
        if has_macro_export(node):
            _classify_exported_macro(inner[0], module)
        return

    if kind == IMPL_ITEM:
        pending = collect_impl(node, module)
        if pending is not None:
            module.pending_methods.append(pending)
        return

    if kind in (MACRO_DEFINITION, MACRO_INVOCATION):
        if has_macro_export(node):
            _classify_exported_macro(node, module)
        return

    if not is_public(node):
        return

    if kind == CONST_ITEM:
        module.consts.append(extract_const(node))
    elif kind == FUNCTION_ITEM:
        module.functions.append(extract_signature(node, module))
    elif kind == STRUCT_ITEM:
        module.structs.append(extract_struct(node, module))
    elif kind == ENUM_ITEM:
        module.enums.append(extract_enum(node, module))
    elif kind == TRAIT_ITEM:
        module.traits.append(extract_trait(node, module))
    else:
        logger.debug("Ignoring %s item in %s", kind, module.file)
