"""
Signature extraction for functions, methods and generic parameter lists.
"""

import logging
from typing import List, Optional

from tree_sitter import Node

from surface.config import (
    ATTRIBUTE_NODES,
    COMMENT_NODES,
    CONST_PARAM_TYPES,
    ISSUE_GENERIC,
    ISSUE_PARAM,
    LIFETIME_PARAM_TYPES,
    PARAMETER,
    PLAIN_PATTERN_TYPES,
    RECEIVER_BY_MUT_REF,
    RECEIVER_BY_REF,
    RECEIVER_BY_VALUE,
    SELF_PARAMETER,
    SELF_TYPE_MARKER,
    TYPE_PARAM_TYPES,
    UNSUPPORTED_PARAM_NAME,
)
from surface.models import ExtractedField, ExtractedFunction, ModuleRecord
from surface.render import node_text, render_return_type, render_tokens, render_type

logger = logging.getLogger(__name__)

# Pattern wrappers that still bind a single plain name (``mut x``, ``ref x``)
_BINDING_WRAPPERS = {"mut_pattern", "ref_pattern"}


def _type_param_name(param: Node) -> Optional[str]:
    """Return the declared name of a type parameter node."""
    if param.type == "type_identifier":
        return node_text(param)
    if param.type == "type_parameter":
        name = param.child_by_field_name("name")
        if name is None:
            name = next(
                (c for c in param.named_children if c.type == "type_identifier"), None
            )
        return node_text(name) or None
    if param.type == "constrained_type_parameter":
        return node_text(param.child_by_field_name("left")) or None
    if param.type == "optional_type_parameter":
        name = param.child_by_field_name("name")
        if name is not None and name.type == "constrained_type_parameter":
            name = name.child_by_field_name("left")
        return node_text(name) or None
    return None


def _is_lifetime_param(param: Node) -> bool:
    if param.type in LIFETIME_PARAM_TYPES:
        return True
    if param.type == "constrained_type_parameter":
        left = param.child_by_field_name("left")
        return left is not None and left.type == "lifetime"
    return False


def collect_type_params(
    type_parameters: Optional[Node],
    module: ModuleRecord,
    owner_kind: str,
    owner_name: str,
) -> List[str]:
    """Collect type parameter names from a ``type_parameters`` node.

    Lifetime and const parameters have no counterpart in generated facades;
    each one is dropped and recorded as a ``generic`` issue on ``module``.

    Args:
        type_parameters: The ``<...>`` node, or None when absent.
        module: Module record receiving issues.
        owner_kind: Function, Struct, Enum or Trait.
        owner_name: Name of the owning item, used in the issue reason.

    Returns:
        Type parameter names in declaration order.
    """
    names: List[str] = []
    if type_parameters is None:
        return names

    for param in type_parameters.named_children:
        if _is_lifetime_param(param):
            module.add_issue(
                ISSUE_GENERIC,
                render_tokens(param),
                f"{owner_kind} '{owner_name}' lifetime generic parameters are not "
                "representable in generated facades and were skipped.",
            )
        elif param.type in CONST_PARAM_TYPES:
            module.add_issue(
                ISSUE_GENERIC,
                render_tokens(param),
                f"{owner_kind} '{owner_name}' const generic parameters are not "
                "representable in generated facades and were skipped.",
            )
        elif param.type in TYPE_PARAM_TYPES:
            name = _type_param_name(param)
            if name:
                names.append(name)
    return names


def receiver_name(self_param: Node) -> str:
    """Map a ``self_parameter`` node onto one of the three receiver sentinels."""
    child_types = {child.type for child in self_param.children}
    if "&" in child_types and "mutable_specifier" in child_types:
        return RECEIVER_BY_MUT_REF
    if "&" in child_types:
        return RECEIVER_BY_REF
    return RECEIVER_BY_VALUE


def _binding_name(pattern: Optional[Node]) -> Optional[str]:
    """Return the bound identifier when ``pattern`` is a plain name."""
    while pattern is not None and pattern.type in _BINDING_WRAPPERS:
        inner = [c for c in pattern.named_children if c.type != "mutable_specifier"]
        pattern = inner[0] if len(inner) == 1 else None
    if pattern is not None and pattern.type in PLAIN_PATTERN_TYPES:
        return node_text(pattern)
    return None


def extract_params(parameters: Optional[Node], module: ModuleRecord) -> List[ExtractedField]:
    """Extract a function's parameter list, receivers included."""
    params: List[ExtractedField] = []
    if parameters is None:
        return params

    for child in parameters.named_children:
        if child.type in ATTRIBUTE_NODES or child.type in COMMENT_NODES:
            continue
        if child.type == "variadic_parameter":
            continue

        if child.type == SELF_PARAMETER:
            params.append(ExtractedField(receiver_name(child), SELF_TYPE_MARKER))
            continue

        if child.type == PARAMETER:
            pattern = child.child_by_field_name("pattern")
            type_text = render_type(child.child_by_field_name("type"))
            if pattern is not None and pattern.type == "self":
                # ``self: Box<Self>`` and friends are by-value receivers
                params.append(ExtractedField(RECEIVER_BY_VALUE, SELF_TYPE_MARKER))
                continue
            name = _binding_name(pattern)
            snippet = render_tokens(pattern)
        else:
            # Anonymous parameter: only a type, no pattern at all
            name = None
            type_text = render_type(child)
            snippet = type_text

        if name is None:
            module.add_issue(
                ISSUE_PARAM,
                snippet,
                "Non-identifier function parameters are not representable in "
                f"generated facades and were replaced by an '{UNSUPPORTED_PARAM_NAME}' name.",
            )
            name = UNSUPPORTED_PARAM_NAME
        params.append(ExtractedField(name, type_text))
    return params


def extract_signature(node: Node, module: ModuleRecord) -> ExtractedFunction:
    """Build a function record from a ``function_item`` or ``function_signature_item``.

    Args:
        node: The function node.
        module: Module record receiving issues.

    Returns:
        The extracted function. Unsupported generics and parameters are
        degraded and reported on ``module``; extraction never fails here.
    """
    name = node_text(node.child_by_field_name("name"))
    type_params = collect_type_params(
        node.child_by_field_name("type_parameters"), module, "Function", name
    )
    params = extract_params(node.child_by_field_name("parameters"), module)
    return_type = render_return_type(node.child_by_field_name("return_type"))
    logger.debug("Extracted signature %s(%d params) in %s", name, len(params), module.file)
    return ExtractedFunction(
        name=name,
        type_params=type_params,
        params=params,
        return_type=return_type,
    )
