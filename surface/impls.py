"""
Inherent impl collection.

Each eligible ``impl Type { ... }`` block becomes its own ``PendingMethods``
entry keyed by the last path segment of the implemented type. Blocks for the
same type are not merged here; merging belongs to the consumer.
"""

import logging
from typing import List, Optional

from tree_sitter import Node

from surface.config import FUNCTION_ITEM, ISSUE_IMPL, NOMINAL_TYPE_NODES
from surface.models import ExtractedFunction, ModuleRecord, PendingMethods
from surface.render import is_public, node_text, render_type
from surface.signatures import extract_signature

logger = logging.getLogger(__name__)


def nominal_target_name(self_type: Optional[Node]) -> Optional[str]:
    """Return the last path segment of a nominal type, or None.

    ``Point``, ``geo::Point`` and ``Point<T>`` all yield ``Point``; references,
    tuples, slices, trait objects and the like yield None.
    """
    node = self_type
    while node is not None and node.type in NOMINAL_TYPE_NODES:
        if node.type == "generic_type":
            node = node.child_by_field_name("type")
        elif node.type == "scoped_type_identifier":
            node = node.child_by_field_name("name")
        else:
            return node_text(node) or None
    return None


def collect_impl(node: Node, module: ModuleRecord) -> Optional[PendingMethods]:
    """Collect public methods of an inherent impl block.

    Args:
        node: An ``impl_item`` node.
        module: Module record receiving issues.

    Returns:
        A ``PendingMethods`` entry, or None for trait impls, unsupported
        targets and blocks without public methods.
    """
    if node.child_by_field_name("trait") is not None:
        return None

    self_type = node.child_by_field_name("type")
    target = nominal_target_name(self_type)
    if target is None:
        module.add_issue(
            ISSUE_IMPL,
            render_type(self_type),
            "Unsupported impl target (expected a nominal path type).",
        )
        return None

    methods: List[ExtractedFunction] = []
    body = node.child_by_field_name("body")
    for member in body.named_children if body is not None else []:
        if member.type != FUNCTION_ITEM or not is_public(member):
            continue
        methods.append(extract_signature(member, module))

    if not methods:
        logger.debug("impl %s in %s has no public methods", target, module.file)
        return None
    return PendingMethods(target=target, methods=methods)
