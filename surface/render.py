"""
Canonical text rendering for syntax nodes.

Type expressions, bounds and diagnostic snippets are rendered from the
tokens of the syntax tree rather than from the raw source slice, so the same
type always produces the same text regardless of how it was formatted:

    Vec < i32 >          -> Vec<i32>
    & 'a mut  Foo        -> &'a mut Foo
    ( i32 , String )     -> (i32, String)
"""

import logging
from typing import Iterator, List, Optional

from tree_sitter import Node

from surface.config import (
    ATOMIC_TOKEN_NODES,
    COMMENT_NODES,
    UNIT_TYPE_TEXT,
    VISIBILITY_MODIFIER,
)

logger = logging.getLogger(__name__)

# Tokens never preceded by a space
_NO_SPACE_BEFORE = {",", ";", ":", "::", ">", ")", "]"}

# Tokens never followed by a space
_NO_SPACE_AFTER = {"<", "(", "[", "::", "?"}

# Tokens that attach to a preceding word (``Fn(i32)``, ``Vec<T>``, ``foo!``)
_ATTACH_TO_WORD = {"(", "[", "<", "!"}

# Delimiters that attach to a preceding macro bang (``vec!(..)``, ``m![..]``)
_MACRO_DELIMITERS = {"(", "[", "{"}

# Prefix operators that bind to the next token when used in unary position
_UNARY_PREFIX = {"&", "*", "&&"}

# Keywords after which ``(`` and ``[`` keep their space (``&mut (A, B)``)
_SPACED_KEYWORDS = {
    "as", "const", "dyn", "extern", "for", "impl", "in", "move",
    "mut", "ref", "return", "static", "unsafe", "where",
}


def node_text(node: Optional[Node]) -> str:
    """Safely decode node text."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")


def iter_tokens(node: Node) -> Iterator[str]:
    """Yield the leaf token texts of ``node`` in source order, skipping comments."""
    if node.type in COMMENT_NODES:
        return
    if node.type in ATOMIC_TOKEN_NODES or node.child_count == 0:
        text = node_text(node).strip()
        if text:
            yield text
        return
    for child in node.children:
        yield from iter_tokens(child)


def _is_word(token: str) -> bool:
    if token.startswith("'"):
        # lifetimes and char literals
        return False
    last = token[-1]
    return last.isalnum() or last == "_"


def join_tokens(tokens: List[str]) -> str:
    """Join tokens with single spaces except where Rust spelling is compact."""
    out: List[str] = []
    prev: Optional[str] = None
    prev_unary = False
    for token in tokens:
        if prev is None:
            out.append(token)
        else:
            glue = (
                token in _NO_SPACE_BEFORE
                or prev in _NO_SPACE_AFTER
                or prev_unary
                or (prev == "!" and token in _MACRO_DELIMITERS)
                or (
                    token in _ATTACH_TO_WORD
                    and _is_word(prev)
                    and not (token in {"(", "["} and prev in _SPACED_KEYWORDS)
                )
            )
            out.append(token if glue else " " + token)
        prev_unary = token in _UNARY_PREFIX and (
            prev is None or not (_is_word(prev) or prev in {")", "]", ">"})
        )
        prev = token
    return "".join(out)


def render_tokens(node: Optional[Node]) -> str:
    """Render any node as canonical, whitespace-collapsed text."""
    if node is None:
        return ""
    return join_tokens(list(iter_tokens(node)))


def render_type(node: Optional[Node]) -> str:
    """Render a type expression node as canonical text."""
    return render_tokens(node)


def render_return_type(node: Optional[Node]) -> str:
    """Render a return type; a missing annotation is the unit type."""
    if node is None:
        return UNIT_TYPE_TEXT
    return render_type(node)


def render_bounds(bounds: Optional[Node]) -> List[str]:
    """Render each bound of a ``trait_bounds`` node as its own string."""
    if bounds is None:
        return []
    return [
        render_tokens(child)
        for child in bounds.named_children
        if child.type not in COMMENT_NODES
    ]


def is_public(node: Node) -> bool:
    """Check an item for unrestricted ``pub`` visibility.

    ``pub(crate)``, ``pub(super)`` and ``pub(in path)`` are restricted and
    count as private.
    """
    for child in node.children:
        if child.type == VISIBILITY_MODIFIER:
            return render_tokens(child) == "pub"
    return False
