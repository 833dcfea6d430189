from typing import List, Optional

import tree_sitter as ts

SCOPE_SEPARATOR = "::"


def get_node_text(node: Optional[ts.Node]) -> str:
    """
    Get text of the tree sitter node
    """
    if not node or not node.text:
        return ""

    return node.text.decode("utf-8", errors="replace")


def qualified_name(node: ts.Node) -> str:
    """
    Rebuild the fully qualified name of a constant reference.

    ``A::B::C`` parses as nested ``scope_resolution`` nodes with the
    outermost scope at the bottom; names are collected inner to outer and
    joined outermost first. A leading ``::`` has no scope and simply ends
    the walk. A scope that is not a constant reference (``self::X``,
    ``foo()::X``) contributes its source text and ends the walk as well.
    """
    parts: List[str] = []
    current: Optional[ts.Node] = node
    while current is not None:
        if current.type != "scope_resolution":
            parts.append(get_node_text(current))
            break
        parts.append(get_node_text(current.child_by_field_name("name")))
        current = current.child_by_field_name("scope")
    parts.reverse()
    return SCOPE_SEPARATOR.join(parts)


def symbol_name(node: ts.Node) -> Optional[str]:
    """
    Return the name of a literal symbol (``:foo``, ``:"foo"``) or None when
    *node* is anything else, including interpolated symbols.
    """
    if node.type == "simple_symbol":
        return get_node_text(node)[1:]
    if node.type == "delimited_symbol":
        if any(ch.type != "string_content" for ch in node.named_children):
            return None
        return "".join(get_node_text(ch) for ch in node.named_children)
    return None


def hash_key_name(node: ts.Node) -> Optional[str]:
    """
    Name of a hash key written as a symbol: ``x:`` or ``:x =>``.
    """
    if node.type == "hash_key_symbol":
        return get_node_text(node)
    return symbol_name(node)


def argument_nodes(call: ts.Node) -> List[ts.Node]:
    """
    Positional view of a call's arguments, comments skipped.
    """
    args = call.child_by_field_name("arguments")
    if args is None:
        return []
    return [ch for ch in args.named_children if ch.type != "comment"]
