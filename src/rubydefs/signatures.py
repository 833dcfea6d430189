from typing import Dict, List, Optional

import tree_sitter as ts

from rubydefs.models import Signature, TypeExpr
from rubydefs.names import argument_nodes, get_node_text, hash_key_name

SIG_METHOD = "sig"


def block_body(block: ts.Node) -> Optional[ts.Node]:
    """
    Return the statement container of a ``{ ... }`` or ``do ... end`` block,
    or None when the block has no statements.
    """
    body = block.child_by_field_name("body")
    if body is None or not statements(body):
        return None
    return body


def statements(body: ts.Node) -> List[ts.Node]:
    return [
        ch
        for ch in body.named_children
        if ch.type not in ("comment", "block_parameters", "empty_statement")
    ]


def parse_signature(body: ts.Node) -> Signature:
    """
    Parse the body of a ``sig { ... }`` block.

    The block value is a chain of calls linked through their receivers, e.g.
    ``params(x: Integer).returns(String)``. The chain is read from the
    outermost call inwards; the outermost ``returns``/``void`` decides the
    return type and the outermost ``params`` wins on repeated names. Calls
    the extractor does not know (``override``, ``checked(:never)``...) are
    skipped. Never fails: missing pieces keep their defaults.
    """
    stmts = statements(body)
    if not stmts:
        return Signature()

    params: Dict[str, TypeExpr] = {}
    returns: Optional[TypeExpr] = None

    # Apply innermost first so outer calls overwrite inner ones.
    for link in reversed(_receiver_chain(stmts[-1])):
        method = _method_name(link)
        if method == "params":
            params.update(_keyword_types(link))
        elif method == "returns":
            args = argument_nodes(link) if link.type == "call" else []
            if args:
                returns = TypeExpr(node=args[0])
        elif method == "void":
            returns = None

    return Signature(params=params, returns=returns)


def _receiver_chain(node: ts.Node) -> List[ts.Node]:
    """
    Calls of a receiver chain, outermost first. A bare identifier (``void``)
    is a call without receiver or arguments.
    """
    chain: List[ts.Node] = []
    current: Optional[ts.Node] = node
    while current is not None:
        if current.type == "call":
            chain.append(current)
            current = current.child_by_field_name("receiver")
        elif current.type == "identifier":
            chain.append(current)
            break
        else:
            break
    return chain


def _method_name(link: ts.Node) -> str:
    if link.type == "identifier":
        return get_node_text(link)
    return get_node_text(link.child_by_field_name("method"))


def _keyword_types(call: ts.Node) -> Dict[str, TypeExpr]:
    args = argument_nodes(call)
    if not args:
        return {}

    pairs: List[ts.Node]
    if args[-1].type == "hash":
        pairs = [ch for ch in args[-1].named_children if ch.type == "pair"]
    else:
        pairs = []
        for arg in reversed(args):
            if arg.type != "pair":
                break
            pairs.append(arg)
        pairs.reverse()

    result: Dict[str, TypeExpr] = {}
    for pair in pairs:
        key = pair.child_by_field_name("key")
        value = pair.child_by_field_name("value")
        if key is None or value is None:
            continue
        name = hash_key_name(key)
        if name is None:
            continue
        result[name] = TypeExpr(node=value)
    return result
