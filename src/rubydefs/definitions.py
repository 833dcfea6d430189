from typing import Callable, Dict, Iterator, List, Optional

import tree_sitter as ts

from rubydefs.logger import logger
from rubydefs.models import (
    AccessorDef,
    AccessorKind,
    ClassDef,
    ConstantAssign,
    Definition,
    MethodDef,
    ModuleDef,
    PropertyKind,
    Signature,
    StaticMethodDef,
    TypedPropertyDef,
    TypeExpr,
)
from rubydefs.names import argument_nodes, get_node_text, qualified_name, symbol_name
from rubydefs.signatures import SIG_METHOD, block_body, parse_signature

# Groups of statements; these are visited eagerly, in source order.
COMPOUND_NODES = frozenset({"program", "body_statement", "parenthesized_statements"})

ACCESSOR_METHODS: Dict[str, AccessorKind] = {
    "attr_reader": AccessorKind.READER,
    "attr_writer": AccessorKind.WRITER,
    "attr_accessor": AccessorKind.ACCESSOR,
}

PROPERTY_METHODS: Dict[str, PropertyKind] = {
    "prop": PropertyKind.MUTABLE,
    "const": PropertyKind.IMMUTABLE,
}


class Definitions(Iterator[Definition]):
    """
    Iterator which walks a parsed Ruby tree and incrementally yields
    definitions.

    Pending definitions live on a stack. The body of a class or module is
    only visited once its own definition is popped, so a container comes
    out before its contents, and statements on the same level come out in
    reverse source order. Statement groups themselves are visited eagerly
    and in order, which keeps every ``sig`` block paired with the definition
    right after it.
    """

    def __init__(self, root: ts.Node) -> None:
        self._stack: List[Definition] = []
        self._pending_sig: Optional[Signature] = None
        self._handlers: Dict[str, Callable[[ts.Node], None]] = {
            "module": self._handle_scope,
            "class": self._handle_scope,
            "method": self._handle_method,
            "singleton_method": self._handle_method,
            "assignment": self._handle_assignment,
            "call": self._handle_call,
        }
        self._push_next(root)

    def __iter__(self) -> "Definitions":
        return self

    def __next__(self) -> Definition:
        if not self._stack:
            raise StopIteration
        item = self._stack.pop()
        self._push_children(item)
        return item

    def _push_next(self, node: ts.Node) -> None:
        if node.type in COMPOUND_NODES:
            for child in node.named_children:
                self._push_next(child)
            return
        handler = self._handlers.get(node.type)
        if handler is not None:
            handler(node)

    def _push_children(self, item: Definition) -> None:
        if not isinstance(item, (ModuleDef, ClassDef)):
            return
        body = item.node.child_by_field_name("body")
        if body is not None:
            self._push_next(body)

    def _take_sig(self) -> Optional[Signature]:
        sig, self._pending_sig = self._pending_sig, None
        return sig

    # Handlers
    def _handle_scope(self, node: ts.Node) -> None:
        if self._pending_sig is not None:
            logger.debug(
                "Dropping signature at scope boundary",
                node_type=node.type,
                line=node.start_point[0] + 1,
            )
        self._pending_sig = None

        name = qualified_name(node.child_by_field_name("name"))
        if node.type == "module":
            self._stack.append(ModuleDef(name=name, node=node))
        else:
            self._stack.append(ClassDef(name=name, node=node))

    def _handle_method(self, node: ts.Node) -> None:
        name = get_node_text(node.child_by_field_name("name"))
        sig = self._take_sig()
        if node.type == "singleton_method":
            self._stack.append(StaticMethodDef(name=name, signature=sig, node=node))
        else:
            self._stack.append(MethodDef(name=name, signature=sig, node=node))

    def _handle_assignment(self, node: ts.Node) -> None:
        left = node.child_by_field_name("left")
        if left is None or left.type not in ("constant", "scope_resolution"):
            return
        self._stack.append(ConstantAssign(name=qualified_name(left), node=node))

    def _handle_call(self, node: ts.Node) -> None:
        method = get_node_text(node.child_by_field_name("method"))
        block = node.child_by_field_name("block")
        if block is not None:
            # Only `sig` blocks matter; any other call with a block is inert.
            # TODO: handle `enums do ... end` blocks from T::Enum subclasses
            if method != SIG_METHOD:
                return
            body = block_body(block)
            if body is not None:
                self._pending_sig = parse_signature(body)
            return

        defn = self._known_defining_method(node, method)
        if defn is not None:
            self._stack.append(defn)

    def _known_defining_method(
        self, node: ts.Node, method: str
    ) -> Optional[Definition]:
        """
        Build a definition from a call that defines methods in a way we know
        about (``attr_reader :x``, ``prop :x, Integer``...).
        """
        if method not in ACCESSOR_METHODS and method not in PROPERTY_METHODS:
            return None

        args = argument_nodes(node)
        name = symbol_name(args[0]) if args else None
        if name is None:
            logger.debug(
                "Skipping call without a symbol name",
                method=method,
                line=node.start_point[0] + 1,
            )
            return None

        if method in ACCESSOR_METHODS:
            return AccessorDef(
                access=ACCESSOR_METHODS[method],
                name=name,
                signature=self._take_sig(),
                node=node,
            )

        if len(args) < 2:
            logger.debug(
                "Skipping property without a type",
                method=method,
                name=name,
                line=node.start_point[0] + 1,
            )
            return None
        return TypedPropertyDef(
            prop_kind=PROPERTY_METHODS[method],
            name=name,
            type_expr=TypeExpr(node=args[1]),
            node=node,
        )
