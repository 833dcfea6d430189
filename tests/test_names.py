import textwrap

from rubydefs.names import argument_nodes, qualified_name, symbol_name
from rubydefs.parsers import parse_source


# Helpers
def _first(code: str, node_type: str):
    parsed = parse_source(textwrap.dedent(code).encode("utf-8"))
    stack = [parsed.root]
    while stack:
        node = stack.pop()
        if node.type == node_type:
            # keep the tree alive alongside the node
            return parsed, node
        stack.extend(reversed(node.children))
    raise AssertionError(f"no {node_type} node in source")


# Tests
def test_qualified_name_outer_to_inner():
    _, cls = _first("class X::Y::Z; end", "class")
    assert qualified_name(cls.child_by_field_name("name")) == "X::Y::Z"


def test_qualified_name_plain_constant():
    _, mod = _first("module Foo; end", "module")
    assert qualified_name(mod.child_by_field_name("name")) == "Foo"


def test_qualified_name_top_level_scope():
    _, mod = _first("module ::Foo::Bar; end", "module")
    assert qualified_name(mod.child_by_field_name("name")) == "Foo::Bar"


def test_symbol_name():
    _, call = _first('attr_reader :foo, :"bar", "baz", :"x#{1}"', "call")
    args = argument_nodes(call)
    assert [symbol_name(a) for a in args] == ["foo", "bar", None, None]


def test_argument_nodes_without_arguments():
    _, call = _first("foo.bar", "call")
    assert argument_nodes(call) == []
