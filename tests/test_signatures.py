import textwrap

from rubydefs.names import get_node_text
from rubydefs.parsers import parse_source
from rubydefs.signatures import block_body, parse_signature


# Helpers
def _sig(code: str):
    """Parse the first `sig` block found in *code*."""
    parsed = parse_source(textwrap.dedent(code).encode("utf-8"))
    stack = [parsed.root]
    while stack:
        node = stack.pop()
        if (
            node.type == "call"
            and get_node_text(node.child_by_field_name("method")) == "sig"
        ):
            body = block_body(node.child_by_field_name("block"))
            assert body is not None
            return parse_signature(body)
        stack.extend(reversed(node.children))
    raise AssertionError("no sig block in source")


def _params(sig):
    return {name: typ.text for name, typ in sig.params.items()}


# Tests
def test_params_and_returns():
    sig = _sig("sig { params(x: IntType).returns(StringType) }")
    assert _params(sig) == {"x": "IntType"}
    assert sig.returns.text == "StringType"


def test_outermost_void_clears_inner_returns():
    sig = _sig("sig { params(x: IntType).returns(StringType).void }")
    assert _params(sig) == {"x": "IntType"}
    assert sig.returns is None


def test_outermost_returns_wins_over_inner_void():
    sig = _sig("sig { void.returns(String) }")
    assert sig.returns.text == "String"


def test_bare_void():
    sig = _sig("sig { void }")
    assert sig.params == {}
    assert sig.returns is None


def test_unknown_calls_are_skipped():
    sig = _sig(
        "sig { override.checked(:never).params(a: Integer, b: T.nilable(String)).returns(T::Boolean) }"
    )
    assert _params(sig) == {"a": "Integer", "b": "T.nilable(String)"}
    assert sig.returns.text == "T::Boolean"


def test_chain_without_known_calls_is_empty():
    sig = _sig("sig { abstract }")
    assert sig.params == {}
    assert sig.returns is None


def test_rocket_keys_and_duplicates():
    sig = _sig('sig { params(:x => Integer, "y" => String, x: Float).void }')
    # string keys are not parameter names; the later `x` wins
    assert _params(sig) == {"x": "Float"}


def test_explicit_hash_argument():
    sig = _sig("sig { params({ a: Integer }).returns(NilClass) }")
    assert _params(sig) == {"a": "Integer"}
    assert sig.returns.text == "NilClass"


def test_returns_without_argument_keeps_default():
    sig = _sig("sig { returns() }")
    assert sig.returns is None


def test_multiline_do_block():
    sig = _sig(
        """
        sig do
          params(
            name: String,
            count: Integer,
          ).returns(T::Array[String])
        end
        """
    )
    assert _params(sig) == {"name": "String", "count": "Integer"}
    assert sig.returns.text == "T::Array[String]"
