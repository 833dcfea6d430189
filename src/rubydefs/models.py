from enum import Enum
from typing import Any, Dict, Literal, Optional, Union

import tree_sitter as ts
from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class DefinitionKind(str, Enum):
    MODULE = "module"
    CLASS = "class"
    METHOD = "method"
    STATIC_METHOD = "static_method"
    ACCESSOR = "accessor"
    TYPED_PROPERTY = "typed_property"
    CONSTANT = "constant"


class AccessorKind(str, Enum):
    READER = "attr_reader"
    WRITER = "attr_writer"
    ACCESSOR = "attr_accessor"


class PropertyKind(str, Enum):
    MUTABLE = "prop"
    IMMUTABLE = "const"


# Borrowed views into a tree-sitter tree. Nothing here owns or edits the tree,
# so values must not be used after the tree is released.
_FROZEN_NODE_CONFIG = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class TypeExpr(BaseModel):
    """
    Opaque reference to a type expression inside a `sig` block or a
    `prop`/`const` declaration. The expression is never interpreted, only
    its source text is exposed for display.
    """

    model_config = _FROZEN_NODE_CONFIG

    node: ts.Node

    @property
    def text(self) -> str:
        if not self.node.text:
            return ""
        return self.node.text.decode("utf-8", errors="replace")


class Signature(BaseModel):
    model_config = _FROZEN_NODE_CONFIG

    params: Dict[str, TypeExpr] = Field(default_factory=dict)
    returns: Optional[TypeExpr] = None  # None for void or undeclared

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": {name: typ.text for name, typ in self.params.items()},
            "returns": self.returns.text if self.returns is not None else None,
        }


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------


class BaseDefinition(BaseModel):
    model_config = _FROZEN_NODE_CONFIG

    name: str
    node: ts.Node = Field(repr=False)

    @property
    def start_line(self) -> int:
        return self.node.start_point[0] + 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,  # type: ignore[attr-defined]
            "name": self.name,
            "line": self.start_line,
        }


class ModuleDef(BaseDefinition):
    kind: Literal[DefinitionKind.MODULE] = DefinitionKind.MODULE


class ClassDef(BaseDefinition):
    kind: Literal[DefinitionKind.CLASS] = DefinitionKind.CLASS


class _SignedDefinition(BaseDefinition):
    signature: Optional[Signature] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["signature"] = (
            self.signature.to_dict() if self.signature is not None else None
        )
        return data


class MethodDef(_SignedDefinition):
    kind: Literal[DefinitionKind.METHOD] = DefinitionKind.METHOD


class StaticMethodDef(_SignedDefinition):
    kind: Literal[DefinitionKind.STATIC_METHOD] = DefinitionKind.STATIC_METHOD


class AccessorDef(_SignedDefinition):
    kind: Literal[DefinitionKind.ACCESSOR] = DefinitionKind.ACCESSOR
    access: AccessorKind

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["access"] = self.access.value
        return data


class TypedPropertyDef(BaseDefinition):
    kind: Literal[DefinitionKind.TYPED_PROPERTY] = DefinitionKind.TYPED_PROPERTY
    prop_kind: PropertyKind
    type_expr: TypeExpr

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["prop_kind"] = self.prop_kind.value
        data["type"] = self.type_expr.text
        return data


class ConstantAssign(BaseDefinition):
    kind: Literal[DefinitionKind.CONSTANT] = DefinitionKind.CONSTANT
    # No extraction rule populates this yet; it is always None.
    type_expr: Optional[TypeExpr] = None

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["type"] = self.type_expr.text if self.type_expr is not None else None
        return data


Definition = Union[
    ModuleDef,
    ClassDef,
    MethodDef,
    StaticMethodDef,
    AccessorDef,
    TypedPropertyDef,
    ConstantAssign,
]
