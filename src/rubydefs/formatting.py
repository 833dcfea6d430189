from typing import Optional

from rubydefs.models import (
    AccessorDef,
    ClassDef,
    ConstantAssign,
    Definition,
    MethodDef,
    ModuleDef,
    Signature,
    StaticMethodDef,
    TypedPropertyDef,
)


def format_signature(sig: Optional[Signature]) -> str:
    """
    Render a signature as a ``(x: Integer): String`` suffix.
    """
    if sig is None:
        return ""
    params = ", ".join(f"{name}: {typ.text}" for name, typ in sig.params.items())
    ret = sig.returns.text if sig.returns is not None else "void"
    return f"({params}): {ret}" if params else f": {ret}"


def format_definition(defn: Definition, signatures: bool = False) -> str:
    if isinstance(defn, ModuleDef):
        return f"module {defn.name}"
    if isinstance(defn, ClassDef):
        return f"class {defn.name}"
    if isinstance(defn, MethodDef):
        label = f"def {defn.name}"
    elif isinstance(defn, StaticMethodDef):
        label = f"def self.{defn.name}"
    elif isinstance(defn, AccessorDef):
        label = f"{defn.access.value} {defn.name}"
    elif isinstance(defn, TypedPropertyDef):
        label = f"{defn.prop_kind.value} {defn.name}"
        return f"{label}: {defn.type_expr.text}" if signatures else label
    elif isinstance(defn, ConstantAssign):
        return f"constant {defn.name}"
    else:
        raise TypeError(f"Unknown definition type: {type(defn).__name__}")

    if signatures:
        label += format_signature(defn.signature)
    return label
