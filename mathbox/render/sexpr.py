"""Deterministic s-expression rendering for expression trees."""

from __future__ import annotations

from mathbox.core.ast import Binary, BinaryOp, Call, Error, Node, Number, Symbol, Tuple, Unary, UnaryOp


_BINARY_HEADS = {
    BinaryOp.ADD: "Add",
    BinaryOp.MULTIPLY: "Mul",
    BinaryOp.DIVIDE: "Div",
    BinaryOp.EXPONENT: "Pow",
    BinaryOp.EQUAL: "Eq",
    BinaryOp.LESS_THAN: "Lt",
    BinaryOp.GREATER_THAN: "Gt",
    BinaryOp.LESS_THAN_EQUAL: "Le",
    BinaryOp.GREATER_THAN_EQUAL: "Ge",
}
_UNARY_HEADS = {
    UnaryOp.NEGATE: "Neg",
    UnaryOp.FACTORIAL: "Fact",
    UnaryOp.INVERSE: "Inv",
}


def to_sexpr(node: Node) -> str:
    """Render ``node`` as an s-expression, e.g. ``(Mul 2 x y)``."""

    if isinstance(node, Number):
        return str(node.value)
    if isinstance(node, Symbol):
        return node.name
    if isinstance(node, Unary):
        return f"({_UNARY_HEADS[node.op]} {to_sexpr(node.arg)})"
    if isinstance(node, Binary):
        return f"({_BINARY_HEADS[node.op]} " + " ".join(to_sexpr(arg) for arg in node.args) + ")"
    if isinstance(node, Call):
        return f"(Call {to_sexpr(node.target)} " + " ".join(to_sexpr(item) for item in node.args.items) + ")"
    if isinstance(node, Tuple):
        return "(Tuple " + " ".join(to_sexpr(item) for item in node.items) + ")"
    if isinstance(node, Error):
        return "?"
    raise AssertionError(f"unhandled node: {node.__class__.__name__}")
