"""Human-readable infix rendering for expression trees."""

from __future__ import annotations

from mathbox.core.ast import (
    RELATIONAL_OPS,
    Binary,
    BinaryOp,
    Call,
    Error,
    Node,
    Number,
    Symbol,
    Tuple,
    Unary,
    UnaryOp,
)


_RELATION_SYMBOLS = {
    BinaryOp.EQUAL: "=",
    BinaryOp.LESS_THAN: "<",
    BinaryOp.GREATER_THAN: ">",
    BinaryOp.LESS_THAN_EQUAL: "≤",
    BinaryOp.GREATER_THAN_EQUAL: "≥",
}


def _is_atomic(node: Node) -> bool:
    return isinstance(node, (Symbol, Call, Tuple, Error)) or (
        isinstance(node, Number) and node.value >= 0
    )


def _wrap(node: Node) -> str:
    text = render_node(node)
    if _is_atomic(node):
        return text
    return f"({text})"


def _render_add(node: Binary) -> str:
    parts = [_render_term(node.args[0])]
    for arg in node.args[1:]:
        if isinstance(arg, Unary) and arg.op is UnaryOp.NEGATE:
            parts.append(f"- {_render_factor(arg.arg)}")
        elif isinstance(arg, Number) and arg.value < 0:
            parts.append(f"- {-arg.value}")
        else:
            parts.append(f"+ {_render_term(arg)}")
    return " ".join(parts)


def _render_term(node: Node) -> str:
    text = render_node(node)
    if isinstance(node, Binary) and node.op in RELATIONAL_OPS:
        return f"({text})"
    return text


def _render_factor(node: Node) -> str:
    text = render_node(node)
    if isinstance(node, Binary) and (node.op is BinaryOp.ADD or node.op in RELATIONAL_OPS):
        return f"({text})"
    return text


def render_node(node: Node) -> str:
    """Render an expression into deterministic human-readable text."""

    if isinstance(node, Number):
        return str(node.value)
    if isinstance(node, Symbol):
        return node.name
    if isinstance(node, Error):
        return "?"
    if isinstance(node, Tuple):
        return "(" + ", ".join(render_node(item) for item in node.items) + ")"
    if isinstance(node, Call):
        target = render_node(node.target)
        return f"{target}{render_node(node.args)}"
    if isinstance(node, Unary):
        if node.op is UnaryOp.NEGATE:
            return f"-{_wrap(node.arg)}"
        if node.op is UnaryOp.FACTORIAL:
            return f"{_wrap(node.arg)}!"
        return f"{_wrap(node.arg)}^-1"
    if isinstance(node, Binary):
        if node.op is BinaryOp.ADD:
            return _render_add(node)
        if node.op is BinaryOp.MULTIPLY:
            return " * ".join(_render_factor(arg) for arg in node.args)
        if node.op is BinaryOp.DIVIDE:
            return f"{_wrap(node.left)} / {_wrap(node.right)}"
        if node.op is BinaryOp.EXPONENT:
            return f"{_wrap(node.left)}^{_wrap(node.right)}"
        return f"{render_node(node.left)} {_RELATION_SYMBOLS[node.op]} {render_node(node.right)}"

    return node.__class__.__name__
