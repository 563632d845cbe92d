"""Best-effort expression tree -> SymPy conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathbox.core import ast
from mathbox.core.functions import DEFAULT_FUNCTIONS, FunctionRegistry

if TYPE_CHECKING:
    import sympy


def _function_map(sympy) -> dict[str, object]:
    return {
        "sin": sympy.sin,
        "cos": sympy.cos,
        "tan": sympy.tan,
        "sec": sympy.sec,
        "csc": sympy.csc,
        "cot": sympy.cot,
        "asin": sympy.asin,
        "acos": sympy.acos,
        "atan": sympy.atan,
        "asec": sympy.asec,
        "acsc": sympy.acsc,
        "acot": sympy.acot,
        "sinh": sympy.sinh,
        "cosh": sympy.cosh,
        "tanh": sympy.tanh,
        "asinh": sympy.asinh,
        "acosh": sympy.acosh,
        "atanh": sympy.atanh,
        "ln": sympy.log,
        "log": sympy.log,
        "exp": sympy.exp,
        "sqrt": sympy.sqrt,
        "abs": sympy.Abs,
        "ceil": sympy.ceiling,
        "floor": sympy.floor,
        "max": sympy.Max,
        "min": sympy.Min,
        "gcd": sympy.gcd,
        "lcm": sympy.lcm,
    }


def node_to_sympy(
    node: ast.Node,
    sym_env: dict[str, "sympy.Symbol"] | None = None,
    *,
    functions: FunctionRegistry = DEFAULT_FUNCTIONS,
) -> tuple[object | None, list[str], dict[str, "sympy.Symbol"]]:
    """Convert an expression tree to a SymPy object with non-fatal warnings.

    Construction only; results are whatever SymPy's constructors produce.
    """

    try:
        import sympy
    except Exception:
        return None, ["sympy not installed"], sym_env or {}

    env: dict[str, sympy.Symbol] = {} if sym_env is None else sym_env
    fn_map = _function_map(sympy)
    relations = {
        ast.BinaryOp.EQUAL: sympy.Eq,
        ast.BinaryOp.LESS_THAN: sympy.Lt,
        ast.BinaryOp.GREATER_THAN: sympy.Gt,
        ast.BinaryOp.LESS_THAN_EQUAL: sympy.Le,
        ast.BinaryOp.GREATER_THAN_EQUAL: sympy.Ge,
    }

    def _fail(msg: str) -> tuple[object | None, list[str]]:
        return None, [msg]

    def _all(nodes: list[ast.Node]) -> tuple[list[object] | None, list[str]]:
        out: list[object] = []
        child_warnings: list[str] = []
        for item in nodes:
            converted, w = _rec(item)
            child_warnings.extend(w)
            if converted is None:
                return None, child_warnings
            out.append(converted)
        return out, child_warnings

    def _callable(target: ast.Node) -> tuple[object | None, list[str]]:
        if isinstance(target, ast.Symbol):
            mapped = fn_map.get(target.name)
            if mapped is None:
                return _fail(f"unsupported Call target={target.name}")
            return mapped, []
        if (
            isinstance(target, ast.Unary)
            and target.op is ast.UnaryOp.INVERSE
            and isinstance(target.arg, ast.Symbol)
        ):
            inverse = functions.inverse(target.arg.name)
            if inverse is None or inverse not in fn_map:
                return _fail(f"no inverse for {target.arg.name}")
            return fn_map[inverse], []
        return _fail(f"unsupported Call target node={target.node}")

    def _rec(node: ast.Node) -> tuple[object | None, list[str]]:
        if isinstance(node, ast.Symbol):
            if node.name not in env:
                env[node.name] = sympy.Symbol(node.name)
            return env[node.name], []

        if isinstance(node, ast.Number):
            value = node.value
            if type(value) is int:
                return sympy.Integer(value), []
            if type(value) is float:
                return sympy.Float(value), []
            return _fail("unsupported Number value type")

        if isinstance(node, ast.Error):
            return _fail("cannot convert Error node")

        if isinstance(node, ast.Tuple):
            items, w = _all(node.items)
            if items is None:
                return None, w
            if len(items) == 1:
                return items[0], w
            return sympy.Tuple(*items), w

        if isinstance(node, ast.Unary):
            if node.op is ast.UnaryOp.INVERSE:
                return _fail("bare function inverse outside a call")
            arg, w = _rec(node.arg)
            if arg is None:
                return None, w
            if node.op is ast.UnaryOp.NEGATE:
                return -arg, w
            return sympy.factorial(arg), w

        if isinstance(node, ast.Binary):
            args, w = _all(node.args)
            if args is None:
                return None, w
            if node.op is ast.BinaryOp.ADD:
                return sympy.Add(*args), w
            if node.op is ast.BinaryOp.MULTIPLY:
                return sympy.Mul(*args), w
            if node.op is ast.BinaryOp.DIVIDE:
                return args[0] / args[1], w
            if node.op is ast.BinaryOp.EXPONENT:
                return sympy.Pow(args[0], args[1]), w
            return relations[node.op](args[0], args[1]), w

        if isinstance(node, ast.Call):
            mapped, target_w = _callable(node.target)
            if mapped is None:
                return None, target_w
            args, w = _all(node.args.items)
            if args is None:
                return None, target_w + w
            return mapped(*args), target_w + w

        return _fail(f"unsupported node={node.__class__.__name__}")

    converted, child_warnings = _rec(node)
    return converted, child_warnings, env
