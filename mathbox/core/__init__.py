"""Core expression model and lookup tables."""

from mathbox.core.ast import BinaryOp, Node, SourceRange, UnaryOp, node_to_dict, parse_node
from mathbox.core.functions import DEFAULT_FUNCTIONS, FunctionRegistry, FunctionSpec
from mathbox.core.numbers import parse_number

__all__ = [
    "BinaryOp",
    "DEFAULT_FUNCTIONS",
    "FunctionRegistry",
    "FunctionSpec",
    "Node",
    "SourceRange",
    "UnaryOp",
    "node_to_dict",
    "parse_node",
    "parse_number",
]
