"""Expression AST node definitions."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, model_validator


class SourceRange(BaseModel):
    """Half-open index span over the originating layout tree."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)

    @model_validator(mode="after")
    def _validate_bounds(self) -> "SourceRange":
        if self.end < self.start:
            raise ValueError("SourceRange.end must be >= SourceRange.start")
        return self

    def contains(self, other: "SourceRange") -> bool:
        return self.start <= other.start and other.end <= self.end


def span(first: SourceRange, last: SourceRange) -> SourceRange:
    """Return the smallest range covering both ranges."""

    return SourceRange(start=min(first.start, last.start), end=max(first.end, last.end))


class UnaryOp(str, Enum):
    """Unary operator tags."""

    NEGATE = "negate"
    FACTORIAL = "factorial"
    INVERSE = "inverse"


class BinaryOp(str, Enum):
    """Binary and relational operator tags."""

    ADD = "add"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    EXPONENT = "exponent"
    EQUAL = "equal"
    LESS_THAN = "less_than"
    GREATER_THAN = "greater_than"
    LESS_THAN_EQUAL = "less_than_equal"
    GREATER_THAN_EQUAL = "greater_than_equal"


# Operators whose nodes hold any number of operands.
NARY_OPS = frozenset({BinaryOp.ADD, BinaryOp.MULTIPLY})

RELATIONAL_OPS = frozenset(
    {
        BinaryOp.EQUAL,
        BinaryOp.LESS_THAN,
        BinaryOp.GREATER_THAN,
        BinaryOp.LESS_THAN_EQUAL,
        BinaryOp.GREATER_THAN_EQUAL,
    }
)


class Number(BaseModel):
    """Numeric literal."""

    node: Literal["Number"] = "Number"
    value: int | float
    range: SourceRange | None = None


class Symbol(BaseModel):
    """Identifier or canonical function name."""

    node: Literal["Symbol"] = "Symbol"
    name: str = Field(min_length=1)
    range: SourceRange | None = None


class Unary(BaseModel):
    """Negation, factorial or function inverse."""

    node: Literal["Unary"] = "Unary"
    op: UnaryOp
    arg: "Node"
    range: SourceRange | None = None
    internal_range: SourceRange | None = None


class Binary(BaseModel):
    """Binary arithmetic or relational operation.

    ADD and MULTIPLY are flattened while parsing and may hold more than two
    operands; every other operator holds exactly two.
    """

    node: Literal["Binary"] = "Binary"
    op: BinaryOp
    args: list["Node"] = Field(min_length=2)
    range: SourceRange | None = None
    internal_range: SourceRange | None = None

    @model_validator(mode="after")
    def _validate_arity(self) -> "Binary":
        if self.op not in NARY_OPS and len(self.args) != 2:
            raise ValueError(f"Binary {self.op.value} requires exactly two operands")
        return self

    @property
    def left(self) -> "Node":
        return self.args[0]

    @property
    def right(self) -> "Node":
        return self.args[-1]


class Tuple(BaseModel):
    """Ordered, comma separated group of expressions."""

    node: Literal["Tuple"] = "Tuple"
    items: list["Node"] = Field(min_length=1)
    range: SourceRange | None = None


class Call(BaseModel):
    """Function application; the argument list is always a tuple."""

    node: Literal["Call"] = "Call"
    target: "Node"
    args: Tuple
    range: SourceRange | None = None


class Error(BaseModel):
    """Placeholder for a region that failed to parse."""

    node: Literal["Error"] = "Error"
    range: SourceRange | None = None


Node = Annotated[
    Union[
        Number,
        Symbol,
        Unary,
        Binary,
        Tuple,
        Call,
        Error,
    ],
    Field(discriminator="node"),
]

for _model in (Unary, Binary, Tuple, Call):
    _model.model_rebuild()


def walk(node: Node):
    """Yield ``node`` and all of its descendants, parents first."""

    yield node
    if isinstance(node, Unary):
        yield from walk(node.arg)
    elif isinstance(node, Binary):
        for arg in node.args:
            yield from walk(arg)
    elif isinstance(node, Tuple):
        for item in node.items:
            yield from walk(item)
    elif isinstance(node, Call):
        yield from walk(node.target)
        yield from walk(node.args)


def parse_node(data: dict) -> Node:
    """Parse and validate a dict into a Node."""

    return TypeAdapter(Node).validate_python(data)


def node_to_dict(node: Node) -> dict:
    """Serialize a Node into a JSON-compatible dict."""

    return node.model_dump(mode="json", exclude_none=True)
