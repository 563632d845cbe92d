"""Pratt parser turning layout containers into expression trees."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import IntEnum

from mathbox.core.ast import (
    Binary,
    BinaryOp,
    Call,
    Error,
    Node,
    Number,
    SourceRange,
    Tuple,
    Unary,
    UnaryOp,
    span,
)
from mathbox.core.functions import DEFAULT_FUNCTIONS, FunctionRegistry
from mathbox.core.numbers import parse_number
from mathbox.diagnostics.models import Diagnostic, DiagnosticLog, DiagnosticSink
from mathbox.layout.models import Container
from mathbox.parse.context import ParserContext
from mathbox.parse.tokenizer import Tokenizer
from mathbox.parse.tokens import Token, TokenKind


class Precedence(IntEnum):
    LOWEST = 0
    EQUAL = 1
    ADD = 2
    MULTIPLY = 3
    PREFIX = 4
    POSTFIX = 5


_RELATIONAL = {
    "=": BinaryOp.EQUAL,
    "<": BinaryOp.LESS_THAN,
    ">": BinaryOp.GREATER_THAN,
    "≤": BinaryOp.LESS_THAN_EQUAL,
    "≥": BinaryOp.GREATER_THAN_EQUAL,
}
_PLUS = {"+"}
_MINUS = {"-", "−"}
_TIMES = {"*", "×", "·"}
_DIVIDE = {"÷", "/"}
_FACTORIAL = "!"
_COMMA = ","


def negate(operand: Node, minus_range: SourceRange) -> Node:
    """Negate ``operand``; number literals fold into a negative literal."""

    result_range = span(minus_range, operand.range)
    if isinstance(operand, Number):
        return operand.model_copy(update={"value": -operand.value, "range": result_range})
    return Unary(op=UnaryOp.NEGATE, arg=operand, range=result_range, internal_range=minus_range)


def join(op: BinaryOp, left: Node, right: Node, internal_range: SourceRange | None = None) -> Binary:
    """Combine operands under an n-ary operator, splicing same-operator children."""

    args: list[Node] = []
    for operand in (left, right):
        if isinstance(operand, Binary) and operand.op is op:
            args.extend(operand.args)
        else:
            args.append(operand)
    return Binary(op=op, args=args, range=span(left.range, right.range), internal_range=internal_range)


class Parser:
    """Precedence-climbing parser over tokenized layout containers.

    Collaborators are injected: the canonical function table, the numeric
    literal parser and the diagnostic sink. ``max_depth`` bounds how deeply
    specials may nest; None means unbounded.
    """

    def __init__(
        self,
        functions: FunctionRegistry = DEFAULT_FUNCTIONS,
        *,
        number_parser: Callable[[str], int | float] = parse_number,
        sink: DiagnosticSink | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.functions = functions
        self.number_parser = number_parser
        self.sink: DiagnosticSink = sink if sink is not None else DiagnosticLog()
        self.max_depth = max_depth
        self.tokenizer = Tokenizer(self)

    def parse(self, container: Container) -> Node:
        """Parse a top-level container; failures yield an Error node."""

        return self.parse_container(container, 0)

    def parse_container(self, container: Container, base_index: int) -> Node:
        ctx = self.tokenizer.tokenize(container, base_index)
        node = self._parse(ctx, Precedence.LOWEST)
        if node is not None and ctx.has_more_tokens():
            ctx.unexpected_token()
            node = None
        if node is None:
            return Error(range=SourceRange(start=base_index, end=base_index + container.width))
        return node

    def parse_tuple(self, container: Container, base_index: int) -> Node:
        """Parse comma separated elements; the range includes the enclosing glyphs."""

        ctx = self.tokenizer.tokenize(container, base_index)
        tuple_range = SourceRange(start=base_index - 1, end=base_index + container.width + 1)

        items: list[Node] = []
        while True:
            item = self._parse(ctx, Precedence.LOWEST)
            if item is None:
                return Error(range=tuple_range)
            items.append(item)
            if not ctx.eat(_COMMA):
                break

        if ctx.has_more_tokens():
            ctx.unexpected_token()
            return Error(range=tuple_range)
        return Tuple(items=items, range=tuple_range)

    def _parse(self, ctx: ParserContext, precedence: int) -> Node | None:
        node = self._prefix(ctx)
        while node is not None and self._is_valid_infix(ctx.current(), precedence):
            assert node.range is not None, "infix left operand has no range"
            node = self._infix(ctx, node)
        assert node is None or node.range is not None, "parsed node has no range"
        return node

    def _prefix(self, ctx: ParserContext) -> Node | None:
        token = ctx.current()

        if token.kind is TokenKind.OPERAND:
            if token.is_function:
                return self._call(ctx)
            ctx.next()
            return token.node

        if token.kind is TokenKind.CODE_POINT:
            if token.code_point in _PLUS:
                ctx.next()
                return self._parse(ctx, Precedence.PREFIX)
            if token.code_point in _MINUS:
                ctx.next()
                operand = self._parse(ctx, Precedence.PREFIX)
                if operand is None:
                    return None
                return negate(operand, token.range)

        ctx.unexpected_token()
        return None

    def _call(self, ctx: ParserContext) -> Node | None:
        function_token = ctx.next()
        target = function_token.node

        if ctx.current().kind is TokenKind.OVER:
            over = ctx.next()
            exponent = over.node
            if not (isinstance(exponent, Number) and exponent.value == -1):
                self.sink.report_ambiguous_function_exponent(over.range)
                return None
            target = Unary(op=UnaryOp.INVERSE, arg=target, range=span(function_token.range, over.range))

        following = ctx.current()
        if following.kind is TokenKind.OPERAND and isinstance(following.node, Tuple):
            ctx.next()
            args = following.node
        else:
            argument = self._parse(ctx, Precedence.MULTIPLY)
            # Absorb juxtaposed operands up to the next function name.
            while argument is not None and self._continues_argument(ctx.current()):
                argument = self._infix(ctx, argument)
            if argument is None:
                return None
            if isinstance(argument, Tuple):
                args = argument
            else:
                args = Tuple(items=[argument], range=argument.range)

        return Call(target=target, args=args, range=span(target.range, args.range))

    @staticmethod
    def _continues_argument(token: Token) -> bool:
        return token.kind is TokenKind.OPERAND and not token.is_function

    def _infix(self, ctx: ParserContext, left: Node) -> Node | None:
        token = ctx.current()

        if token.kind is TokenKind.OPERAND:
            right = self._parse(ctx, Precedence.MULTIPLY)
            if right is None:
                return None
            return join(BinaryOp.MULTIPLY, left, right)

        if token.kind is TokenKind.OVER:
            ctx.next()
            return Binary(op=BinaryOp.EXPONENT, args=[left, token.node], range=token.range)

        if token.kind is TokenKind.END_OF_INPUT:
            raise AssertionError("end of input has no infix rule")

        if token.kind is TokenKind.CODE_POINT:
            code_point = token.code_point

            if code_point == _FACTORIAL:
                ctx.next()
                return Unary(op=UnaryOp.FACTORIAL, arg=left, range=span(left.range, token.range))

            if code_point in _TIMES or code_point in _DIVIDE:
                ctx.next()
                right = self._parse(ctx, Precedence.MULTIPLY)
                if right is None:
                    return None
                if code_point in _TIMES:
                    return join(BinaryOp.MULTIPLY, left, right, token.range)
                return Binary(
                    op=BinaryOp.DIVIDE,
                    args=[left, right],
                    range=span(left.range, right.range),
                    internal_range=token.range,
                )

            if code_point in _RELATIONAL:
                ctx.next()
                # One below EQUAL so relational chains nest to the right.
                right = self._parse(ctx, Precedence.EQUAL - 1)
                if right is None:
                    return None
                return Binary(
                    op=_RELATIONAL[code_point],
                    args=[left, right],
                    range=span(left.range, right.range),
                    internal_range=token.range,
                )

            if code_point in _PLUS or code_point in _MINUS:
                ctx.next()
                right = self._parse(ctx, Precedence.ADD)
                if right is None:
                    return None
                if code_point in _MINUS:
                    right = negate(right, token.range)
                return join(BinaryOp.ADD, left, right, token.range)

        # UNDER tokens and unknown glyphs have no rule at this position.
        ctx.unexpected_token()
        return None

    @staticmethod
    def _is_valid_infix(token: Token, precedence: int) -> bool:
        kind = token.kind
        if kind is TokenKind.END_OF_INPUT:
            return False
        if kind is TokenKind.OPERAND:
            return precedence < Precedence.MULTIPLY
        if kind is TokenKind.OVER or kind is TokenKind.UNDER:
            return precedence < Precedence.POSTFIX
        if kind is TokenKind.CODE_POINT:
            code_point = token.code_point
            if code_point in _RELATIONAL:
                return precedence < Precedence.EQUAL
            if code_point in _PLUS or code_point in _MINUS:
                return precedence < Precedence.ADD
            if code_point in _TIMES or code_point in _DIVIDE:
                return precedence < Precedence.MULTIPLY
            if code_point == _FACTORIAL:
                return precedence < Precedence.POSTFIX
            return False
        raise AssertionError(f"unhandled token kind: {kind}")


@dataclass(frozen=True)
class LayoutParseResult:
    status: str
    node: Node
    diagnostics: list[Diagnostic] = field(default_factory=list)


def parse(
    container: Container,
    *,
    functions: FunctionRegistry = DEFAULT_FUNCTIONS,
    sink: DiagnosticSink | None = None,
    max_depth: int | None = None,
) -> Node:
    """Parse a layout container into an expression tree; never returns None."""

    return Parser(functions, sink=sink, max_depth=max_depth).parse(container)


def parse_layout(
    container: Container,
    *,
    functions: FunctionRegistry = DEFAULT_FUNCTIONS,
    max_depth: int | None = None,
    log: DiagnosticLog | None = None,
) -> LayoutParseResult:
    """Parse a container and collect its diagnostics into one result."""

    log = log if log is not None else DiagnosticLog()
    start = len(log.diagnostics)
    node = Parser(functions, sink=log, max_depth=max_depth).parse(container)
    diagnostics = log.diagnostics[start:]
    return LayoutParseResult(
        status="ok" if not diagnostics else "error",
        node=node,
        diagnostics=diagnostics,
    )
