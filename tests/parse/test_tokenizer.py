"""Tests for layout tokenization and the word/number merge passes."""

from __future__ import annotations

from mathbox.core.ast import Binary, BinaryOp, Call, Error, Number, SourceRange, Symbol, Tuple
from mathbox.core.functions import FunctionRegistry, FunctionSpec
from mathbox.diagnostics.models import DiagnosticCode, DiagnosticLog
from mathbox.layout.build import abs_, brackets, ceil, floor, frac, parens, row, sqrt, sub, sup
from mathbox.parse.pratt import Parser, parse_layout
from mathbox.parse.tokenizer import is_word_code_point
from mathbox.parse.tokens import Token, TokenKind


def _tokens(*items, parser: Parser | None = None) -> list[Token]:
    parser = parser or Parser()
    return parser.tokenizer.tokenize(row(*items), 0).tokens


def _summary(tokens: list[Token]) -> list[tuple]:
    out = []
    for token in tokens:
        if token.kind is TokenKind.CODE_POINT:
            out.append(("cp", token.code_point))
        elif token.kind is TokenKind.OPERAND and isinstance(token.node, Number):
            out.append(("num", token.node.value))
        elif token.kind is TokenKind.OPERAND and isinstance(token.node, Symbol):
            out.append(("fn" if token.is_function else "sym", token.node.name))
        else:
            out.append((token.kind.value,))
    return out


def test_number_run_merges_to_one_operand() -> None:
    tokens = _tokens("12.5")

    assert _summary(tokens) == [("num", 12.5), ("end_of_input",)]
    assert tokens[0].range == SourceRange(start=0, end=4)
    assert tokens[-1].range == SourceRange(start=4, end=4)


def test_number_run_stops_at_second_point() -> None:
    assert _summary(_tokens("1.2.3")) == [("num", 1.2), ("num", 0.3), ("end_of_input",)]


def test_lone_point_is_not_a_number() -> None:
    assert _summary(_tokens(".")) == [("cp", "."), ("end_of_input",)]
    assert _summary(_tokens("..5")) == [("cp", "."), ("num", 0.5), ("end_of_input",)]


def test_letters_become_single_symbols() -> None:
    assert _summary(_tokens("2xy")) == [
        ("num", 2),
        ("sym", "x"),
        ("sym", "y"),
        ("end_of_input",),
    ]


def test_function_names_merge_with_longest_match() -> None:
    assert _summary(_tokens("sinhx")) == [("fn", "sinh"), ("sym", "x"), ("end_of_input",)]
    assert _summary(_tokens("xsin")) == [("sym", "x"), ("fn", "sin"), ("end_of_input",)]


def test_function_alias_maps_to_canonical_name() -> None:
    tokens = _tokens("arcsinx")

    assert _summary(tokens) == [("fn", "asin"), ("sym", "x"), ("end_of_input",)]
    assert tokens[0].range == SourceRange(start=0, end=6)


def test_single_letter_function_from_custom_table() -> None:
    parser = Parser(FunctionRegistry([FunctionSpec(canonical_name="f", surface_forms=("f",))]))

    assert _summary(_tokens("fx", parser=parser)) == [("fn", "f"), ("sym", "x"), ("end_of_input",)]


def test_greek_letters_are_word_characters() -> None:
    assert is_word_code_point("θ")
    assert is_word_code_point("Ω")
    assert not is_word_code_point("1")
    assert not is_word_code_point("∞")
    assert _summary(_tokens("2πr")) == [("num", 2), ("sym", "π"), ("sym", "r"), ("end_of_input",)]


def test_whitespace_separates_runs_and_is_dropped() -> None:
    tokens = _tokens("12 34")

    assert _summary(tokens) == [("num", 12), ("num", 34), ("end_of_input",)]
    assert tokens[1].range == SourceRange(start=3, end=5)


def test_fraction_becomes_divide_operand() -> None:
    tokens = _tokens(frac("1", "x"))
    node = tokens[0].node

    assert tokens[0].kind is TokenKind.OPERAND
    assert tokens[0].range == SourceRange(start=0, end=5)
    assert isinstance(node, Binary)
    assert node.op is BinaryOp.DIVIDE
    assert node.internal_range == SourceRange(start=2, end=3)


def test_parentheses_become_tuple_operand() -> None:
    tokens = _tokens(parens("a,b"))
    node = tokens[0].node

    assert isinstance(node, Tuple)
    assert [item.name for item in node.items] == ["a", "b"]


def test_brackets_group_without_tuple() -> None:
    node = _tokens(brackets("a+b"))[0].node

    assert isinstance(node, Binary)
    assert node.op is BinaryOp.ADD


def test_call_specials_wrap_named_function() -> None:
    for builder, name in ((abs_, "abs"), (ceil, "ceil"), (floor, "floor"), (sqrt, "sqrt")):
        node = _tokens(builder("x"))[0].node
        assert isinstance(node, Call)
        assert node.target.name == name
        assert len(node.args.items) == 1
        assert node.args.items[0].name == "x"


def test_over_and_under_tokens_carry_inner_parse() -> None:
    tokens = _tokens("x", sup("2"), sub("i"))

    assert [token.kind for token in tokens] == [
        TokenKind.OPERAND,
        TokenKind.OVER,
        TokenKind.UNDER,
        TokenKind.END_OF_INPUT,
    ]
    assert tokens[1].node.value == 2
    assert tokens[2].node.name == "i"
    assert tokens[1].range == SourceRange(start=1, end=4)


def test_nested_container_indices_are_absolute() -> None:
    tokens = _tokens("a", parens("bc"))
    inner = tokens[1].node.items[0]

    # "a" at 0, "(" at 1, "b" at 2, "c" at 3.
    assert inner.range == SourceRange(start=2, end=4)
    assert inner.args[0].range == SourceRange(start=2, end=3)


def test_depth_guard_replaces_deep_special_with_error() -> None:
    log = DiagnosticLog()
    parser = Parser(sink=log, max_depth=1)

    tokens = parser.tokenizer.tokenize(row(parens(parens("x"))), 0).tokens
    outer = tokens[0].node

    assert isinstance(outer, Tuple)
    assert outer.items[0].node == "Error"
    assert log.codes() == [DiagnosticCode.NESTING_TOO_DEEP]
    assert parser.tokenizer._depth == 0


def test_depth_guard_keeps_superscript_role() -> None:
    log = DiagnosticLog()
    parser = Parser(sink=log, max_depth=1)

    node = parser.parse(row(parens(row("x", sup("2")))))
    power = node.items[0]

    assert isinstance(power, Binary)
    assert power.op is BinaryOp.EXPONENT
    assert power.left.name == "x"
    assert isinstance(power.right, Error)
    assert log.codes() == [DiagnosticCode.NESTING_TOO_DEEP]


def test_depth_guard_keeps_subscript_role() -> None:
    log = DiagnosticLog()
    parser = Parser(sink=log, max_depth=1)

    tokens = parser.tokenizer.tokenize(row(parens(row("x", sub("i")))), 0).tokens

    assert isinstance(tokens[0].node, Error)
    assert log.codes() == [DiagnosticCode.NESTING_TOO_DEEP, DiagnosticCode.UNEXPECTED_TOKEN]
    assert log.diagnostics[1].details["kind"] == "under"


def test_unconvertible_number_becomes_error_operand() -> None:
    def reject(text: str) -> int:
        raise ValueError(f"cannot convert {text!r}")

    log = DiagnosticLog()
    tokens = _tokens("x+12", parser=Parser(number_parser=reject, sink=log))

    assert tokens[2].kind is TokenKind.OPERAND
    assert isinstance(tokens[2].node, Error)
    assert tokens[2].range == SourceRange(start=2, end=4)
    assert log.codes() == [DiagnosticCode.INVALID_NUMBER]
    assert log.diagnostics[0].details == {"length": 2}


def test_digit_run_past_int_conversion_limit_is_reported() -> None:
    result = parse_layout(row("1" * 5000))

    assert result.status == "error"
    assert isinstance(result.node, Error)
    assert result.node.range == SourceRange(start=0, end=5000)
    assert [d.code for d in result.diagnostics] == [DiagnosticCode.INVALID_NUMBER]
