"""Tests for the token cursor."""

from __future__ import annotations

from mathbox.core.ast import SourceRange
from mathbox.diagnostics.models import DiagnosticCode, DiagnosticLog
from mathbox.parse.context import ParserContext
from mathbox.parse.tokens import Token, TokenKind, code_point_token


def _ctx(text: str, log: DiagnosticLog | None = None) -> ParserContext:
    tokens = [code_point_token(ch, SourceRange(start=i, end=i + 1)) for i, ch in enumerate(text)]
    end = SourceRange(start=len(text), end=len(text))
    tokens.append(Token(kind=TokenKind.END_OF_INPUT, range=end))
    return ParserContext(tokens, log if log is not None else DiagnosticLog())


def test_next_returns_current_then_advances() -> None:
    ctx = _ctx("+-")

    assert ctx.next().code_point == "+"
    assert ctx.current().code_point == "-"


def test_next_is_clamped_at_end_of_input() -> None:
    ctx = _ctx("a")
    ctx.next()

    assert ctx.next().kind is TokenKind.END_OF_INPUT
    assert ctx.next().kind is TokenKind.END_OF_INPUT
    assert ctx.index == 1
    assert not ctx.has_more_tokens()


def test_peek_and_eat() -> None:
    ctx = _ctx(",x")

    assert ctx.peek(",")
    assert not ctx.eat("x")
    assert ctx.eat(",")
    assert ctx.peek("x")
    assert ctx.has_more_tokens()


def test_unexpected_token_reports_current_range() -> None:
    log = DiagnosticLog()
    ctx = _ctx("a*", log)
    ctx.next()

    ctx.unexpected_token()

    assert log.codes() == [DiagnosticCode.UNEXPECTED_TOKEN]
    assert log.diagnostics[0].range == SourceRange(start=1, end=2)
    assert log.diagnostics[0].message == "unexpected '*'"
