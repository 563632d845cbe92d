"""Cursor over a finished token stream."""

from __future__ import annotations

from mathbox.diagnostics.models import DiagnosticSink
from mathbox.parse.tokens import Token, TokenKind


class ParserContext:
    """Look-ahead and consumption over one container's tokens.

    The last token is always END_OF_INPUT and the cursor never moves past it.
    """

    def __init__(self, tokens: list[Token], sink: DiagnosticSink) -> None:
        assert tokens and tokens[-1].kind is TokenKind.END_OF_INPUT
        self.tokens = tokens
        self.index = 0
        self.sink = sink

    def current(self) -> Token:
        return self.tokens[self.index]

    def next(self) -> Token:
        """Return the current token and advance, clamped at end of input."""

        token = self.tokens[self.index]
        if self.index < len(self.tokens) - 1:
            self.index += 1
        return token

    def peek(self, code_point: str) -> bool:
        return self.current().is_code_point(code_point)

    def eat(self, code_point: str) -> bool:
        """Consume the current token if it is ``code_point``."""

        if self.peek(code_point):
            self.next()
            return True
        return False

    def has_more_tokens(self) -> bool:
        return self.current().kind is not TokenKind.END_OF_INPUT

    def unexpected_token(self) -> None:
        self.sink.report_unexpected_token(self.current())
