"""Layout container -> flat token stream.

Nested containers are parsed depth-first into finished sub-expressions, so
the grammar only ever sees OPERAND, OVER, UNDER and CODE_POINT atoms.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mathbox.core.ast import Binary, BinaryOp, Call, Error, Node, Number, SourceRange, Symbol, Tuple, span
from mathbox.layout.models import Character, Container, Special, SpecialKind
from mathbox.parse.context import ParserContext
from mathbox.parse.tokens import Token, TokenKind, code_point_token, operand_token

if TYPE_CHECKING:
    from mathbox.parse.pratt import Parser


# Specials that become a one-argument call to a named function.
_CALL_SPECIALS = {
    SpecialKind.ABSOLUTE_VALUE: "abs",
    SpecialKind.CEILING: "ceil",
    SpecialKind.FLOOR: "floor",
    SpecialKind.RADICAL: "sqrt",
}


def is_word_code_point(code_point: str) -> bool:
    """ASCII letters and Greek letters."""

    if ("a" <= code_point <= "z") or ("A" <= code_point <= "Z"):
        return True
    return ("α" <= code_point <= "ω") or ("Α" <= code_point <= "Ω")


def _is_word_token(token: Token) -> bool:
    return token.kind is TokenKind.CODE_POINT and is_word_code_point(token.code_point)


def _is_number_token(token: Token) -> bool:
    return token.kind is TokenKind.CODE_POINT and ("0" <= token.code_point <= "9" or token.code_point == ".")


def _is_space_token(token: Token) -> bool:
    return token.kind is TokenKind.CODE_POINT and token.code_point.isspace()


class Tokenizer:
    """Turns one container into a ParserContext, recursing through specials."""

    def __init__(self, parser: "Parser") -> None:
        self.parser = parser
        self._depth = 0

    def tokenize(self, container: Container, base_index: int) -> ParserContext:
        tokens: list[Token] = []
        index = base_index
        for child in container.children:
            element_range = SourceRange(start=index, end=index + child.width)
            if isinstance(child, Character):
                tokens.append(code_point_token(child.code_point, element_range))
            else:
                tokens.append(self._special_token(child, index, element_range))
            index += child.width

        tokens = self._merge_words(tokens)
        tokens = self._merge_numbers(tokens)
        # Whitespace only separates runs; the grammar never sees it.
        tokens = [token for token in tokens if not _is_space_token(token)]
        tokens.append(Token(kind=TokenKind.END_OF_INPUT, range=SourceRange(start=index, end=index)))
        return ParserContext(tokens, self.parser.sink)

    def _special_token(self, special: Special, index: int, element_range: SourceRange) -> Token:
        limit = self.parser.max_depth
        if limit is not None and self._depth >= limit:
            self.parser.sink.report_nesting_too_deep(element_range, limit)
            error = Error(range=element_range)
            if special.kind is SpecialKind.OVER:
                return Token(kind=TokenKind.OVER, range=element_range, node=error)
            if special.kind is SpecialKind.UNDER:
                return Token(kind=TokenKind.UNDER, range=element_range, node=error)
            return operand_token(error, range=element_range)

        self._depth += 1
        try:
            return self._resolve_special(special, index, element_range)
        finally:
            self._depth -= 1

    def _resolve_special(self, special: Special, index: int, element_range: SourceRange) -> Token:
        parser = self.parser
        offsets = special.container_offsets(index)
        kind = special.kind

        if kind is SpecialKind.FRACTION:
            numerator, denominator = special.containers
            num = parser.parse_container(numerator, offsets[0])
            den = parser.parse_container(denominator, offsets[1])
            bar_index = offsets[0] + numerator.width
            node: Node = Binary(
                op=BinaryOp.DIVIDE,
                args=[num, den],
                range=span(num.range, den.range),
                internal_range=SourceRange(start=bar_index, end=bar_index + 1),
            )
            return operand_token(node, range=element_range)

        if kind is SpecialKind.PARENTHESES:
            return operand_token(parser.parse_tuple(special.containers[0], offsets[0]), range=element_range)

        if kind is SpecialKind.BRACKETS:
            inner = parser.parse_container(special.containers[0], offsets[0])
            return operand_token(inner, range=element_range)

        if kind in _CALL_SPECIALS:
            inner = parser.parse_container(special.containers[0], offsets[0])
            node = Call(
                target=Symbol(name=_CALL_SPECIALS[kind], range=element_range),
                args=Tuple(items=[inner], range=inner.range),
                range=element_range,
            )
            return operand_token(node, range=element_range)

        if kind is SpecialKind.OVER or kind is SpecialKind.UNDER:
            inner = parser.parse_container(special.containers[0], offsets[0])
            token_kind = TokenKind.OVER if kind is SpecialKind.OVER else TokenKind.UNDER
            return Token(kind=token_kind, range=element_range, node=inner)

        raise AssertionError(f"unhandled special kind: {kind}")

    def _merge_words(self, tokens: list[Token]) -> list[Token]:
        """Collapse runs of word characters into symbol operands.

        The longest prefix naming a canonical function wins; without one the
        first character alone becomes a plain symbol.
        """

        out: list[Token] = []
        i = 0
        while i < len(tokens):
            first = tokens[i]
            if not _is_word_token(first):
                out.append(first)
                i += 1
                continue

            text = ""
            best_length = 0
            best_name = ""
            best_function = False
            j = i
            while j < len(tokens) and _is_word_token(tokens[j]):
                text += tokens[j].code_point
                canonical = self.parser.functions.lookup(text)
                if canonical is not None:
                    best_length, best_name, best_function = len(text), canonical, True
                elif j == i:
                    best_length, best_name, best_function = 1, text, False
                j += 1

            last = tokens[i + best_length - 1]
            symbol = Symbol(name=best_name, range=span(first.range, last.range))
            out.append(operand_token(symbol, function=best_function))
            i += best_length
        return out

    def _merge_numbers(self, tokens: list[Token]) -> list[Token]:
        """Collapse runs of digits with at most one point into number operands."""

        out: list[Token] = []
        i = 0
        while i < len(tokens):
            first = tokens[i]
            if not _is_number_token(first):
                out.append(first)
                i += 1
                continue

            text = ""
            j = i
            while j < len(tokens) and _is_number_token(tokens[j]):
                code_point = tokens[j].code_point
                if code_point == "." and "." in text:
                    break
                text += code_point
                j += 1

            if text == ".":
                out.append(first)
                i += 1
                continue

            run_range = span(first.range, tokens[j - 1].range)
            try:
                value = self.parser.number_parser(text)
            except ValueError:
                self.parser.sink.report_invalid_number(run_range, len(text))
                out.append(operand_token(Error(range=run_range)))
            else:
                out.append(operand_token(Number(value=value, range=run_range)))
            i = j
        return out
