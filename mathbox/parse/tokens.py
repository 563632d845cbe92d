"""Token definitions for the layout tokenizer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from mathbox.core.ast import Node, SourceRange


class TokenKind(str, Enum):
    CODE_POINT = "code_point"
    END_OF_INPUT = "end_of_input"
    OPERAND = "operand"
    OVER = "over"
    UNDER = "under"


class TokenFlag(str, Enum):
    FUNCTION = "function"


@dataclass(frozen=True, slots=True)
class Token:
    """One atom of the flat token stream.

    ``code_point`` is set only for CODE_POINT tokens; ``node`` only for
    OPERAND, OVER and UNDER tokens.
    """

    kind: TokenKind
    range: SourceRange
    code_point: str | None = None
    node: Node | None = None
    flags: frozenset[TokenFlag] = field(default_factory=frozenset)

    @property
    def is_function(self) -> bool:
        return TokenFlag.FUNCTION in self.flags

    def is_code_point(self, code_point: str) -> bool:
        return self.kind is TokenKind.CODE_POINT and self.code_point == code_point

    def describe(self) -> str:
        if self.kind is TokenKind.CODE_POINT:
            return f"'{self.code_point}'"
        if self.kind is TokenKind.END_OF_INPUT:
            return "end of input"
        if self.kind is TokenKind.OPERAND and self.is_function:
            return "function name"
        return self.kind.value.replace("_", " ")


def code_point_token(code_point: str, range: SourceRange) -> Token:
    return Token(kind=TokenKind.CODE_POINT, range=range, code_point=code_point)


def operand_token(node: Node, *, function: bool = False, range: SourceRange | None = None) -> Token:
    """Wrap a parsed node; the token covers ``range`` or else the node's own range."""

    assert node.range is not None, "operand node must carry a range"
    flags = frozenset({TokenFlag.FUNCTION}) if function else frozenset()
    return Token(kind=TokenKind.OPERAND, range=range if range is not None else node.range, node=node, flags=flags)
