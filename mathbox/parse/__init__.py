"""Layout tokenizer and Pratt parser."""

from mathbox.parse.context import ParserContext
from mathbox.parse.pratt import LayoutParseResult, Parser, Precedence, parse, parse_layout
from mathbox.parse.tokenizer import Tokenizer
from mathbox.parse.tokens import Token, TokenFlag, TokenKind

__all__ = [
    "LayoutParseResult",
    "Parser",
    "ParserContext",
    "Precedence",
    "Token",
    "TokenFlag",
    "TokenKind",
    "Tokenizer",
    "parse",
    "parse_layout",
]
