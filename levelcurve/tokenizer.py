import enum
import re
from dataclasses import dataclass
from typing import Optional

from levelcurve.utils import PrintableEnum


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    VARIABLE = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    PERCENT = enum.auto()
    CARET = enum.auto()
    LOG = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    SPACE = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    pos: int

    @property
    def end(self) -> int:
        return self.pos + len(self.lexeme)

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


VARIABLE_SYMBOL = "x"

LITERAL_TOKENS = {
    TokenType.VARIABLE: VARIABLE_SYMBOL,
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.STAR: "*",
    TokenType.SLASH: "/",
    TokenType.PERCENT: "%",
    TokenType.CARET: "^",
    TokenType.LOG: "log",
    TokenType.BRACKET_OPEN: "(",
    TokenType.BRACKET_CLOSE: ")",
}

PATTERN_TOKENS = {
    # 12, -3.5, .5, 1., 6.02e+23
    TokenType.NUMBER: re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"),
    # only horizontal whitespace is allowed between tokens
    TokenType.SPACE: re.compile(r"[ \t]+"),
}


def match_token(token_type: TokenType, code: str, i: int) -> Optional[Token]:
    """Tries to match a token of the given type starting exactly at ``code[i]``.

    Tokens are matched on demand by the parser rather than in a separate pass: a
    leading ``-`` is an operator in ``(x -1)`` but part of the literal in ``(x - -1)``,
    and only the grammar position tells which one is wanted.
    """
    if token_type in LITERAL_TOKENS:
        lexeme = LITERAL_TOKENS[token_type]
        if code.startswith(lexeme, i):
            return Token(type=token_type, lexeme=lexeme, pos=i)
        return None
    match = PATTERN_TOKENS[token_type].match(code, i)
    if match is None:
        return None
    return Token(type=token_type, lexeme=match.group(), pos=i)


def skip_spaces(code: str, i: int) -> int:
    space = match_token(TokenType.SPACE, code, i)
    return space.end if space is not None else i
