import enum
from dataclasses import dataclass

from levelcurve.tokenizer import LITERAL_TOKENS, VARIABLE_SYMBOL, TokenType
from levelcurve.utils import PrintableEnum


class BinaryOperator(PrintableEnum):
    ADD = enum.auto()
    SUB = enum.auto()
    MUL = enum.auto()
    DIV = enum.auto()
    MOD = enum.auto()
    POW = enum.auto()
    LOG = enum.auto()

    @property
    def token_type(self) -> TokenType:
        return OPERATOR_TOKENS[self]

    @property
    def symbol(self) -> str:
        return LITERAL_TOKENS[OPERATOR_TOKENS[self]]


OPERATOR_TOKENS = {
    BinaryOperator.ADD: TokenType.PLUS,
    BinaryOperator.SUB: TokenType.MINUS,
    BinaryOperator.MUL: TokenType.STAR,
    BinaryOperator.DIV: TokenType.SLASH,
    BinaryOperator.MOD: TokenType.PERCENT,
    BinaryOperator.POW: TokenType.CARET,
    BinaryOperator.LOG: TokenType.LOG,
}


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Variable:
    pass


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Node"
    right: "Node"


Node = Number | Variable | BinaryOperation


def to_text(node: Node) -> str:
    """Renders a tree as canonical fully parenthesized text.

    Whitespace and the spelling of number literals are normalized, so the result is
    not necessarily identical to the text the tree was parsed from. Leaves are written
    bare; see ``Expression.to_text`` for the re-parseable top-level form.
    """
    if isinstance(node, Number):
        return repr(node.value)
    elif isinstance(node, Variable):
        return VARIABLE_SYMBOL
    elif isinstance(node, BinaryOperation):
        return f"({to_text(node.left)} {node.operator.symbol} {to_text(node.right)})"
    else:
        raise TypeError(f"Unexpected node type: {node!r}")
