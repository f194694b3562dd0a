"""Ordered-choice recursive descent parser for level formulas.

Grammar::

    expr    := "(" number ")" | "(" variable ")"
             | "(" ws? operand ws? operator ws? operand ws? ")"
    operand := number | variable | expr

There is no operator precedence: every binary application is written in its own
pair of parentheses. Alternatives are tried in a fixed order and the first one
matching a prefix of the remaining input wins: the bare number, the bare variable,
then the operator families in ``BinaryOperator`` declaration order, and inside a
family the left/right operand shapes in ``SHAPE_COMBINATIONS`` order.
"""
import enum
import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Optional

from levelcurve.nodes import BinaryOperation, BinaryOperator, Node, Number, Variable
from levelcurve.tokenizer import LITERAL_TOKENS, Token, TokenType, match_token, skip_spaces
from levelcurve.utils import PrintableEnum, render_excerpt

logger = logging.getLogger(__name__)

# each nesting level costs a handful of interpreter frames while parsing
DEFAULT_MAX_DEPTH = 100


@dataclass
class ParserError(Exception):
    errmsg: str
    code: str
    error_char_idx: int

    @property
    def remainder(self) -> str:
        return self.code[self.error_char_idx :]

    def __str__(self) -> str:
        excerpt, caret = render_excerpt(self.code, self.error_char_idx)
        return "\n".join([f"[Parser error] {self.errmsg} (offset {self.error_char_idx})", excerpt, caret])


class OperandShape(PrintableEnum):
    NUMBER = enum.auto()
    VARIABLE = enum.auto()
    SUBEXPRESSION = enum.auto()


SHAPE_COMBINATIONS = list(itertools.product(OperandShape, repeat=2))


@dataclass(frozen=True)
class ParsedOperand:
    shape: OperandShape
    value: "float | ParsedExpression | None" = None


@dataclass(frozen=True)
class ParsedApplication:
    operator: BinaryOperator
    left: ParsedOperand
    right: ParsedOperand


ParsedExpression = ParsedOperand | ParsedApplication
ParseResult = Optional[tuple[ParsedExpression, int]]


@dataclass
class _ParserState:
    code: str
    max_depth: int
    # packrat memo: offset -> result of matching ``expr`` there
    memo: dict[int, ParseResult] = field(default_factory=dict)
    furthest_idx: int = 0
    expected: set[TokenType] = field(default_factory=set)

    def expect(self, token_type: TokenType, i: int) -> Optional[Token]:
        token = match_token(token_type, self.code, i)
        if token is None:
            if i > self.furthest_idx:
                self.furthest_idx = i
                self.expected = {token_type}
            elif i == self.furthest_idx:
                self.expected.add(token_type)
        return token

    def error(self) -> ParserError:
        expected = ", ".join(sorted(_describe(t) for t in self.expected))
        if self.furthest_idx < len(self.code):
            found = repr(self.code[self.furthest_idx])
        else:
            found = "end of input"
        return ParserError(f"Expected {expected}, found {found}", code=self.code, error_char_idx=self.furthest_idx)


def _describe(token_type: TokenType) -> str:
    if token_type in LITERAL_TOKENS:
        return repr(LITERAL_TOKENS[token_type])
    return token_type.name.lower()


def parse(code: str, max_depth: int = DEFAULT_MAX_DEPTH) -> Node:
    """Parses formula text into an expression tree.

    The whole of ``code`` must be a single ``expr``. Raises ``ParserError`` when no
    alternative matches, when input remains after the match, or when parentheses nest
    deeper than ``max_depth``.
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be positive, got {max_depth}")
    state = _ParserState(code=code, max_depth=max_depth)
    result = _consume_expression(state, 0, depth=1)
    if result is None:
        raise state.error()
    parsed, i = result
    if i != len(code):
        raise ParserError(f"Unexpected trailing input {code[i:]!r}", code=code, error_char_idx=i)
    tree = build_tree(parsed)
    logger.debug("parsed formula %r into %r", code, tree)
    return tree


def build_tree(parsed: ParsedExpression) -> Node:
    if isinstance(parsed, ParsedApplication):
        return BinaryOperation(operator=parsed.operator, left=build_tree(parsed.left), right=build_tree(parsed.right))
    elif parsed.shape is OperandShape.NUMBER:
        if not isinstance(parsed.value, float):
            raise RuntimeError(f"Unexpected number operand value: {parsed.value!r}")
        return Number(parsed.value)
    elif parsed.shape is OperandShape.VARIABLE:
        return Variable()
    elif isinstance(parsed.value, (ParsedOperand, ParsedApplication)):
        return build_tree(parsed.value)
    else:
        raise RuntimeError(f"Unexpected subexpression operand value: {parsed.value!r}")


def _consume_expression(state: _ParserState, i: int, depth: int) -> ParseResult:
    if i in state.memo:
        return state.memo[i]

    result: ParseResult = None
    if state.expect(TokenType.BRACKET_OPEN, i) is not None:
        if depth > state.max_depth:
            raise ParserError(
                f"Formula is nested deeper than {state.max_depth} levels", code=state.code, error_char_idx=i
            )
        result = _consume_alternatives(state, i, depth)

    state.memo[i] = result
    return result


def _consume_alternatives(state: _ParserState, i: int, depth: int) -> ParseResult:
    for shape in (OperandShape.NUMBER, OperandShape.VARIABLE):
        result = _consume_bare(state, i, shape)
        if result is not None:
            return result

    for operator in BinaryOperator:
        for left_shape, right_shape in SHAPE_COMBINATIONS:
            result = _consume_application(state, i, depth, operator, left_shape, right_shape)
            if result is not None:
                return result

    return None


def _consume_bare(state: _ParserState, i: int, shape: OperandShape) -> ParseResult:
    """ "(" number ")" or "(" variable ")", no whitespace inside"""
    operand = _consume_operand(state, i + 1, depth=0, shape=shape)
    if operand is None:
        return None
    parsed, j = operand
    bracket_close = state.expect(TokenType.BRACKET_CLOSE, j)
    if bracket_close is None:
        return None
    return parsed, bracket_close.end


def _consume_application(
    state: _ParserState,
    i: int,
    depth: int,
    operator: BinaryOperator,
    left_shape: OperandShape,
    right_shape: OperandShape,
) -> ParseResult:
    j = skip_spaces(state.code, i + 1)
    left = _consume_operand(state, j, depth, left_shape)
    if left is None:
        return None
    left_operand, j = left

    operator_token = state.expect(operator.token_type, skip_spaces(state.code, j))
    if operator_token is None:
        return None

    right = _consume_operand(state, skip_spaces(state.code, operator_token.end), depth, right_shape)
    if right is None:
        return None
    right_operand, j = right

    bracket_close = state.expect(TokenType.BRACKET_CLOSE, skip_spaces(state.code, j))
    if bracket_close is None:
        return None

    return ParsedApplication(operator=operator, left=left_operand, right=right_operand), bracket_close.end


def _consume_operand(
    state: _ParserState, i: int, depth: int, shape: OperandShape
) -> Optional[tuple[ParsedOperand, int]]:
    if shape is OperandShape.NUMBER:
        token = state.expect(TokenType.NUMBER, i)
        if token is None:
            return None
        value = float(token.lexeme)
        if math.isinf(value):
            raise ParserError(f"Number literal {token.lexeme!r} is out of range", code=state.code, error_char_idx=i)
        return ParsedOperand(shape=shape, value=value), token.end
    elif shape is OperandShape.VARIABLE:
        token = state.expect(TokenType.VARIABLE, i)
        if token is None:
            return None
        return ParsedOperand(shape=shape), token.end
    else:
        subexpression = _consume_expression(state, i, depth + 1)
        if subexpression is None:
            return None
        parsed, j = subexpression
        return ParsedOperand(shape=shape, value=parsed), j
