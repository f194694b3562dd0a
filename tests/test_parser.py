import pytest

from levelcurve.nodes import BinaryOperation, BinaryOperator, Node, Number, Variable
from levelcurve.parser import DEFAULT_MAX_DEPTH, OperandShape, ParsedOperand, ParserError, build_tree, parse
from levelcurve.runtime import evaluate

X = Variable()


def nested(levels: int) -> str:
    """``levels + 1`` pairs of nested parentheses: ((((x) + 1) + 1) ...)"""
    code = "(x)"
    for _ in range(levels):
        code = f"({code} + 1)"
    return code


@pytest.mark.parametrize(
    "code, expected_tree",
    [
        pytest.param("(6)", Number(6.0)),
        pytest.param("(-2.5e3)", Number(-2500.0)),
        pytest.param("(.5)", Number(0.5)),
        pytest.param("(x)", X),
        pytest.param("(x+1)", BinaryOperation(BinaryOperator.ADD, X, Number(1.0))),
        pytest.param("(x+-1)", BinaryOperation(BinaryOperator.ADD, X, Number(-1.0))),
        pytest.param("(x -1)", BinaryOperation(BinaryOperator.SUB, X, Number(1.0))),
        pytest.param("(x - -1)", BinaryOperation(BinaryOperator.SUB, X, Number(-1.0))),
        pytest.param("(2-3)", BinaryOperation(BinaryOperator.SUB, Number(2.0), Number(3.0))),
        pytest.param("(x*x)", BinaryOperation(BinaryOperator.MUL, X, X)),
        pytest.param("(  x\t/\t2  )", BinaryOperation(BinaryOperator.DIV, X, Number(2.0))),
        pytest.param("(x % 3)", BinaryOperation(BinaryOperator.MOD, X, Number(3.0))),
        pytest.param("(2 ^ x)", BinaryOperation(BinaryOperator.POW, Number(2.0), X)),
        pytest.param("(2 log x)", BinaryOperation(BinaryOperator.LOG, Number(2.0), X)),
        pytest.param("(xlog2)", BinaryOperation(BinaryOperator.LOG, X, Number(2.0))),
        pytest.param("((1) / (0))", BinaryOperation(BinaryOperator.DIV, Number(1.0), Number(0.0))),
        pytest.param(
            "((x + 1) * (x - 1))",
            BinaryOperation(
                BinaryOperator.MUL,
                BinaryOperation(BinaryOperator.ADD, X, Number(1.0)),
                BinaryOperation(BinaryOperator.SUB, X, Number(1.0)),
            ),
        ),
        pytest.param(
            "(2 * (x ^ 2))",
            BinaryOperation(BinaryOperator.MUL, Number(2.0), BinaryOperation(BinaryOperator.POW, X, Number(2.0))),
        ),
    ],
)
def test_parse(code: str, expected_tree: Node) -> None:
    assert parse(code) == expected_tree


@pytest.mark.parametrize(
    "code, error_char_idx",
    [
        pytest.param("(2 +)", 4),
        pytest.param("", 0),
        pytest.param("x", 0),
        pytest.param("6", 0),
        pytest.param("()", 1),
        pytest.param("(6", 2),
        pytest.param("( 6)", 3),
        pytest.param("(6 )", 3),
        pytest.param("((x))", 4),
        pytest.param("(1 + 2 + 3)", 7),
        pytest.param("(y)", 1),
        pytest.param("(x y)", 3),
        pytest.param("(1 ++ 2)", 4),
        pytest.param("(x\n+ 1)", 2),
        pytest.param("(inf)", 1),
        pytest.param("(x) ", 3),
        pytest.param(" (x)", 0),
        pytest.param("(6))", 3),
    ],
)
def test_parse_error(code: str, error_char_idx: int) -> None:
    with pytest.raises(ParserError) as exc_info:
        parse(code)
    assert exc_info.value.error_char_idx == error_char_idx
    assert exc_info.value.remainder == code[error_char_idx:]


def test_parse_error_message() -> None:
    with pytest.raises(ParserError) as exc_info:
        parse("(2 +)")
    message = str(exc_info.value)
    assert "Expected '(', 'x', number, found ')'" in message
    assert message.splitlines()[1:] == ["(2 +)", "    ^"]
    assert exc_info.value.code == "(2 +)"
    assert exc_info.value.remainder == ")"


def test_trailing_input_message() -> None:
    with pytest.raises(ParserError) as exc_info:
        parse("(x) + 1")
    assert "Unexpected trailing input ' + 1'" in str(exc_info.value)


def test_number_literal_out_of_range() -> None:
    with pytest.raises(ParserError) as exc_info:
        parse("(x + 1e999)")
    assert exc_info.value.error_char_idx == 5
    assert "out of range" in exc_info.value.errmsg


def test_nesting_cap() -> None:
    assert evaluate(parse(nested(4), max_depth=5), 0) == 4.0
    with pytest.raises(ParserError) as exc_info:
        parse(nested(5), max_depth=5)
    assert exc_info.value.error_char_idx == 5
    assert "nested deeper than 5 levels" in exc_info.value.errmsg


def test_default_nesting_cap() -> None:
    assert evaluate(parse(nested(DEFAULT_MAX_DEPTH - 1)), 1) == float(DEFAULT_MAX_DEPTH)
    with pytest.raises(ParserError):
        parse(nested(DEFAULT_MAX_DEPTH))


def test_invalid_max_depth() -> None:
    with pytest.raises(ValueError):
        parse("(x)", max_depth=0)


def test_build_tree_rejects_malformed_operand() -> None:
    with pytest.raises(RuntimeError):
        build_tree(ParsedOperand(OperandShape.NUMBER))
    with pytest.raises(RuntimeError):
        build_tree(ParsedOperand(OperandShape.SUBEXPRESSION, 1.0))
    assert build_tree(ParsedOperand(OperandShape.SUBEXPRESSION, ParsedOperand(OperandShape.VARIABLE))) == X
