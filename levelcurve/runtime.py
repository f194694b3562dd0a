import math
from typing import Any, Callable, Optional

from levelcurve.nodes import BinaryOperation, BinaryOperator, Node, Number, Variable
from levelcurve.numeric import NumericTypeLike, from_double, to_double

BinaryOperationImpl = Callable[[float, float], float]


def evaluate(
    node: Node,
    value: Any,
    output_type: NumericTypeLike = float,
    input_type: Optional[NumericTypeLike] = None,
) -> float | int:
    """Substitutes ``value`` for the variable and converts the result to ``output_type``.

    Arithmetic is done in double precision with IEEE-754 semantics: division by zero,
    logarithms of zero and similar produce infinities or NaN instead of raising. Those
    only turn into a ``ConversionError`` when ``output_type`` cannot represent them.
    """
    x = to_double(value, input_type)
    return from_double(evaluate_node(node, x), output_type)


def evaluate_node(node: Node, x: float) -> float:
    if isinstance(node, Number):
        return node.value
    elif isinstance(node, Variable):
        return x
    elif isinstance(node, BinaryOperation):
        left_res = evaluate_node(node.left, x)
        right_res = evaluate_node(node.right, x)
        return binary_operation_impls[node.operator](left_res, right_res)
    else:
        raise TypeError(f"Unexpected node type: {node!r}")


def _is_odd_integer(n: float) -> bool:
    return math.isfinite(n) and n.is_integer() and n % 2 == 1


def _div(a: float, b: float) -> float:
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _mod(a: float, b: float) -> float:
    # remainder takes the sign of the dividend, like C fmod
    try:
        return math.fmod(a, b)
    except ValueError:
        return math.nan


def _pow(a: float, b: float) -> float:
    try:
        return math.pow(a, b)
    except OverflowError:
        return -math.inf if a < 0 and _is_odd_integer(b) else math.inf
    except ValueError:
        if a == 0:
            # zero to a negative power
            return -math.inf if math.copysign(1.0, a) < 0 and _is_odd_integer(b) else math.inf
        return math.nan


def _ln(a: float) -> float:
    if a == 0:
        return -math.inf
    if a < 0 or math.isnan(a):
        return math.nan
    return math.log(a)


def _log(a: float, base: float) -> float:
    return _div(_ln(a), _ln(base))


binary_operation_impls: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUB: lambda a, b: a - b,
    BinaryOperator.MUL: lambda a, b: a * b,
    BinaryOperator.DIV: _div,
    BinaryOperator.MOD: _mod,
    BinaryOperator.POW: _pow,
    BinaryOperator.LOG: _log,
}
