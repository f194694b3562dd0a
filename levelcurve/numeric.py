"""Conversion of caller values to and from double precision.

Formulas are always computed on Python floats (IEEE-754 doubles). A caller picks the
numeric type of the result, e.g. ``U8`` for a level cap stored in a byte, and the
conversion either produces an exact value of that type or raises ``ConversionError``:

* float targets accept any double; ``F32`` additionally rounds to single precision
  and rejects finite values beyond its range,
* integer targets truncate toward zero and reject NaN, infinities, negative values
  for unsigned types and anything outside the type's range.
"""
import decimal
import math
import numbers
import struct
from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass
class ConversionError(Exception):
    errmsg: str
    value: Any

    def __str__(self) -> str:
        return f"[Conversion error] {self.errmsg}"


@dataclass(frozen=True)
class NumericType:
    name: str
    is_integer: bool
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    single_precision: bool = False

    @property
    def is_unsigned(self) -> bool:
        return self.min_value == 0

    def __str__(self) -> str:
        return self.name


def _unsigned(bits: int) -> NumericType:
    return NumericType(name=f"u{bits}", is_integer=True, min_value=0, max_value=2**bits - 1)


def _signed(bits: int) -> NumericType:
    return NumericType(name=f"i{bits}", is_integer=True, min_value=-(2 ** (bits - 1)), max_value=2 ** (bits - 1) - 1)


U8 = _unsigned(8)
U16 = _unsigned(16)
U32 = _unsigned(32)
U64 = _unsigned(64)
I8 = _signed(8)
I16 = _signed(16)
I32 = _signed(32)
I64 = _signed(64)
F32 = NumericType(name="f32", is_integer=False, single_precision=True)
F64 = NumericType(name="f64", is_integer=False)
INT = NumericType(name="int", is_integer=True)

NumericTypeLike = Union[NumericType, type]

BUILTIN_TYPES: dict[type, NumericType] = {int: INT, float: F64}

NUMERIC_TYPES: dict[str, NumericType] = {t.name: t for t in (U8, U16, U32, U64, I8, I16, I32, I64, F32, F64, INT)}


def resolve_numeric_type(numeric_type: NumericTypeLike) -> NumericType:
    if isinstance(numeric_type, NumericType):
        return numeric_type
    if numeric_type in BUILTIN_TYPES:
        return BUILTIN_TYPES[numeric_type]  # type: ignore
    raise TypeError(f"Unsupported numeric type: {numeric_type!r}")


def numeric_type_by_name(name: str) -> NumericType:
    if name not in NUMERIC_TYPES:
        raise ValueError(f"Unknown numeric type name: {name!r}")
    return NUMERIC_TYPES[name]


def to_double(value: Any, input_type: Optional[NumericTypeLike] = None) -> float:
    """Converts an input value to a double, optionally checking it against ``input_type``"""
    if isinstance(value, bool) or not isinstance(value, (numbers.Real, decimal.Decimal)):
        raise ConversionError(f"{value!r} is not a real number", value=value)

    if input_type is not None:
        _check_input(value, resolve_numeric_type(input_type))

    try:
        return float(value)
    except (OverflowError, ValueError) as e:
        raise ConversionError(f"{value!r} has no double precision representation", value=value) from e


def _is_integral(value: Any) -> bool:
    if isinstance(value, decimal.Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return isinstance(value, numbers.Integral)


def _check_input(value: Any, numeric_type: NumericType) -> None:
    if numeric_type.is_integer:
        if not _is_integral(value):
            raise ConversionError(f"{value!r} is not a {numeric_type} value", value=value)
        _check_range(int(value), numeric_type, value)
    elif numeric_type.single_precision:
        from_double(float(value), numeric_type)


def from_double(value: float, output_type: NumericTypeLike = float) -> float | int:
    """Converts a computed double to ``output_type``"""
    numeric_type = resolve_numeric_type(output_type)

    if not numeric_type.is_integer:
        if numeric_type.single_precision:
            result = struct.unpack("f", struct.pack("f", value))[0]
            if math.isinf(result) and math.isfinite(value):
                raise ConversionError(f"{value!r} is out of range for {numeric_type}", value=value)
            return result
        return value

    if math.isnan(value) or math.isinf(value):
        raise ConversionError(f"Non-finite {value!r} cannot be converted to {numeric_type}", value=value)
    if numeric_type.is_unsigned and value < 0:
        raise ConversionError(f"Negative {value!r} cannot be converted to {numeric_type}", value=value)
    result = math.trunc(value)
    _check_range(result, numeric_type, value)
    return result


def _check_range(n: int, numeric_type: NumericType, value: Any) -> None:
    if numeric_type.min_value is not None and n < numeric_type.min_value:
        raise ConversionError(f"{value!r} is below the {numeric_type} minimum {numeric_type.min_value}", value=value)
    if numeric_type.max_value is not None and n > numeric_type.max_value:
        raise ConversionError(f"{value!r} is above the {numeric_type} maximum {numeric_type.max_value}", value=value)
