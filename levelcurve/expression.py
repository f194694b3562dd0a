from dataclasses import dataclass
from typing import Any, Optional

from levelcurve.nodes import BinaryOperation, Node, to_text
from levelcurve.numeric import NumericTypeLike
from levelcurve.parser import DEFAULT_MAX_DEPTH, parse
from levelcurve.runtime import evaluate


@dataclass(frozen=True)
class Expression:
    """A parsed formula in the single variable ``x``.

    Immutable once built, so one instance can be evaluated any number of times, from
    any number of threads.

    >>> Expression.parse("((2 * x) + 1)").evaluate(3)
    7.0
    """

    root: Node

    @classmethod
    def parse(cls, code: str, max_depth: int = DEFAULT_MAX_DEPTH) -> "Expression":
        return cls(root=parse(code, max_depth=max_depth))

    def evaluate(
        self,
        value: Any,
        output_type: NumericTypeLike = float,
        input_type: Optional[NumericTypeLike] = None,
    ) -> float | int:
        return evaluate(self.root, value, output_type=output_type, input_type=input_type)

    def to_text(self) -> str:
        """Canonical text of the formula, accepted by ``Expression.parse``"""
        if isinstance(self.root, BinaryOperation):
            return to_text(self.root)
        return f"({to_text(self.root)})"

    def __str__(self) -> str:
        return self.to_text()

    def to_dict(self) -> dict[str, str]:
        return {"formula": self.to_text()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Expression":
        return cls.parse(data["formula"])
