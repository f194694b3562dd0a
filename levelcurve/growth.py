import logging
from typing import Any, Optional, Protocol

from levelcurve.expression import Expression
from levelcurve.numeric import U64, NumericType, NumericTypeLike, numeric_type_by_name, resolve_numeric_type
from levelcurve.progress import Progress
from levelcurve.value_map import ValueMap

logger = logging.getLogger(__name__)


class Evaluation(Protocol):
    def evaluate(
        self,
        value: Any,
        output_type: NumericTypeLike = float,
        input_type: Optional[NumericTypeLike] = None,
    ) -> float | int:
        ...


class Growth:
    """Progress whose ceiling is derived from a level.

    >>> growth = Growth(Expression.parse("((x * 100) + 50)"), Progress(0, 150))
    >>> growth.apply_level(2)
    >>> growth.progress.max
    250
    """

    def __init__(self, evaluation: Evaluation, progress: Progress, ceiling_type: NumericTypeLike = U64) -> None:
        self.evaluation = evaluation
        self.progress = progress
        self.ceiling_type: NumericType = resolve_numeric_type(ceiling_type)
        if not self.ceiling_type.is_integer:
            raise TypeError(f"Progress ceilings are integers, got {self.ceiling_type}")

    def ceiling(self, level: int) -> int:
        return int(self.evaluation.evaluate(level, output_type=self.ceiling_type))

    def apply_level(self, level: int) -> None:
        """Recomputes the ceiling for ``level``; on ``ConversionError`` progress is left as is"""
        new_max = self.ceiling(level)
        logger.debug("level %s: progress ceiling %s -> %s", level, self.progress.max, new_max)
        self.progress.set_max(new_max)

    def __repr__(self) -> str:
        return f"Growth({self.evaluation!r}, {self.progress!r})"

    def to_dict(self) -> dict[str, Any]:
        if not isinstance(self.evaluation, (Expression, ValueMap)):
            raise TypeError(f"Cannot serialize evaluation of type {type(self.evaluation).__name__}")
        return {
            "evaluation": self.evaluation.to_dict(),
            "progress": self.progress.to_dict(),
            "ceiling_type": self.ceiling_type.name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Growth":
        evaluation_data = data["evaluation"]
        evaluation: Evaluation
        if "formula" in evaluation_data:
            evaluation = Expression.from_dict(evaluation_data)
        else:
            evaluation = ValueMap.from_dict(evaluation_data)
        return cls(
            evaluation=evaluation,
            progress=Progress.from_dict(data["progress"]),
            ceiling_type=numeric_type_by_name(data.get("ceiling_type", U64.name)),
        )
