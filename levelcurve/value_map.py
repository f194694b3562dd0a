from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from levelcurve.numeric import ConversionError, NumericTypeLike, from_double, to_double


@dataclass(frozen=True)
class ValueMap:
    """Lookup-table evaluation: an explicit value for every supported level"""

    values: Mapping[int, float | int] = field(default_factory=dict)

    def evaluate(
        self,
        value: int,
        output_type: NumericTypeLike = float,
        input_type: Optional[NumericTypeLike] = None,
    ) -> float | int:
        if input_type is not None:
            to_double(value, input_type)
        if value not in self.values:
            raise ConversionError(f"{value!r} is out of bound for the value map", value=value)
        return from_double(to_double(self.values[value]), output_type)

    def to_dict(self) -> dict[str, Any]:
        # JSON object keys are strings
        return {"values": {str(k): v for k, v in self.values.items()}}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ValueMap":
        return cls(values={int(k): v for k, v in data["values"].items()})
