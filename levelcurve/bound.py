import enum
from dataclasses import dataclass
from typing import Any

from levelcurve.utils import PrintableEnum


@dataclass
class ConstructionError(Exception):
    errmsg: str

    def __str__(self) -> str:
        return f"[Construction error] {self.errmsg}"


class BoundCheck(PrintableEnum):
    BELOW = enum.auto()
    WITHIN = enum.auto()
    ABOVE = enum.auto()


@dataclass(frozen=True)
class Bound:
    """Inclusive ``[min, max]`` range that either clamps or wraps values into it.

    Wrapping treats the range as a cycle of ``max - min + 1`` integer steps:

    >>> bound = Bound(3, 7, wrap=True)
    >>> [bound.apply(n) for n in (10, 12, 13, 0, -2, -3)]
    [5, 7, 3, 5, 3, 7]
    """

    min: int
    max: int
    wrap: bool = False

    def __post_init__(self) -> None:
        if self.min > self.max:
            raise ConstructionError(f"Invalid bound: {self.min} > {self.max}")

    def check(self, n: int) -> BoundCheck:
        if n < self.min:
            return BoundCheck.BELOW
        elif n > self.max:
            return BoundCheck.ABOVE
        else:
            return BoundCheck.WITHIN

    def apply(self, n: int) -> int:
        position = self.check(n)
        if position is BoundCheck.BELOW:
            if not self.wrap:
                return self.min
            diff = (self.min - n) % self._range()
            return self.min if diff == 0 else self.max - diff + 1
        elif position is BoundCheck.ABOVE:
            if not self.wrap:
                return self.max
            diff = (n - self.max) % self._range()
            return self.max if diff == 0 else self.min + diff - 1
        else:
            return n

    def _range(self) -> int:
        return self.max - self.min + 1

    def to_dict(self) -> dict[str, Any]:
        return {"min": self.min, "max": self.max, "wrap": self.wrap}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Bound":
        return cls(min=data["min"], max=data["max"], wrap=data.get("wrap", False))
