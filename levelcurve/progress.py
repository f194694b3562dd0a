from typing import Any

from levelcurve.bound import ConstructionError


class Progress:
    """Non-negative counter capped at ``max``, e.g. experience within the current level.

    ``add`` and ``sub`` never leave ``[0, max]``; whatever does not fit is returned to
    the caller so it can be carried over to the next or previous level.
    """

    def __init__(self, current: int, max: int) -> None:
        if current < 0 or max < 0:
            raise ConstructionError(f"Invalid progress: {current} / {max}, values must not be negative")
        if current > max:
            raise ConstructionError(f"Invalid progress: {current} > {max}")
        self._current = current
        self._max = max

    @property
    def current(self) -> int:
        return self._current

    @property
    def max(self) -> int:
        return self._max

    def set_current(self, n: int) -> None:
        _check_amount(n)
        self._current = min(n, self._max)

    def set_max(self, n: int) -> None:
        _check_amount(n)
        self._current = min(self._current, n)
        self._max = n

    def add(self, n: int) -> int:
        """Adds ``n``, returns the overflow past ``max``"""
        _check_amount(n)
        added = self._current + n
        if added > self._max:
            self._current = self._max
            return added - self._max
        self._current = added
        return 0

    def sub(self, n: int) -> int:
        """Subtracts ``n``, returns the underflow past zero"""
        _check_amount(n)
        if self._current < n:
            rest = n - self._current
            self._current = 0
            return rest
        self._current -= n
        return 0

    def __repr__(self) -> str:
        return f"Progress({self._current}/{self._max})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Progress):
            return NotImplemented
        return (self._current, self._max) == (other._current, other._max)

    def to_dict(self) -> dict[str, int]:
        return {"current": self._current, "max": self._max}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Progress":
        return cls(current=data["current"], max=data["max"])


def _check_amount(n: int) -> None:
    if n < 0:
        raise ValueError(f"Progress amounts must not be negative, got {n}")
