import pytest

from levelcurve.bound import ConstructionError
from levelcurve.progress import Progress


def test_add_sub_sequence() -> None:
    progress = Progress(0, 10)

    assert progress.add(15) == 5
    assert progress.current == 10

    assert progress.sub(3) == 0
    assert progress.current == 7

    assert progress.sub(9) == 2
    assert progress.current == 0


def test_add_within_max() -> None:
    progress = Progress(2, 10)
    assert progress.add(8) == 0
    assert progress.current == 10


def test_set_current_clamps() -> None:
    progress = Progress(0, 10)
    progress.set_current(4)
    assert progress.current == 4
    progress.set_current(20)
    assert progress.current == 10


def test_set_max() -> None:
    progress = Progress(8, 10)
    progress.set_max(20)
    assert (progress.current, progress.max) == (8, 20)
    progress.set_max(5)
    assert (progress.current, progress.max) == (5, 5)


@pytest.mark.parametrize(
    "current, max_",
    [
        pytest.param(11, 10),
        pytest.param(-1, 10),
        pytest.param(0, -1),
    ],
)
def test_invalid_progress(current: int, max_: int) -> None:
    with pytest.raises(ConstructionError):
        Progress(current, max_)


def test_negative_amounts() -> None:
    progress = Progress(5, 10)
    with pytest.raises(ValueError):
        progress.add(-1)
    with pytest.raises(ValueError):
        progress.sub(-1)
    with pytest.raises(ValueError):
        progress.set_max(-1)
    assert progress == Progress(5, 10)


def test_to_dict() -> None:
    progress = Progress(3, 10)
    assert progress.to_dict() == {"current": 3, "max": 10}
    assert Progress.from_dict(progress.to_dict()) == progress
    assert repr(progress) == "Progress(3/10)"
