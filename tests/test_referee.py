import pytest

from shadows_knight.errors import DataIntegrityError, InvalidArgumentError
from shadows_knight.models import Bounds, Coordinate, Feedback
from shadows_knight.referee import Referee


def test_referee_points_toward_target() -> None:
    referee = Referee(bounds=Bounds(width=10, height=5), target=Coordinate(6, 3))

    assert referee.judge(Coordinate(0, 0)) is Feedback.DR
    assert referee.judge(Coordinate(7, 3)) is Feedback.L
    assert referee.judge(Coordinate(6, 4)) is Feedback.U
    assert referee.next_feedback(Coordinate(6, 3)) == "FOUND"
    assert referee.jumps == 4


def test_referee_rejects_target_outside_building() -> None:
    with pytest.raises(InvalidArgumentError):
        Referee(bounds=Bounds(width=10, height=5), target=Coordinate(10, 0))


def test_referee_rejects_jump_outside_building() -> None:
    referee = Referee(bounds=Bounds(width=10, height=5), target=Coordinate(6, 3))

    with pytest.raises(DataIntegrityError):
        referee.judge(Coordinate(-1, 0))
    assert referee.jumps == 0
