import logging

import pytest

from shadows_knight.errors import DataIntegrityError, InvalidArgumentError, SessionNotRunningError
from shadows_knight.models import Bounds, Coordinate, Feedback
from shadows_knight.referee import Referee
from shadows_knight.session import SessionStatus, TurnLoop


class ScriptedSource:
    def __init__(self, tokens: list[str]) -> None:
        self.tokens = list(tokens)
        self.judged: list[Coordinate] = []

    def next_feedback(self, probe: Coordinate) -> str | None:
        self.judged.append(probe)
        return self.tokens.pop(0) if self.tokens else None


class ListSink:
    def __init__(self) -> None:
        self.coordinates: list[Coordinate] = []

    def emit(self, coordinate: Coordinate) -> None:
        self.coordinates.append(coordinate)


def _loop(turns: int = 20, start: Coordinate = Coordinate(0, 0)) -> TurnLoop:
    return TurnLoop(bounds=Bounds(width=10, height=5), turns=turns, start=start)


def test_loop_converges_on_planted_target() -> None:
    bounds = Bounds(width=10, height=5)
    loop = TurnLoop(bounds=bounds, turns=20, start=Coordinate(0, 0))
    sink = ListSink()

    state = loop.run(Referee(bounds=bounds, target=Coordinate(6, 3)), sink)

    assert state.status == SessionStatus.FOUND
    assert sink.coordinates == [Coordinate(5, 2), Coordinate(7, 3), Coordinate(6, 3)]
    assert state.turns_taken == 3
    assert state.turns_remaining == 17
    assert [probe.feedback for probe in state.history] == [Feedback.DR, Feedback.DR, Feedback.L]
    assert state.history[0].coordinate == Coordinate(0, 0)


def test_each_token_judges_previous_jump() -> None:
    loop = _loop()
    source = ScriptedSource(["DR", "DR", "L"])

    loop.run(source, ListSink())

    assert source.judged == [Coordinate(0, 0), Coordinate(5, 2), Coordinate(7, 3)]


def test_found_token_ends_session_without_emitting() -> None:
    loop = _loop(start=Coordinate(4, 2))
    sink = ListSink()

    state = loop.run(ScriptedSource(["FOUND"]), sink)

    assert state.status == SessionStatus.FOUND
    assert sink.coordinates == []
    assert state.turns_remaining == 20


def test_next_turn_reports_probe_and_window() -> None:
    result = _loop().next_turn("DR")

    assert result.turn == 1
    assert result.probe == Coordinate(5, 2)
    assert result.window.area == 36
    assert result.status == SessionStatus.RUNNING


def test_window_area_strictly_shrinks_each_turn() -> None:
    bounds = Bounds(width=200, height=300)
    referee = Referee(bounds=bounds, target=Coordinate(17, 251))
    loop = TurnLoop(bounds=bounds, turns=100, start=Coordinate(199, 0))
    areas = [loop.state.search.window.area]

    while loop.is_running():
        loop.next_turn(referee.judge(loop.state.search.last_probe))
        areas.append(loop.state.search.window.area)

    assert loop.state.status == SessionStatus.FOUND
    assert all(later < earlier for earlier, later in zip(areas, areas[1:]))


def test_budget_exhaustion_is_reported_not_raised() -> None:
    bounds = Bounds(width=10_000, height=10_000)
    loop = TurnLoop(bounds=bounds, turns=2, start=Coordinate(0, 0))
    sink = ListSink()

    state = loop.run(Referee(bounds=bounds, target=Coordinate(9_999, 9_999)), sink)

    assert state.status == SessionStatus.EXHAUSTED
    assert state.turns_remaining == 0
    assert len(sink.coordinates) == 2
    assert not loop.is_running()


def test_turn_after_termination_is_rejected() -> None:
    loop = _loop(turns=2)
    loop.next_turn("DR")
    loop.next_turn("DR")

    with pytest.raises(SessionNotRunningError):
        loop.next_turn("L")


def test_closed_feedback_stream_abandons_session() -> None:
    state = _loop().run(ScriptedSource(["DR"]), ListSink())

    assert state.status == SessionStatus.ABANDONED
    assert state.turns_taken == 1


@pytest.mark.parametrize("turns", [1, 101])
def test_turn_budget_is_validated(turns: int) -> None:
    with pytest.raises(InvalidArgumentError):
        _loop(turns=turns)


def test_start_outside_building_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        _loop(start=Coordinate(0, 5))


def test_contradicting_feedback_propagates() -> None:
    loop = _loop()

    with pytest.raises(DataIntegrityError):
        loop.next_turn("U")


def test_session_events_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="shadows_knight.session")
    loop = _loop()

    loop.run(ScriptedSource(["DR", "DR", "L"]), ListSink())

    messages = [record.getMessage() for record in caplog.records]
    assert messages[0] == "session_started"
    assert messages.count("turn_completed") == 3
    assert messages[-1] == "session_finished"
    assert caplog.records[-1].status == "found"
