"""Turn-by-turn orchestration of a single search session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from shadows_knight.errors import SessionNotRunningError, check_argument
from shadows_knight.models import Bounds, Coordinate, Feedback, Probe, Rectangle
from shadows_knight.search import SearchState, Strategy, create_strategy

MIN_INPUT_TURNS = 2
MAX_INPUT_TURNS = 100
STOP_BELOW_TURNS = 1


class SessionStatus(str, Enum):
    """Lifecycle states for a search session."""

    RUNNING = "running"
    FOUND = "found"
    EXHAUSTED = "exhausted"
    ABANDONED = "abandoned"


class FeedbackSource(Protocol):
    """Supplies one bomb-direction token per turn."""

    def next_feedback(self, probe: Coordinate) -> str | None:
        """Return the token judging ``probe``, or ``None`` once the stream is over."""


class ProbeSink(Protocol):
    """Receives every coordinate the agent jumps to."""

    def emit(self, coordinate: Coordinate) -> None:
        """Publish the next jump."""


@dataclass(slots=True)
class SessionState:
    bounds: Bounds
    turns_remaining: int
    search: SearchState
    status: SessionStatus = SessionStatus.RUNNING
    history: list[Probe] = field(default_factory=list)

    @property
    def turns_taken(self) -> int:
        return len(self.history)


@dataclass(frozen=True, slots=True)
class TurnResult:
    """Outcome of one turn; ``probe`` is ``None`` when nothing was emitted."""

    turn: int
    feedback: Feedback
    probe: Coordinate | None
    window: Rectangle
    status: SessionStatus


class TurnLoop:
    """Owns the session state and feeds each token through the strategy."""

    def __init__(
        self,
        *,
        bounds: Bounds,
        turns: int,
        start: Coordinate,
        strategy: Strategy | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        check_argument(turns, MIN_INPUT_TURNS, MAX_INPUT_TURNS, "Turns left")
        self._strategy = strategy or create_strategy()
        self._logger = logger or logging.getLogger("shadows_knight.session")
        self._state = SessionState(
            bounds=bounds,
            turns_remaining=turns,
            search=SearchState.initial(bounds, start),
        )
        self._logger.info(
            "session_started",
            extra={"width": bounds.width, "height": bounds.height, "turns": turns, "start": str(start)},
        )

    @property
    def state(self) -> SessionState:
        return self._state

    def is_running(self) -> bool:
        return self._state.status == SessionStatus.RUNNING and self._state.turns_remaining >= STOP_BELOW_TURNS

    def next_turn(self, feedback: Feedback | str) -> TurnResult:
        """Apply one feedback token and return the jump to make, if any."""
        if not self.is_running():
            raise SessionNotRunningError(f"The session is not running: {self._state.status.value}")

        state = self._state
        feedback = Feedback.parse(feedback)
        judged = state.search.last_probe
        coordinate, search = self._strategy.decide(state.search, feedback)

        state.history.append(Probe(coordinate=judged, feedback=feedback))
        state.search = search
        turn = state.turns_taken

        if feedback is Feedback.FOUND:
            state.status = SessionStatus.FOUND
            self._logger.info("target_confirmed", extra={"turn": turn, "target": str(judged)})
            return TurnResult(turn=turn, feedback=feedback, probe=None, window=search.window, status=state.status)

        state.turns_remaining -= 1
        if search.converged:
            state.status = SessionStatus.FOUND
        elif state.turns_remaining < STOP_BELOW_TURNS:
            state.status = SessionStatus.EXHAUSTED

        self._logger.debug(
            "turn_completed",
            extra={
                "turn": turn,
                "feedback": feedback.value,
                "probe": str(coordinate),
                "area": search.window.area,
                "active_axes": search.active_axes,
                "turns_remaining": state.turns_remaining,
            },
        )
        if state.status == SessionStatus.EXHAUSTED:
            self._logger.warning("turns_exhausted", extra={"turn": turn, "window": str(search.window)})
        return TurnResult(turn=turn, feedback=feedback, probe=coordinate, window=search.window, status=state.status)

    def run(self, source: FeedbackSource, sink: ProbeSink) -> SessionState:
        """Drive the session until it is found, exhausted or the source runs dry."""
        while self.is_running():
            token = source.next_feedback(self._state.search.last_probe)
            if token is None:
                self._state.status = SessionStatus.ABANDONED
                self._logger.warning("feedback_stream_closed", extra={"turn": self._state.turns_taken})
                break

            result = self.next_turn(token)
            if result.probe is not None:
                sink.emit(result.probe)

        self._logger.info(
            "session_finished",
            extra={"status": self._state.status.value, "turns_taken": self._state.turns_taken},
        )
        return self._state
