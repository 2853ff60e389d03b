"""Decision-makers that turn bomb directions into the next jump."""

from __future__ import annotations

from typing import Protocol

from shadows_knight.errors import InvalidArgumentError, InvalidStateError
from shadows_knight.models import Coordinate, Feedback

from .state import SearchState


class Strategy(Protocol):
    """Chooses the next probe from the current state and the latest feedback."""

    def decide(self, state: SearchState, feedback: Feedback | str) -> tuple[Coordinate, SearchState]:
        """Return the next coordinate and the refined state. Must not mutate ``state``."""


class BinarySearchStrategy:
    """Halves both axes of the window on every turn.

    The probe is the floor midpoint of each remaining interval, so an axis of
    ``n`` values is resolved within ``ceil(log2(n))`` turns.
    """

    name = "binary"

    def decide(self, state: SearchState, feedback: Feedback | str) -> tuple[Coordinate, SearchState]:
        if state.converged:
            raise InvalidStateError(f"Search already converged on {state.window.x_min},{state.window.y_min}")

        feedback = Feedback.parse(feedback)
        narrowed = state.narrow(feedback)
        if feedback is Feedback.FOUND:
            return state.last_probe, narrowed

        window = narrowed.window
        probe = Coordinate(_midpoint(window.x_min, window.x_max), _midpoint(window.y_min, window.y_max))
        return probe, narrowed.moved_to(probe)


def _midpoint(low: int, high: int) -> int:
    return (low + high) // 2


_STRATEGIES = {BinarySearchStrategy.name: BinarySearchStrategy}


def create_strategy(name: str = "binary") -> Strategy:
    try:
        factory = _STRATEGIES[name.strip().lower()]
    except KeyError:
        raise InvalidArgumentError(
            f"Unknown strategy {name!r}; available: {', '.join(sorted(_STRATEGIES))}"
        ) from None
    return factory()
