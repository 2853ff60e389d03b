"""Deterministic local judge with a planted target."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import DataIntegrityError, InvalidArgumentError
from .models import Bounds, Coordinate, Feedback


@dataclass(slots=True)
class Referee:
    """Answers every jump with the bomb direction, like the game server would."""

    bounds: Bounds
    target: Coordinate
    jumps: int = 0

    def __post_init__(self) -> None:
        if not self.bounds.contains(self.target):
            raise InvalidArgumentError(
                f"Target {self.target.x},{self.target.y} is outside the "
                f"{self.bounds.width}x{self.bounds.height} building"
            )

    def judge(self, probe: Coordinate) -> Feedback:
        if not self.bounds.contains(probe):
            raise DataIntegrityError(f"Jump to {probe.x},{probe.y} leaves the building")
        self.jumps += 1
        return Feedback.toward(probe, self.target)

    def next_feedback(self, probe: Coordinate) -> str:
        return self.judge(probe).value
