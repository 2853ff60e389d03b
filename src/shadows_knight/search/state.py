"""Bookkeeping for the window of coordinates that may still hold the target."""

from __future__ import annotations

from dataclasses import dataclass, replace

from shadows_knight.errors import DataIntegrityError, InvalidArgumentError
from shadows_knight.models import Bounds, Coordinate, Feedback, Rectangle


@dataclass(frozen=True, slots=True)
class SearchState:
    """Search window plus the probe the next feedback token refers to.

    Instances are immutable; every refinement returns a new state.
    """

    window: Rectangle
    last_probe: Coordinate

    @classmethod
    def initial(cls, bounds: Bounds, start: Coordinate) -> SearchState:
        if not bounds.contains(start):
            raise InvalidArgumentError(
                f"Start position {start.x},{start.y} is outside the {bounds.width}x{bounds.height} building"
            )
        return cls(window=Rectangle.from_bounds(bounds), last_probe=start)

    @property
    def converged(self) -> bool:
        return self.window.is_point

    @property
    def active_axes(self) -> tuple[str, ...]:
        """Axes whose interval still holds more than one value."""
        axes = []
        if self.window.width > 1:
            axes.append("x")
        if self.window.height > 1:
            axes.append("y")
        return tuple(axes)

    def narrow(self, feedback: Feedback) -> SearchState:
        """Cut the window with a direction token about ``last_probe``."""
        if feedback is Feedback.FOUND:
            return self.solved()

        window = self.window
        x_min, x_max = _narrow_axis(window.x_min, window.x_max, self.last_probe.x, feedback.dx, "x", feedback)
        y_min, y_max = _narrow_axis(window.y_min, window.y_max, self.last_probe.y, feedback.dy, "y", feedback)
        return replace(self, window=Rectangle(x_min, x_max, y_min, y_max))

    def solved(self) -> SearchState:
        if not self.window.contains(self.last_probe):
            raise DataIntegrityError(
                f"FOUND reported at {self.last_probe} which lies outside the search window {self.window}"
            )
        return replace(self, window=Rectangle.point(self.last_probe))

    def moved_to(self, probe: Coordinate) -> SearchState:
        return replace(self, last_probe=probe)


def _narrow_axis(low: int, high: int, previous: int, direction: int, axis: str, feedback: Feedback) -> tuple[int, int]:
    if direction == 0:
        if not low <= previous <= high:
            raise DataIntegrityError(
                f"'{feedback.value}' pins {axis}={previous}, which was already excluded from [{low}, {high}]"
            )
        return previous, previous

    new_low = max(low, previous + 1) if direction > 0 else low
    new_high = min(high, previous - 1) if direction < 0 else high
    if new_low > new_high:
        raise DataIntegrityError(
            f"'{feedback.value}' points past the edge of [{low}, {high}] from {axis}={previous}"
        )
    return new_low, new_high
