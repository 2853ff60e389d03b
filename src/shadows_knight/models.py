from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import DataIntegrityError, InvalidArgumentError, check_argument

MIN_WIDTH = 1
MAX_WIDTH = 10_000
MIN_HEIGHT = 5
MAX_HEIGHT = 10_000


@dataclass(frozen=True, slots=True)
class Bounds:
    """Building size in windows; immutable once validated."""

    width: int
    height: int

    def __post_init__(self) -> None:
        check_argument(self.width, MIN_WIDTH, MAX_WIDTH, "Building width")
        check_argument(self.height, MIN_HEIGHT, MAX_HEIGHT, "Building height")

    def contains(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.x < self.width and 0 <= coordinate.y < self.height


@dataclass(frozen=True, slots=True)
class Coordinate:
    x: int
    y: int

    def __str__(self) -> str:
        return f"{self.x} {self.y}"


@dataclass(frozen=True, slots=True)
class Rectangle:
    """Inclusive search window ``[x_min, x_max] x [y_min, y_max]``."""

    x_min: int
    x_max: int
    y_min: int
    y_max: int

    def __post_init__(self) -> None:
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise InvalidArgumentError(f"Empty search window: {self}")

    @classmethod
    def from_bounds(cls, bounds: Bounds) -> Rectangle:
        return cls(0, bounds.width - 1, 0, bounds.height - 1)

    @classmethod
    def point(cls, coordinate: Coordinate) -> Rectangle:
        return cls(coordinate.x, coordinate.x, coordinate.y, coordinate.y)

    @property
    def width(self) -> int:
        return self.x_max - self.x_min + 1

    @property
    def height(self) -> int:
        return self.y_max - self.y_min + 1

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_point(self) -> bool:
        return self.x_min == self.x_max and self.y_min == self.y_max

    def contains(self, coordinate: Coordinate) -> bool:
        return self.x_min <= coordinate.x <= self.x_max and self.y_min <= coordinate.y <= self.y_max


class Feedback(str, Enum):
    """Bomb direction relative to the last judged probe.

    ``dx``/``dy`` give the sign of the target offset on each axis; y grows
    downward, so ``U`` has ``dy == -1``.
    """

    U = "U"
    UR = "UR"
    R = "R"
    DR = "DR"
    D = "D"
    DL = "DL"
    L = "L"
    UL = "UL"
    FOUND = "FOUND"

    @classmethod
    def parse(cls, token: str | Feedback) -> Feedback:
        if isinstance(token, Feedback):
            return token
        normalized = token.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise DataIntegrityError(f"Unknown bomb direction: {token!r}") from None

    @classmethod
    def toward(cls, origin: Coordinate, target: Coordinate) -> Feedback:
        """Return the token a judge sends for a probe at ``origin``."""
        if origin == target:
            return cls.FOUND
        vertical = "U" if target.y < origin.y else "D" if target.y > origin.y else ""
        horizontal = "L" if target.x < origin.x else "R" if target.x > origin.x else ""
        return cls(vertical + horizontal)

    @property
    def dx(self) -> int:
        if "L" in self.value:
            return -1
        if "R" in self.value:
            return 1
        return 0

    @property
    def dy(self) -> int:
        if self is Feedback.FOUND:
            return 0
        if self.value.startswith("U"):
            return -1
        if self.value.startswith("D"):
            return 1
        return 0


_ALIASES = {"UP": "U", "DOWN": "D", "LEFT": "L", "RIGHT": "R"}


@dataclass(frozen=True, slots=True)
class Probe:
    """A submitted jump and the feedback the judge returned for it."""

    coordinate: Coordinate
    feedback: Feedback
