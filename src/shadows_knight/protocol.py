"""Line protocol between the agent and an external judge.

Bootstrap (whitespace separated, read once)::

    W H        building width and height
    N          turns allowed
    X0 Y0      starting window

Then one bomb-direction token per line; the agent answers each with ``"X Y"``.
Input is consumed line by line so the reader never waits on data the judge
has not sent yet.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from dataclasses import dataclass
from typing import TextIO

from shadows_knight.errors import DataIntegrityError, InvalidArgumentError
from shadows_knight.models import Bounds, Coordinate
from shadows_knight.search import Strategy
from shadows_knight.session import SessionState, TurnLoop

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True, slots=True)
class Bootstrap:
    bounds: Bounds
    turns: int
    start: Coordinate


class TokenReader:
    """Lazy whitespace tokenizer over a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: deque[str] = deque()

    def next_token(self) -> str | None:
        while not self._pending:
            try:
                line = self._stream.readline()
            except UnicodeDecodeError as exc:
                raise DataIntegrityError(f"Input is not valid {exc.encoding} text: {exc.reason}") from None
            if not line:
                return None
            self._pending.extend(line.split())
        return self._pending.popleft()

    def next_int(self, label: str) -> int:
        token = self.next_token()
        if token is None:
            raise InvalidArgumentError(f"{label}: input ended before a value was read")
        if not _INTEGER.fullmatch(token):
            raise InvalidArgumentError(f"{label}: argument '{token}' is not an integer")
        return int(token)


def read_bootstrap(reader: TokenReader) -> Bootstrap:
    width = reader.next_int("Building width")
    height = reader.next_int("Building height")
    bounds = Bounds(width=width, height=height)
    turns = reader.next_int("Turns left")
    start = Coordinate(reader.next_int("Batman x0"), reader.next_int("Batman y0"))
    return Bootstrap(bounds=bounds, turns=turns, start=start)


class StreamFeedbackSource:
    """Feeds one token per turn from a :class:`TokenReader`."""

    def __init__(self, reader: TokenReader) -> None:
        self._reader = reader

    def next_feedback(self, probe: Coordinate) -> str | None:
        return self._reader.next_token()


class ProbeWriter:
    """Writes one ``"X Y"`` line per jump and flushes immediately."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def emit(self, coordinate: Coordinate) -> None:
        self._stream.write(f"{coordinate}\n")
        self._stream.flush()


def run_session(
    input_stream: TextIO,
    output_stream: TextIO,
    *,
    strategy: Strategy | None = None,
    logger: logging.Logger | None = None,
) -> SessionState:
    """Bootstrap from ``input_stream`` and play until the session terminates."""
    reader = TokenReader(input_stream)
    bootstrap = read_bootstrap(reader)
    loop = TurnLoop(
        bounds=bootstrap.bounds,
        turns=bootstrap.turns,
        start=bootstrap.start,
        strategy=strategy,
        logger=logger,
    )
    return loop.run(StreamFeedbackSource(reader), ProbeWriter(output_stream))
