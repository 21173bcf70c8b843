"""
Events emitted by the engine.

The engine never calls into a UI directly. Every operation appends typed events to an EventQueue:
* listeners registered with `subscribe()` are called immediately, in order
* the caller can also `drain()` the queue after an operation to see what happened
"""

from collections.abc import Callable
from dataclasses import dataclass, field

from src.chess.pieces import Color
from src.chess.square import Square


@dataclass(frozen=True)
class Event:
    """Base class so listeners can be typed against all events."""


@dataclass(frozen=True)
class BoardChanged(Event):
    pass


@dataclass(frozen=True)
class PlayerChanged(Event):
    color: Color


@dataclass(frozen=True)
class PieceCaptured(Event):
    """x, y are the centre of the captured square in board-world coordinates (origin bottom-left), count is a particle hint."""

    square: Square
    x: float
    y: float
    count: int


@dataclass(frozen=True)
class MovePlayed(Event):
    """Cue for the move sound"""

    from_square: Square
    to_square: Square


@dataclass(frozen=True)
class GameWon(Event):
    """A king got captured"""

    winner: Color


@dataclass(frozen=True)
class PuzzleBeaten(Event):
    pass


@dataclass(frozen=True)
class OpponentMoveScheduled(Event):
    """The scripted opponent should reply after `delay` seconds (caller triggers it)."""

    delay: float


@dataclass(frozen=True)
class HintAvailable(Event):
    from_square: Square


@dataclass(frozen=True)
class HintMoveAvailable(Event):
    from_square: Square
    to_square: Square


Listener = Callable[[Event], None]


@dataclass
class EventQueue:
    """
    Observable queue. Multiple listeners per queue.

    Every event is kept in `pending` until `drain()` is called, also when listeners are subscribed.
    Owners that only use listeners have to drain now and then.
    """

    listeners: list[Listener] = field(default_factory=list)
    pending: list[Event] = field(default_factory=list)

    def subscribe(self, listener: Listener) -> None:
        self.listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self.listeners.remove(listener)

    def emit(self, event: Event) -> None:
        self.pending.append(event)
        for listener in list(self.listeners):
            listener(event)

    def drain(self) -> list[Event]:
        """Return all events emitted since the previous drain and empty the queue"""
        events, self.pending = self.pending, []
        return events
