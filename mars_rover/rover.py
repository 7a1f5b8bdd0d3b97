from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterable, Iterator, List, Optional

from .coordinate import Coordinate, Number, cardinal, format_number, to_number
from .errors import CrashedRoverCommand

if TYPE_CHECKING:
    from .plateau import Plateau


Step = Callable[[float], None]
Animation = Callable[[Step], None]
RoverObserver = Callable[["Rover", str], None]


# ---------------------------------------------------------------------------
# Animations
# ---------------------------------------------------------------------------


def instant(step: Step) -> None:
    """Jump straight to the final state."""
    step(1.0)


def frames(count: int) -> Animation:
    """Animation that emits `count` evenly spaced progress values ending at 1.0."""
    count = max(1, int(count))

    def animate(step: Step) -> None:
        for i in range(1, count):
            step(i / count)
        step(1.0)

    return animate


@dataclass
class RoverState:
    """Snapshot of a rover on the plateau.

    Attributes
    ----------
    x : float
        East position (grid units).
    y : float
        North position (grid units).
    heading : float
        Cumulative compass bearing in degrees, clockwise from north.
    crashed : bool
        True once the rover has left the plateau.
    """

    x: float
    y: float
    heading: float
    crashed: bool


class Rover:
    """A rover on a plateau, driven by L/R/M commands.

    The rover keeps a back-reference to its plateau, used only to look up the
    bounds after every position or heading change. Leaving the plateau past
    its north or east edge crashes the rover for good. The plateau owns its
    rovers; `clear()` detaches them.
    """

    def __init__(
        self,
        plateau: Optional["Plateau"],
        x: Any = 0,
        y: Any = 0,
        heading: Number = 0,
    ) -> None:
        self._plateau = plateau
        self._position = Coordinate(x, y)
        self._heading = to_number(heading)
        self._crashed = False
        self._observers: List[RoverObserver] = []
        self.is_moving = False

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------
    @property
    def plateau(self) -> Optional["Plateau"]:
        return self._plateau

    @property
    def position(self) -> Coordinate:
        return self._position

    @position.setter
    def position(self, coordinate: Coordinate) -> None:
        self._position = coordinate
        self._changed("position")

    @property
    def heading(self) -> float:
        return self._heading

    @heading.setter
    def heading(self, degrees: Number) -> None:
        self._heading = to_number(degrees)
        self._changed("heading")

    @property
    def crashed(self) -> bool:
        return self._crashed

    def detach(self) -> None:
        """Drop the plateau link; bounds are no longer checked."""
        self._plateau = None

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def subscribe(self, callback: RoverObserver) -> None:
        """Call `callback(rover, attribute)` after every attribute change."""
        self._observers.append(callback)

    def unsubscribe(self, callback: RoverObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, attribute: str) -> None:
        for callback in list(self._observers):
            callback(self, attribute)

    def _changed(self, attribute: str) -> None:
        self._notify(attribute)
        self._check_bounds()

    def _check_bounds(self) -> None:
        # Only the north/east edges are checked; negative coordinates never crash.
        if self._crashed:
            return
        plateau = self.plateau
        if plateau is None:
            return
        size = plateau.size
        if self._position.x > size.x or self._position.y > size.y:
            self._crashed = True
            self._notify("crashed")

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------
    def _animation(self) -> Animation:
        plateau = self.plateau
        return plateau.animation if plateau is not None else instant

    def _ensure_operational(self) -> None:
        if self._crashed:
            raise CrashedRoverCommand(f"Rover is crashed at {self._position}. Cannot move.")

    def turn(self, degrees: Number) -> bool:
        """Rotate by `degrees` (positive is clockwise).

        Returns False without effect if the rover is already in motion, even
        when it crashed during that motion.
        """
        if self.is_moving:
            return False
        self._ensure_operational()
        self.is_moving = True
        initial = self._heading
        delta = to_number(degrees)
        try:
            self._animation()(lambda progress: setattr(self, "heading", initial + delta * progress))
        finally:
            self.is_moving = False
        return True

    def turn_left(self) -> bool:
        return self.turn(-90)

    def turn_right(self) -> bool:
        return self.turn(90)

    def move(self) -> bool:
        """Advance one grid unit along the current heading.

        Returns False without effect if the rover is already in motion, even
        when it crashed during that motion.
        """
        if self.is_moving:
            return False
        self._ensure_operational()
        self.is_moving = True
        initial = self._position
        heading = self._heading
        try:
            self._animation()(lambda progress: setattr(self, "position", initial.at(heading, progress)))
        finally:
            self.is_moving = False
        return True

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def process_command(self, command: Optional[str]) -> bool:
        """Run one of L, R, M (case-insensitive). Anything else is a no-op."""
        letter = (command or "").upper()
        if letter == "L":
            return self.turn_left()
        if letter == "R":
            return self.turn_right()
        if letter == "M":
            return self.move()
        return False

    def iter_commands(self, commands: Optional[Iterable[str]]) -> Iterator["Rover"]:
        """Run commands one at a time, yielding the rover after each."""
        for command in commands or "":
            self.process_command(command)
            yield self

    def process_commands(self, commands: Optional[Iterable[str]]) -> "Rover":
        """Run a full command string in order and return the rover."""
        for _ in self.iter_commands(commands):
            pass
        return self

    # ------------------------------------------------------------------
    # Utility
    # ------------------------------------------------------------------
    def get_state(self) -> RoverState:
        return RoverState(
            x=self._position.x,
            y=self._position.y,
            heading=self._heading,
            crashed=self._crashed,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize current rover state to a dict for logging/telemetry."""
        s = self.get_state()
        return {"x": s.x, "y": s.y, "heading": s.heading, "crashed": s.crashed}

    def __str__(self) -> str:
        text = (
            f"{format_number(self._position.x)} {format_number(self._position.y)} "
            f"{cardinal(self._heading)}"
        )
        return f"Crashed at {text}" if self._crashed else text

    def __repr__(self) -> str:
        return f"Rover({self})"
