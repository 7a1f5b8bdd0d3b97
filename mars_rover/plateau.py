from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any, Callable, Deque, Dict, Iterator, List, Optional, Tuple
import re
import sys

from .coordinate import Coordinate, heading_to_degrees, to_number
from .errors import InvalidPositionFormat, MalformedMission, MarsRoverError
from .rover import Animation, Rover, instant


PlateauObserver = Callable[["Plateau", str, Any], None]

POSITION_PATTERN = re.compile(r"(\d+) (\d+) ([NESW])", re.IGNORECASE)
SIZE_PATTERN = re.compile(r"(\d+) (\d+)")

DEFAULT_SCALE = 50


class Action(Enum):
    """Single-key actions for interactive control."""

    NEW_ROVER = "N"
    TURN_LEFT = "L"
    MOVE = "M"
    TURN_RIGHT = "R"

    @classmethod
    def from_key(cls, key: Optional[str]) -> Optional["Action"]:
        """Decode a key letter (case-insensitive); unknown keys give None."""
        try:
            return cls((key or "").upper())
        except ValueError:
            return None


class Plateau:
    """Bounded rectangular plateau owning an ordered list of rovers.

    Parameters
    ----------
    size : Coordinate
        Largest valid (x, y); the origin is always in bounds.
    scale : float
        Pixels per grid unit, read by the renderer only.
    animation : Animation
        How rover turns and moves are stepped from progress 0 to 1.
    """

    def __init__(
        self,
        size: Optional[Coordinate] = None,
        scale: float = DEFAULT_SCALE,
        animation: Animation = instant,
    ) -> None:
        self._size = size if size is not None else Coordinate(0, 0)
        self.scale = to_number(scale) or DEFAULT_SCALE
        self.animation = animation
        self._rovers: List[Rover] = []
        self._observers: List[PlateauObserver] = []

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------
    @property
    def size(self) -> Coordinate:
        return self._size

    @size.setter
    def size(self, size: Coordinate) -> None:
        self._size = size
        self._notify("size", size)

    @property
    def rovers(self) -> List[Rover]:
        return list(self._rovers)

    @property
    def active_rover(self) -> Optional[Rover]:
        """Most recently created rover, target of interactive commands."""
        return self._rovers[-1] if self._rovers else None

    def subscribe(self, callback: PlateauObserver) -> None:
        """Call `callback(plateau, event, payload)` on plateau events."""
        self._observers.append(callback)

    def unsubscribe(self, callback: PlateauObserver) -> None:
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, payload: Any = None) -> None:
        for callback in list(self._observers):
            callback(self, event, payload)

    # ------------------------------------------------------------------
    # Rover creation
    # ------------------------------------------------------------------
    def create_rover(self, x: Any, y: Any, heading: Any) -> Rover:
        """Place a new rover at (x, y) facing N, E, S or W."""
        rover = Rover(self, x, y, heading_to_degrees(heading))
        self._rovers.append(rover)
        self._notify("rover_added", rover)
        return rover

    def parse_rover(self, position: str) -> Rover:
        """Create a rover from an "X Y D" position string."""
        match = POSITION_PATTERN.search(position or "")
        if match is None:
            raise InvalidPositionFormat(
                f'Unable to read rover position {position!r}. Format is "X Y [NESW]".'
            )
        x, y, heading = match.groups()
        return self.create_rover(x, y, heading)

    def parse_rover_command_set(self, position: str, commands: str) -> Optional[Rover]:
        """Create a rover and run its commands.

        Failures are reported, not raised; returns None if the rover could not
        be created or its commands failed.
        """
        try:
            return self.parse_rover(position).process_commands(commands)
        except MarsRoverError as exc:
            self._report(position, exc)
            return None

    # ------------------------------------------------------------------
    # Missions
    # ------------------------------------------------------------------
    @staticmethod
    def parse_mission(text: str) -> Tuple[Coordinate, List[Tuple[str, str]]]:
        """Split mission text into the plateau size and (position, commands) pairs."""
        lines = [line.rstrip("\r") for line in (text or "").split("\n")]
        # Trailing blank lines are dropped unless the last one is an empty command line.
        while lines and not lines[-1].strip():
            if len(lines) % 2 == 1 and len(lines) > 1 and lines[-2].strip():
                break
            lines.pop()
        if not lines:
            raise MalformedMission("Mission text is empty. First line must be the plateau size \"X Y\".")

        size_line, rover_lines = lines[0], lines[1:]
        match = SIZE_PATTERN.search(size_line)
        if match is None:
            raise MalformedMission(f'Unable to read plateau size {size_line!r}. Format is "X Y".')
        if len(rover_lines) % 2:
            raise MalformedMission(
                f"Rover position {rover_lines[-1]!r} has no command line. "
                "Each rover needs a position line and a command line."
            )

        size = Coordinate(*match.groups())
        pairs = [(rover_lines[i], rover_lines[i + 1]) for i in range(0, len(rover_lines), 2)]
        return size, pairs

    def _mission(self, position: str, commands: str) -> Iterator[Rover]:
        try:
            rover = self.parse_rover(position)
        except MarsRoverError as exc:
            self._report(position, exc)
            return
        yield rover
        try:
            for _ in rover.iter_commands(commands):
                yield rover
        except MarsRoverError as exc:
            self._report(position, exc)

    def execute(self, text: str) -> List[Rover]:
        """Run a full mission and return every rover on the plateau.

        All rovers are created first, in mission order; their command strings
        then advance round-robin, one command per rover per round. A failing
        rover is reported and does not stop the others.
        """
        size, pairs = self.parse_mission(text)
        self.size = size

        pending: Deque[Iterator[Rover]] = deque()
        for position, commands in pairs:
            mission = self._mission(position, commands)
            # First step creates the rover, keeping creation order.
            if next(mission, None) is not None:
                pending.append(mission)

        while pending:
            mission = pending.popleft()
            if next(mission, None) is not None:
                pending.append(mission)
        return self.rovers

    def _report(self, position: str, exc: Exception) -> None:
        print(f"Rover {position!r} failed: {exc}", file=sys.stderr)
        self._notify("error", str(exc))

    def clear(self) -> None:
        """Remove all rovers; size and scale are kept."""
        for rover in self._rovers:
            rover.detach()
        self._rovers.clear()
        self._notify("cleared")

    # ------------------------------------------------------------------
    # Interactive control
    # ------------------------------------------------------------------
    def dispatch(self, action: Optional[Action]) -> Optional[Rover]:
        """Apply one interactive action; returns the rover acted on, if any."""
        if action is None:
            return None
        if action is Action.NEW_ROVER:
            return self.create_rover(0, 0, "N")
        rover = self.active_rover
        if rover is None:
            return None
        if action is Action.TURN_LEFT:
            rover.turn_left()
        elif action is Action.MOVE:
            rover.move()
        elif action is Action.TURN_RIGHT:
            rover.turn_right()
        return rover

    def handle_key(self, key: Optional[str]) -> Optional[Rover]:
        return self.dispatch(Action.from_key(key))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize plateau and rover states."""
        return {
            "size": {"x": self._size.x, "y": self._size.y},
            "scale": self.scale,
            "rovers": [rover.to_dict() for rover in self._rovers],
        }
