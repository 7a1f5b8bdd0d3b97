"""
Grid geometry for the plateau.

Provides the immutable Coordinate value type, compass-bearing projection and
the number/heading display rules shared by rovers and the mission runner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Union
import math

from .errors import InvalidHeading


Number = Union[int, float]

HEADINGS: Dict[str, int] = {"N": 0, "E": 90, "S": 180, "W": 270}
CARDINALS: Dict[int, str] = {deg: letter for letter, deg in HEADINGS.items()}


# ---------------------------------------------------------------------------
# Number helpers
# ---------------------------------------------------------------------------


def to_number(value: Any) -> float:
    """Coerce value to float; anything unparseable (or NaN) becomes 0.0."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number):
        return 0.0
    # -0.0 + 0.0 == +0.0
    return number + 0.0


def format_number(value: Number) -> str:
    """Integral values print without a fractional part ("3", not "3.0")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------


def heading_to_degrees(letter: Any) -> int:
    """Map a compass letter (case-insensitive) to a bearing in degrees."""
    key = str(letter or "").upper()
    if key not in HEADINGS:
        raise InvalidHeading(f"Unrecognized direction {letter!r}. Use [NESW].")
    return HEADINGS[key]


def cardinal(degrees: Number) -> str:
    """Compass letter for right-angle bearings, the raw number otherwise."""
    wrapped = degrees % 360
    if wrapped in CARDINALS:
        return CARDINALS[int(wrapped)]
    return format_number(degrees)


# ---------------------------------------------------------------------------
# Coordinate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Coordinate:
    """Immutable point on the plateau grid.

    Attributes
    ----------
    x : float
        Position along the east axis.
    y : float
        Position along the north axis.
    """

    x: float = 0.0
    y: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", to_number(self.x))
        object.__setattr__(self, "y", to_number(self.y))

    def at(self, degrees: Number, distance: Number) -> "Coordinate":
        """Point `distance` away along compass bearing `degrees`.

        0 deg is +y (north) and bearings grow clockwise, so 90 deg is +x.
        Both components are rounded to 4 decimal places.
        """
        rad = math.radians(to_number(degrees) % 360)
        dist = to_number(distance)
        dx = dist * math.sin(rad)
        dy = dist * math.cos(rad)
        return Coordinate(round(self.x + dx, 4), round(self.y + dy, 4))

    def __str__(self) -> str:
        return f"{format_number(self.x)}, {format_number(self.y)}"
