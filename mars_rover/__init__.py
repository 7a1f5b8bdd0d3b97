"""
Top-level package for the Mars rover plateau simulator.

Components:
- coordinate: immutable grid points and compass-bearing projection
- rover: rover state, turn/move step functions and command processing
- plateau: bounded container, mission parsing and interactive control
- errors: error kinds raised by rovers and plateaus
- config: YAML configuration loading
- render: pygame-based visualization (imported on demand)
"""

from .coordinate import Coordinate
from .errors import (
    CrashedRoverCommand,
    InvalidHeading,
    InvalidPositionFormat,
    MalformedMission,
    MarsRoverError,
)
from .rover import RoverState, Rover, frames, instant
from .plateau import Action, Plateau

__all__ = [
    "Coordinate",
    "RoverState",
    "Rover",
    "Plateau",
    "Action",
    "frames",
    "instant",
    "MarsRoverError",
    "InvalidHeading",
    "InvalidPositionFormat",
    "MalformedMission",
    "CrashedRoverCommand",
]
