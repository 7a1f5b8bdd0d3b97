from __future__ import annotations


class MarsRoverError(ValueError):
    """Base class for all plateau/rover errors."""


class InvalidHeading(MarsRoverError):
    """Heading letter is not one of N, E, S, W."""


class InvalidPositionFormat(MarsRoverError):
    """Position string does not match "X Y [NESW]"."""


class MalformedMission(MarsRoverError):
    """Mission text is empty, has a bad size line, or unpaired rover lines."""


class CrashedRoverCommand(MarsRoverError, RuntimeError):
    """A motion command was sent to a rover that has already crashed."""
