from __future__ import annotations

import json
import os
from typing import Any, Dict, List, Optional, TextIO

from mars_rover.plateau import Plateau
from mars_rover.rover import Rover


class TelemetryLogger:
    """Structured JSONL logger for plateau and rover changes.

    Append-only logging of dict records, one JSON object per line.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        self._fp: Optional[TextIO] = open(self.path, "a", encoding="utf-8")
        self._rovers: List[Rover] = []
        self._plateaus: List[Plateau] = []

    def log_step(self, record: Dict[str, Any]) -> None:
        """Append a single telemetry record to the JSONL file."""
        if self._fp is None:
            return
        line = json.dumps(record, separators=(",", ":"))
        self._fp.write(line + "\n")
        self._fp.flush()

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def attach(self, plateau: Plateau) -> None:
        """Record every change on `plateau` and on its rovers, present and future."""
        if plateau in self._plateaus:
            return
        self._plateaus.append(plateau)
        plateau.subscribe(self._on_plateau_event)
        for rover in plateau.rovers:
            self._watch(rover)

    def _watch(self, rover: Rover) -> None:
        if rover not in self._rovers:
            self._rovers.append(rover)
            rover.subscribe(self._on_rover_change)

    def _forget_detached(self) -> None:
        for rover in [r for r in self._rovers if r.plateau is None]:
            rover.unsubscribe(self._on_rover_change)
            self._rovers.remove(rover)

    def _on_plateau_event(self, plateau: Plateau, event: str, payload: Any) -> None:
        record: Dict[str, Any] = {"event": event}
        if event == "size":
            record.update({"x": payload.x, "y": payload.y})
        elif event == "rover_added":
            self._watch(payload)
            record.update({"rover": plateau.rovers.index(payload), **payload.to_dict()})
        elif event == "cleared":
            self._forget_detached()
        elif event == "error":
            record["message"] = payload
        self.log_step(record)

    def _on_rover_change(self, rover: Rover, attribute: str) -> None:
        record = {"event": "rover_changed", "rover": rover.plateau.rovers.index(rover), "attribute": attribute}
        record.update(rover.to_dict())
        self.log_step(record)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def close(self) -> None:
        if self._fp is not None:
            self._fp.close()
            self._fp = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
