from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional

import yaml

from .plateau import Plateau
from .rover import frames, instant


@dataclass
class PlateauConfig:
    """Plateau presentation settings.

    Attributes
    ----------
    scale : float
        Pixels per grid unit.
    animation_frames : int
        Progress steps per turn/move; 1 jumps straight to the final state.
    """

    scale: float = 50.0
    animation_frames: int = 1


@dataclass
class RenderConfig:
    fps: int = 30
    show_trail: bool = True
    trail_max_length: int = 200


@dataclass
class MissionConfig:
    plateau: PlateauConfig = field(default_factory=PlateauConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    telemetry_path: Optional[str] = None


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _section(cls, data: Optional[Dict[str, Any]]):
    """Build a dataclass from the known keys of a config section."""
    data = data or {}
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in data.items() if k in known})


def config_from_dict(data: Dict[str, Any]) -> MissionConfig:
    plateau_cfg = _section(PlateauConfig, data.get("plateau"))
    render_cfg = _section(RenderConfig, data.get("render"))
    telemetry_cfg = data.get("telemetry") or {}
    return MissionConfig(
        plateau=PlateauConfig(
            scale=float(plateau_cfg.scale),
            animation_frames=int(plateau_cfg.animation_frames),
        ),
        render=RenderConfig(
            fps=int(render_cfg.fps),
            show_trail=bool(render_cfg.show_trail),
            trail_max_length=int(render_cfg.trail_max_length),
        ),
        telemetry_path=telemetry_cfg.get("path"),
    )


def load_config(path: Optional[str]) -> MissionConfig:
    """Load a YAML config; no path gives the defaults."""
    if path is None:
        return MissionConfig()
    return config_from_dict(load_yaml(path))


def build_plateau(cfg: PlateauConfig) -> Plateau:
    animation = frames(cfg.animation_frames) if cfg.animation_frames > 1 else instant
    return Plateau(scale=cfg.scale, animation=animation)
