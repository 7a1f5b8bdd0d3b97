from __future__ import annotations

from pathlib import Path
from typing import List

from mars_rover.config import (
    MissionConfig,
    PlateauConfig,
    build_plateau,
    config_from_dict,
    load_config,
)
from mars_rover.coordinate import Coordinate
from mars_rover.rover import instant


def test_defaults_without_path() -> None:
    cfg = load_config(None)
    assert cfg == MissionConfig()
    assert cfg.plateau.scale == 50.0
    assert cfg.plateau.animation_frames == 1
    assert cfg.telemetry_path is None


def test_shipped_config_loads() -> None:
    path = Path(__file__).resolve().parent.parent / "configs" / "plateau.yaml"
    cfg = load_config(str(path))
    assert cfg.plateau.animation_frames > 1
    assert cfg.render.fps > 0
    assert cfg.telemetry_path.endswith(".jsonl")


def test_partial_config_and_unknown_keys(tmp_path: Path) -> None:
    path = tmp_path / "plateau.yaml"
    path.write_text("plateau:\n  scale: 20\n  gravity: 3.7\nrender:\n  show_trail: false\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg.plateau.scale == 20.0
    assert cfg.plateau.animation_frames == 1
    assert cfg.render.show_trail is False
    assert cfg.render.fps == 30


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(str(path)) == MissionConfig()


def test_build_plateau_uses_instant_animation_for_single_frame() -> None:
    plateau = build_plateau(PlateauConfig(scale=10, animation_frames=1))
    assert plateau.animation is instant
    assert plateau.scale == 10


def test_build_plateau_with_frames() -> None:
    cfg = config_from_dict({"plateau": {"animation_frames": 3}})
    plateau = build_plateau(cfg.plateau)
    plateau.size = Coordinate(5, 5)
    rover = plateau.create_rover(0, 0, "N")
    ys: List[float] = []
    rover.subscribe(lambda r, attribute: ys.append(r.position.y))
    rover.move()
    assert ys == [0.3333, 0.6667, 1.0]
