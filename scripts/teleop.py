from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import pygame

from mars_rover.config import build_plateau, load_config
from mars_rover.coordinate import Coordinate
from mars_rover.errors import MalformedMission, MarsRoverError
from mars_rover.plateau import Action, Plateau
from mars_rover.render import PygameRenderer
from telemetry.logger import TelemetryLogger


KEY_ACTIONS = {
    pygame.K_n: Action.NEW_ROVER,
    pygame.K_l: Action.TURN_LEFT,
    pygame.K_m: Action.MOVE,
    pygame.K_r: Action.TURN_RIGHT,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Interactive plateau with keyboard rover control.")
    parser.add_argument(
        "--config",
        type=str,
        default="configs/plateau.yaml",
        help="Path to plateau YAML config.",
    )
    parser.add_argument("--mission", type=str, default=None, help="Mission file to run first.")
    parser.add_argument("--size", type=int, nargs=2, default=(5, 5), metavar=("X", "Y"), help="Plateau size.")
    args = parser.parse_args(argv)

    mission: Optional[str] = None
    if args.mission:
        try:
            with open(args.mission, "r", encoding="utf-8") as f:
                mission = f.read()
            Plateau.parse_mission(mission)
        except OSError as exc:
            print(f"Cannot read mission: {exc}", file=sys.stderr)
            return 2
        except MalformedMission as exc:
            print(f"Malformed mission: {exc}", file=sys.stderr)
            return 2

    cfg = load_config(args.config)
    render_cfg = cfg.render
    plateau = build_plateau(cfg.plateau)
    plateau.size = Coordinate(*args.size)

    renderer = PygameRenderer(
        plateau,
        show_trail=render_cfg.show_trail,
        trail_max_length=render_cfg.trail_max_length,
    )
    plateau.animation = renderer.animation(cfg.plateau.animation_frames, render_cfg.fps)

    telemetry = TelemetryLogger(cfg.telemetry_path) if cfg.telemetry_path else None
    if telemetry is not None:
        telemetry.attach(plateau)

    if mission is not None:
        for rover in plateau.execute(mission):
            print(rover)

    print("Keyboard control: N new rover, L/R turn, M move, C clear, ESC to quit.")

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                elif event.key == pygame.K_c:
                    plateau.clear()
                    renderer.trails.clear()
                elif event.key in KEY_ACTIONS:
                    try:
                        rover = plateau.dispatch(KEY_ACTIONS[event.key])
                    except MarsRoverError as exc:
                        print(f"{exc}", file=sys.stderr)
                    else:
                        if rover is not None:
                            print(rover)

        renderer.draw()
        renderer.tick(render_cfg.fps)

    if telemetry is not None:
        telemetry.close()
    renderer.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
