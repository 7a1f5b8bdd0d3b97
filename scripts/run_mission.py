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

from mars_rover.config import build_plateau, load_config
from mars_rover.errors import MalformedMission
from telemetry.logger import TelemetryLogger


def read_mission(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run a Mars rover mission and print final rover positions.")
    parser.add_argument("mission", type=str, help="Mission file, or '-' for stdin.")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to plateau YAML config.",
    )
    parser.add_argument(
        "--telemetry",
        type=str,
        default=None,
        help="JSONL telemetry output path (overrides config).",
    )
    args = parser.parse_args(argv)

    try:
        text = read_mission(args.mission)
    except OSError as exc:
        print(f"Cannot read mission: {exc}", file=sys.stderr)
        return 2

    cfg = load_config(args.config)
    plateau = build_plateau(cfg.plateau)

    telemetry_path = args.telemetry or cfg.telemetry_path
    telemetry = TelemetryLogger(telemetry_path) if telemetry_path else None
    if telemetry is not None:
        telemetry.attach(plateau)

    try:
        rovers = plateau.execute(text)
    except MalformedMission as exc:
        print(f"Malformed mission: {exc}", file=sys.stderr)
        return 2
    finally:
        if telemetry is not None:
            telemetry.close()

    for rover in rovers:
        print(rover)
    return 0


if __name__ == "__main__":
    sys.exit(main())
