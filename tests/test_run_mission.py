from __future__ import annotations

import json
from pathlib import Path

import pytest

from scripts.run_mission import main


def test_prints_final_rover_positions(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    mission = tmp_path / "mission.txt"
    mission.write_text("5 5\n1 2 N\nLMLMLMLMM\n3 3 E\nMMRMMRMRRM\n", encoding="utf-8")
    assert main([str(mission)]) == 0
    assert capsys.readouterr().out == "1 3 N\n5 1 E\n"


def test_writes_telemetry(tmp_path: Path) -> None:
    mission = tmp_path / "mission.txt"
    mission.write_text("2 2\n0 0 N\nM\n", encoding="utf-8")
    telemetry = tmp_path / "out.jsonl"
    assert main([str(mission), "--telemetry", str(telemetry)]) == 0
    records = [json.loads(line) for line in telemetry.read_text(encoding="utf-8").splitlines()]
    assert records[0]["event"] == "size"
    assert records[-1]["y"] == 1.0


def test_malformed_mission_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    mission = tmp_path / "mission.txt"
    mission.write_text("not a size\n", encoding="utf-8")
    assert main([str(mission)]) == 2
    assert "Malformed mission" in capsys.readouterr().err


def test_missing_mission_file_exit_code(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    assert main([str(tmp_path / "nowhere.txt")]) == 2
    assert "Cannot read mission" in capsys.readouterr().err
