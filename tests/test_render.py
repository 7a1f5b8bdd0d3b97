from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from mars_rover.coordinate import Coordinate
from mars_rover.plateau import Plateau
from mars_rover.render import PygameRenderer


def test_draw_mission_headless() -> None:
    plateau = Plateau(scale=20)
    plateau.execute("5 5\n1 2 N\nLMLMLMLMM\n5 5 N\nM")
    renderer = PygameRenderer(plateau, hud_width=200)
    try:
        renderer.draw()
        assert renderer.screen.get_size() == (6 * 20 + 200, 6 * 20)
        assert len(renderer.trails) == 2

        plateau.size = Coordinate(9, 9)
        renderer.draw()
        assert renderer.screen.get_size() == (10 * 20 + 200, 10 * 20)
    finally:
        renderer.close()


def test_paced_animation_redraws_each_frame() -> None:
    plateau = Plateau(size=Coordinate(3, 3), scale=10)
    renderer = PygameRenderer(plateau)
    try:
        plateau.animation = renderer.animation(frame_count=3, target_fps=1000)
        rover = plateau.create_rover(0, 0, "N")
        rover.move()
        rover.turn_right()
        assert str(rover) == "0 1 E"
        assert renderer.trails[id(rover)][-1] == (0.0, 1.0)
        assert len(renderer.trails[id(rover)]) == 3
    finally:
        renderer.close()
