from __future__ import annotations

from typing import Dict, List, Tuple
import math

import pygame

from .plateau import Plateau
from .rover import Animation, Rover, Step, frames


# Dust palette
THEME = {
    "bg": (32, 20, 16),
    "ground": (120, 62, 38),
    "grid": (150, 84, 56),
    "rover_fill": (235, 225, 205),
    "rover_outline": (90, 70, 60),
    "rover_active": (255, 200, 90),
    "rover_crashed": (220, 60, 50),
    "trail": (200, 150, 110),
    "hud_bg": (28, 20, 18),
    "hud_border": (110, 80, 64),
    "hud_text": (240, 225, 205),
}


class PygameRenderer:
    """Top-down view of a plateau and its rovers.

    Coordinates:
    - Grid origin (0,0) is the bottom-left cell.
    - Y axis is flipped so that north is up while screen y increases downward.
    - Each grid unit is `plateau.scale` pixels; the window shows
      (size + 1) cells along each axis.
    """

    def __init__(
        self,
        plateau: Plateau,
        show_trail: bool = True,
        trail_max_length: int = 200,
        hud_width: int = 220,
    ) -> None:
        pygame.init()
        pygame.display.set_caption("Mars Rover Plateau")
        self.plateau = plateau
        self.show_trail = show_trail
        self.trail_max_length = trail_max_length
        self.hud_width = hud_width
        self.trails: Dict[int, List[Tuple[float, float]]] = {}
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 18)
        self.screen = pygame.display.set_mode(self._window_size())

    # ------------------------------------------------------------------
    # Coordinate transforms
    # ------------------------------------------------------------------
    def _grid_pixels(self) -> Tuple[int, int]:
        size, scale = self.plateau.size, self.plateau.scale
        return int((size.x + 1) * scale), int((size.y + 1) * scale)

    def _window_size(self) -> Tuple[int, int]:
        width, height = self._grid_pixels()
        return width + self.hud_width, max(height, 120)

    def _grid_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Centre of cell (x, y) in screen pixels."""
        scale = self.plateau.scale
        _, height = self._grid_pixels()
        sx = int((x + 0.5) * scale)
        sy = int(height - (y + 0.5) * scale)
        return sx, sy

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def _resize_if_needed(self) -> None:
        if self.screen.get_size() != self._window_size():
            self.screen = pygame.display.set_mode(self._window_size())

    def _draw_grid(self) -> None:
        width, height = self._grid_pixels()
        scale = max(1, int(self.plateau.scale))
        pygame.draw.rect(self.screen, THEME["ground"], pygame.Rect(0, 0, width, height))
        for x in range(0, width + 1, scale):
            pygame.draw.line(self.screen, THEME["grid"], (x, 0), (x, height), 1)
        for y in range(0, height + 1, scale):
            pygame.draw.line(self.screen, THEME["grid"], (0, y), (width, y), 1)

    def draw(self) -> None:
        """Render one frame."""
        self._resize_if_needed()
        self.screen.fill(THEME["bg"])
        self._draw_grid()

        rovers = self.plateau.rovers
        active = self.plateau.active_rover
        for rover in rovers:
            if self.show_trail:
                self._draw_trail(rover)
            self._draw_rover(rover, rover is active)

        self._draw_hud(rovers)
        pygame.display.flip()

    def _draw_trail(self, rover: Rover) -> None:
        trail = self.trails.setdefault(id(rover), [])
        point = (rover.position.x, rover.position.y)
        if not trail or trail[-1] != point:
            trail.append(point)
        if len(trail) > self.trail_max_length:
            del trail[: len(trail) - self.trail_max_length]
        if len(trail) >= 2:
            pts = [self._grid_to_screen(px, py) for px, py in trail]
            pygame.draw.lines(self.screen, THEME["trail"], False, pts, 2)

    def _draw_rover(self, rover: Rover, active: bool) -> None:
        center = self._grid_to_screen(rover.position.x, rover.position.y)
        radius_px = max(3, int(self.plateau.scale * 0.35))
        if rover.crashed:
            fill = THEME["rover_crashed"]
        elif active:
            fill = THEME["rover_active"]
        else:
            fill = THEME["rover_fill"]

        # Triangle pointing along the compass bearing (clockwise from north)
        rad = math.radians(rover.heading)
        tip = (center[0] + math.sin(rad) * radius_px, center[1] - math.cos(rad) * radius_px)
        left = rad - math.pi * 0.8
        right = rad + math.pi * 0.8
        wing_l = (center[0] + math.sin(left) * radius_px, center[1] - math.cos(left) * radius_px)
        wing_r = (center[0] + math.sin(right) * radius_px, center[1] - math.cos(right) * radius_px)
        tri = [tip, wing_l, wing_r]
        pygame.draw.polygon(self.screen, fill, tri)
        pygame.draw.polygon(self.screen, THEME["rover_outline"], tri, 2)

    def _draw_hud(self, rovers: List[Rover]) -> None:
        pad = 8
        left = self._grid_pixels()[0] + pad
        lines = [f"Plateau {self.plateau.size}", "N new  L/R turn  M move  C clear"]
        lines += [f"#{i} {rover}" for i, rover in enumerate(rovers)]
        height = pad + len(lines) * 18
        panel = pygame.Rect(left, pad, self.hud_width - 2 * pad, height)
        pygame.draw.rect(self.screen, THEME["hud_bg"], panel)
        pygame.draw.rect(self.screen, THEME["hud_border"], panel, 1)
        for i, text in enumerate(lines):
            surf = self.font.render(text, True, THEME["hud_text"])
            self.screen.blit(surf, (panel.x + 4, panel.y + 4 + i * 18))

    # ------------------------------------------------------------------
    # Pacing
    # ------------------------------------------------------------------
    def animation(self, frame_count: int, target_fps: int) -> Animation:
        """Frame-paced animation that redraws after every progress step."""
        base = frames(frame_count)

        def animate(step: Step) -> None:
            def paced(progress: float) -> None:
                step(progress)
                pygame.event.pump()
                self.draw()
                self.tick(target_fps)

            base(paced)

        return animate

    def tick(self, target_fps: int) -> float:
        """Cap frame rate and return achieved FPS."""
        fps = self.clock.get_fps()
        self.clock.tick(target_fps)
        return fps

    def close(self) -> None:
        pygame.quit()
