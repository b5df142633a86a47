#!/usr/bin/env python3
"""
orbit_viewer.py

pygame viewer for a seeded, procedurally generated universe.

Features
--------
- Builds the universe from a seed and a list of galaxy definitions
  (see universe_config.py for the JSON schema; defaults are used when no
  file is given).
- Shows the starting galaxy's most populous star system: the star,
  circular orbit rings and every planet moving along its orbit.
- Hover a planet to highlight it, click to select it and read its day of
  year; click empty space to clear the selection.
- SPACE pauses / resumes the orbital clock.

Usage
-----
    python orbit_viewer.py
    python orbit_viewer.py data/universe.json
    python orbit_viewer.py data/universe.json --seed "another universe" -v

Dependencies
-----------
    pip install pygame
"""

import argparse
import logging
import sys
from typing import List, Optional

import pygame

from simulation import RenderFrame, Simulation
from universe_config import load_universe_params
from universe_gen import ConfigurationError, Universe

log = logging.getLogger(__name__)

ORBIT_COLOR = (200, 200, 200)
HOVER_COLOR = (255, 255, 255)
TEXT_COLOR = (220, 220, 220)
HELP_COLOR = (150, 150, 150)


# ---------- Viewer / UI ----------


class StarMapViewer:
    def __init__(self, universe: Universe, width: int = 1000, height: int = 1000):
        # validate the target before opening a window
        self.sim = Simulation(universe, width, height)

        pygame.init()
        pygame.display.set_caption(f"starmap - {self.sim.system.name}")
        self.width = width
        self.height = height
        self.screen = pygame.display.set_mode((width, height))
        self.clock = pygame.time.Clock()
        self.running = True

        self.font = pygame.font.SysFont("consolas", 16)
        self.small_font = pygame.font.SysFont("consolas", 13)
        self.frame: Optional[RenderFrame] = None

    # --- main loop ---

    def run(self):
        log.info(
            "showing %s (%d planets)", self.sim.system.name, self.sim.system.size
        )
        while True:
            dt_ms = self.clock.tick(60)
            self.handle_events()
            self.frame = self.sim.tick(dt_ms if self.running else 0.0)
            self.draw(self.frame)

    # --- event handling ---

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit()
                sys.exit(0)
            elif event.type == pygame.KEYDOWN:
                self.handle_keydown(event.key)
            elif event.type == pygame.MOUSEMOTION:
                self.sim.set_pointer(event.pos)
            elif event.type == pygame.WINDOWLEAVE:
                self.sim.set_pointer(None)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.sim.set_pointer(event.pos)
                self.sim.click()

    def handle_keydown(self, key):
        if key == pygame.K_SPACE:
            self.running = not self.running
        if key == pygame.K_ESCAPE:
            pygame.quit()
            sys.exit(0)

    # --- drawing ---

    def draw(self, frame: RenderFrame):
        self.screen.fill((0, 0, 0))
        cx, cy = frame.centre

        star = (int(cx), int(cy))
        pygame.draw.circle(self.screen, frame.star_stroke_rgb, star, int(frame.star_radius))
        pygame.draw.circle(self.screen, frame.star_fill_rgb, star, int(frame.star_radius), 1)

        for sprite in frame.planets:
            if sprite.orbit_pixels > 1:
                pygame.draw.circle(self.screen, ORBIT_COLOR, star, int(sprite.orbit_pixels), 1)

        hovered = frame.under_pointer.name if frame.under_pointer else None
        for sprite in frame.planets:
            pos = (int(sprite.position[0]), int(sprite.position[1]))
            r = max(1, int(sprite.draw_radius))
            pygame.draw.circle(self.screen, sprite.fill_rgb, pos, r)
            pygame.draw.circle(self.screen, sprite.stroke_rgb, pos, r, 1)
            if sprite.name == hovered:
                pygame.draw.circle(self.screen, HOVER_COLOR, pos, r + 4, 1)

        self.draw_info_panel(frame)
        self.draw_help_overlay()

        pygame.display.flip()

    def draw_info_panel(self, frame: RenderFrame):
        lines: List[str] = []
        lines.append(f"System: {frame.system_name}")
        if frame.under_pointer:
            lines.append(f"Hover: {frame.under_pointer.name}")
        info = self.sim.selected_planet_info()
        if info:
            lines.append(f"Planet: {info.name}")
            lines.append(info.label)
            lines.append(f"Satellites: {info.satellites}")
        if not self.running:
            lines.append("PAUSED")

        x = 10
        y = 10
        for line in lines:
            txt = self.font.render(line, True, TEXT_COLOR)
            self.screen.blit(txt, (x, y))
            y += txt.get_height() + 2

    def draw_help_overlay(self):
        line = "SPACE: play/pause   Click planet: select   Click space: clear   ESC: quit"
        txt = self.small_font.render(line, True, HELP_COLOR)
        self.screen.blit(txt, (10, self.height - txt.get_height() - 10))


# ---------- main ----------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Seeded procedural star map viewer")
    parser.add_argument(
        "json_path",
        nargs="?",
        default=None,
        help="Path to a universe JSON file (defaults are used when omitted).",
    )
    parser.add_argument("--seed", default=None, help="Seed overriding the file's seed.")
    parser.add_argument("--width", type=int, default=1000)
    parser.add_argument("--height", type=int, default=1000)
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        params = load_universe_params(args.json_path, seed=args.seed)
        universe = Universe.from_params(params)
        viewer = StarMapViewer(universe, args.width, args.height)
    except (ConfigurationError, OSError) as exc:
        parser.error(str(exc))
    viewer.run()


if __name__ == "__main__":
    main()
