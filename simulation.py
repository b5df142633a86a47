"""
simulation.py

Per-frame driver between a Universe and whatever draws it.

The caller owns the loop: it calls Simulation.tick(elapsed_ms) once per
frame and paints the RenderFrame it gets back. Stopping the animation is
just not calling tick any more.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from universe_gen import (
    ConfigurationError,
    Planet,
    Point,
    StarSystem,
    Universe,
    ValidationError,
    planet_under_point,
)

log = logging.getLogger(__name__)

# pointer position meaning "no pointer over the canvas"
OUT_OF_BOUNDS: Point = (-1000.0, -1000.0)

RGB = Tuple[int, int, int]


@dataclass
class PlanetSprite:
    name: str
    fill_rgb: RGB
    stroke_rgb: RGB
    orbital_radius: float
    angular_position: float
    orbit_pixels: float
    position: Point
    draw_radius: float


@dataclass
class RenderFrame:
    system_name: str
    centre: Point
    star_radius: float
    star_fill_rgb: RGB
    star_stroke_rgb: RGB
    planets: List[PlanetSprite] = field(default_factory=list)
    under_pointer: Optional[Planet] = None
    selected: Optional[Planet] = None


@dataclass
class PlanetInfo:
    name: str
    day_of_year: int
    year_length: int
    satellites: int
    label: str


class Simulation:
    def __init__(self, universe: Universe, width: int, height: int):
        self.universe = universe
        self.resize(width, height)
        self.pointer: Point = OUT_OF_BOUNDS
        self.under_pointer: Optional[Planet] = None
        self.selected: Optional[Planet] = None
        self.elapsed_ms = 0.0

    @property
    def system(self) -> StarSystem:
        return self.universe.focused_system

    def resize(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"unusable render target {width}x{height}")
        self.width = width
        self.height = height

    def set_pointer(self, point: Optional[Point]):
        self.pointer = OUT_OF_BOUNDS if point is None else point

    # --- geometry ---

    @property
    def centre(self) -> Point:
        return (self.width / 2, self.height / 2)

    def orbit_pixels(self, planet: Planet) -> float:
        return self.width / 2 * planet.orbital_radius

    def draw_radius_for(self, planet: Planet) -> float:
        return self.width / 10 * planet.planetary_radius

    # --- frame ---

    def tick(self, elapsed_ms: float) -> RenderFrame:
        """
        Advance every planet of the focused system, lay them out on screen
        and work out which one is under the pointer.
        """
        if elapsed_ms < 0:
            raise ValidationError(f"elapsed time must not be negative, got {elapsed_ms}")
        self.elapsed_ms += elapsed_ms

        system = self.system
        cx, cy = self.centre
        sprites = []
        for planet in system.planets:
            planet.advance_time(elapsed_ms)
            r = self.orbit_pixels(planet)
            radius = planet.fix_draw_radius(self.draw_radius_for(planet))
            planet.set_position((
                cx + r * math.cos(planet.angular_position),
                cy + r * math.sin(planet.angular_position),
            ))
            sprites.append(PlanetSprite(
                name=planet.name,
                fill_rgb=planet.fill_color.rgb,
                stroke_rgb=planet.stroke_color.rgb,
                orbital_radius=planet.orbital_radius,
                angular_position=planet.angular_position,
                orbit_pixels=r,
                position=planet.position,
                draw_radius=radius,
            ))

        # only after every planet has moved this frame
        self.under_pointer = planet_under_point(system.planets, self.pointer)

        return RenderFrame(
            system_name=system.name,
            centre=(cx, cy),
            star_radius=self.width / 20,
            star_fill_rgb=system.fill_color.rgb,
            star_stroke_rgb=system.stroke_color.rgb,
            planets=sprites,
            under_pointer=self.under_pointer,
            selected=self.selected,
        )

    def click(self) -> Optional[Planet]:
        """Select whatever is under the pointer (or clear the selection)."""
        self.selected = self.under_pointer
        if self.selected is not None:
            log.debug("selected %s", self.selected.name)
        return self.selected

    def selected_planet_info(self) -> Optional[PlanetInfo]:
        planet = self.selected
        if planet is None:
            return None
        return PlanetInfo(
            name=planet.name,
            day_of_year=math.floor(planet.day_of_year),
            year_length=planet.year_length,
            satellites=planet.satellites,
            label=planet.day_label(),
        )
