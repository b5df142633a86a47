"""
universe_gen.py

Seeded procedural universe: galaxies -> star systems -> planets.

Everything here is derived from a single SeededRandomSource. The order in
which the generators draw from it is fixed, so the same seed and the same
galaxy parameters always produce the same names, colors, satellite counts
and orbital parameters.

Per system the draws are: three letters, three digits, fill color, stroke
color, solar mass. Per planet: fill color, stroke color, satellite count.
Per galaxy: every star system, then one system-index draw per planet, then
the orbital bounds of each system (variance, then angle, per planet).
The universe draws one starting-galaxy index after each galaxy is built.

Nothing in this module touches pygame; the viewer feeds screen positions
back through Planet.fix_draw_radius / Planet.set_position.
"""

import enum
import logging
import math
import random
from typing import Iterable, List, NamedTuple, Optional, Sequence, Tuple

log = logging.getLogger(__name__)

TAU = 2.0 * math.pi

# ticks per year for a year-length factor of 1.0
BASE_YEAR_TICKS = 570
# ms of wall-clock time per day-of-year tick
MS_PER_DAY = 100.0

INNER_ORBIT = 0.15
ORBIT_SPAN = 0.8
FIRST_YEAR_FACTOR = 0.25
YEAR_GROWTH = 2 ** 1.005

Point = Tuple[float, float]


# ---------- Errors ----------


class ValidationError(ValueError):
    """A value handed to the generator is outside its permitted range."""


class InvalidRangeError(ValidationError):
    """An HSL component is outside its range."""


class ConfigurationError(ValueError):
    """Generation parameters (or the render target) are unusable."""


class PlanetStateError(RuntimeError):
    """An operation was called in the wrong part of a lifecycle."""


# ---------- Random source ----------


class SeededRandomSource:
    """Deterministic stream of floats in [0, 1), seeded from a string."""

    def __init__(self, seed: str):
        self.seed = seed
        self._rng = random.Random(seed)
        self.draws = 0

    def random(self) -> float:
        self.draws += 1
        return self._rng.random()

    def randint_inclusive(self, low: int, high: int) -> int:
        """One draw mapped onto [low, high], both ends inclusive (floor based)."""
        return math.floor(self.random() * (high - low + 1)) + low


# ---------- Colors ----------


class CelestialColor(NamedTuple):
    hsl: Tuple[int, int, int]
    rgb: Tuple[int, int, int]

    def css(self) -> str:
        return "rgb({}, {}, {})".format(*self.rgb)


def _validate_hsl(name: str, value: float, limit: float):
    if value > limit or value < 0:
        raise InvalidRangeError(
            f"{name} must be between 0 and {limit}. Value of {value} provided"
        )


def hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """
    Convert hue [0, 360], saturation [0, 100], lightness [0, 100] to an
    (r, g, b) tuple of ints in [0, 255].
    """
    _validate_hsl("Hue", h, 360)
    _validate_hsl("Saturation", s, 100)
    _validate_hsl("Lightness", l, 100)
    s /= 100
    l /= 100
    a = s * min(l, 1 - l)

    def k(n):
        return (n + h / 30) % 12

    def f(n):
        return l - a * max(-1, min(k(n) - 3, 9 - k(n), 1))

    return (math.floor(255 * f(0)), math.floor(255 * f(8)), math.floor(255 * f(4)))


def random_celestial_color(
    rng: SeededRandomSource, min_saturation: int = 50, min_lightness: int = 25
) -> CelestialColor:
    hsl = (
        rng.randint_inclusive(0, 360),
        rng.randint_inclusive(min_saturation, 100),
        rng.randint_inclusive(min_lightness, 100),
    )
    return CelestialColor(hsl, hsl_to_rgb(*hsl))


# ---------- Planets ----------


class PlanetState(enum.Enum):
    UNCONFIGURED = "unconfigured"
    INITIALISED = "initialised"
    POSITIONED = "positioned"
    ANIMATING = "animating"


class BoundingBox(NamedTuple):
    top_left: Point
    bottom_right: Point

    def contains(self, point: Point) -> bool:
        """Strictly inside; a point on an edge is outside."""
        x, y = point
        return (
            self.top_left[0] < x < self.bottom_right[0]
            and self.top_left[1] < y < self.bottom_right[1]
        )


class Planet:
    def __init__(self, name: str, rng: SeededRandomSource):
        self.name: str = name
        self.fill_color: CelestialColor = random_celestial_color(rng)
        self.stroke_color: CelestialColor = random_celestial_color(rng)
        self.satellites: int = rng.randint_inclusive(0, 10)

        # Orbital parameters, assigned once by StarSystem.establish_planet_bounds
        self.orbital_radius: Optional[float] = None
        self.planetary_radius: Optional[float] = None
        self.year_length: Optional[int] = None
        self.initial_angular_position: Optional[float] = None
        self.angular_position: Optional[float] = None
        self.day_of_year: float = 0.0

        # Screen space, fed back by the renderer
        self.position: Optional[Point] = None
        self.draw_radius: Optional[float] = None
        self.bounding_box: Optional[BoundingBox] = None
        self._ticks = 0

    def __repr__(self):
        return f"Planet({self.name!r})"

    @property
    def state(self) -> PlanetState:
        if self.year_length is None:
            return PlanetState.UNCONFIGURED
        if self.position is None:
            return PlanetState.INITIALISED
        if self._ticks == 0:
            return PlanetState.POSITIONED
        return PlanetState.ANIMATING

    def initialise(
        self,
        orbital_radius: float,
        planetary_radius: float,
        year_length_factor: float,
        angular_position: float,
    ) -> "Planet":
        if self.year_length is not None:
            raise PlanetStateError(f"{self.name} is already initialised")
        self.orbital_radius = orbital_radius
        self.planetary_radius = planetary_radius
        self.year_length = math.floor(BASE_YEAR_TICKS * year_length_factor)
        self.initial_angular_position = angular_position
        self.angular_position = angular_position
        log.debug(
            "%s: orbit %.4f size %.4f year %d ticks",
            self.name, orbital_radius, planetary_radius, self.year_length,
        )
        return self

    def advance_time(self, elapsed_ms: float):
        """
        Move the planet along its orbit by elapsed_ms of wall-clock time.

        A year that overflows is wrapped by a single subtraction; a jump of
        several years in one call is not normalised any further.
        """
        if self.year_length is None:
            raise PlanetStateError(f"{self.name} has no orbit yet")
        self.day_of_year += elapsed_ms / MS_PER_DAY
        if self.day_of_year > self.year_length:
            self.day_of_year -= self.year_length
        offset = TAU * (self.day_of_year / self.year_length)
        self.angular_position = self.initial_angular_position + offset
        if self.position is not None:
            self._ticks += 1

    def fix_draw_radius(self, value: float) -> float:
        """Set the draw radius if it is still unset; returns the radius in use."""
        if self.draw_radius is None:
            if value <= 0:
                raise ValidationError(f"draw radius must be positive, got {value}")
            self.draw_radius = value
        return self.draw_radius

    def set_position(self, point: Point) -> "Planet":
        self.position = point
        if self.draw_radius:
            x, y = point
            r = self.draw_radius
            self.bounding_box = BoundingBox((x - r, y - r), (x + r, y + r))
        else:
            self.bounding_box = None
        return self

    def is_under_point(self, point: Point) -> bool:
        if self.bounding_box is None:
            return False
        return self.bounding_box.contains(point)

    def day_label(self) -> str:
        return f"Day {math.floor(self.day_of_year)} of {self.year_length}"


def planet_under_point(planets: Iterable[Planet], point: Point) -> Optional[Planet]:
    """First planet, inner to outer, whose bounding box holds point."""
    for planet in planets:
        if planet.is_under_point(point):
            return planet
    return None


# ---------- Star systems ----------


class StarSystem:
    def __init__(self, rng: SeededRandomSource):
        self._rng = rng
        # three upper case letters followed by three digits
        letters = "".join(chr(rng.randint_inclusive(65, 90)) for _ in range(3))
        digits = "".join(str(rng.randint_inclusive(0, 9)) for _ in range(3))
        self.name: str = letters + digits
        self.fill_color: CelestialColor = random_celestial_color(rng, 75, 75)
        self.stroke_color: CelestialColor = random_celestial_color(rng)
        self.solar_mass: float = rng.randint_inclusive(50, 150) / 100
        self.planets: List[Planet] = []
        self.bounds_established = False

    def __repr__(self):
        return f"StarSystem({self.name!r}, planets={len(self.planets)})"

    def __len__(self):
        return len(self.planets)

    @property
    def size(self) -> int:
        return len(self.planets)

    def add_planet(self) -> Planet:
        if self.bounds_established:
            raise PlanetStateError(f"{self.name}: orbits are already fixed")
        planet = Planet(f"{self.name} - {len(self.planets) + 1}", self._rng)
        self.planets.append(planet)
        return planet

    def establish_planet_bounds(self):
        """
        Lay out orbital shells inner to outer.

        Each shell is the average width 0.8 / n varied by up to +/-20%.
        Planets get the inner edge of their shell as orbital radius, a size
        that grows with the index, a year roughly double the previous one,
        and a random starting angle.
        """
        if self.bounds_established:
            raise PlanetStateError(f"{self.name}: orbits are already fixed")
        self.bounds_established = True
        count = len(self.planets)
        if count == 0:
            return

        orbital_radius = INNER_ORBIT
        ave_orbital_delta = ORBIT_SPAN / count
        size_ratio = 1 / count / 2
        year_length_factor = FIRST_YEAR_FACTOR

        for i, planet in enumerate(self.planets):
            variance = self._rng.randint_inclusive(0, 40) - 20
            offset = ave_orbital_delta + ave_orbital_delta * variance / 100
            size_multiplier = 0.5 + (i + 1) * size_ratio
            planet.initialise(
                orbital_radius,
                offset * size_multiplier,
                year_length_factor,
                self._rng.random() * TAU,
            )
            year_length_factor *= YEAR_GROWTH
            orbital_radius = min(orbital_radius + offset, 1.0)


# ---------- Galaxies ----------


class Galaxy:
    def __init__(
        self,
        name: str,
        star_count: int,
        planet_to_star_ratio: float,
        rng: SeededRandomSource,
    ):
        if star_count < 1:
            raise ConfigurationError(f"galaxy {name!r} needs at least one star")
        if planet_to_star_ratio < 0:
            raise ConfigurationError(f"galaxy {name!r} has a negative planet ratio")

        self.name = name
        self.star_systems: List[StarSystem] = [
            StarSystem(rng) for _ in range(star_count)
        ]

        most_populous = self.star_systems[0]
        for _ in range(math.floor(star_count * planet_to_star_ratio)):
            system = self.star_systems[rng.randint_inclusive(0, star_count - 1)]
            system.add_planet()
            if system.size > most_populous.size:
                most_populous = system

        # bounds need the final planet count of each system
        for system in self.star_systems:
            system.establish_planet_bounds()

        self.most_populous_system: StarSystem = most_populous
        self.focused_system: StarSystem = most_populous
        log.debug(
            "galaxy %s: %d systems, most populous %s (%d planets)",
            name, star_count, most_populous.name, most_populous.size,
        )

    def __repr__(self):
        return f"Galaxy({self.name!r}, systems={len(self.star_systems)})"

    @property
    def planet_count(self) -> int:
        return sum(s.size for s in self.star_systems)

    def focus(self, system: StarSystem) -> StarSystem:
        if not any(system is s for s in self.star_systems):
            raise ConfigurationError(f"{system.name} is not part of galaxy {self.name!r}")
        self.focused_system = system
        return system


# ---------- Universe ----------


class Universe:
    def __init__(self, galaxy_params: Sequence, rng: SeededRandomSource):
        """
        galaxy_params: sequence of objects with name, star_count and
        planet_to_star_ratio attributes (see universe_config.GalaxyParams).
        """
        if not galaxy_params:
            raise ConfigurationError("a universe needs at least one galaxy")
        self.rng = rng
        self.galaxies: List[Galaxy] = []
        self.starting_galaxy: Optional[Galaxy] = None
        for params in galaxy_params:
            self.galaxies.append(
                Galaxy(params.name, params.star_count, params.planet_to_star_ratio, rng)
            )
            # re-drawn after every galaxy; only the last draw sticks
            index = rng.randint_inclusive(0, len(self.galaxies) - 1)
            self.starting_galaxy = self.galaxies[index]

        log.info(
            "universe %r: %d galaxies, starting at %s in %s",
            rng.seed, len(self.galaxies),
            self.starting_system.name, self.starting_galaxy.name,
        )

    @classmethod
    def from_params(cls, params) -> "Universe":
        """Build from a universe_config.UniverseParams."""
        return cls(params.galaxies, SeededRandomSource(params.seed))

    @property
    def starting_system(self) -> StarSystem:
        return self.starting_galaxy.most_populous_system

    @property
    def focused_system(self) -> StarSystem:
        return self.starting_galaxy.focused_system
