"""
universe_config.py

Construction parameters for a universe.

Accepted JSON shape (camelCase keys from the original browser build and
snake_case keys are both understood):

    {
      "seed": "hello universe",
      "galaxies": [
        {"name": "Cerulean Path", "stars": 1, "planetStarRatio": 8}
      ]
    }

Missing or empty keys fall back to the defaults below. Everything is
validated before any generation happens, so a bad file fails with
ConfigurationError and never with a half-built universe.
"""

import json
import logging
from typing import List, NamedTuple, Optional

from universe_gen import ConfigurationError

log = logging.getLogger(__name__)

DEFAULT_SEED = "hello universe"
DEFAULT_GALAXIES = [
    {"name": "Cerulean Path", "stars": 1, "planetStarRatio": 8},
]


class GalaxyParams(NamedTuple):
    name: str
    star_count: int
    planet_to_star_ratio: float


class UniverseParams(NamedTuple):
    seed: str
    galaxies: List[GalaxyParams]


def _first_present(raw: dict, *keys):
    for key in keys:
        if key in raw:
            return raw[key]
    return None


def parse_galaxy_params(raw: dict, index: int = 0) -> GalaxyParams:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"galaxy #{index} must be an object, got {raw!r}")

    name = raw.get("name") or f"Galaxy {index + 1}"

    stars = _first_present(raw, "star_count", "stars")
    if isinstance(stars, bool) or not isinstance(stars, int):
        raise ConfigurationError(f"galaxy {name!r}: star count must be an integer")
    if stars < 1:
        raise ConfigurationError(f"galaxy {name!r}: star count must be at least 1")

    ratio = _first_present(raw, "planet_to_star_ratio", "planetStarRatio")
    if isinstance(ratio, bool) or not isinstance(ratio, (int, float)):
        raise ConfigurationError(f"galaxy {name!r}: planet ratio must be a number")
    if ratio < 0:
        raise ConfigurationError(f"galaxy {name!r}: planet ratio must not be negative")

    return GalaxyParams(str(name), stars, float(ratio))


def parse_universe_params(raw: Optional[dict] = None, seed: Optional[str] = None) -> UniverseParams:
    """
    Merge defaults into raw and validate it.

    seed, when given, wins over any seed found in raw.
    """
    raw = dict(raw or {})
    if "universe" in raw and isinstance(raw["universe"], dict):
        # original bootstrap shape: {"prngKey": ..., "universe": {"galaxies": [...]}}
        raw = {**raw["universe"], **{k: v for k, v in raw.items() if k != "universe"}}

    if seed is None:
        seed = _first_present(raw, "seed", "prngKey") or DEFAULT_SEED
    if not isinstance(seed, str):
        raise ConfigurationError(f"seed must be a string, got {seed!r}")

    galaxies_raw = raw.get("galaxies") or DEFAULT_GALAXIES
    if not isinstance(galaxies_raw, list):
        raise ConfigurationError("'galaxies' must be a list")

    galaxies = [parse_galaxy_params(g, i) for i, g in enumerate(galaxies_raw)]
    return UniverseParams(seed, galaxies)


def load_universe_params(path: Optional[str] = None, seed: Optional[str] = None) -> UniverseParams:
    """Read a universe JSON file; with no path the defaults are used."""
    if path is None:
        return parse_universe_params(None, seed=seed)

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"{path}: not valid JSON ({exc})") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be an object")
    params = parse_universe_params(data, seed=seed)
    log.debug("loaded %d galaxy definitions from %s", len(params.galaxies), path)
    return params
