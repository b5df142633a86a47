import json
from pathlib import Path

import pytest

from universe_config import (
    DEFAULT_SEED,
    GalaxyParams,
    load_universe_params,
    parse_universe_params,
)
from universe_gen import ConfigurationError


def test_defaults():
    params = parse_universe_params()
    assert params.seed == DEFAULT_SEED
    assert params.galaxies == [GalaxyParams("Cerulean Path", 1, 8.0)]


def test_empty_values_fall_back_to_defaults():
    params = parse_universe_params({"seed": "", "galaxies": []})
    assert params.seed == DEFAULT_SEED
    assert len(params.galaxies) == 1


def test_camel_and_snake_case():
    params = parse_universe_params({
        "seed": "s",
        "galaxies": [
            {"name": "A", "stars": 3, "planetStarRatio": 2},
            {"name": "B", "star_count": 4, "planet_to_star_ratio": 0.5},
        ],
    })
    assert params.galaxies == [GalaxyParams("A", 3, 2.0), GalaxyParams("B", 4, 0.5)]


def test_original_bootstrap_shape():
    params = parse_universe_params({
        "prngKey": "old style",
        "universe": {"galaxies": [{"name": "Old", "stars": 2, "planetStarRatio": 1}]},
    })
    assert params.seed == "old style"
    assert params.galaxies[0].name == "Old"


def test_seed_override():
    assert parse_universe_params({"seed": "file"}, seed="cli").seed == "cli"


def test_unnamed_galaxy():
    params = parse_universe_params({"galaxies": [{"stars": 1, "planetStarRatio": 1}]})
    assert params.galaxies[0].name == "Galaxy 1"


@pytest.mark.parametrize("galaxy", [
    {"stars": 0, "planetStarRatio": 1},
    {"stars": -1, "planetStarRatio": 1},
    {"stars": "3", "planetStarRatio": 1},
    {"stars": 2.5, "planetStarRatio": 1},
    {"stars": True, "planetStarRatio": 1},
    {"planetStarRatio": 1},
    {"stars": 1, "planetStarRatio": -1},
    {"stars": 1, "planetStarRatio": "lots"},
    {"stars": 1},
    "not an object",
])
def test_bad_galaxy(galaxy):
    with pytest.raises(ConfigurationError):
        parse_universe_params({"galaxies": [galaxy]})


def test_bad_top_level():
    with pytest.raises(ConfigurationError):
        parse_universe_params({"galaxies": {"name": "A"}})
    with pytest.raises(ConfigurationError):
        parse_universe_params({"seed": 42})


def test_load_file(tmp_path):
    path = tmp_path / "universe.json"
    path.write_text(json.dumps({
        "seed": "from file",
        "galaxies": [{"name": "F", "stars": 2, "planetStarRatio": 3}],
    }), encoding="utf-8")
    params = load_universe_params(str(path))
    assert params.seed == "from file"
    assert params.galaxies == [GalaxyParams("F", 2, 3.0)]


def test_load_without_path():
    assert load_universe_params(None, seed="x").seed == "x"


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_universe_params(str(path))


def test_load_non_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_universe_params(str(path))


def test_sample_data_file():
    params = load_universe_params(str(Path(__file__).parent.parent / "data" / "universe.json"))
    assert [g.name for g in params.galaxies] == ["Cerulean Path", "Amber Drift"]
