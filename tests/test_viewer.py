import pytest

import orbit_viewer


def test_parser_defaults():
    args = orbit_viewer.build_parser().parse_args([])
    assert args.json_path is None
    assert args.seed is None
    assert (args.width, args.height) == (1000, 1000)
    assert not args.verbose


def test_parser_options():
    args = orbit_viewer.build_parser().parse_args(
        ["data/universe.json", "--seed", "abc", "--width", "640", "-v"]
    )
    assert args.json_path == "data/universe.json"
    assert args.seed == "abc"
    assert args.width == 640
    assert args.verbose


def test_bad_config_exits(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"galaxies": [{"stars": 0, "planetStarRatio": 1}]}', encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        orbit_viewer.main([str(path)])
    assert excinfo.value.code == 2


def test_unusable_window_exits():
    with pytest.raises(SystemExit):
        orbit_viewer.main(["--width", "0"])
