import pytest

from universe_gen import (
    CelestialColor,
    InvalidRangeError,
    SeededRandomSource,
    ValidationError,
    hsl_to_rgb,
    random_celestial_color,
)


def test_black_and_white():
    assert hsl_to_rgb(0, 0, 0) == (0, 0, 0)
    assert hsl_to_rgb(0, 0, 100) == (255, 255, 255)


@pytest.mark.parametrize("hsl, rgb", [
    ((0, 100, 50), (255, 0, 0)),
    ((120, 100, 50), (0, 255, 0)),
    ((240, 100, 50), (0, 0, 255)),
    ((360, 100, 50), (255, 0, 0)),
])
def test_primary_hues(hsl, rgb):
    assert hsl_to_rgb(*hsl) == rgb


def test_upper_bounds_accepted():
    assert hsl_to_rgb(360, 100, 100) == (255, 255, 255)


@pytest.mark.parametrize("hsl", [(361, 50, 50), (-1, 50, 50), (0, 101, 50), (0, 50, 100.5)])
def test_out_of_range_rejected(hsl):
    with pytest.raises(InvalidRangeError):
        hsl_to_rgb(*hsl)


def test_range_error_is_a_validation_error():
    with pytest.raises(ValidationError, match="Hue must be between 0 and 360"):
        hsl_to_rgb(361, 50, 50)


def test_channels_stay_in_byte_range():
    for h in range(0, 361, 15):
        for s in range(0, 101, 20):
            for l in range(0, 101, 10):
                assert all(0 <= c <= 255 for c in hsl_to_rgb(h, s, l))


def test_conversion_is_pure():
    assert hsl_to_rgb(211, 63, 47) == hsl_to_rgb(211, 63, 47)


def test_random_color_respects_minimums():
    rng = SeededRandomSource("colors")
    for _ in range(200):
        color = random_celestial_color(rng, 75, 75)
        h, s, l = color.hsl
        assert 0 <= h <= 360
        assert 75 <= s <= 100
        assert 75 <= l <= 100
        assert color.rgb == hsl_to_rgb(h, s, l)


def test_random_color_uses_three_draws():
    rng = SeededRandomSource("colors")
    random_celestial_color(rng)
    assert rng.draws == 3


def test_css():
    assert CelestialColor((0, 100, 50), (255, 0, 0)).css() == "rgb(255, 0, 0)"


def test_randint_inclusive_hits_both_ends():
    rng = SeededRandomSource("ints")
    seen = {rng.randint_inclusive(0, 3) for _ in range(500)}
    assert seen == {0, 1, 2, 3}


def test_randint_inclusive_floors():
    class Fixed(SeededRandomSource):
        def __init__(self, value):
            super().__init__("fixed")
            self.value = value

        def random(self):
            return self.value

    assert Fixed(0.0).randint_inclusive(5, 9) == 5
    assert Fixed(0.999999).randint_inclusive(5, 9) == 9
    # 0.59 * 5 = 2.95 -> 2, rounding would give 3
    assert Fixed(0.59).randint_inclusive(0, 4) == 2


def test_same_seed_same_stream():
    a = SeededRandomSource("same")
    b = SeededRandomSource("same")
    assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]
    assert SeededRandomSource("other").random() != SeededRandomSource("same").random()
