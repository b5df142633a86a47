import pytest

from universe_gen import SeededRandomSource


class ScriptedSource(SeededRandomSource):
    """Seeded source whose draws for one (low, high) range come from a script."""

    def __init__(self, seed, rng_range, script):
        super().__init__(seed)
        self.rng_range = rng_range
        self.script = list(script)

    def randint_inclusive(self, low, high):
        if (low, high) == self.rng_range and self.script:
            self.draws += 1
            return self.script.pop(0)
        return super().randint_inclusive(low, high)


@pytest.fixture
def rng():
    return SeededRandomSource("test universe")


@pytest.fixture
def scripted():
    return ScriptedSource
