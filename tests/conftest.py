import random

import pytest

import exporters
import wordsearch_engine as eng


class ScriptedRandom:
    """
    Plays back fixed answers: `choices` are indexes for choice(), `ranges`
    are the values randrange() returns. Once a script runs out, the lowest
    option is used.
    """

    def __init__(self, choices=(), ranges=()):
        self.choices = list(choices)
        self.ranges = list(ranges)

    def choice(self, seq):
        i = self.choices.pop(0) if self.choices else 0
        return seq[i]

    def randrange(self, start, stop=None):
        if self.ranges:
            return self.ranges.pop(0)
        return 0 if stop is None else start


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture
def seeded():
    return random.Random(1234)


@pytest.fixture(autouse=True)
def quiet_engine_log():
    lines = []
    eng.set_logger(lines.append)
    exporters.set_logger(lines.append)
    yield lines
    eng.set_logger(None)
    exporters.set_logger(None)
