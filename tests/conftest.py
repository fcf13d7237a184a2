import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame
import pytest


class ScriptedRandom:
    """Random source that replays fixed fractions instead of drawing them.

    ``random()`` returns the next fraction, ``uniform`` maps it onto [a, b],
    ``choice`` and ``randrange`` pick by the same fraction. Once the script
    runs out the last value repeats.
    """

    def __init__(self, *fractions):
        self.fractions = list(fractions) or [0.0]
        self.calls = 0

    def random(self):
        index = min(self.calls, len(self.fractions) - 1)
        self.calls += 1
        return self.fractions[index]

    def uniform(self, a, b):
        return a + (b - a) * self.random()

    def choice(self, seq):
        return seq[min(int(self.random() * len(seq)), len(seq) - 1)]

    def randrange(self, start, stop):
        return start + min(int(self.random() * (stop - start)), stop - start - 1)


class RecordingFont:
    """Stand-in for pygame.font.Font that remembers what it was asked to draw."""

    def __init__(self):
        self.rendered = []

    def render(self, text, antialias, color):
        self.rendered.append((text, color))
        return pygame.Surface((8, 8))


class RecordingSurface:
    def __init__(self, size):
        self.size = size
        self.blits = []
        self.fills = []

    def get_size(self):
        return self.size

    def fill(self, color):
        self.fills.append(color)

    def blit(self, source, dest):
        self.blits.append((source, dest))


@pytest.fixture(scope="session", autouse=True)
def pygame_session():
    pygame.init()
    yield
    pygame.quit()
