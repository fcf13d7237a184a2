# coding=utf-8
import random

import pygame

from rain_config import BACKGROUND_COLOR, random_color, vary

TOP = 'top'        # position measured from the top edge downward
BOTTOM = 'bottom'  # position measured from the bottom edge upward
ORIENTATIONS = (TOP, BOTTOM)


def fade_alpha(strength):
    """Convert a 0.0-1.0 fading strength into a pygame surface alpha."""
    return max(0, min(255, int(round(strength * 255))))


# --- Column ---
class Column:
    __slots__ = ('position', 'word', 'color', 'fall_speed', 'fading_strength', 'fading_speed')

    def __init__(self):
        self.position = 0.0
        self.word = ''
        self.color = None
        self.fall_speed = 0.0
        self.fading_strength = 0.0
        # Re-rolled with the rest on reset; kept as column state, nothing draws with it.
        self.fading_speed = 0.0

    def __repr__(self):
        return (f"Column(position={self.position:.2f}, word={self.word!r}, color={self.color}, "
                f"fall_speed={self.fall_speed:.3f}, fading_strength={self.fading_strength:.3f}, "
                f"fading_speed={self.fading_speed:.3f})")


# --- RainField ---
class RainField:
    """
    One stream of columns converging on the horizontal centerline.

    Columns are recycled in place: once a column passes the centerline it is
    reset with a fresh word, color and motion, and starts again somewhere
    inside the half-screen range instead of at the edge.
    """

    def __init__(self, config, orientation, viewport_size, rng=None):
        if orientation not in ORIENTATIONS:
            raise ValueError(f"orientation must be one of {ORIENTATIONS}, got {orientation!r}")
        self.config = config
        self.orientation = orientation
        self.rng = rng if rng is not None else random.Random()
        self.width = 0
        self.height = 0
        self.columns = []
        self._fade_surface = None
        self.initialize(viewport_size)

    @property
    def half_range(self):
        """Distance from the edge to the centerline, in glyph units."""
        return self.height / 2 / self.config.glyph_size

    def initialize(self, viewport_size):
        """Rebuild every column for a viewport of ``(width, height)`` pixels."""
        width, height = viewport_size
        self.width, self.height = width, height
        count = int(width // self.config.glyph_size)
        columns = []
        for _ in range(count):
            column = Column()
            self.reset_column(column)
            columns.append(column)
        self.columns = columns

    def reset_column(self, column):
        config = self.config
        rng = self.rng
        column.position = rng.random() * self.half_range
        column.word = rng.choice(config.words)
        column.color = random_color(rng)
        column.fall_speed = vary(config.base_fall_speed, config.fall_speed_variation, rng)
        column.fading_strength = vary(config.base_fading_strength, config.fading_strength_variation, rng)
        column.fading_speed = vary(config.base_fading_speed, config.fading_speed_variation, rng)

    def crossed_centerline(self, column):
        return column.position * self.config.glyph_size > self.height / 2

    def pixel_y(self, column):
        offset = column.position * self.config.glyph_size
        if self.orientation == TOP:
            return offset
        return self.height - offset

    def fading_strength(self):
        """Weakest fading strength in the field, used for the background re-fill."""
        return min(column.fading_strength for column in self.columns)

    def fade_surface_for(self, size):
        """Background-filled surface of ``size``, rebuilt only when the size changes."""
        if self._fade_surface is None or self._fade_surface.get_size() != tuple(size):
            self._fade_surface = pygame.Surface(size)
            self._fade_surface.fill(BACKGROUND_COLOR)
        return self._fade_surface

    def render(self, surface, font):
        if not self.columns:
            return

        fade_surface = self.fade_surface_for(surface.get_size())
        fade_surface.set_alpha(fade_alpha(self.fading_strength()))
        surface.blit(fade_surface, (0, 0))

        glyph_size = self.config.glyph_size
        for i, column in enumerate(self.columns):
            text_surface = font.render(column.word, True, column.color)
            surface.blit(text_surface, (i * glyph_size, int(self.pixel_y(column))))

    def advance(self):
        for column in self.columns:
            column.position += column.fall_speed
            if self.crossed_centerline(column):
                self.reset_column(column)

    def step(self, surface, font):
        """Draw the field at its current positions, then move every column."""
        self.render(surface, font)
        self.advance()
