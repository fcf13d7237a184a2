# coding=utf-8
import string
from collections import namedtuple

# --- Defaults ---
GLYPH_SIZE = 16             # Pixel edge of one monospace cell
BACKGROUND_COLOR = (0, 0, 0)

# Motion is in glyph units per tick, fading strength is the alpha (0.0-1.0)
# of the background re-fill drawn before each field.
BASE_FALL_SPEED = 0.5
BASE_FADING_STRENGTH = 0.08
BASE_FADING_SPEED = 0.02

# (fall speed, fading strength, fading speed)
VARIATION = (0.5, 0.25, 0.25)

TOP_WORDS = tuple(string.ascii_uppercase + string.digits)
BOTTOM_WORDS = ('wake', 'up', 'neo', 'follow', 'the', 'white', 'rabbit',
                'knock', 'matrix', '0', '1')


class ConfigurationError(ValueError):
    pass


_RainConfigBase = namedtuple(
    '_RainConfigBase',
    'words glyph_size base_fall_speed base_fading_strength base_fading_speed variation')


class RainConfig(_RainConfigBase):
    """Static parameters for one stream of columns.

    ``variation`` holds three fractions, one per derived parameter, in the
    order (fall speed, fading strength, fading speed). Fractions above 1 are
    allowed; ``vary`` clamps what they produce at zero.
    """
    __slots__ = ()

    def __new__(cls, words=TOP_WORDS, glyph_size=GLYPH_SIZE,
                base_fall_speed=BASE_FALL_SPEED,
                base_fading_strength=BASE_FADING_STRENGTH,
                base_fading_speed=BASE_FADING_SPEED,
                variation=VARIATION):
        words = tuple(words)
        if not words:
            raise ConfigurationError("word pool is empty")
        if glyph_size <= 0:
            raise ConfigurationError(f"glyph size must be positive, got {glyph_size}")
        for name, value in (('base_fall_speed', base_fall_speed),
                            ('base_fading_strength', base_fading_strength),
                            ('base_fading_speed', base_fading_speed)):
            if value < 0:
                raise ConfigurationError(f"{name} must not be negative, got {value}")
        try:
            variation = tuple(float(v) for v in variation)
        except (TypeError, ValueError):
            raise ConfigurationError(f"variation must be three numbers, got {variation!r}")
        if len(variation) != 3:
            raise ConfigurationError(f"variation must be three numbers, got {variation!r}")
        return super().__new__(cls, words, glyph_size, base_fall_speed,
                               base_fading_strength, base_fading_speed, variation)

    @classmethod
    def _make(cls, iterable):
        # _replace goes through here too, so copies are validated like new configs.
        return cls(*iterable)

    @property
    def fall_speed_variation(self):
        return self.variation[0]

    @property
    def fading_strength_variation(self):
        return self.variation[1]

    @property
    def fading_speed_variation(self):
        return self.variation[2]


def vary(base, variation, rng):
    """Return ``base`` moved by a random fraction drawn from [-variation, +variation]."""
    u = rng.uniform(-variation, variation)
    return max(0.0, base * (1 + u))


def random_color(rng):
    # Draws from 1..0xFFFFFF so pure black never comes up.
    value = rng.randrange(1, 1 << 24)
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
