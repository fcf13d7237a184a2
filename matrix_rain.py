# coding=utf-8
import argparse
import random
import sys

import pygame

from rain_config import (BASE_FADING_SPEED, BASE_FADING_STRENGTH, BASE_FALL_SPEED,
                         BACKGROUND_COLOR, BOTTOM_WORDS, GLYPH_SIZE, TOP_WORDS, VARIATION,
                         ConfigurationError, RainConfig)
from rain_field import BOTTOM, TOP, RainField

# --- Configuration ---
FRAME_INTERVAL_MS = 33
FRAME_RATE = 1000 // FRAME_INTERVAL_MS   # ~30 ticks per second
WINDOW_SIZE = (1024, 768)                # Windowed mode, also the fullscreen fallback
FONT_NAMES = ['consolas', 'couriernew', 'monospace'] # Preferred fonts


class SurfaceError(RuntimeError):
    pass


# --- Fonts ---
def load_font(size):
    """Return a monospace font sized to ``size`` pixels, trying FONT_NAMES first."""
    size = int(round(size))
    for name in FONT_NAMES:
        try:
            font = pygame.font.SysFont(name, size, bold=True)
        except (pygame.error, OSError):
            continue
        if font and font.render('A', True, (255, 255, 255)):
            return font
    try:
        font = pygame.font.Font(None, size + 2)
        if not font.render('A', True, (255, 255, 255)):
            raise SurfaceError(f"default font failed to render at size {size}")
    except (pygame.error, OSError) as e:
        raise SurfaceError(f"no usable font found for size {size}: {e}") from e
    return font


# --- Display ---
def open_window(size):
    try:
        return pygame.display.set_mode(size, pygame.RESIZABLE)
    except pygame.error as e:
        raise SurfaceError(f"could not open a {size[0]}x{size[1]} window: {e}") from e


def open_display(size=WINDOW_SIZE, fullscreen=False):
    if not fullscreen:
        return open_window(size)
    try:
        screen_info = pygame.display.Info()
        full_size = (screen_info.current_w, screen_info.current_h)
        screen = pygame.display.set_mode(full_size, pygame.FULLSCREEN | pygame.DOUBLEBUF)
    except pygame.error as e:
        print(f"Error setting up fullscreen display: {e}. "
              f"Falling back to windowed mode ({WINDOW_SIZE[0]}x{WINDOW_SIZE[1]}).")
        return open_window(WINDOW_SIZE)
    pygame.mouse.set_visible(False)
    return screen


def resize_opener(screen):
    """Surface opener for resize events that keeps the display mode ``screen`` runs in.

    A fullscreen display is only re-measured; a window is reopened at the new size.
    """
    if screen.get_flags() & pygame.FULLSCREEN:
        return None
    return open_window


# --- Compositor ---
class Compositor:
    """
    Owns the drawing surface and the two converging fields.

    ``open_surface`` is called with the new size on every resize and must
    return the surface to draw on from then on. Without it the current
    surface is kept and only re-measured.
    """

    def __init__(self, surface, top_config, bottom_config, rng=None, open_surface=None):
        if surface is None:
            raise SurfaceError("no drawing surface available")
        self.surface = surface
        self.open_surface = open_surface
        self.rng = rng if rng is not None else random.Random()

        size = surface.get_size()
        self.top = RainField(top_config, TOP, size, self.rng)
        self.bottom = RainField(bottom_config, BOTTOM, size, self.rng)
        self.fonts = {
            TOP: load_font(top_config.glyph_size),
            BOTTOM: load_font(bottom_config.glyph_size),
        }
        self.surface.fill(BACKGROUND_COLOR)

    @property
    def fields(self):
        return (self.top, self.bottom)

    def tick(self):
        for field in self.fields:
            field.step(self.surface, self.fonts[field.orientation])

    def on_resize(self, size):
        if self.open_surface is not None:
            surface = self.open_surface(size)
            if surface is None:
                raise SurfaceError(f"no drawing surface for size {size}")
            self.surface = surface
        size = self.surface.get_size()
        for field in self.fields:
            field.initialize(size)
        self.surface.fill(BACKGROUND_COLOR)


# --- Command line ---
def word_list(value):
    words = [word.strip() for word in value.split(',') if word.strip()]
    if not words:
        raise argparse.ArgumentTypeError("expected a comma separated list of words")
    return words


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Two streams of text rain converging on the middle of the screen")
    parser.add_argument("--width", type=int, default=WINDOW_SIZE[0], help="Window width in pixels")
    parser.add_argument("--height", type=int, default=WINDOW_SIZE[1], help="Window height in pixels")
    parser.add_argument("--fullscreen", action="store_true", help="Use the whole screen")
    parser.add_argument("--glyph-size", type=int, default=GLYPH_SIZE, help="Glyph cell size in pixels")
    parser.add_argument("--fps", type=int, default=FRAME_RATE, help="Ticks per second")
    parser.add_argument("--fall-speed", type=float, default=BASE_FALL_SPEED,
                        help="Base fall speed in glyphs per tick")
    parser.add_argument("--top-words", type=word_list, default=list(TOP_WORDS),
                        help="Comma separated word pool for the top stream")
    parser.add_argument("--bottom-words", type=word_list, default=list(BOTTOM_WORDS),
                        help="Comma separated word pool for the bottom stream")
    return parser.parse_args(argv)


def build_configs(args):
    shared = dict(glyph_size=args.glyph_size,
                  base_fall_speed=args.fall_speed,
                  base_fading_strength=BASE_FADING_STRENGTH,
                  base_fading_speed=BASE_FADING_SPEED,
                  variation=VARIATION)
    return RainConfig(args.top_words, **shared), RainConfig(args.bottom_words, **shared)


# --- Main Program ---
def main(argv=None):
    args = parse_args(argv)

    try:
        top_config, bottom_config = build_configs(args)
    except ConfigurationError as e:
        print(f"Fatal: invalid configuration: {e}")
        sys.exit(2)

    pygame.init()
    if not pygame.font.get_init():
        print("Error: Pygame font system failed to initialize.")
        pygame.quit()
        sys.exit(1)

    try:
        screen = open_display((args.width, args.height), args.fullscreen)
        pygame.display.set_caption("Converging Rain")
        compositor = Compositor(screen, top_config, bottom_config,
                                open_surface=resize_opener(screen))
    except SurfaceError as e:
        print(f"Fatal: {e}")
        pygame.quit()
        sys.exit(1)

    width, height = screen.get_size()
    print("-" * 30)
    print(f"Screen Dimensions: {width}x{height}")
    print(f"Glyph Size: {top_config.glyph_size}")
    print(f"Target FPS: {args.fps}")
    print(f"Columns: {len(compositor.top.columns)} top, {len(compositor.bottom.columns)} bottom")
    print(f"Base Fall Speed: {top_config.base_fall_speed}, Variation: {top_config.variation}")
    print("-" * 30)

    # --- Game Loop ---
    clock = pygame.time.Clock()
    running = True
    while running:
        clock.tick(args.fps)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                compositor.on_resize(event.size)
                print(f"Resized to {event.size[0]}x{event.size[1]}, "
                      f"{len(compositor.top.columns)} columns per stream")

        compositor.tick()
        pygame.display.flip()

    # --- Cleanup ---
    pygame.quit()


# --- Entry Point ---
if __name__ == '__main__':
    main()
