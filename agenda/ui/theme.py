"""Color themes for the terminal UI.

Each palette gives the foreground/background used for the header, the
normal and alternate table rows, and the selected row. Curses only offers
the eight basic colors, so the palettes are approximations.
"""
import curses
from dataclasses import dataclass

# Color pair numbers
HEADER = 1
ROW = 2
ALT_ROW = 3
SELECTED = 4
ALERT = 5
DETAIL = 6


@dataclass(frozen=True)
class Palette:
    name: str
    accent: int
    background: int = curses.COLOR_BLACK
    text: int = curses.COLOR_WHITE


PALETTES = [
    Palette("blue", curses.COLOR_BLUE),
    Palette("emerald", curses.COLOR_GREEN),
    Palette("indigo", curses.COLOR_BLUE, text=curses.COLOR_CYAN),
    Palette("red", curses.COLOR_RED),
    Palette("amber", curses.COLOR_YELLOW),
    Palette("rose", curses.COLOR_MAGENTA, text=curses.COLOR_RED),
    Palette("lime", curses.COLOR_GREEN, text=curses.COLOR_YELLOW),
    Palette("fuchsia", curses.COLOR_MAGENTA),
    Palette("sky", curses.COLOR_CYAN),
]


def init_colors(palette: Palette):
    """Register the color pairs for ``palette``. Needs an initialised screen."""
    curses.start_color()
    curses.init_pair(HEADER, palette.background, palette.accent)
    curses.init_pair(ROW, palette.text, palette.background)
    curses.init_pair(ALT_ROW, palette.accent, palette.background)
    curses.init_pair(SELECTED, palette.background, palette.text)
    curses.init_pair(ALERT, curses.COLOR_WHITE, curses.COLOR_RED)
    curses.init_pair(DETAIL, curses.COLOR_BLACK, curses.COLOR_WHITE)
