"""Level theme palette - single source of truth for prefix colors.

Each theme is a 24-bit background/foreground pair applied to the
bracketed level name of a rendered prefix.
"""

from __future__ import annotations

import random
from dataclasses import dataclass

Color = tuple[int, int, int]

# =============================================================================
# ANSI Escape Codes
# =============================================================================

ANSI_RESET = "\033[0m"

# =============================================================================
# Level Themes
# =============================================================================


@dataclass(frozen=True)
class Theme:
    """Background and foreground color for a level name."""

    bg: Color
    fg: Color


DEFAULT_THEME = Theme(bg=(255, 255, 255), fg=(0, 0, 0))

THEMES: dict[str, Theme] = {
    "NONE": Theme(bg=(255, 255, 255), fg=(0, 0, 0)),
    "TRACE": Theme(bg=(255, 255, 200), fg=(0, 0, 0)),
    "DEBUG": Theme(bg=(200, 255, 200), fg=(0, 0, 0)),
    "LOG": Theme(bg=(230, 230, 230), fg=(0, 0, 0)),
    "INFO": Theme(bg=(200, 255, 255), fg=(0, 0, 0)),
    "WARN": Theme(bg=(255, 180, 0), fg=(0, 0, 0)),
    "ERROR": Theme(bg=(255, 130, 130), fg=(0, 0, 0)),
    "FATAL": Theme(bg=(255, 0, 0), fg=(255, 255, 255)),
}


def _channel(value: int | None) -> int:
    return random.randrange(200) if value is None else value


def colorize(
    text: str,
    bg: tuple[int | None, int | None, int | None] = (None, None, None),
    fg: tuple[int | None, int | None, int | None] = (None, None, None),
) -> str:
    """Wrap text in a 24-bit background/foreground escape sequence.

    Missing channels are picked at random in [0, 200).
    """
    r, g, b = (_channel(c) for c in bg)
    fg_r, fg_g, fg_b = (_channel(c) for c in fg)
    return f"\033[48;2;{r};{g};{b};38;2;{fg_r};{fg_g};{fg_b}m{text}{ANSI_RESET}"


def theme(text: str, theme_name: str) -> str:
    """Colorize text with a named theme (white on black default)."""
    selected = THEMES.get(theme_name.upper(), DEFAULT_THEME)
    return colorize(text, selected.bg, selected.fg)


def is_themed(level: str) -> bool:
    """Check if a level name has a registered theme."""
    return level.upper() in THEMES


def register_theme(level: str, bg: Color, fg: Color = (0, 0, 0)) -> Theme:
    """Register or replace the theme used for a level name."""
    selected = Theme(bg=bg, fg=fg)
    THEMES[level.upper()] = selected
    return selected
