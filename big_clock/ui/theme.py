"""
Theme - Color palettes and key-edge driven palette cycling
"""
from dataclasses import dataclass
from typing import Sequence, Tuple

from .compositor import hex_to_packed


# Background palette, cycled with B
BACKGROUND_COLORS = (
    '#000000',  # Pure black
    '#1a1a1a',  # Panel black
    '#0a0f1d',  # Slate
    '#002b36',  # Deep teal
    '#1a140e',  # Warm brown
    '#ffffff',  # Paper white
)

# Foreground palette, cycled with F
FOREGROUND_COLORS = (
    '#ffffff',  # White
    '#00ff00',  # Terminal green
    '#00aaff',  # Bright blue
    '#00ffaa',  # Teal
    '#ffaa00',  # Orange
    '#ff0000',  # Red
    '#000000',  # Black (for light backgrounds)
)


@dataclass
class ColorPalette:
    """
    Background and foreground sequences with an index into each.
    Indices wrap modulo the sequence length.
    """
    backgrounds: Tuple[int, ...]
    foregrounds: Tuple[int, ...]
    bg_index: int = 0
    fg_index: int = 0

    def __post_init__(self):
        self.backgrounds = tuple(self.backgrounds)
        self.foregrounds = tuple(self.foregrounds)
        if not self.backgrounds or not self.foregrounds:
            raise ValueError("Palettes need at least one color each")
        self.bg_index %= len(self.backgrounds)
        self.fg_index %= len(self.foregrounds)

    @classmethod
    def from_hex(cls, backgrounds: Sequence[str] = BACKGROUND_COLORS,
                 foregrounds: Sequence[str] = FOREGROUND_COLORS) -> 'ColorPalette':
        return cls(tuple(hex_to_packed(c) for c in backgrounds),
                   tuple(hex_to_packed(c) for c in foregrounds))

    @property
    def background(self) -> int:
        return self.backgrounds[self.bg_index]

    @property
    def foreground(self) -> int:
        return self.foregrounds[self.fg_index]

    def next_background(self) -> int:
        self.bg_index = (self.bg_index + 1) % len(self.backgrounds)
        return self.background

    def next_foreground(self) -> int:
        self.fg_index = (self.fg_index + 1) % len(self.foregrounds)
        return self.foreground


class KeyEdge:
    """Rising-edge detector for a sampled key state."""

    def __init__(self):
        self.previous = False

    def update(self, pressed: bool) -> bool:
        """Record this tick's state; True only on a released -> pressed change."""
        pressed = bool(pressed)
        rising = pressed and not self.previous
        self.previous = pressed
        return rising


class ThemeCycler:
    """
    Advances the palette once per key press, never per held tick.
    """

    def __init__(self, palette: ColorPalette):
        self.palette = palette
        self._background_key = KeyEdge()
        self._foreground_key = KeyEdge()

    def update(self, background_pressed: bool, foreground_pressed: bool) -> Tuple[bool, bool]:
        """
        Sample both cycle keys for one tick.

        Returns:
            (background advanced, foreground advanced)
        """
        bg_changed = self._background_key.update(background_pressed)
        fg_changed = self._foreground_key.update(foreground_pressed)
        if bg_changed:
            self.palette.next_background()
        if fg_changed:
            self.palette.next_foreground()
        return bg_changed, fg_changed

    @property
    def background(self) -> int:
        return self.palette.background

    @property
    def foreground(self) -> int:
        return self.palette.foreground
