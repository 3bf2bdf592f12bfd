"""
Layout - Jitter-free placement of the clock string and window sizing
"""
from typing import Tuple

from ..core.clock_service import CLOCK_TEXT_LENGTH
from ..core.config_service import RenderConfig


# Assumed advance of one monospaced character, as a fraction of font size.
# Not measured from the font.
CHAR_WIDTH_FACTOR = 0.65
LINE_HEIGHT_FACTOR = 1.2

MIN_WINDOW_WIDTH = 250
MAX_WINDOW_WIDTH = 720
MIN_WINDOW_HEIGHT = 350
MAX_WINDOW_HEIGHT = 1080

DEFAULT_WINDOW_SIZE = (800, 200)


def fixed_text_width(font_size: float, char_count: int = CLOCK_TEXT_LENGTH) -> float:
    """
    Nominal width of a run of ``char_count`` characters.

    Args:
        font_size: Font scale in pixels
        char_count: Number of characters

    Returns:
        Width in pixels, independent of the actual glyphs
    """
    return font_size * CHAR_WIDTH_FACTOR * char_count


def calculate_window_size(font_size: float, padding: float) -> Tuple[int, int]:
    """
    Window size that fits the clock string plus padding, clamped to sane bounds.

    Args:
        font_size: Font scale in pixels
        padding: Padding on each side in pixels

    Returns:
        Tuple of (width, height)
    """
    width = int(fixed_text_width(font_size) + padding * 2)
    height = int(font_size * LINE_HEIGHT_FACTOR + padding * 2)

    width = max(MIN_WINDOW_WIDTH, min(MAX_WINDOW_WIDTH, width))
    height = max(MIN_WINDOW_HEIGHT, min(MAX_WINDOW_HEIGHT, height))
    return (width, height)


def initial_window_size(config: RenderConfig) -> Tuple[int, int]:
    if config.auto_resize:
        return calculate_window_size(config.font_size, config.padding)
    return DEFAULT_WINDOW_SIZE


class TextLayout:
    """
    Positions the clock string inside a buffer of a given size.

    Horizontal placement uses the fixed nominal width rather than measured
    glyph extents, so the start position only changes with buffer width or
    text length. Vertical placement is baseline relative: the baseline sits
    half an ascent below the buffer's middle row.

    Proportional fonts drift slightly off center with this policy.
    """

    def __init__(self, width: int, height: int, font_size: float, ascent: float):
        """
        Args:
            width: Buffer width in pixels
            height: Buffer height in pixels
            font_size: Font scale in pixels
            ascent: Font ascent at that scale
        """
        self._width = width
        self._height = height
        self._font_size = font_size
        self._ascent = ascent

    def update_dimensions(self, width: int, height: int) -> None:
        self._width = width
        self._height = height

    def text_width(self, text: str) -> float:
        return fixed_text_width(self._font_size, len(text))

    def start_x(self, text: str) -> float:
        return max(0.0, (self._width - self.text_width(text)) / 2.0)

    def baseline_y(self) -> float:
        return self._height / 2.0 + self._ascent / 2.0

    def origin(self, text: str) -> Tuple[float, float]:
        """
        Pen origin for ``text``.

        Returns:
            Tuple of (x, baseline y)
        """
        return (self.start_x(text), self.baseline_y())

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def dimensions(self) -> Tuple[int, int]:
        return (self._width, self._height)
