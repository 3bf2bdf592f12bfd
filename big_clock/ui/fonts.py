"""
Fonts - Glyph rasterization on top of Pillow FreeType fonts.

Each character is rendered once into an 8-bit coverage sprite and cached;
``layout`` only translates cached sprites to the pen position, so a frame
never re-rasterizes text.
"""
import os
import platform
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..core.logging_service import LoggingService, get_logger


EMBEDDED_FONT = '<embedded>'

FONT_PATHS = {
    'Windows': [
        'C:\\Windows\\Fonts\\consola.ttf',
        'C:\\Windows\\Fonts\\cour.ttf',
        'C:\\Windows\\Fonts\\arial.ttf',
        'C:\\Windows\\Fonts\\calibri.ttf',
    ],
    'Darwin': [
        '/System/Library/Fonts/Monaco.ttf',
        '/System/Library/Fonts/Menlo.ttc',
        '/System/Library/Fonts/Courier.ttc',
        '/System/Library/Fonts/Helvetica.ttc',
    ],
    'Linux': [
        '/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf',
        '/usr/share/fonts/TTF/DejaVuSansMono.ttf',
        '/usr/share/fonts/droid/DroidSansMono.ttf',
        '/usr/share/fonts/liberation/LiberationMono-Regular.ttf',
        '/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf',
        '/usr/share/fonts/truetype/ubuntu/UbuntuMono-R.ttf',
    ],
}

CLOCK_CHARS = '0123456789:.'


def candidate_font_paths(system: Optional[str] = None) -> List[str]:
    """Platform-conventional font files, most preferred first."""
    system = system or platform.system()
    return list(FONT_PATHS.get(system, FONT_PATHS['Linux']))


@dataclass(frozen=True)
class VerticalMetrics:
    ascent: float   # above baseline, positive
    descent: float  # below baseline, zero or negative


@dataclass(frozen=True)
class _Sprite:
    offset_x: int
    offset_y: int
    coverage: np.ndarray
    advance: float


class Glyph:
    """A rasterized character placed in buffer space."""

    __slots__ = ('char', 'bounding_box', 'coverage_map')

    def __init__(self, char: str, bounding_box: Tuple[int, int, int, int], coverage_map: np.ndarray):
        self.char = char
        self.bounding_box = bounding_box
        self.coverage_map = coverage_map

    @property
    def width(self) -> int:
        return self.bounding_box[2] - self.bounding_box[0]

    @property
    def height(self) -> int:
        return self.bounding_box[3] - self.bounding_box[1]

    def coverage(self, x: int, y: int) -> float:
        """Ink coverage in [0, 1] at a local offset from the box minimum."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return float(self.coverage_map[y, x])
        return 0.0

    def __repr__(self) -> str:
        return f"Glyph({self.char!r}, bbox={self.bounding_box})"


class FontRasterizer:
    """
    Font scaled to a pixel size, producing positioned coverage glyphs.
    """

    def __init__(self, font: ImageFont.FreeTypeFont, font_size: float, source: str = EMBEDDED_FONT):
        self._font = font
        self.font_size = font_size
        self.source = source
        self._sprite_cache: Dict[str, _Sprite] = {}

    @staticmethod
    def _pixel_size(font_size: float) -> int:
        return max(1, int(round(font_size)))

    @classmethod
    def from_bytes(cls, data: bytes, font_size: float, source: str = EMBEDDED_FONT) -> 'FontRasterizer':
        """
        Parse font file contents.

        Raises:
            OSError: If the data is not a font FreeType can open
        """
        font = ImageFont.truetype(BytesIO(data), cls._pixel_size(font_size))
        return cls(font, font_size, source)

    @classmethod
    def embedded(cls, font_size: float) -> 'FontRasterizer':
        """The default font bundled with Pillow; always available."""
        return cls(ImageFont.load_default(size=cls._pixel_size(font_size)), font_size, EMBEDDED_FONT)

    @classmethod
    def load(cls, font_size: float, paths: Optional[Sequence[str]] = None,
             logger: Optional[LoggingService] = None) -> 'FontRasterizer':
        """
        Load the first usable font from ``paths`` (platform candidates by
        default), falling back to the embedded font.
        """
        logger = logger or get_logger()
        if paths is None:
            paths = candidate_font_paths()

        for path in paths:
            if not path or not os.path.exists(path):
                continue
            try:
                rasterizer = cls.from_bytes(Path(path).read_bytes(), font_size, source=path)
            except (OSError, ValueError) as e:
                logger.warning(f"Error loading font {path}: {e}")
                continue
            logger.info(f"Using font: {path}")
            return rasterizer

        logger.warning("No system font found, using embedded default font")
        return cls.embedded(font_size)

    def vertical_metrics(self) -> VerticalMetrics:
        ascent, descent = self._font.getmetrics()
        return VerticalMetrics(ascent=float(ascent), descent=-float(descent))

    def advance(self, char: str) -> float:
        return self._sprite(char).advance

    def is_monospaced(self, chars: str = CLOCK_CHARS) -> bool:
        """True if every character in ``chars`` has the same advance width."""
        advances = {round(self._font.getlength(c), 2) for c in chars}
        return len(advances) <= 1

    def _sprite(self, char: str) -> _Sprite:
        sprite = self._sprite_cache.get(char)
        if sprite is not None:
            return sprite

        x0, y0, x1, y1 = self._font.getbbox(char, anchor='ls')
        width, height = max(0, x1 - x0), max(0, y1 - y0)
        if width and height:
            image = Image.new('L', (width, height), 0)
            ImageDraw.Draw(image).text((-x0, -y0), char, font=self._font, fill=255, anchor='ls')
            coverage = np.asarray(image, dtype=np.float64) / 255.0
        else:
            coverage = np.zeros((0, 0), dtype=np.float64)

        sprite = _Sprite(offset_x=x0, offset_y=y0, coverage=coverage,
                         advance=float(self._font.getlength(char)))
        self._sprite_cache[char] = sprite
        return sprite

    def layout(self, text: str, origin: Tuple[float, float]) -> List[Glyph]:
        """
        Position ``text`` with its baseline starting at ``origin``.

        Args:
            text: Characters to place
            origin: (x, baseline y) in buffer pixels

        Returns:
            One Glyph per character, bounding boxes in buffer space
        """
        pen_x, baseline = origin
        base_y = int(round(baseline))
        glyphs = []
        for char in text:
            sprite = self._sprite(char)
            left = int(round(pen_x)) + sprite.offset_x
            top = base_y + sprite.offset_y
            height, width = sprite.coverage.shape
            glyphs.append(Glyph(char, (left, top, left + width, top + height), sprite.coverage))
            pen_x += sprite.advance
        return glyphs
