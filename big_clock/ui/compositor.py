"""
Compositor - Packed RGB pixel buffer and coverage blending
"""
from typing import Tuple

import numpy as np


COVERAGE_EPSILON = 0.01


def pack_rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit channels into 0xRRGGBB."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def unpack_rgb(color: int) -> Tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def hex_to_packed(hex_color: str) -> int:
    """Convert '#RRGGBB' to a packed 0xRRGGBB integer."""
    hex_color = hex_color.lstrip('#')
    if len(hex_color) != 6:
        raise ValueError(f"Expected #RRGGBB, got {hex_color!r}")
    return int(hex_color, 16)


def blend_channel(fg: int, bg: int, coverage: float) -> int:
    value = round(fg * coverage + bg * (1.0 - coverage))
    return max(0, min(255, value))


def blend_colors(fg: int, bg: int, coverage: float) -> int:
    """Linear interpolation of two packed colors, per channel."""
    fr, fg_, fb = unpack_rgb(fg)
    br, bg_, bb = unpack_rgb(bg)
    return pack_rgb(blend_channel(fr, br, coverage),
                    blend_channel(fg_, bg_, coverage),
                    blend_channel(fb, bb, coverage))


class PixelBuffer:
    """
    Row-major buffer of packed 0xRRGGBB pixels.

    ``len(pixels) == width * height`` holds after construction and after
    every resize.
    """

    def __init__(self, width: int, height: int):
        if width < 0 or height < 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros(self.width * self.height, dtype=np.uint32)

    def __len__(self) -> int:
        return len(self.pixels)

    @property
    def size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def resize(self, width: int, height: int) -> bool:
        """
        Reallocate to a new size. Contents are zeroed.

        Returns:
            True if the buffer was reallocated
        """
        if (width, height) == (self.width, self.height):
            return False
        if width < 0 or height < 0:
            raise ValueError(f"Invalid buffer size {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.zeros(self.width * self.height, dtype=np.uint32)
        return True

    def fill(self, color: int) -> None:
        self.pixels.fill(color)

    def get(self, x: int, y: int) -> int:
        return int(self.pixels[y * self.width + x])

    def rows(self) -> np.ndarray:
        """2-D view (height, width) sharing memory with ``pixels``."""
        return self.pixels.reshape(self.height, self.width)

    def to_rgb_bytes(self) -> bytes:
        """RGB888 bytes for handing to the display surface."""
        rows = self.rows()
        rgb = np.empty((self.height, self.width, 3), dtype=np.uint8)
        rgb[:, :, 0] = (rows >> 16) & 0xFF
        rgb[:, :, 1] = (rows >> 8) & 0xFF
        rgb[:, :, 2] = rows & 0xFF
        return rgb.tobytes()


def blend(buffer: PixelBuffer, x: int, y: int, coverage: float, fg_color: int, bg_color: int) -> bool:
    """
    Blend a single glyph sample into the buffer.

    Samples below COVERAGE_EPSILON and samples outside the buffer are
    dropped.

    Returns:
        True if the pixel was written
    """
    if coverage < COVERAGE_EPSILON:
        return False
    if x < 0 or y < 0 or x >= buffer.width or y >= buffer.height:
        return False
    buffer.pixels[y * buffer.width + x] = blend_colors(fg_color, bg_color, min(coverage, 1.0))
    return True


def blend_glyph(buffer: PixelBuffer, glyph, fg_color: int, bg_color: int) -> int:
    """
    Blend a whole glyph's coverage map, clipped to the buffer edges.

    Same rule as ``blend`` applied with numpy over the glyph box.

    Returns:
        Number of pixels written
    """
    min_x, min_y, max_x, max_y = glyph.bounding_box
    x0, y0 = max(0, min_x), max(0, min_y)
    x1, y1 = min(buffer.width, max_x), min(buffer.height, max_y)
    if x0 >= x1 or y0 >= y1:
        return 0

    coverage = glyph.coverage_map[y0 - min_y:y1 - min_y, x0 - min_x:x1 - min_x]
    mask = coverage >= COVERAGE_EPSILON
    if not mask.any():
        return 0
    coverage = np.minimum(coverage, 1.0)
    inverse = 1.0 - coverage

    channels = []
    for fg, bg in zip(unpack_rgb(fg_color), unpack_rgb(bg_color)):
        value = np.clip(np.rint(fg * coverage + bg * inverse), 0, 255)
        channels.append(value.astype(np.uint32))
    packed = (channels[0] << 16) | (channels[1] << 8) | channels[2]

    region = buffer.rows()[y0:y1, x0:x1]
    region[mask] = packed[mask]
    return int(mask.sum())
