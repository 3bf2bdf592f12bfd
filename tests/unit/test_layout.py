"""Tests for clock placement and window sizing."""

from big_clock.core.config_service import RenderConfig
from big_clock.ui.layout import (
    CHAR_WIDTH_FACTOR,
    DEFAULT_WINDOW_SIZE,
    MAX_WINDOW_HEIGHT,
    MAX_WINDOW_WIDTH,
    MIN_WINDOW_HEIGHT,
    MIN_WINDOW_WIDTH,
    TextLayout,
    calculate_window_size,
    fixed_text_width,
    initial_window_size,
)


class TestTextLayout:

    def test_equal_length_strings_share_start(self):
        layout = TextLayout(800, 300, 80, ascent=60)
        assert layout.start_x("01:02:03.004") == layout.start_x("12:59:59.999")

    def test_start_x_centers_fixed_width(self):
        layout = TextLayout(1000, 300, 80, ascent=60)
        expected = (1000 - 80 * CHAR_WIDTH_FACTOR * 12) / 2
        assert abs(layout.start_x("00:00:00.000") - expected) < 1e-9

    def test_start_x_never_negative(self):
        layout = TextLayout(100, 300, 80, ascent=60)
        assert layout.start_x("00:00:00.000") == 0.0

    def test_baseline_centering(self):
        layout = TextLayout(400, 300, 80, ascent=60)
        assert layout.baseline_y() == 180.0
        assert layout.origin("12:00:00.000")[1] == 180.0

    def test_update_dimensions(self):
        layout = TextLayout(400, 300, 40, ascent=30)
        layout.update_dimensions(1200, 600)
        assert layout.dimensions == (1200, 600)
        assert layout.baseline_y() == 315.0

    def test_fixed_width(self):
        assert abs(fixed_text_width(100) - 780.0) < 1e-9
        assert abs(fixed_text_width(100, 8) - 520.0) < 1e-9


class TestWindowSize:

    def test_default_settings_within_clamps(self):
        width, height = calculate_window_size(80, 20)
        assert MIN_WINDOW_WIDTH <= width <= MAX_WINDOW_WIDTH
        assert MIN_WINDOW_HEIGHT <= height <= MAX_WINDOW_HEIGHT
        assert abs(width - 664) <= 1
        assert height == MIN_WINDOW_HEIGHT

    def test_large_font_clamped_to_max(self):
        assert calculate_window_size(1000, 50) ==(MAX_WINDOW_WIDTH, MAX_WINDOW_HEIGHT)

    def test_tiny_font_clamped_to_min(self):
        assert calculate_window_size(1, 0) == (MIN_WINDOW_WIDTH, MIN_WINDOW_HEIGHT)

    def test_initial_size_auto_resize(self):
        cfg = RenderConfig(font_size=80, padding=20, auto_resize=True)
        assert initial_window_size(cfg) == calculate_window_size(80, 20)

    def test_initial_size_fixed(self):
        cfg = RenderConfig(font_size=80, padding=20, auto_resize=False)
        assert initial_window_size(cfg) == DEFAULT_WINDOW_SIZE
