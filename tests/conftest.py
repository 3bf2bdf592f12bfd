"""Shared test fixtures."""

import os

os.environ.setdefault('SDL_VIDEODRIVER', 'dummy')  # Headless pygame

from datetime import datetime

import pytest

from big_clock.core.clock_service import ClockService
from big_clock.core.config_service import RenderConfig
from big_clock.core.logging_service import get_logger
from big_clock.hardware.display_surface import PresentationError
from big_clock.ui.fonts import FontRasterizer
from big_clock.ui.main_window import MainWindow, RenderState
from big_clock.ui.theme import ColorPalette


class FakeSurface:
    """In-memory stand-in for PygameSurface."""

    def __init__(self, size=(320, 200)):
        self.size = size
        self.pressed = set()
        self.opened = False
        self.user_closed = False
        self.fail_present = False
        self.presented = []
        self.ticks = 0
        self.script = []  # callables run on each pump, one per tick

    def open(self):
        self.opened = True

    def pump(self):
        if self.script:
            self.script.pop(0)(self)

    def is_open(self):
        return self.opened and not self.user_closed

    def get_size(self):
        return self.size

    def is_key_down(self, name):
        return name in self.pressed

    def present(self, buffer):
        if self.fail_present:
            raise PresentationError("surface rejected the buffer")
        self.presented.append((buffer.width, buffer.height, len(buffer.pixels)))

    def tick(self, fps):
        self.ticks += 1

    def close(self):
        self.opened = False


@pytest.fixture
def logger():
    return get_logger()


@pytest.fixture
def font():
    """Embedded font; no system font needed."""
    return FontRasterizer.embedded(40)


@pytest.fixture
def fixed_clock():
    return ClockService(now=lambda: datetime(2024, 1, 2, 3, 4, 5, 6000))


@pytest.fixture
def fake_surface():
    return FakeSurface()


@pytest.fixture
def render_state(font):
    config = RenderConfig(font_size=40)
    palette = ColorPalette(backgrounds=(0x000000, 0x202020), foregrounds=(0xFFFFFF, 0x00FF00))
    return RenderState.create(config, font, palette, 320, 200)


@pytest.fixture
def main_window(fake_surface, render_state, fixed_clock, logger):
    window = MainWindow(fake_surface, render_state, fixed_clock, logger=logger, fps=60)
    window.initialize()
    return window
