"""Tests for the pygame surface on the dummy video driver."""

import pygame
import pytest

from big_clock.hardware.display_surface import (
    PresentationError,
    PygameSurface,
    WindowCreationError,
)
from big_clock.ui.compositor import PixelBuffer


@pytest.fixture
def surface(logger):
    surface = PygameSurface("test clock", 120, 80, logger=logger)
    yield surface
    surface.close()


def test_open_uses_initial_size(surface):
    surface.open()
    assert surface.is_open()
    assert surface.get_size() == (120, 80)
    assert pygame.display.get_caption()[0] == "test clock"


def test_present_copies_pixels(surface):
    surface.open()
    buffer = PixelBuffer(120, 80)
    buffer.fill(0xFF0000)
    surface.present(buffer)
    assert tuple(pygame.display.get_surface().get_at((0, 0)))[:3] == (255, 0, 0)
    assert tuple(pygame.display.get_surface().get_at((119, 79)))[:3] == (255, 0, 0)


def test_present_scales_mismatched_buffer(surface):
    surface.open()
    buffer = PixelBuffer(10, 10)
    buffer.fill(0x0000FF)
    surface.present(buffer)
    assert tuple(pygame.display.get_surface().get_at((100, 70)))[:3] == (0, 0, 255)


def test_quit_event_closes(surface):
    surface.open()
    pygame.event.post(pygame.event.Event(pygame.QUIT))
    surface.pump()
    assert not surface.is_open()


def test_keys_start_released(surface):
    surface.open()
    surface.pump()
    assert not surface.is_key_down('escape')
    assert not surface.is_key_down('b')
    assert not surface.is_key_down('f')


def test_window_creation_failure(surface, monkeypatch):
    def refuse(*args, **kwargs):
        raise pygame.error("no display available")

    monkeypatch.setattr(pygame.display, 'set_mode', refuse)
    with pytest.raises(WindowCreationError):
        surface.open()
    assert not surface.is_open()


def test_present_after_close_fails(surface):
    surface.open()
    surface.close()
    assert not surface.is_open()
    with pytest.raises(PresentationError):
        surface.present(PixelBuffer(120, 80))


def test_tick_without_window_is_noop(surface):
    assert surface.tick(144) == 0
