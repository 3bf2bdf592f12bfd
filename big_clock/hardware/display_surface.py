"""
Display Surface - Resizable pygame window that presents packed pixel buffers
"""
from typing import Optional, Tuple

import pygame

from ..core.logging_service import LoggingService, get_logger


KEY_CODES = {
    'escape': pygame.K_ESCAPE,
    'b': pygame.K_b,
    'f': pygame.K_f,
}


class SurfaceError(RuntimeError):
    """Host window failure. Never recovered."""


class WindowCreationError(SurfaceError):
    pass


class PresentationError(SurfaceError):
    pass


class PygameSurface:
    """
    Host surface for the frame loop.

    The buffer is blitted 1:1; if a resize lands between the size query and
    the present, the frame is stretched to the window instead.
    """

    def __init__(self, title: str, width: int, height: int, resizable: bool = True,
                 logger: Optional[LoggingService] = None):
        self._title = title
        self._initial_size = (width, height)
        self._resizable = resizable
        self._logger = logger or get_logger()
        self._clock: Optional[pygame.time.Clock] = None
        self._open = False

    def open(self) -> None:
        """
        Create the window.

        Raises:
            WindowCreationError: If SDL cannot create the window
        """
        flags = pygame.RESIZABLE if self._resizable else 0
        try:
            pygame.display.init()
            pygame.display.set_mode(self._initial_size, flags)
        except pygame.error as e:
            raise WindowCreationError(f"Could not create window: {e}") from e

        pygame.display.set_caption(self._title)
        self._clock = pygame.time.Clock()
        self._open = True
        width, height = self.get_size()
        self._logger.info(f"Window opened: {width}x{height} (driver={pygame.display.get_driver()})")

    def pump(self) -> None:
        """Process pending window events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._open = False
            elif event.type == pygame.VIDEORESIZE:
                self._logger.debug(f"Window resized to {event.w}x{event.h}")

    def is_open(self) -> bool:
        return self._open

    def get_size(self) -> Tuple[int, int]:
        screen = pygame.display.get_surface()
        if screen is None:
            return self._initial_size
        return screen.get_size()

    def is_key_down(self, name: str) -> bool:
        return bool(pygame.key.get_pressed()[KEY_CODES[name]])

    def present(self, buffer) -> None:
        """
        Show a PixelBuffer.

        Raises:
            PresentationError: If the window rejects the frame
        """
        screen = pygame.display.get_surface()
        if screen is None:
            raise PresentationError("Window is not open")
        try:
            if buffer.width and buffer.height:
                image = pygame.image.frombuffer(buffer.to_rgb_bytes(), buffer.size, 'RGB')
                if image.get_size() != screen.get_size():
                    image = pygame.transform.scale(image, screen.get_size())
                screen.blit(image, (0, 0))
            pygame.display.flip()
        except pygame.error as e:
            raise PresentationError(f"Failed to present frame: {e}") from e

    def tick(self, fps: int) -> int:
        """Sleep as needed to hold ``fps``; returns milliseconds since last tick."""
        return self._clock.tick(fps) if self._clock else 0

    def close(self) -> None:
        if self._open or pygame.display.get_init():
            pygame.display.quit()
        self._open = False
