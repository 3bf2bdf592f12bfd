"""
Main Window - Frame loop that renders the clock into a pixel buffer and presents it
"""
import time
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..core.clock_service import ClockService
from ..core.config_service import RenderConfig
from ..core.logging_service import LoggingService, get_logger
from .compositor import PixelBuffer, blend_glyph
from .fonts import FontRasterizer
from .layout import TextLayout
from .theme import ColorPalette, ThemeCycler


TARGET_FPS = 144

EXIT_KEY = 'escape'
BACKGROUND_KEY = 'b'
FOREGROUND_KEY = 'f'

STATS_INTERVAL_FRAMES = 600


class LoopState(Enum):
    RUNNING = 'running'
    EXITING = 'exiting'


@dataclass
class RenderState:
    """Everything a frame needs, owned by the frame loop."""
    config: RenderConfig
    font: FontRasterizer
    theme: ThemeCycler
    buffer: PixelBuffer
    layout: TextLayout

    @classmethod
    def create(cls, config: RenderConfig, font: FontRasterizer, palette: ColorPalette,
               width: int, height: int) -> 'RenderState':
        ascent = font.vertical_metrics().ascent
        return cls(
            config=config,
            font=font,
            theme=ThemeCycler(palette),
            buffer=PixelBuffer(width, height),
            layout=TextLayout(width, height, config.font_size, ascent),
        )

    def resize(self, width: int, height: int) -> bool:
        """Reallocate the buffer if the size changed."""
        if not self.buffer.resize(width, height):
            return False
        self.layout.update_dimensions(width, height)
        return True


def render_clock_text(state: RenderState, text: str) -> int:
    """
    Clear the buffer to the background color and draw ``text`` centered.

    Returns:
        Number of glyph pixels written
    """
    background = state.theme.background
    foreground = state.theme.foreground
    state.buffer.fill(background)

    written = 0
    for glyph in state.font.layout(text, state.layout.origin(text)):
        written += blend_glyph(state.buffer, glyph, foreground, background)
    return written


class MainWindow:
    """
    Drives the render state against a host surface.

    The surface must provide ``open``, ``pump``, ``is_open``, ``get_size``,
    ``is_key_down``, ``present``, ``tick`` and ``close``
    (see ``hardware.display_surface.PygameSurface``).
    """

    def __init__(self, surface, state: RenderState, clock_service: ClockService,
                 logger: Optional[LoggingService] = None, fps: int = TARGET_FPS):
        self._surface = surface
        self._state = state
        self._clock = clock_service
        self._logger = logger or get_logger()
        self._fps = fps

        self._loop_state = LoopState.EXITING
        self._frame_count = 0
        self._frame_times: List[float] = []

    @property
    def state(self) -> RenderState:
        return self._state

    @property
    def loop_state(self) -> LoopState:
        return self._loop_state

    def initialize(self) -> None:
        """
        Open the surface.

        Raises:
            WindowCreationError: If the window cannot be created
        """
        self._surface.open()
        self._loop_state = LoopState.RUNNING

    def is_running(self) -> bool:
        return self._loop_state is LoopState.RUNNING

    def stop(self) -> None:
        self._loop_state = LoopState.EXITING

    def _sync_size(self) -> None:
        width, height = self._surface.get_size()
        if self._state.resize(width, height):
            self._logger.debug(f"Buffer reallocated: {width}x{height}")

    def tick(self) -> LoopState:
        """
        Run one frame.

        Raises:
            PresentationError: If the surface rejects the buffer
        """
        if self._loop_state is LoopState.EXITING:
            return self._loop_state

        self._surface.pump()
        if not self._surface.is_open() or self._surface.is_key_down(EXIT_KEY):
            self._logger.info("Exit requested")
            self._loop_state = LoopState.EXITING
            return self._loop_state

        t_start = time.perf_counter()
        self._sync_size()
        text = self._clock.clock_string()

        theme = self._state.theme
        bg_changed, fg_changed = theme.update(self._surface.is_key_down(BACKGROUND_KEY),
                                              self._surface.is_key_down(FOREGROUND_KEY))
        if bg_changed:
            self._logger.debug(f"Background color -> #{theme.background:06x}")
        if fg_changed:
            self._logger.debug(f"Foreground color -> #{theme.foreground:06x}")

        render_clock_text(self._state, text)
        self._surface.present(self._state.buffer)
        self._track_frame((time.perf_counter() - t_start) * 1000)
        return self._loop_state

    def _track_frame(self, elapsed_ms: float) -> None:
        self._frame_count += 1
        self._frame_times.append(elapsed_ms)
        if len(self._frame_times) > 60:
            self._frame_times.pop(0)

        if self._frame_count % STATS_INTERVAL_FRAMES == 0:
            avg = sum(self._frame_times) / len(self._frame_times)
            self._logger.debug(f"Render timing: avg={avg:.2f}ms, last={elapsed_ms:.2f}ms, frames={self._frame_count}")

    def start(self) -> None:
        """Blocking frame loop; returns once the loop is exiting."""
        self._logger.info(f"Starting clock loop at {self._fps} fps")
        while self.tick() is LoopState.RUNNING:
            self._surface.tick(self._fps)
        self._logger.info(f"Clock loop stopped after {self._frame_count} frames")
