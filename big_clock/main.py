"""
Main entry point for Big Clock
"""
import os
import signal
import sys
from typing import List, Optional, TextIO

from big_clock.build_info import PROGRAM_NAME, format_version, get_version
from big_clock.core.clock_service import ClockService
from big_clock.core.config_service import ConfigService, RenderConfig
from big_clock.core.logging_service import get_logger
from big_clock.hardware.display_surface import PygameSurface, SurfaceError
from big_clock.ui.fonts import FontRasterizer, candidate_font_paths
from big_clock.ui.layout import initial_window_size
from big_clock.ui.main_window import MainWindow, RenderState
from big_clock.ui.theme import ColorPalette


WINDOW_TITLE = 'Clock - ESC to exit'

USAGE = f"""\
Usage: {PROGRAM_NAME} [options]

Options:
    --help, -h       show this help
    --version, -v    show version

Controls:
    ESC              exit program
    B                cycle background colors
    F                cycle font colors

Configuration file: ~/.config/big_clock/config.yaml
Example:
    settings:
      font_size: 80
      padding: 20.0
      auto_resize: true

Environment overrides: CLOCK_FONT_SIZE, CLOCK_PADDING, CLOCK_AUTO_RESIZE,
CLOCK_FONT, LOG_LEVEL"""


def show_help(out: Optional[TextIO] = None) -> None:
    print(USAGE, file=out or sys.stdout)


def show_version(out: Optional[TextIO] = None) -> None:
    print(format_version(), file=out or sys.stdout)


def handle_args(argv: List[str], out: Optional[TextIO] = None,
                err: Optional[TextIO] = None) -> Optional[int]:
    """
    Handle command line options.

    Args:
        argv: Arguments without the program name

    Returns:
        Exit code if an option was handled, None to launch the clock
    """
    if not argv:
        return None

    option = argv[0]
    if option in ('--help', '-h'):
        show_help(out)
        return 0
    if option in ('--version', '-v'):
        show_version(out)
        return 0

    err = err or sys.stderr
    print(f"{PROGRAM_NAME}: unknown option: {option}", file=err)
    print(f"Try '{PROGRAM_NAME} --help' for more information.", file=err)
    return 1


class Application:
    """
    Wires config, font, palette and window together and runs the loop.
    """

    def __init__(self, config_service: Optional[ConfigService] = None):
        self._logger = get_logger(level=os.environ.get('LOG_LEVEL', 'INFO'))
        self._config: RenderConfig = (config_service or ConfigService(logger=self._logger)).load()
        self._surface: Optional[PygameSurface] = None
        self._main_window: Optional[MainWindow] = None

        self._logger.log_startup(get_version(), {
            'font_size': self._config.font_size,
            'padding': self._config.padding,
            'auto_resize': self._config.auto_resize,
            'font_path': self._config.font_path,
        })

    def _load_font(self) -> FontRasterizer:
        paths = candidate_font_paths()
        if self._config.font_path:
            paths.insert(0, os.path.expanduser(self._config.font_path))

        font = FontRasterizer.load(self._config.font_size, paths, logger=self._logger)
        if not font.is_monospaced():
            self._logger.warning(f"Font {font.source} is not monospaced; "
                                 "the clock may drift slightly off center")
        return font

    def _initialize_ui(self) -> None:
        width, height = initial_window_size(self._config)
        self._logger.info(f"Initial window size: {width}x{height}")

        state = RenderState.create(self._config, self._load_font(), ColorPalette.from_hex(), width, height)
        self._surface = PygameSurface(WINDOW_TITLE, width, height, logger=self._logger)
        self._main_window = MainWindow(self._surface, state, ClockService(), logger=self._logger)
        self._main_window.initialize()

    def _setup_signal_handlers(self) -> None:
        def signal_handler(signum, frame):
            self._logger.info(f"Received signal {signum}, shutting down")
            if self._main_window:
                self._main_window.stop()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    def run(self) -> int:
        """
        Run until Escape, window close or a signal.

        Returns:
            Process exit code
        """
        try:
            self._setup_signal_handlers()
            self._initialize_ui()
            self._main_window.start()
            return 0
        except SurfaceError as e:
            self._logger.critical(f"Fatal display error: {e}")
            return 1
        finally:
            self.shutdown()

    def shutdown(self) -> None:
        if self._main_window:
            self._main_window.stop()
        if self._surface:
            self._surface.close()
        self._logger.log_shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = sys.argv[1:] if argv is None else argv
    code = handle_args(args)
    if code is not None:
        return code
    return Application().run()


if __name__ == '__main__':
    sys.exit(main())
