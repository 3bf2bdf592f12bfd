"""
Logging Service - Console logging with configurable levels
"""
import sys
import logging
from typing import Optional


LOGGER_NAME = 'big-clock'


class LoggingService:
    """
    Centralized logging service with a single stdout handler.
    """

    def __init__(self, name: str = LOGGER_NAME, level: str = 'INFO'):
        """
        Initialize logging service.

        Args:
            name: Logger name
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._logger = logging.getLogger(name)
        self._set_level(level)
        self._setup_handlers()

    def _set_level(self, level: str) -> None:
        """Set logging level from string"""
        log_level = getattr(logging, str(level).upper(), None)
        if not isinstance(log_level, int):
            log_level = logging.INFO
        self._logger.setLevel(log_level)

    def _setup_handlers(self) -> None:
        """Setup console handler with formatting"""
        self._logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(self._logger.level)
        console_handler.setFormatter(logging.Formatter(
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))

        self._logger.addHandler(console_handler)

    def debug(self, message: str, **kwargs) -> None:
        self._logger.debug(message, extra=kwargs)

    def info(self, message: str, **kwargs) -> None:
        self._logger.info(message, extra=kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._logger.warning(message, extra=kwargs)

    def critical(self, message: str, exc_info: bool = False, **kwargs) -> None:
        self._logger.critical(message, exc_info=exc_info, extra=kwargs)

    def set_level(self, level: str) -> None:
        """
        Change logging level dynamically.

        Args:
            level: New log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        """
        self._set_level(level)
        for handler in self._logger.handlers:
            handler.setLevel(self._logger.level)

    def log_startup(self, version: str, summary: dict) -> None:
        """
        Log the startup banner.

        Args:
            version: Application version
            summary: Settings summary (font size, padding, window size, font)
        """
        self.info("=" * 60)
        self.info(f"Big Clock v{version} starting up")
        self.info(f"Python: {sys.version.split()[0]}")
        self.info(f"Font size: {summary.get('font_size')}, padding: {summary.get('padding')}")
        self.info(f"Auto resize: {'enabled' if summary.get('auto_resize') else 'disabled'}")
        if summary.get('font_path'):
            self.info(f"Configured font: {summary['font_path']}")
        self.info("=" * 60)

    def log_shutdown(self) -> None:
        self.info("=" * 60)
        self.info("Big Clock shutting down")
        self.info("=" * 60)

    @property
    def logger(self) -> logging.Logger:
        """Get underlying logger instance"""
        return self._logger


_logging_service: Optional[LoggingService] = None


def get_logger(name: str = LOGGER_NAME, level: str = 'INFO') -> LoggingService:
    """
    Get or create logging service singleton.

    Args:
        name: Logger name
        level: Log level

    Returns:
        LoggingService instance
    """
    global _logging_service
    if _logging_service is None:
        _logging_service = LoggingService(name, level)
    return _logging_service
