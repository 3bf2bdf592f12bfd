"""
Configuration Service - Loads render settings from YAML with environment overrides
"""
import math
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .logging_service import LoggingService, get_logger


DEFAULT_FONT_SIZE = 80.0
DEFAULT_PADDING = 20.0
DEFAULT_AUTO_RESIZE = True

TRUE_VALUES = ('true', '1', 'yes')
FALSE_VALUES = ('false', '0', 'no')


@dataclass(frozen=True)
class RenderConfig:
    """Settings that drive font scale and initial window size."""
    font_size: float = DEFAULT_FONT_SIZE
    padding: float = DEFAULT_PADDING
    auto_resize: bool = DEFAULT_AUTO_RESIZE
    font_path: Optional[str] = None


DEFAULT_CONFIG = RenderConfig()


def config_path() -> Path:
    """Location of the user's config file (XDG aware)."""
    base = os.environ.get('XDG_CONFIG_HOME') or str(Path.home() / '.config')
    return Path(base) / 'big_clock' / 'config.yaml'


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"settings.{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"settings.{name} must be finite")
    return value


def _parse_settings(raw: Any) -> RenderConfig:
    """
    Validate the parsed YAML document.

    Raises:
        ValueError: If the document, the settings section or any field is invalid
    """
    if not isinstance(raw, dict) or not isinstance(raw.get('settings'), dict):
        raise ValueError("config must contain a 'settings' mapping")
    settings = raw['settings']

    if 'font_size' not in settings:
        raise ValueError("settings.font_size is required")
    font_size = _number(settings['font_size'], 'font_size')
    if font_size <= 0:
        raise ValueError("settings.font_size must be greater than 0")

    padding = _number(settings.get('padding', DEFAULT_PADDING), 'padding')
    if padding < 0:
        raise ValueError("settings.padding must not be negative")

    auto_resize = settings.get('auto_resize', DEFAULT_AUTO_RESIZE)
    if not isinstance(auto_resize, bool):
        raise ValueError("settings.auto_resize must be a boolean")

    font_path = settings.get('font')
    if font_path is not None and not isinstance(font_path, str):
        raise ValueError("settings.font must be a path string")

    return RenderConfig(font_size=font_size, padding=padding,
                        auto_resize=auto_resize, font_path=font_path or None)


class ConfigService:
    """
    Render settings loader.

    Priority order:
    1. Environment variables (highest)
    2. YAML config file
    3. Default values (lowest)

    A missing, unreadable or invalid file never fails the load: the defaults
    are used and a single diagnostic is logged.
    """

    def __init__(self, path: Optional[Path] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 logger: Optional[LoggingService] = None):
        self._path = Path(path) if path is not None else config_path()
        self._environ = os.environ if environ is None else environ
        self._logger = logger or get_logger()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> RenderConfig:
        """Load config from file, then apply environment overrides."""
        return self._apply_env_overrides(self._load_yaml_config())

    def _load_yaml_config(self) -> RenderConfig:
        if not self._path.exists():
            self._logger.info(f"Config not found at {self._path}, using defaults")
            return DEFAULT_CONFIG

        try:
            with open(self._path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
            return _parse_settings(raw)
        except (OSError, yaml.YAMLError, ValueError) as e:
            self._logger.warning(f"Failed to read config {self._path}, using defaults: {e}")
            return DEFAULT_CONFIG

    def _apply_env_overrides(self, cfg: RenderConfig) -> RenderConfig:
        overrides: Dict[str, Any] = {}

        for env_name, field, minimum in (('CLOCK_FONT_SIZE', 'font_size', None),
                                         ('CLOCK_PADDING', 'padding', 0.0)):
            env_value = self._environ.get(env_name)
            if not env_value:
                continue
            try:
                value = float(env_value)
            except ValueError:
                self._logger.warning(f"Ignoring {env_name}={env_value!r}: not a number")
                continue
            if not math.isfinite(value) or (minimum is None and value <= 0) or \
                    (minimum is not None and value < minimum):
                self._logger.warning(f"Ignoring {env_name}={env_value!r}: out of range")
                continue
            overrides[field] = value
            self._logger.info(f"Using {env_name} from environment: {value}")

        env_resize = self._environ.get('CLOCK_AUTO_RESIZE')
        if env_resize:
            if env_resize.lower() in TRUE_VALUES:
                overrides['auto_resize'] = True
            elif env_resize.lower() in FALSE_VALUES:
                overrides['auto_resize'] = False
            else:
                self._logger.warning(f"Ignoring CLOCK_AUTO_RESIZE={env_resize!r}")

        if env_font := self._environ.get('CLOCK_FONT'):
            overrides['font_path'] = env_font
            self._logger.info(f"Using CLOCK_FONT from environment: {env_font}")

        return replace(cfg, **overrides) if overrides else cfg
