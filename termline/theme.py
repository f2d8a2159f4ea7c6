# theme.py

from enum import Enum
from typing import Optional

from .color.model import DARK_THRESHOLD
from .color.palette import Palette
from .logger import Logger
from .settings import Settings, read_theme
from .terminal.capability import OSC_BACKGROUND, TerminalCapabilityProbe


class Theme(Enum):
    DARK = 'dark'
    LIGHT = 'light'


class ThemeDetector:
    """
    Decides whether the terminal has a dark or a light background.

    Order of precedence: the TERMINAL_THEME setting, then the background
    color (TERMINAL_BG_COLOR or an OSC 11 query). When nothing can be
    learned the answer is Theme.DARK.
    """

    def __init__(self, settings: Optional[Settings] = None,
                 probe: Optional[TerminalCapabilityProbe] = None,
                 logger: Optional[Logger] = None):
        # None: TERMINAL_THEME and the background override are read on demand
        self.settings = settings
        self.logger = logger or Logger(__name__)
        self.probe = probe or TerminalCapabilityProbe(settings=self.settings, logger=self.logger)

    def detect(self) -> Theme:
        override = (self.settings.theme_override if self.settings is not None
                    else read_theme())
        if override:
            theme = Theme(override)
            self.logger.debug(f"detect_theme: TERMINAL_THEME override: {theme.value}")
            return theme

        result = self.probe.probe(OSC_BACKGROUND)
        if not result:
            self.logger.debug("detect_theme: background unavailable, defaulting to dark")
            return Theme.DARK

        lum = result.color.luminance
        theme = Theme.DARK if lum < DARK_THRESHOLD else Theme.LIGHT
        self.logger.debug(
            f"detect_theme: background {result.color} ({result.source}) luminance {lum} -> {theme.value}"
        )
        return theme

    def palette(self) -> Palette:
        """Palette matching the detected theme."""
        return Palette.for_theme(self.detect())


def detect_theme() -> Theme:
    return ThemeDetector().detect()


def is_dark_mode() -> bool:
    return detect_theme() is Theme.DARK


def is_light_mode() -> bool:
    return detect_theme() is Theme.LIGHT
