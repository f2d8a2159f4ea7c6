# __init__.py

from .errors import (
    TermlineError,
    ConfigurationError,
    InvalidWidthError,
    InvalidColorError,
    InvalidThemeError,
)
from .logger import Logger
from .settings import Settings
from .color import RGBColor, Palette, luminance, contrast_ratio
from .text import (
    EscapeSequenceScanner,
    VisualWidthCalculator,
    WordWrapEngine,
    WrapConfig,
    strip_escape_sequences,
    visual_width,
    wrap,
)
from .terminal import ProbeResult, TerminalCapabilityProbe, probe
from .theme import Theme, ThemeDetector, detect_theme, is_dark_mode, is_light_mode

__version__ = "0.1.0"

__all__ = [
    "TermlineError", "ConfigurationError", "InvalidWidthError",
    "InvalidColorError", "InvalidThemeError",
    "Logger", "Settings",
    "RGBColor", "Palette", "luminance", "contrast_ratio",
    "EscapeSequenceScanner", "VisualWidthCalculator", "WordWrapEngine", "WrapConfig",
    "strip_escape_sequences", "visual_width", "wrap",
    "ProbeResult", "TerminalCapabilityProbe", "probe",
    "Theme", "ThemeDetector", "detect_theme", "is_dark_mode", "is_light_mode",
]
