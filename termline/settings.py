# settings.py

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .color.model import RGBColor
from .errors import InvalidThemeError, InvalidWidthError

DEFAULT_TAB_WIDTH = 4
THEME_NAMES = ('dark', 'light')

# OSC color code -> override variable
COLOR_OVERRIDES = {10: 'TERMINAL_FG_COLOR', 11: 'TERMINAL_BG_COLOR'}


def _read(environ: Mapping[str, str], name: str) -> Optional[str]:
    """Return a variable's value, treating empty or blank values as unset."""
    value = environ.get(name, '')
    return value if value.strip() else None


def _read_int(environ: Mapping[str, str], name: str) -> Optional[int]:
    value = _read(environ, name)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidWidthError(f"{name} must be an integer, got {value!r}") from None


def read_tab_width(environ: Optional[Mapping[str, str]] = None) -> int:
    """TAB_WIDTH on its own, for callers that only need tab expansion."""
    environ = os.environ if environ is None else environ
    tab_width = _read_int(environ, 'TAB_WIDTH')
    if tab_width is None:
        return DEFAULT_TAB_WIDTH
    if tab_width < 0:
        raise InvalidWidthError(f"TAB_WIDTH must not be negative, got {tab_width}")
    return tab_width


def read_columns(environ: Optional[Mapping[str, str]] = None) -> Optional[int]:
    """COLUMNS on its own, or None when unset."""
    environ = os.environ if environ is None else environ
    return _read_int(environ, 'COLUMNS')


def read_color_override(osc_code: int,
                        environ: Optional[Mapping[str, str]] = None) -> Optional[RGBColor]:
    """The "R G B" override for one OSC color code, or None when unset."""
    environ = os.environ if environ is None else environ
    value = _read(environ, COLOR_OVERRIDES[osc_code])
    return RGBColor.parse(value) if value else None


def read_theme(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    environ = os.environ if environ is None else environ
    theme = _read(environ, 'TERMINAL_THEME')
    if theme is None:
        return None
    theme = theme.strip().lower()
    if theme not in THEME_NAMES:
        raise InvalidThemeError(f"TERMINAL_THEME must be 'dark' or 'light', got {theme!r}")
    return theme


def read_flag(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    """True when the variable is set to anything but blanks."""
    environ = os.environ if environ is None else environ
    return _read(environ, name) is not None


@dataclass(frozen=True)
class Settings:
    """
    Environment-driven configuration.

    Every field has a neutral default so tests and embedding applications can
    build a Settings directly instead of touching os.environ.
    """

    fg_override: Optional[RGBColor] = None
    bg_override: Optional[RGBColor] = None
    theme_override: Optional[str] = None
    ci: bool = False
    tab_width: int = DEFAULT_TAB_WIDTH
    columns: Optional[int] = None
    in_tmux: bool = False

    def __post_init__(self):
        if self.tab_width < 0:
            raise InvalidWidthError(f"TAB_WIDTH must not be negative, got {self.tab_width}")
        if self.theme_override is not None and self.theme_override not in THEME_NAMES:
            raise InvalidThemeError(
                f"TERMINAL_THEME must be 'dark' or 'light', got {self.theme_override!r}"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Load settings from the environment.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ConfigurationError: for malformed colors, themes or integers.
        """
        environ = os.environ if environ is None else environ
        return cls(
            fg_override=read_color_override(10, environ),
            bg_override=read_color_override(11, environ),
            theme_override=read_theme(environ),
            ci=read_flag('CI', environ),
            tab_width=read_tab_width(environ),
            columns=read_columns(environ),
            in_tmux=read_flag('TMUX', environ),
        )

    def color_override(self, osc_code: int) -> Optional[RGBColor]:
        """Return the override matching an OSC color code (10 = fg, 11 = bg)."""
        return self.fg_override if osc_code == 10 else self.bg_override
