# color/palette.py

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from .model import RGBColor, contrast_ratio

# ANSI format utility
FMT = lambda x: f'\033[{x}m'

RESET = FMT('0')

SGR: Mapping[str, str] = MappingProxyType({
    'BLACK': FMT('30'),
    'RED': FMT('31'),
    'GREEN': FMT('32'),
    'YELLOW': FMT('33'),
    'BLUE': FMT('34'),
    'MAGENTA': FMT('35'),
    'CYAN': FMT('36'),
    'WHITE': FMT('37'),

    'BRIGHT_BLACK': FMT('90'),
    'BRIGHT_RED': FMT('91'),
    'BRIGHT_GREEN': FMT('92'),
    'BRIGHT_YELLOW': FMT('93'),
    'BRIGHT_BLUE': FMT('94'),
    'BRIGHT_MAGENTA': FMT('95'),
    'BRIGHT_CYAN': FMT('96'),
    'BRIGHT_WHITE': FMT('97'),

    'BOLD': FMT('1'),
    'NORMAL': FMT('22'),
    'DIM': FMT('2'),
    'ITALIC': FMT('3'),
    'NO_ITALIC': FMT('23'),
    'STRIKE': FMT('9'),
    'NO_STRIKE': FMT('29'),
    'REVERSE': FMT('7'),
    'NO_REVERSE': FMT('27'),
    'UNDERLINE': FMT('4'),
    'NO_UNDERLINE': FMT('24'),
    'BLINK': FMT('5'),
    'NO_BLINK': FMT('25'),

    'BG_BLACK': FMT('40'),
    'BG_RED': FMT('41'),
    'BG_GREEN': FMT('42'),
    'BG_YELLOW': FMT('43'),
    'BG_BLUE': FMT('44'),
    'BG_MAGENTA': FMT('45'),
    'BG_CYAN': FMT('46'),
    'BG_WHITE': FMT('47'),

    'BG_BRIGHT_BLACK': FMT('100'),
    'BG_BRIGHT_RED': FMT('101'),
    'BG_BRIGHT_GREEN': FMT('102'),
    'BG_BRIGHT_YELLOW': FMT('103'),
    'BG_BRIGHT_BLUE': FMT('104'),
    'BG_BRIGHT_MAGENTA': FMT('105'),
    'BG_BRIGHT_CYAN': FMT('106'),
    'BG_BRIGHT_WHITE': FMT('107'),

    'RESET': RESET,
    'DEF_FG': FMT('39'),
    'DEF_BG': FMT('49'),
    'DEF_COLOR': FMT('39') + FMT('49'),

    'SAVE_POSITION': '\033[s',
    'RESTORE_POSITION': '\033[u',
    'CLEAR_SCREEN': '\033[2J',
})

CLEAR_SCREEN = SGR['CLEAR_SCREEN']

TAG_PATTERN = re.compile(r'\{\{(.*?)\}\}')
TAG_NAME = re.compile(r'[A-Za-z_][A-Za-z0-9_]*')


@dataclass(frozen=True)
class ColorPair:
    """Foreground and/or background for a run of text."""

    fg: Optional[RGBColor] = None
    bg: Optional[RGBColor] = None

    @property
    def prefix(self) -> str:
        return rgb_prefix(self.fg, self.bg)


def _sgr_for(color: RGBColor, foreground: bool) -> str:
    return FMT(';'.join(color.to_rich().get_ansi_codes(foreground=foreground)))


def rgb_prefix(fg: Optional[RGBColor] = None, bg: Optional[RGBColor] = None) -> str:
    """Truecolor SGR codes for the given colors (ESC[38;2;..m then ESC[48;2;..m)."""
    prefix = ''
    if fg is not None:
        prefix += _sgr_for(fg, foreground=True)
    if bg is not None:
        prefix += _sgr_for(bg, foreground=False)
    return prefix


def parse_color_pair(value: str) -> ColorPair:
    """
    Parse "R G B", "R G B / R G B" or "/ R G B" (background only).

    Raises:
        InvalidColorError: if either side isn't a valid RGB triple.
    """
    fg_part, sep, bg_part = value.partition('/')
    fg_part, bg_part = fg_part.strip(), bg_part.strip()
    return ColorPair(
        fg=RGBColor.parse(fg_part) if fg_part else None,
        bg=RGBColor.parse(bg_part) if sep and bg_part else None,
    )


def rgb_text(color: Union[str, ColorPair], text: str = '') -> str:
    """
    Render text in the given colors, followed by a full reset.

    Args:
        color: A ColorPair or a string accepted by parse_color_pair
        text: Text to color
    """
    pair = parse_color_pair(color) if isinstance(color, str) else color
    return f"{pair.prefix}{text}{RESET}"


NAMED_COLORS: Mapping[str, ColorPair] = MappingProxyType({
    name: parse_color_pair(value) for name, value in {
        'orange': '242 81 29',
        'orange_highlighted': '242 81 29 / 71 49 55',
        'orange_backed': '16 16 16 / 242 81 29',
        'blue': '4 51 255',
        'blue_backed': '235 235 235 / 4 51 255',
        'light_blue_backed': '8 8 8 / 65 128 255',
        'dark_blue_backed': '235 235 235 / 1 25 147',
        'tangerine': '255 147 0',
        'tangerine_highlighted': '255 147 0 / 125 77 0',
        'tangerine_backed': '16 16 16 / 255 147 0',
        'slate_blue': '63 99 139',
        'slate_blue_backed': '63 99 139 / 203 237 255',
        'green': '0 143 0',
        'green_backed': '8 8 8 / 0 229 0',
        'light_green_backed': '8 8 8 / 0 143 0',
        'dark_green_backed': '235 235 235 / 0 65 0',
        'lime': '15 250 121',
        'lime_backed': '33 33 33 / 15 250 121',
        'pink': '255 138 216',
        'pink_backed': '33 33 33 / 255 138 216',
        'dark_pink_backed': '235 235 235 / 148 23 81',
        'yellow': '255 252 121',
        'light_yellow_backed': '8 8 8 / 255 252 121',
        'yellow_backed': '8 8 8 / 255 251 0',
        'dark_yellow_backed': '255 255 255 / 146 144 0',
        'red': '255 38 0',
        'red_backed': '235 235 235 / 255 38 0',
        'dark_red_backed': '235 235 235 / 148 17 0',
        'light_red_backed': '8 8 8 / 255 126 121',
        'purple': '172 57 255',
        'purple_backed': '235 235 235 / 148 55 255',
        'light_purple_backed': '8 8 8 / 215 131 255',
        'dark_purple_backed': '235 235 235 / 83 27 147',
        'black_backed': '192 192 192 / 0 0 0',
        'white_backed': '66 66 66 / 255 255 255',
        'gray_backed': '33 33 33 / 169 169 169',
        'light_gray_backed': '55 55 55 / 214 214 214',
        'dark_gray_backed': '235 235 235 / 66 66 66',
        'bg_gray': '/ 94 94 94',
        'bg_light_gray': '/ 146 146 146',
        'bg_dark_gray': '/ 66 66 66',
        'bg_blue': '/ 0 84 147',
        'bg_light_blue': '/ 0 150 255',
        'bg_dark_blue': '/ 1 25 147',
        'bg_green': '/ 0 143 0',
        'bg_light_green': '/ 0 172 0',
        'bg_dark_green': '/ 0 114 0',
        'bg_yellow': '/ 255 251 0',
        'bg_light_yellow': '/ 255 252 121',
        'bg_dark_yellow': '/ 146 144 0',
        'bg_red': '/ 255 38 0',
        'bg_light_red': '/ 255 126 121',
        'bg_dark_red': '/ 148 17 0',
    }.items()
})


def styled(name: str, text: str, rest: str = '') -> str:
    """
    Color `text` with a named color and append `rest` uncolored.

    Raises:
        KeyError: for an unknown color name.
    """
    return rgb_text(NAMED_COLORS[name], text) + rest


def colorize(content: str, codes: Mapping[str, str] = SGR) -> str:
    """
    Replace {{TAG}} markers with the code of the same name.

    Unknown tags, tags that aren't identifiers, and an unterminated '{{'
    are left in the output unchanged.
    """
    def _replace(match: re.Match) -> str:
        tag = match.group(1)
        if TAG_NAME.fullmatch(tag) and tag in codes:
            return codes[tag]
        return match.group(0)

    return TAG_PATTERN.sub(_replace, content)


def screen_title(title: str) -> str:
    """OSC 0 sequence setting the window and icon title."""
    return f'\033]0;{title}\007'


# Representative backgrounds used to check role colors for legibility.
THEME_BACKGROUNDS: Mapping[str, RGBColor] = MappingProxyType({
    'dark': RGBColor(30, 30, 30),
    'light': RGBColor(250, 250, 250),
})

MIN_CONTRAST = 450

_ROLE_COLORS: Dict[str, Dict[str, RGBColor]] = {
    'dark': {
        'text': RGBColor(235, 235, 235),
        'muted': RGBColor(190, 190, 190),
        'accent': RGBColor(255, 180, 80),
        'error': RGBColor(255, 170, 165),
        'success': RGBColor(15, 250, 121),
    },
    'light': {
        'text': RGBColor(16, 16, 16),
        'muted': RGBColor(44, 44, 44),
        'accent': RGBColor(1, 25, 147),
        'error': RGBColor(148, 17, 0),
        'success': RGBColor(0, 60, 0),
    },
}


@dataclass(frozen=True)
class Palette:
    """
    Role colors for one theme.

    Built with Palette.for_theme(); callers keep the instance they were given,
    nothing is registered globally.
    """

    theme: str
    background: RGBColor
    roles: Mapping[str, RGBColor]

    @classmethod
    def for_theme(cls, theme) -> "Palette":
        """
        Args:
            theme: A Theme member or its value ('dark' / 'light')
        """
        name = getattr(theme, 'value', theme)
        return cls(
            theme=name,
            background=THEME_BACKGROUNDS[name],
            roles=MappingProxyType(dict(_ROLE_COLORS[name])),
        )

    def color(self, role: str) -> RGBColor:
        return self.roles[role]

    def contrast(self, role: str) -> int:
        return contrast_ratio(self.roles[role], self.background)

    def paint(self, role: str, text: str) -> str:
        """Color text for a role, followed by a reset."""
        return rgb_text(ColorPair(fg=self.roles[role]), text)
