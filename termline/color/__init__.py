# color/__init__.py

from .model import RGBColor, luminance, contrast_ratio
from .palette import (
    SGR,
    NAMED_COLORS,
    ColorPair,
    Palette,
    colorize,
    parse_color_pair,
    rgb_prefix,
    rgb_text,
    screen_title,
    styled,
)

__all__ = [
    'RGBColor', 'luminance', 'contrast_ratio',
    'SGR', 'NAMED_COLORS', 'ColorPair', 'Palette',
    'colorize', 'parse_color_pair', 'rgb_prefix', 'rgb_text', 'screen_title', 'styled',
]
