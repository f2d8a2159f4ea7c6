# color/model.py

from dataclasses import dataclass
from typing import Tuple, Union

from rich.color import Color

from ..errors import InvalidColorError

# ITU-R BT.709 weights scaled by 10000 so everything stays integer.
LUMA_RED = 2126
LUMA_GREEN = 7152
LUMA_BLUE = 722
LUMA_SCALE = 10000

# WCAG's +0.05 term expressed on the 0-255 luminance scale.
CONTRAST_OFFSET = 12

DARK_THRESHOLD = 128


def _channel(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidColorError(f"{name} channel must be an integer, got {value!r}")
    if not 0 <= value <= 255:
        raise InvalidColorError(f"{name} channel must be in 0..255, got {value}")
    return value


@dataclass(frozen=True)
class RGBColor:
    """An 8-bit per channel RGB color."""

    r: int
    g: int
    b: int

    def __post_init__(self):
        _channel('red', self.r)
        _channel('green', self.g)
        _channel('blue', self.b)

    @classmethod
    def parse(cls, value: str) -> "RGBColor":
        """
        Parse a space separated decimal triple such as "30 30 30".

        Raises:
            InvalidColorError: if the value isn't exactly three decimal channels.
        """
        parts = value.split()
        if len(parts) != 3 or not all(p.isascii() and p.isdigit() for p in parts):
            raise InvalidColorError(f"expected 'R G B' with decimal channels, got {value!r}")
        return cls(*(int(p) for p in parts))

    @classmethod
    def from_rich(cls, color: Color) -> "RGBColor":
        """Build from a rich Color, resolving named and palette colors to truecolor."""
        triplet = color.get_truecolor()
        return cls(triplet.red, triplet.green, triplet.blue)

    def to_rich(self) -> Color:
        return Color.from_rgb(self.r, self.g, self.b)

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def luminance(self) -> int:
        return luminance(self.r, self.g, self.b)

    @property
    def is_dark(self) -> bool:
        return self.luminance < DARK_THRESHOLD

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return f"{self.r} {self.g} {self.b}"


def luminance(r: int, g: int, b: int) -> int:
    """Relative luminance in 0..255 using integer BT.709 weights."""
    return (LUMA_RED * r + LUMA_GREEN * g + LUMA_BLUE * b) // LUMA_SCALE


def _as_luminance(color: Union[RGBColor, Tuple[int, int, int]]) -> int:
    if isinstance(color, RGBColor):
        return color.luminance
    return luminance(*color)


def contrast_ratio(a: Union[RGBColor, Tuple[int, int, int]],
                   b: Union[RGBColor, Tuple[int, int, int]]) -> int:
    """
    Contrast ratio between two colors, scaled by 100.

    WCAG guidance in these units: 450 for normal text, 300 for large text,
    700 for enhanced contrast.

    Args:
        a: First color, as an RGBColor or an (r, g, b) tuple
        b: Second color

    Returns:
        ((lighter + 12) * 100) // (darker + 12), where lighter/darker are the
        two luminances in descending order.
    """
    lighter, darker = sorted((_as_luminance(a), _as_luminance(b)), reverse=True)
    return ((lighter + CONTRAST_OFFSET) * 100) // (darker + CONTRAST_OFFSET)
