# test_color.py

import pytest
from rich.color import Color

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from termline.color.model import RGBColor, contrast_ratio, luminance
from termline.color.palette import (
    MIN_CONTRAST,
    NAMED_COLORS,
    RESET,
    SGR,
    ColorPair,
    Palette,
    colorize,
    parse_color_pair,
    rgb_prefix,
    rgb_text,
    screen_title,
    styled,
)
from termline.errors import ConfigurationError, InvalidColorError
from termline.text.scanner import Escape, EscapeKind, Literal, scan, strip_escape_sequences
from termline.theme import Theme


class TestLuminance:

    def test_bounds(self):
        assert luminance(0, 0, 0) == 0
        assert luminance(255, 255, 255) == 255

    def test_channel_weights(self):
        assert luminance(255, 0, 0) == 54
        assert luminance(0, 255, 0) == 182
        assert luminance(0, 0, 255) == 18

    @pytest.mark.parametrize("channel", [0, 1, 2])
    def test_monotonic_in_each_channel(self, channel):
        previous = -1
        for value in range(0, 256, 5):
            rgb = [40, 40, 40]
            rgb[channel] = value
            current = luminance(*rgb)
            assert current >= previous
            previous = current

    def test_property_matches_function(self):
        assert RGBColor(30, 30, 46).luminance == luminance(30, 30, 46)


class TestContrastRatio:

    def test_white_on_black(self):
        assert contrast_ratio((255, 255, 255), (0, 0, 0)) == 2225

    def test_same_color(self):
        assert contrast_ratio((120, 40, 200), (120, 40, 200)) == 100

    @pytest.mark.parametrize("a,b", [
        ((255, 255, 255), (0, 0, 0)),
        ((30, 30, 30), (235, 235, 235)),
        ((255, 38, 0), (0, 84, 147)),
    ])
    def test_symmetric(self, a, b):
        assert contrast_ratio(a, b) == contrast_ratio(b, a)
        assert contrast_ratio(a, b) >= 100

    def test_accepts_rgb_colors(self):
        assert contrast_ratio(RGBColor(30, 30, 30), RGBColor(235, 235, 235)) == 588


class TestRGBColor:

    def test_parse(self):
        assert RGBColor.parse("10 20 30") == RGBColor(10, 20, 30)
        assert RGBColor.parse("  1  2   3 ") == RGBColor(1, 2, 3)

    @pytest.mark.parametrize("value", ["10 10", "a b c", "10 10 300", "1 2 3 4", "", "-1 0 0"])
    def test_parse_rejects(self, value):
        with pytest.raises(InvalidColorError):
            RGBColor.parse(value)

    @pytest.mark.parametrize("channels", [(256, 0, 0), (-1, 0, 0), (1.5, 0, 0), (True, 0, 0)])
    def test_channel_validation(self, channels):
        with pytest.raises(ConfigurationError):
            RGBColor(*channels)

    def test_hex_and_str(self):
        color = RGBColor(255, 0, 16)
        assert color.hex == "#ff0010"
        assert str(color) == "255 0 16"
        assert color.as_tuple() == (255, 0, 16)

    def test_rich_interop(self):
        assert RGBColor(1, 2, 3).to_rich().get_truecolor() == (1, 2, 3)
        assert RGBColor.from_rich(Color.parse("#102030")) == RGBColor(16, 32, 48)

    def test_is_dark(self):
        assert RGBColor(127, 127, 127).is_dark
        assert not RGBColor(128, 128, 128).is_dark


class TestTruecolorCodes:

    def test_foreground_prefix(self):
        assert rgb_prefix(RGBColor(1, 2, 3)) == "\x1b[38;2;1;2;3m"

    def test_background_prefix(self):
        assert rgb_prefix(bg=RGBColor(1, 2, 3)) == "\x1b[48;2;1;2;3m"

    def test_foreground_then_background(self):
        assert rgb_prefix(RGBColor(9, 8, 7), RGBColor(1, 2, 3)) == "\x1b[38;2;9;8;7m\x1b[48;2;1;2;3m"

    def test_rgb_text(self):
        assert rgb_text("255 100 0", "hi") == "\x1b[38;2;255;100;0mhi\x1b[0m"
        assert rgb_text("255 100 0 / 30 30 30", "t") == "\x1b[38;2;255;100;0m\x1b[48;2;30;30;30mt\x1b[0m"
        assert rgb_text("/ 30 30 30", "t") == "\x1b[48;2;30;30;30mt\x1b[0m"

    def test_parse_color_pair(self):
        assert parse_color_pair("/30 30 30") == ColorPair(bg=RGBColor(30, 30, 30))
        assert parse_color_pair("1 2 3") == ColorPair(fg=RGBColor(1, 2, 3))
        with pytest.raises(InvalidColorError):
            parse_color_pair("1 2 / 3 4 5")

    def test_colored_text_scans_as_escapes_around_literal(self):
        runs = list(scan(rgb_text("1 2 3 / 4 5 6", "body")))
        assert [type(r) for r in runs] == [Escape, Escape, Literal, Escape]
        assert all(r.kind is EscapeKind.CSI for r in runs if isinstance(r, Escape))
        assert strip_escape_sequences(rgb_text("1 2 3 / 4 5 6", "body")) == "body"


class TestNamedColors:

    def test_styled(self):
        assert styled("orange", "x", "rest") == "\x1b[38;2;242;81;29mx\x1b[0mrest"

    def test_unknown_name(self):
        with pytest.raises(KeyError):
            styled("no_such_color", "x")

    def test_every_entry_has_a_color(self):
        for name, pair in NAMED_COLORS.items():
            assert pair.fg is not None or pair.bg is not None, name

    def test_background_only_entries(self):
        assert NAMED_COLORS["bg_dark_red"] == ColorPair(bg=RGBColor(148, 17, 0))


class TestColorize:

    def test_replaces_known_tags(self):
        assert colorize("{{RED}}Hello{{RESET}} world") == "\x1b[31mHello\x1b[0m world"

    def test_unknown_and_malformed_tags_are_kept(self):
        assert colorize("{{NOPE}}x") == "{{NOPE}}x"
        assert colorize("{{bad-tag}}x") == "{{bad-tag}}x"
        assert colorize("a {{RED") == "a {{RED"

    def test_plain_text_unchanged(self):
        assert colorize("Plain text") == "Plain text"

    def test_custom_codes(self):
        assert colorize("{{WARN}}!", {"WARN": "<w>"}) == "<w>!"

    def test_codes_are_read_only(self):
        with pytest.raises(TypeError):
            SGR["RED"] = "x"
        assert SGR["RESET"] == RESET
        assert SGR["DEF_COLOR"] == "\x1b[39m\x1b[49m"


class TestScreenTitle:

    def test_is_one_osc_sequence(self):
        title = screen_title("hi")
        assert title == "\x1b]0;hi\x07"
        assert list(scan(title)) == [Escape(EscapeKind.OSC, title)]


class TestPalette:

    @pytest.mark.parametrize("theme", [Theme.DARK, Theme.LIGHT, "dark", "light"])
    def test_roles_are_legible(self, theme):
        palette = Palette.for_theme(theme)
        for role in palette.roles:
            assert palette.contrast(role) >= MIN_CONTRAST, role

    def test_theme_name(self):
        assert Palette.for_theme(Theme.LIGHT).theme == "light"

    def test_paint(self):
        palette = Palette.for_theme("dark")
        painted = palette.paint("error", "oops")
        assert painted == rgb_text(ColorPair(fg=palette.color("error")), "oops")
        assert painted.endswith(RESET)

    def test_roles_are_read_only(self):
        palette = Palette.for_theme("dark")
        with pytest.raises(TypeError):
            palette.roles["text"] = RGBColor(0, 0, 0)
