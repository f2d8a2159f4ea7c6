# test_wrap.py

import pytest
from unittest.mock import Mock

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import termline.text.wrapper as wrap_module
from termline.errors import InvalidWidthError
from termline.text.scanner import Escape, scan, strip_escape_sequences
from termline.text.width import visual_width
from termline.text.wrapper import WordWrapEngine, WrapConfig, wrap

FOX = "The quick brown fox \x1b[1mjumps\x1b[0m over the lazy dog"

CORPUS = [
    FOX,
    "supercalifragilisticexpialidocious is a long word",
    "a\tb\tc d\te",
    "\x1b[38;2;255;100;0mcolored words\x1b[0m run across \x1b]8;;https://example.com\x1b\\several\x1b]8;;\x1b\\ lines",
    "lines\nwith  double  spaces\n\nand blanks   \n",
    "aaaa bbbb cccc dddd",
    "x" * 30 + " y",
]


def _escapes(text):
    return [run.raw for run in scan(text) if isinstance(run, Escape)]


class TestWordWrap:

    def test_fox_at_twenty(self):
        assert wrap(FOX, 20, 4) == "The quick brown fox\n\x1b[1mjumps\x1b[0m over the lazy\ndog"

    def test_text_that_fits_is_unchanged(self):
        assert wrap("short line", 20, 4) == "short line"

    def test_empty_input(self):
        assert wrap("", 10, 4) == ""

    def test_long_word_stays_whole(self):
        result = wrap("supercalifragilistic is long", 10, 4)
        assert result == "supercalifragilistic\nis long"

    def test_space_that_overflows_is_dropped(self):
        assert wrap("aaaa bbbb", 4, 4) == "aaaa\nbbbb"

    def test_trailing_space_is_trimmed_from_broken_line(self):
        assert wrap("aaa bbb", 4, 4) == "aaa\nbbb"

    def test_runs_of_spaces_at_break(self):
        assert wrap("ab  cd", 3, 4) == "ab\ncd"

    def test_blank_run_after_break_leaves_empty_line(self):
        assert wrap("hello     world", 5, 4) == "hello\n\nworld"

    def test_overflowing_indentation_leaves_empty_line(self):
        assert wrap(" a", 1, 4) == "\na"
        assert wrap("  ab", 3, 4) == "\nab"

    def test_tabs_are_break_points(self):
        assert wrap("a\tb\tc", 5, 4) == "a\nb\nc"

    def test_newlines_are_kept(self):
        assert wrap("one two\nthree four", 20, 4) == "one two\nthree four"
        assert wrap("a\n\nb", 20, 4) == "a\n\nb"

    def test_leading_newline_is_kept(self):
        assert wrap("\nabc", 20, 4) == "\nabc"

    def test_trailing_newline_is_dropped(self):
        assert wrap("abc\n", 20, 4) == "abc"

    def test_escape_moves_with_following_word(self):
        assert wrap("aaaa \x1b[31mbbbb", 4, 4) == "aaaa\n\x1b[31mbbbb"

    def test_escape_stays_with_preceding_word(self):
        assert wrap("aaa\x1b[0m bbb", 4, 4) == "aaa\x1b[0m\nbbb"

    def test_unterminated_escape_passes_through(self):
        assert wrap("abc \x1b[31", 3, 4) == "abc\n\x1b[31"

    @pytest.mark.parametrize("text", CORPUS)
    @pytest.mark.parametrize("width", [1, 3, 5, 8, 13, 20, 40])
    def test_lines_fit_or_hold_a_single_word(self, text, width):
        for line in wrap(text, width, 4).split("\n"):
            plain = strip_escape_sequences(line)
            assert visual_width(line, 4) <= width or not any(c in plain for c in " \t")

    @pytest.mark.parametrize("text", CORPUS)
    @pytest.mark.parametrize("width", [1, 4, 9, 20])
    def test_escape_sequences_are_never_split(self, text, width):
        result = wrap(text, width, 4)
        lines = result.split("\n")
        assert [raw for line in lines for raw in _escapes(line)] == _escapes(text)

    @pytest.mark.parametrize("text", [t for t in CORPUS if "\n" not in t])
    def test_no_line_ends_in_blank(self, text):
        for line in wrap(text, 6, 4).split("\n"):
            assert not strip_escape_sequences(line).endswith((" ", "\t"))

    @pytest.mark.parametrize("width", [0, -3])
    def test_invalid_width(self, width):
        with pytest.raises(InvalidWidthError):
            wrap("text", width, 4)

    def test_invalid_width_is_a_value_error(self):
        with pytest.raises(ValueError):
            WrapConfig(0)

    def test_non_integer_width(self):
        with pytest.raises(InvalidWidthError):
            WrapConfig("20")
        with pytest.raises(InvalidWidthError):
            WrapConfig(True)


class TestWordWrapEngine:

    def setup_method(self):
        self.logger = Mock()
        self.engine = WordWrapEngine(WrapConfig(max_width=10), logger=self.logger)

    def test_wrap_lines(self):
        assert self.engine.wrap_lines("hello world again") == ["hello", "world", "again"]

    def test_logs_the_split(self):
        self.engine.wrap("hello world again")
        self.logger.debug.assert_called()

    def test_engine_is_reusable(self):
        assert self.engine.wrap("one two three four") == self.engine.wrap("one two three four")


class TestWrapDefaults:

    def test_width_resolved_when_missing(self, monkeypatch):
        resolve = Mock(return_value=10)
        monkeypatch.setattr(wrap_module, "resolve_wrap_width", resolve)
        assert wrap("hello world again", tab_width=4) == "hello\nworld\nagain"
        resolve.assert_called_once()

    def test_width_from_columns(self, monkeypatch):
        monkeypatch.setenv("COLUMNS", "17")
        assert wrap("hello world again", tab_width=4) == "hello world\nagain"

    def test_tab_width_from_environment(self, monkeypatch):
        monkeypatch.setenv("TAB_WIDTH", "8")
        assert wrap("a\tb", 8) == "a\nb"
