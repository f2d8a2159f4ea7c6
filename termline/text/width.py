# text/width.py

from typing import Optional

from ..errors import InvalidWidthError
from ..settings import DEFAULT_TAB_WIDTH, read_tab_width
from .scanner import Literal, scan


class VisualWidthCalculator:
    """
    Counts the terminal columns a string occupies.

    Escape sequences take no columns, a tab takes `tab_width` columns and every
    other code point takes one. Wide (CJK/emoji) glyphs are deliberately
    counted as a single column.
    """

    def __init__(self, tab_width: int = DEFAULT_TAB_WIDTH):
        if tab_width < 0:
            raise InvalidWidthError(f"tab width must not be negative, got {tab_width}")
        self.tab_width = tab_width

    def char_width(self, char: str) -> int:
        return self.tab_width if char == '\t' else 1

    def measure(self, text: str) -> int:
        width = 0
        for run in scan(text):
            if isinstance(run, Literal):
                tabs = run.text.count('\t')
                width += len(run.text) - tabs + tabs * self.tab_width
        return width


def visual_width(text: str, tab_width: Optional[int] = None) -> int:
    """
    Visual width of text in columns.

    Args:
        text: Text that may contain escape sequences
        tab_width: Columns per tab; defaults to the TAB_WIDTH setting (4)
    """
    if tab_width is None:
        tab_width = read_tab_width()
    return VisualWidthCalculator(tab_width).measure(text)
