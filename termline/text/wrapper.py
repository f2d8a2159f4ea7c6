# text/wrapper.py

from dataclasses import dataclass
from typing import List, Optional

from ..errors import InvalidWidthError
from ..logger import Logger
from ..settings import DEFAULT_TAB_WIDTH, read_tab_width
from ..terminal.size import resolve_wrap_width
from .scanner import Escape, scan
from .width import VisualWidthCalculator

BREAK_CHARS = (' ', '\t')


@dataclass(frozen=True)
class WrapConfig:
    """Target width and tab expansion for the wrap engine."""

    max_width: int
    tab_width: int = DEFAULT_TAB_WIDTH

    def __post_init__(self):
        if isinstance(self.max_width, bool) or not isinstance(self.max_width, int):
            raise InvalidWidthError(f"wrap width must be an integer, got {self.max_width!r}")
        if self.max_width < 1:
            raise InvalidWidthError(f"wrap width must be a positive number, received: {self.max_width}")
        if self.tab_width < 0:
            raise InvalidWidthError(f"tab width must not be negative, got {self.tab_width}")


class _LineBuilder:
    """The line being filled, with the last place it may be broken."""

    def __init__(self, measure):
        self._measure = measure
        self.text = ''
        self.width = 0
        self.boundary = -1

    def append(self, raw: str, width: int) -> None:
        self.text += raw
        self.width += width

    def mark_boundary(self) -> None:
        self.boundary = len(self.text)

    def break_at_boundary(self) -> str:
        """
        Split at the boundary, returning the finished line without trailing blanks.

        A line that held only blanks (indentation, or the run of spaces after a
        previous break) comes back empty and is still emitted.
        """
        done, rest = self.text[:self.boundary], self.text[self.boundary:]
        self.text = rest
        self.width = self._measure(rest)
        self.boundary = -1
        return done.rstrip(''.join(BREAK_CHARS))

    def flush(self) -> str:
        line = self.text
        self.text = ''
        self.width = 0
        self.boundary = -1
        return line


class WordWrapEngine:
    """
    Reflows text to a column width on space and tab boundaries.

    Escape sequences ride along with the text they sit in and are never
    broken up. A word wider than the target is kept whole on its own line.
    """

    def __init__(self, config: WrapConfig, logger: Optional[Logger] = None):
        self.config = config
        self.calculator = VisualWidthCalculator(config.tab_width)
        self.logger = logger or Logger(__name__)

    def wrap(self, text: str) -> str:
        """
        Wrap text to the configured width.

        Args:
            text: Text, possibly holding escape sequences and newlines

        Returns:
            Newline-joined wrapped lines
        """
        if not text:
            return ''
        return '\n'.join(self.wrap_lines(text))

    def wrap_lines(self, text: str) -> List[str]:
        max_width = self.config.max_width
        char_width = self.calculator.char_width
        line = _LineBuilder(self.calculator.measure)
        lines: List[str] = []

        for run in scan(text):
            if isinstance(run, Escape):
                line.append(run.raw, 0)
                continue

            for char in run.text:
                if char == '\n':
                    lines.append(line.flush())
                    continue

                line.append(char, char_width(char))
                if char in BREAK_CHARS:
                    line.mark_boundary()
                    if line.width > max_width:
                        lines.append(line.break_at_boundary())
                elif line.width > max_width and line.boundary > 0:
                    lines.append(line.break_at_boundary())

        if line.text:
            lines.append(line.flush())

        self.logger.debug(f"wrap: split content to max width {max_width} ({len(lines)} lines)")
        return lines


def wrap(text: str, width: Optional[int] = None, tab_width: Optional[int] = None,
         logger: Optional[Logger] = None) -> str:
    """
    Wrap text on word boundaries, keeping escape sequences intact.

    Args:
        text: Content to wrap
        width: Target width; resolved from COLUMNS / the terminal / 75 if None
        tab_width: Columns per tab; defaults to the TAB_WIDTH setting (4)
        logger: Optional logger

    Raises:
        InvalidWidthError: for a width below 1 or a negative tab width.
    """
    if not text:
        return ''
    if width is None:
        width = resolve_wrap_width(logger=logger)
    if tab_width is None:
        tab_width = read_tab_width()
    return WordWrapEngine(WrapConfig(width, tab_width), logger=logger).wrap(text)
