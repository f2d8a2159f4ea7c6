# text/scanner.py

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Union

ESC = '\x1b'
BEL = '\x07'
ST = ESC + '\\'

CSI_TERMINATORS = frozenset(
    'ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz~@'
)


class EscapeKind(Enum):
    CSI = 'csi'
    OSC = 'osc'
    OTHER = 'other'


@dataclass(frozen=True)
class Literal:
    """A run of displayable text (may include tabs and newlines)."""

    text: str

    @property
    def raw(self) -> str:
        return self.text


@dataclass(frozen=True)
class Escape:
    """
    A single escape sequence, kept whole.

    `complete` is False when the input ended before the sequence's terminator,
    which is how callers spot a sequence split across chunk boundaries.
    """

    kind: EscapeKind
    raw: str
    complete: bool = True


TextRun = Union[Literal, Escape]


def _scan_escape(text: str, start: int) -> Escape:
    """Read one escape sequence starting at text[start] == ESC."""
    n = len(text)
    if start + 1 >= n:
        return Escape(EscapeKind.OTHER, text[start:], complete=False)

    intro = text[start + 1]
    if intro == '[':
        pos = start + 2
        while pos < n:
            if text[pos] in CSI_TERMINATORS:
                return Escape(EscapeKind.CSI, text[start:pos + 1])
            pos += 1
        return Escape(EscapeKind.CSI, text[start:], complete=False)

    if intro == ']':
        pos = start + 2
        while pos < n:
            ch = text[pos]
            if ch == BEL:
                return Escape(EscapeKind.OSC, text[start:pos + 1])
            if ch == ESC and pos + 1 < n and text[pos + 1] == '\\':
                return Escape(EscapeKind.OSC, text[start:pos + 2])
            pos += 1
        return Escape(EscapeKind.OSC, text[start:], complete=False)

    return Escape(EscapeKind.OTHER, text[start:start + 2])


def scan(text: str) -> Iterator[TextRun]:
    """
    Split text into literal runs and escape sequences.

    Never raises: malformed or truncated sequences come back as open
    (incomplete) escapes, and joining every run's `raw` reproduces `text`.
    """
    pos = 0
    n = len(text)
    while pos < n:
        esc = text.find(ESC, pos)
        if esc == -1:
            yield Literal(text[pos:])
            return
        if esc > pos:
            yield Literal(text[pos:esc])
        run = _scan_escape(text, esc)
        yield run
        pos = esc + len(run.raw)


class EscapeSequenceScanner:
    """
    Restartable view of a string as a sequence of TextRuns.

    Each iteration starts a fresh scan, so the same scanner can be walked
    any number of times.
    """

    def __init__(self, text: str):
        self.text = text

    def __iter__(self) -> Iterator[TextRun]:
        return scan(self.text)

    def runs(self) -> List[TextRun]:
        return list(self)

    def literals(self) -> Iterator[Literal]:
        return (run for run in self if isinstance(run, Literal))

    def escapes(self) -> Iterator[Escape]:
        return (run for run in self if isinstance(run, Escape))


def strip_escape_sequences(text: str) -> str:
    """Remove every escape sequence, leaving the literal text untouched."""
    return ''.join(run.text for run in scan(text) if isinstance(run, Literal))


def is_start_of_escape_sequence(text: str) -> bool:
    """Return True if the last character of text is ESC."""
    return text.endswith(ESC)


def is_part_of_escape_sequence(text: str) -> bool:
    """
    Return True if the last character of text belongs to an escape sequence.

    That covers open sequences still waiting for their terminator as well as
    a sequence whose terminator is the final character.
    """
    last = None
    for last in scan(text):
        pass
    return isinstance(last, Escape)
