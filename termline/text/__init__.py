# text/__init__.py

from .scanner import (
    EscapeKind,
    Escape,
    Literal,
    TextRun,
    EscapeSequenceScanner,
    scan,
    strip_escape_sequences,
    is_start_of_escape_sequence,
    is_part_of_escape_sequence,
)
from .width import VisualWidthCalculator, visual_width
from .wrapper import WrapConfig, WordWrapEngine, wrap

__all__ = [
    'EscapeKind', 'Escape', 'Literal', 'TextRun', 'EscapeSequenceScanner', 'scan',
    'strip_escape_sequences', 'is_start_of_escape_sequence', 'is_part_of_escape_sequence',
    'VisualWidthCalculator', 'visual_width',
    'WrapConfig', 'WordWrapEngine', 'wrap',
]
