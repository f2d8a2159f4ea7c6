"""
Talking to the controlling terminal.

Everything here degrades quietly: without a tty, under CI, or when the
terminal doesn't answer in time, callers get an "unavailable" result rather
than an exception, and the terminal mode is always put back the way it was.
"""

from .device import TerminalDevice, has_controlling_terminal  # noqa
from .capability import (  # noqa
    ProbeResult,
    TerminalCapabilityProbe,
    build_color_query,
    parse_color_response,
    probe,
)
from .size import TerminalSize, query_window_size, resolve_wrap_width  # noqa
