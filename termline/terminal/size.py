# terminal/size.py
import os
import re
import sys
import termios
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from ..errors import InvalidWidthError
from ..logger import Logger
from ..settings import read_columns
from .device import (
    DEFAULT_DEVICE,
    TerminalDevice,
    has_controlling_terminal,
    is_interactive,
)

WINDOW_SIZE_QUERY = "\x1b[18t"
WINDOW_SIZE_REPLY = re.compile(r"\x1b\[8;(\d+);(\d+)t")

# Columns kept free on the right when the width comes from the terminal.
WRAP_MARGIN = 5
FALLBACK_WRAP_WIDTH = 75


@dataclass
class TerminalSize:
    """Terminal dimensions."""

    columns: int
    lines: int


def parse_window_size(response: Union[bytes, str]) -> Optional[TerminalSize]:
    """Parse an ESC[8;rows;colst reply."""
    if isinstance(response, bytes):
        response = response.decode("ascii", errors="replace")
    match = WINDOW_SIZE_REPLY.search(response)
    if not match:
        return None
    return TerminalSize(columns=int(match.group(2)), lines=int(match.group(1)))


def query_window_size(stdout=None, device_factory=TerminalDevice,
                      tty_path: str = DEFAULT_DEVICE,
                      logger: Optional[Logger] = None) -> Optional[TerminalSize]:
    """
    Ask the terminal for its size in characters with the ESC[18t report.

    Returns None when stdout isn't a terminal, the device is missing, or the
    terminal doesn't answer within the read timeout.
    """
    logger = logger or Logger(__name__)
    stdout = stdout if stdout is not None else sys.stdout
    if not is_interactive(stdout) or not has_controlling_terminal(tty_path):
        return None
    try:
        with device_factory(tty_path) as device:
            device.write(WINDOW_SIZE_QUERY.encode("ascii"))
            response = device.read_response(terminators=(b"t",))
    except (OSError, termios.error) as e:
        logger.debug(f"query_window_size: terminal exchange failed: {e}")
        return None
    size = parse_window_size(response)
    if size is None:
        logger.debug(f"query_window_size: no size in response {response!r}")
    return size


def os_columns(stdout=None) -> int:
    """
    Columns the OS reports for stdout's terminal, 0 when it isn't one.
    Ignores the COLUMNS variable.
    """
    stdout = stdout if stdout is not None else sys.stdout
    try:
        return os.get_terminal_size(stdout.fileno()).columns
    except (AttributeError, TypeError, ValueError, OSError):
        return 0


def resolve_wrap_width(environ: Optional[Mapping[str, str]] = None,
                       stdout=None,
                       device_factory=TerminalDevice,
                       tty_path: str = DEFAULT_DEVICE,
                       logger: Optional[Logger] = None) -> int:
    """
    Work out a wrap width when the caller didn't give one.

    Tried in order, each minus WRAP_MARGIN: the COLUMNS setting, the
    terminal's answer to ESC[18t, the size the OS reports for the terminal.
    Falls back to FALLBACK_WRAP_WIDTH.

    Raises:
        InvalidWidthError: if COLUMNS is set but leaves no room to wrap into.
    """
    logger = logger or Logger(__name__)

    columns = read_columns(environ)
    if columns is not None:
        width = columns - WRAP_MARGIN
        if width < 1:
            raise InvalidWidthError(
                f"COLUMNS={columns} leaves no room for text after a {WRAP_MARGIN} column margin"
            )
        logger.debug(f"resolve_wrap_width: using COLUMNS: {width}")
        return width

    size = query_window_size(stdout, device_factory, tty_path, logger)
    if size is not None and size.columns > WRAP_MARGIN:
        logger.debug(f"resolve_wrap_width: got columns from terminal query: {size.columns}")
        return size.columns - WRAP_MARGIN

    reported = os_columns(stdout)
    if reported > WRAP_MARGIN:
        logger.debug(f"resolve_wrap_width: got columns from the OS: {reported}")
        return reported - WRAP_MARGIN

    logger.debug(f"resolve_wrap_width: using hard-coded fallback: {FALLBACK_WRAP_WIDTH}")
    return FALLBACK_WRAP_WIDTH
