# terminal/device.py
import os
import stat
import time
import termios
import tty
from typing import Iterable, Optional

DEFAULT_DEVICE = "/dev/tty"
READ_TIMEOUT = 0.1  # seconds
READ_LIMIT = 100  # bytes

BEL = b"\x07"
ST = b"\x1b\\"


def has_controlling_terminal(path: str = DEFAULT_DEVICE) -> bool:
    """Return True if path exists and is a character device."""
    try:
        mode = os.stat(path).st_mode
    except OSError:
        return False
    return stat.S_ISCHR(mode)


def is_interactive(stream) -> bool:
    """Return True if stream is attached to a terminal."""
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


class TerminalDevice:
    """
    Exclusive, short-lived access to the controlling terminal.

    Entering the context opens the device, remembers the current terminal
    mode and switches to raw mode with VMIN=0 and VTIME set from `timeout`,
    so every read returns after at most `timeout` seconds. Leaving the
    context restores the remembered mode and closes the device, whatever
    happened inside the block.
    """

    def __init__(self, path: str = DEFAULT_DEVICE, timeout: float = READ_TIMEOUT,
                 limit: int = READ_LIMIT):
        self.path = path
        self.timeout = timeout
        self.limit = limit
        self._fd: Optional[int] = None
        self._saved_mode = None
        self._entered = False

    @property
    def fd(self) -> Optional[int]:
        return self._fd

    def __enter__(self):
        if self._entered:
            raise RuntimeError("Can only enter the terminal device once.")
        self._entered = True
        self._fd = os.open(self.path, os.O_RDWR | os.O_NOCTTY)
        try:
            self._store_terminal_mode()
            self._set_terminal_mode()
        except BaseException:
            self._close()
            raise
        return self

    def __exit__(self, *args):
        self._close()

    def _store_terminal_mode(self) -> None:
        self._saved_mode = termios.tcgetattr(self._fd)

    def _set_terminal_mode(self) -> None:
        # Same as `stty raw -echo min 0 time N`
        mode = termios.tcgetattr(self._fd)
        tty.cfmakeraw(mode)
        mode[tty.CC][termios.VMIN] = 0
        mode[tty.CC][termios.VTIME] = max(1, round(self.timeout * 10))
        termios.tcsetattr(self._fd, termios.TCSANOW, mode)

    def _reset_terminal_mode(self) -> None:
        if self._saved_mode is not None:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._saved_mode)
            self._saved_mode = None

    def _close(self) -> None:
        try:
            if self._fd is not None:
                self._reset_terminal_mode()
        finally:
            if self._fd is not None:
                os.close(self._fd)
                self._fd = None
            self._entered = False

    def write(self, data: bytes) -> None:
        """Write all of data to the terminal."""
        view = memoryview(data)
        while view:
            written = os.write(self._fd, view)
            view = view[written:]

    def read_response(self, terminators: Iterable[bytes] = (BEL, ST)) -> bytes:
        """
        Read a reply until a terminator shows up, the byte limit is hit,
        or the terminal stays silent for one read timeout.

        Returns:
            The bytes received, possibly empty.
        """
        terminators = tuple(terminators)
        deadline = time.monotonic() + self.timeout
        buf = bytearray()
        while len(buf) < self.limit:
            chunk = os.read(self._fd, self.limit - len(buf))
            if not chunk:
                break
            buf.extend(chunk)
            if any(t in buf for t in terminators):
                break
            if time.monotonic() >= deadline:
                break
        return bytes(buf)
