# terminal/capability.py
import re
import sys
import termios
from dataclasses import dataclass
from typing import Optional, Union

from ..color.model import RGBColor
from ..logger import Logger
from ..settings import Settings, read_color_override, read_flag
from .device import (
    DEFAULT_DEVICE,
    TerminalDevice,
    has_controlling_terminal,
    is_interactive,
)

ESC = "\x1b"
BEL = "\x07"
ST = ESC + "\\"

OSC_FOREGROUND = 10
OSC_BACKGROUND = 11

RGB_RESPONSE = re.compile(
    r"rgb:([0-9a-fA-F]+)/([0-9a-fA-F]+)/([0-9a-fA-F]+)(?![0-9a-fA-F/])"
)


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a color query; falsy when no color could be determined."""

    color: Optional[RGBColor] = None
    source: str = "unavailable"

    @classmethod
    def ok(cls, color: RGBColor, source: str = "terminal") -> "ProbeResult":
        return cls(color=color, source=source)

    @classmethod
    def unavailable(cls) -> "ProbeResult":
        return cls()

    @property
    def available(self) -> bool:
        return self.color is not None

    def __bool__(self) -> bool:
        return self.available


def build_color_query(osc_code: int, in_tmux: bool = False) -> str:
    """
    Build the OSC color query for a terminal.

    Inside tmux the query is wrapped in a DCS passthrough envelope with every
    inner ESC doubled, otherwise tmux swallows it instead of forwarding it.
    """
    query = f"{ESC}]{osc_code};?{BEL}"
    if in_tmux:
        return f"{ESC}Ptmux;{query.replace(ESC, ESC * 2)}{ST}"
    return query


def parse_color_response(response: Union[bytes, str]) -> Optional[RGBColor]:
    """
    Extract the color from an OSC 10/11 reply such as
    ESC ] 11 ; rgb:1e1e/1e1e/2e2e BEL.

    Channels may carry 1 to 4 hex digits; only the two most significant are
    used, which maps 16-bit channels onto 0..255.
    """
    if isinstance(response, bytes):
        response = response.decode("ascii", errors="replace")
    match = RGB_RESPONSE.search(response)
    if not match:
        return None
    return RGBColor(*(int(channel[:2], 16) for channel in match.groups()))


class TerminalCapabilityProbe:
    """
    Asks the controlling terminal for its default colors.

    Never raises for I/O problems: anything that stops the exchange (no tty,
    CI, missing device, timeout, unparsable reply) yields
    ProbeResult.unavailable().
    """

    def __init__(self, settings: Optional[Settings] = None,
                 stdin=None, stdout=None,
                 device_factory=TerminalDevice,
                 tty_path: str = DEFAULT_DEVICE,
                 logger: Optional[Logger] = None):
        """
        Args:
            settings: Overrides and environment flags; read from os.environ if None
            stdin: Input stream checked for interactivity (sys.stdin if None)
            stdout: Output stream checked for interactivity (sys.stdout if None)
            device_factory: Callable returning a TerminalDevice-like context manager
            tty_path: Terminal device to talk to
            logger: Logger for debug output
        """
        # None: read only the variables a query needs, when it needs them
        self.settings = settings
        self._stdin = stdin
        self._stdout = stdout
        self.device_factory = device_factory
        self.tty_path = tty_path
        self.logger = logger or Logger(__name__)

    @property
    def stdin(self):
        return self._stdin if self._stdin is not None else sys.stdin

    @property
    def stdout(self):
        return self._stdout if self._stdout is not None else sys.stdout

    def _flag(self, field: str, name: str) -> bool:
        if self.settings is not None:
            return getattr(self.settings, field)
        return read_flag(name)

    def _color_override(self, osc_code: int) -> Optional[RGBColor]:
        if self.settings is not None:
            return self.settings.color_override(osc_code)
        return read_color_override(osc_code)

    def unavailable_reason(self) -> Optional[str]:
        """Return why probing can't happen right now, or None if it can."""
        if not (is_interactive(self.stdin) and is_interactive(self.stdout)):
            return "stdin/stdout is not a terminal"
        if self._flag("ci", "CI"):
            return "running under CI"
        if not has_controlling_terminal(self.tty_path):
            return f"{self.tty_path} is not available"
        return None

    def probe(self, osc_code: int) -> ProbeResult:
        """
        Query the terminal color for an OSC code.

        Args:
            osc_code: 10 for the foreground color, 11 for the background

        Returns:
            ProbeResult with the color and where it came from
        """
        if osc_code not in (OSC_FOREGROUND, OSC_BACKGROUND):
            raise ValueError(f"osc_code must be 10 or 11, got {osc_code!r}")

        override = self._color_override(osc_code)
        if override is not None:
            self.logger.debug(f"probe({osc_code}): using override {override}")
            return ProbeResult.ok(override, "override")

        reason = self.unavailable_reason()
        if reason:
            self.logger.debug(f"probe({osc_code}): skipped, {reason}")
            return ProbeResult.unavailable()

        query = build_color_query(osc_code, self._flag("in_tmux", "TMUX"))
        try:
            with self.device_factory(self.tty_path) as device:
                device.write(query.encode("ascii"))
                response = device.read_response()
        except (OSError, termios.error) as e:
            self.logger.debug(f"probe({osc_code}): terminal exchange failed: {e}")
            return ProbeResult.unavailable()

        color = parse_color_response(response)
        if color is None:
            self.logger.debug(f"probe({osc_code}): no color in response {response!r}")
            return ProbeResult.unavailable()

        self.logger.debug(f"probe({osc_code}): terminal reported {color}")
        return ProbeResult.ok(color, "terminal")

    def foreground_color(self) -> ProbeResult:
        return self.probe(OSC_FOREGROUND)

    def background_color(self) -> ProbeResult:
        return self.probe(OSC_BACKGROUND)


def probe(osc_code: int) -> ProbeResult:
    """Query the terminal using settings from the environment."""
    return TerminalCapabilityProbe().probe(osc_code)
