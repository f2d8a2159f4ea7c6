# cli.py

import argparse
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .color.model import RGBColor, contrast_ratio, luminance
from .color.palette import NAMED_COLORS
from .errors import ConfigurationError
from .logger import Logger
from .terminal.capability import TerminalCapabilityProbe
from .text.scanner import strip_escape_sequences
from .text.width import visual_width
from .text.wrapper import wrap
from .theme import ThemeDetector

EXIT_UNAVAILABLE = 1
EXIT_CONFIG = 2


def _read_text(args) -> str:
    """TEXT argument, or everything on stdin when it's omitted."""
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def _cmd_wrap(args, logger: Logger) -> int:
    sys.stdout.write(wrap(_read_text(args), width=args.width,
                          tab_width=args.tab_width, logger=logger) + "\n")
    return 0


def _cmd_width(args, logger: Logger) -> int:
    print(visual_width(_read_text(args), tab_width=args.tab_width))
    return 0


def _cmd_strip(args, logger: Logger) -> int:
    sys.stdout.write(strip_escape_sequences(_read_text(args)))
    return 0


def _cmd_color(args, logger: Logger) -> int:
    probe = TerminalCapabilityProbe(logger=logger)
    result = probe.foreground_color() if args.command == "fg" else probe.background_color()
    if not result:
        return EXIT_UNAVAILABLE
    print(result.color)
    return 0


def _cmd_theme(args, logger: Logger) -> int:
    print(ThemeDetector(logger=logger).detect().value)
    return 0


def _cmd_luminance(args, logger: Logger) -> int:
    color = RGBColor(*args.rgb)
    print(luminance(color.r, color.g, color.b))
    return 0


def _cmd_contrast(args, logger: Logger) -> int:
    print(contrast_ratio(RGBColor.parse(args.first), RGBColor.parse(args.second)))
    return 0


def _cmd_colors(args, logger: Logger) -> int:
    console = Console(highlight=False)
    table = Table(title="Named colors")
    table.add_column("name")
    table.add_column("foreground")
    table.add_column("background")
    table.add_column("sample")
    for name, pair in NAMED_COLORS.items():
        style = " ".join(
            part for part in (
                pair.fg.hex if pair.fg else "",
                f"on {pair.bg.hex}" if pair.bg else "",
            ) if part
        )
        table.add_row(
            name,
            str(pair.fg) if pair.fg else "-",
            str(pair.bg) if pair.bg else "-",
            Text(" sample ", style=style),
        )
    console.print(table)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termline",
        description="Terminal-aware text wrapping and color detection",
    )
    parser.add_argument('--enable-logging',
        action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stdout)')

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("wrap", help="Wrap text on word boundaries")
    p.add_argument("text", nargs="?", help="Text to wrap (stdin if omitted)")
    p.add_argument("-w", "--width", type=int, help="Target width (default: from terminal)")
    p.add_argument("-t", "--tab-width", type=int, help="Columns per tab (default: TAB_WIDTH or 4)")
    p.set_defaults(func=_cmd_wrap)

    p = sub.add_parser("width", help="Print the visual width of text")
    p.add_argument("text", nargs="?", help="Text to measure (stdin if omitted)")
    p.add_argument("-t", "--tab-width", type=int, help="Columns per tab (default: TAB_WIDTH or 4)")
    p.set_defaults(func=_cmd_width)

    p = sub.add_parser("strip", help="Remove escape sequences from text")
    p.add_argument("text", nargs="?", help="Text to clean (stdin if omitted)")
    p.set_defaults(func=_cmd_strip)

    p = sub.add_parser("fg", help="Print the terminal foreground color as 'R G B'")
    p.set_defaults(func=_cmd_color)

    p = sub.add_parser("bg", help="Print the terminal background color as 'R G B'")
    p.set_defaults(func=_cmd_color)

    p = sub.add_parser("theme", help="Print 'dark' or 'light'")
    p.set_defaults(func=_cmd_theme)

    p = sub.add_parser("luminance", help="Print the luminance of a color (0-255)")
    p.add_argument("rgb", nargs=3, type=int, metavar="N", help="Red, green and blue channels")
    p.set_defaults(func=_cmd_luminance)

    p = sub.add_parser("contrast", help="Print the contrast ratio (x100) of two colors")
    p.add_argument("first", help="First color as 'R G B'")
    p.add_argument("second", help="Second color as 'R G B'")
    p.set_defaults(func=_cmd_contrast)

    p = sub.add_parser("colors", help="Show the named colors")
    p.set_defaults(func=_cmd_colors)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = Logger("termline", args.enable_logging, args.log_file)
    try:
        return args.func(args, logger)
    except ConfigurationError as e:
        print(f"termline: {e}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    sys.exit(main())
