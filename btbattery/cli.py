"""Print battery levels of connected Bluetooth devices on one line.

Usage: `btbattery [-l | -s | -n] [-m] [ADDRESS ...]`

Without addresses every connected device BlueZ knows about is listed;
with addresses only those devices are queried. Output is meant for a
terminal or a status bar block (use `--markup` for Pango-aware bars such
as i3blocks with `markup=pango`).
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import re
import string
import sys
from typing import List, Optional

from dbus_next.errors import AuthError, DBusError, InvalidAddressError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .bus import DEFAULT_ADAPTER, DEFAULT_TIMEOUT, BluezError
from .format import DeviceFormat, render_devices
from .retrieve import fetch_devices

logger = logging.getLogger(__name__)

PROG = 'btbattery'
EXIT_BUS_ERROR = 4

_ADDRESS_RE = re.compile(r'^[0-9A-Fa-f:_-]+$')


def address(text: str) -> str:
    if not _ADDRESS_RE.match(text) or not set(text) & set(string.hexdigits):
        raise argparse.ArgumentTypeError(f"not a Bluetooth address: {text!r}")
    return text


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=PROG,
        description="Show battery levels of connected Bluetooth devices.")
    modes = ap.add_mutually_exclusive_group()
    modes.add_argument('--long', '--full', '-l', '-f', dest='format', action='store_const',
                       const=DeviceFormat.LONG, help='icon, name and percentage')
    modes.add_argument('--short', '-s', dest='format', action='store_const',
                       const=DeviceFormat.SHORT, help='name and percentage')
    modes.add_argument('--narrow', '-n', dest='format', action='store_const',
                       const=DeviceFormat.NARROW, help='icon and percentage (default)')
    ap.add_argument('--markup', '-m', action='store_true',
                    help='emit Pango markup icons instead of emoji')
    ap.add_argument('--adapter', '-i', default=DEFAULT_ADAPTER,
                    help='controller the given addresses belong to (default: %(default)s)')
    ap.add_argument('--verbose', '-v', action='store_true', help='log debug output to stderr')
    ap.add_argument('--version', '-V', action='version', version=f'{PROG} {__version__}')
    ap.add_argument('addresses', metavar='ADDRESS', nargs='*', type=address,
                    help='only query these devices, e.g. AA:BB:CC:11:22:33')
    return ap


def setup_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    err_console = Console(stderr=True)
    setup_logging(args.verbose, err_console)

    try:
        devices = fetch_devices(args.addresses, adapter=args.adapter, timeout=DEFAULT_TIMEOUT)
    except asyncio.TimeoutError:
        err_console.print(f"[red]Timed out talking to BlueZ after {DEFAULT_TIMEOUT:g}s[/]")
        return EXIT_BUS_ERROR
    except (DBusError, BluezError, AuthError, InvalidAddressError, OSError) as e:
        logger.debug("Device query failed", exc_info=True)
        err_console.print(f"[red]Failed to query BlueZ via D-Bus: {escape(str(e))}[/]")
        return EXIT_BUS_ERROR

    fmt = args.format or DeviceFormat.default()
    sys.stdout.write(render_devices(devices, fmt, args.markup))
    sys.stdout.flush()
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
