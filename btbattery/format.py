"""Text rendering for device listings."""
from __future__ import annotations

import html
from enum import Enum
from typing import Iterable

from .device import Device, sort_devices


class DeviceFormat(Enum):
    LONG = 'long'
    SHORT = 'short'
    NARROW = 'narrow'

    @classmethod
    def default(cls) -> 'DeviceFormat':
        return cls.NARROW


def long(device: Device, markup: bool = False) -> str:
    name = html.escape(device.name) if markup else device.name
    return f"{device.icon.glyph(markup)}{name} ({device.power}%)"


def short(device: Device) -> str:
    return f"{device.name} {device.power}%"


def narrow(device: Device, markup: bool = False) -> str:
    return f"{device.icon.glyph(markup)}{device.power}%"


def render_device(device: Device, fmt: DeviceFormat = DeviceFormat.NARROW,
                  markup: bool = False) -> str:
    if fmt is DeviceFormat.LONG:
        return long(device, markup)
    if fmt is DeviceFormat.SHORT:
        return short(device)
    return narrow(device, markup)


def separator(fmt: DeviceFormat) -> str:
    return '  ' if fmt is DeviceFormat.SHORT else ' '


def render_devices(devices: Iterable[Device], fmt: DeviceFormat = DeviceFormat.NARROW,
                   markup: bool = False) -> str:
    """Render all devices on one line, sorted, newline-terminated.

    An empty listing renders as '' so a status bar shows nothing.
    """
    entries = [render_device(device, fmt, markup) for device in sort_devices(devices)]
    if not entries:
        return ''
    return separator(fmt).join(entries) + '\n'
