"""
btbattery - battery levels of connected Bluetooth devices, read from BlueZ
"""

from .device import Device, sort_devices
from .format import DeviceFormat, render_device, render_devices
from .icons import Icon
from .retrieve import bulk_devices, fetch_devices, targeted_devices

__version__ = "0.1.0"
__all__ = [
    "Device",
    "DeviceFormat",
    "Icon",
    "bulk_devices",
    "fetch_devices",
    "render_device",
    "render_devices",
    "sort_devices",
    "targeted_devices",
]
