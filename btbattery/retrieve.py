"""Find connected Bluetooth devices that report a battery level.

Two strategies produce the same `Device` records:

* `bulk_devices` reads the whole BlueZ object tree once and quietly skips
  anything that is not a connected device with a name, icon and battery.
* `targeted_devices` asks BlueZ about specific addresses. A device that is
  not connected is skipped, but any other unreadable property is an error,
  since the caller named that device explicitly.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional, Sequence

from .bus import (
    BATTERY_INTERFACE,
    DEFAULT_ADAPTER,
    DEFAULT_TIMEOUT,
    DEVICE_INTERFACE,
    BluezBus,
    ManagedObjects,
    PropertyTypeError,
    PropertyValueError,
    device_path,
)
from .device import Device, lookup
from .icons import Icon

logger = logging.getLogger(__name__)


def decode_device(interfaces: Mapping[str, Mapping[str, Any]]) -> Optional[Device]:
    """Build a Device from one managed object's interfaces, or return None."""
    props = interfaces.get(DEVICE_INTERFACE)
    if props is None:
        return None

    connected_value = lookup(props, 'Connected')
    connected = bool(connected_value and connected_value.as_boolean_like())

    name_value = lookup(props, 'Name')
    name = name_value.as_text() if name_value else None
    if not name:
        return None

    icon_value = lookup(props, 'Icon')
    icon_text = icon_value.as_text() if icon_value else None
    if icon_text is None:
        return None
    icon = Icon.parse(icon_text)

    power_value = lookup(interfaces.get(BATTERY_INTERFACE), 'Percentage')
    power = power_value.as_unsigned_integer() if power_value else None
    if power is None:
        return None

    if not connected:
        return None
    return Device(name=name, icon=icon, power=power)


def decode_managed_objects(objects: ManagedObjects) -> List[Device]:
    devices = []
    for path, interfaces in objects.items():
        device = decode_device(interfaces)
        if device is None:
            if DEVICE_INTERFACE in interfaces:
                logger.debug("Skipping %s: not connected or no name, icon or battery", path)
            continue
        devices.append(device)
    return devices


async def bulk_devices(bluez: BluezBus) -> List[Device]:
    objects = await bluez.get_managed_objects()
    logger.debug("BlueZ reported %d managed objects", len(objects))
    return decode_managed_objects(objects)


async def _get_typed(bluez: BluezBus, path: str, interface: str, name: str, signature: str) -> Any:
    variant = await bluez.get_property(path, interface, name)
    if variant.signature != signature:
        raise PropertyTypeError(path, interface, name, signature, variant.signature)
    return variant.value


async def read_device(bluez: BluezBus, address: str,
                      adapter: str = DEFAULT_ADAPTER) -> Optional[Device]:
    """Read one device by address; None if it is not connected.

    Errors from the bus and mistyped properties propagate to the caller.
    """
    path = device_path(address, adapter)
    connected = await _get_typed(bluez, path, DEVICE_INTERFACE, 'Connected', 'b')
    if not connected:
        logger.debug("Skipping %s: not connected", address)
        return None

    power = await _get_typed(bluez, path, BATTERY_INTERFACE, 'Percentage', 'y')
    name = await _get_typed(bluez, path, DEVICE_INTERFACE, 'Name', 's')
    icon = await _get_typed(bluez, path, DEVICE_INTERFACE, 'Icon', 's')
    if not name:
        raise PropertyValueError(f"{DEVICE_INTERFACE}.Name on {path} is empty")
    return Device(name=name, icon=Icon.parse(icon), power=power)


async def targeted_devices(bluez: BluezBus, addresses: Sequence[str],
                           adapter: str = DEFAULT_ADAPTER) -> List[Device]:
    devices = []
    for address in addresses:
        device = await read_device(bluez, address, adapter)
        if device is not None:
            devices.append(device)
    return devices


async def _fetch_devices(addresses: Sequence[str], adapter: str, timeout: float) -> List[Device]:
    async with await BluezBus.connect(timeout=timeout) as bluez:
        if addresses:
            return await targeted_devices(bluez, addresses, adapter)
        return await bulk_devices(bluez)


def fetch_devices(addresses: Sequence[str] = (), adapter: str = DEFAULT_ADAPTER,
                  timeout: float = DEFAULT_TIMEOUT) -> List[Device]:
    """Synchronous entry point: targeted lookup when addresses are given, else bulk."""
    return asyncio.run(_fetch_devices(addresses, adapter, timeout))
