from typing import Any, Dict, Optional, Tuple

import pytest
from dbus_next import Variant
from dbus_next.errors import DBusError

from btbattery.bus import BATTERY_INTERFACE, DEVICE_INTERFACE, device_path


class FakeBluez:
    """In-memory stand-in for BluezBus."""

    def __init__(self, objects: Optional[Dict[str, Any]] = None,
                 properties: Optional[Dict[Tuple[str, str, str], Variant]] = None):
        self.objects = objects or {}
        self.properties = properties or {}
        self.calls = []
        self.disconnected = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.disconnect()

    def disconnect(self):
        self.disconnected = True

    async def get_managed_objects(self):
        self.calls.append('GetManagedObjects')
        return self.objects

    async def get_property(self, path: str, interface: str, name: str) -> Variant:
        self.calls.append((path, interface, name))
        try:
            return self.properties[(path, interface, name)]
        except KeyError:
            raise DBusError('org.freedesktop.DBus.Error.InvalidArgs',
                            f'No such property {name}') from None

    def add_device(self, address: str, connected: bool = True, name: Optional[str] = None,
                   icon: Optional[str] = None, percentage: Optional[int] = None):
        path = device_path(address)
        self.properties[(path, DEVICE_INTERFACE, 'Connected')] = Variant('b', connected)
        if name is not None:
            self.properties[(path, DEVICE_INTERFACE, 'Name')] = Variant('s', name)
        if icon is not None:
            self.properties[(path, DEVICE_INTERFACE, 'Icon')] = Variant('s', icon)
        if percentage is not None:
            self.properties[(path, BATTERY_INTERFACE, 'Percentage')] = Variant('y', percentage)
        return path


def managed_device(connected=True, name='Headphones', icon='audio-headset', percentage=80):
    """Interfaces of one BlueZ device object; pass None to leave a property out."""
    device = {'Address': Variant('s', 'AA:BB:CC:11:22:33')}
    if connected is not None:
        device['Connected'] = Variant('b', connected)
    if name is not None:
        device['Name'] = Variant('s', name)
    if icon is not None:
        device['Icon'] = Variant('s', icon)
    interfaces = {DEVICE_INTERFACE: device}
    if percentage is not None:
        interfaces[BATTERY_INTERFACE] = {'Percentage': Variant('y', percentage)}
    return interfaces


@pytest.fixture
def bluez():
    return FakeBluez()
