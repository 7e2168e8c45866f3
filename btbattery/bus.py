"""BlueZ access over the D-Bus system bus (dbus-next).

Only the two requests the battery report needs are exposed: the
ObjectManager dump of the whole `org.bluez` tree and a single
`org.freedesktop.DBus.Properties.Get`. Both are sent as low-level
`Message` calls and bounded by a fixed timeout.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from dbus_next import Message, MessageType, Variant
from dbus_next.aio import MessageBus
from dbus_next.constants import BusType
from dbus_next.errors import DBusError

logger = logging.getLogger(__name__)

BLUEZ_SERVICE = 'org.bluez'
BLUEZ_ROOT = '/'
DEVICE_INTERFACE = 'org.bluez.Device1'
BATTERY_INTERFACE = 'org.bluez.Battery1'
OBJECT_MANAGER_INTERFACE = 'org.freedesktop.DBus.ObjectManager'
PROPERTIES_INTERFACE = 'org.freedesktop.DBus.Properties'

DEFAULT_ADAPTER = 'hci0'
DEFAULT_TIMEOUT = 5.0

ManagedObjects = Dict[str, Dict[str, Dict[str, Variant]]]


class BluezError(Exception):
    """Base class for errors raised by btbattery itself."""


class PropertyTypeError(BluezError):
    """A property came back with a D-Bus type other than the expected one."""

    def __init__(self, path: str, interface: str, name: str, expected: str, actual: str):
        super().__init__(
            f"{interface}.{name} on {path} has type '{actual}', expected '{expected}'")
        self.path = path
        self.interface = interface
        self.name = name
        self.expected = expected
        self.actual = actual


class PropertyValueError(BluezError):
    """A property has the right type but a value no device record can hold."""


def device_path(address: str, adapter: str = DEFAULT_ADAPTER) -> str:
    """Object path BlueZ uses for the device with `address` on `adapter`.

    `aa:bb:cc:11:22:33` on hci0 becomes `/org/bluez/hci0/dev_AA_BB_CC_11_22_33`.
    """
    node = address.upper().replace(':', '_').replace('-', '_')
    return f"/org/bluez/{adapter}/dev_{node}"


class BluezBus:
    """Thin request/response client for the BlueZ service.

    Use `BluezBus.connect()` as an async context manager so the underlying
    connection is always released:

        async with await BluezBus.connect() as bluez:
            objects = await bluez.get_managed_objects()
    """

    def __init__(self, bus: MessageBus, timeout: float = DEFAULT_TIMEOUT):
        self.bus = bus
        self.timeout = timeout

    @classmethod
    async def connect(cls, timeout: float = DEFAULT_TIMEOUT) -> 'BluezBus':
        bus = MessageBus(bus_type=BusType.SYSTEM)
        logger.debug("Connecting to the system bus")
        try:
            await asyncio.wait_for(bus.connect(), timeout=timeout)
        except BaseException:
            bus.disconnect()
            raise
        return cls(bus, timeout=timeout)

    async def __aenter__(self) -> 'BluezBus':
        return self

    async def __aexit__(self, *exc_info) -> None:
        self.disconnect()

    def disconnect(self) -> None:
        self.bus.disconnect()

    async def _call(self, path: str, interface: str, member: str,
                    signature: str = '', body: Optional[list] = None) -> Any:
        msg = Message(destination=BLUEZ_SERVICE, path=path, interface=interface,
                      member=member, signature=signature, body=body or [])
        logger.debug("Calling %s.%s on %s", interface, member, path)
        reply = await asyncio.wait_for(self.bus.call(msg), timeout=self.timeout)
        if reply.message_type == MessageType.ERROR:
            text = reply.body[0] if reply.body else ''
            raise DBusError(reply.error_name, text, reply=reply)
        return reply.body[0] if reply.body else None

    async def get_managed_objects(self) -> ManagedObjects:
        return await self._call(BLUEZ_ROOT, OBJECT_MANAGER_INTERFACE, 'GetManagedObjects')

    async def get_property(self, path: str, interface: str, name: str) -> Variant:
        return await self._call(path, PROPERTIES_INTERFACE, 'Get',
                                signature='ss', body=[interface, name])
