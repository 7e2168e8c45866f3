from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional

from .icons import Icon

# D-Bus signatures that hold a non-negative integer; booleans count as 0/1.
UNSIGNED_SIGNATURES = frozenset('byqut')
TEXT_SIGNATURES = frozenset('sog')


class PropertyValue:
    """A D-Bus property value tagged with its signature.

    The accessors never raise: a value of the wrong kind reads as None, so
    callers can treat "missing" and "wrong type" the same way.
    """

    def __init__(self, signature: str, value: Any):
        self.signature = signature
        self.value = value

    @classmethod
    def from_variant(cls, variant: Any) -> 'PropertyValue':
        # Variants may nest (signature 'v'); only the innermost value matters.
        while getattr(variant, 'signature', None) == 'v':
            variant = variant.value
        return cls(getattr(variant, 'signature', ''), getattr(variant, 'value', variant))

    def __repr__(self) -> str:
        return f"PropertyValue({self.signature!r}, {self.value!r})"

    def as_unsigned_integer(self) -> Optional[int]:
        if self.signature not in UNSIGNED_SIGNATURES:
            return None
        return int(self.value)

    def as_text(self) -> Optional[str]:
        if self.signature not in TEXT_SIGNATURES:
            return None
        return str(self.value)

    def as_boolean_like(self) -> Optional[bool]:
        number = self.as_unsigned_integer()
        if number is None:
            return None
        return number != 0


def lookup(properties: Optional[Mapping[str, Any]], name: str) -> Optional[PropertyValue]:
    """Fetch `name` from a property dict as a PropertyValue, if present."""
    if not properties or name not in properties:
        return None
    return PropertyValue.from_variant(properties[name])


@dataclass(frozen=True, order=True)
class Device:
    """A connected Bluetooth peripheral and its battery level.

    Records compare by name, then icon class, then power.
    """

    name: str
    icon: Icon
    power: int


def sort_devices(devices: Iterable[Device]) -> List[Device]:
    return sorted(devices)
