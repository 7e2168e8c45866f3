"""Glyphs for freedesktop device icon classes.

https://specifications.freedesktop.org/icon-naming-spec/latest/#devices
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

# Each glyph carries its own trailing space so an unknown class renders as
# nothing at all. Glyphs ending in U+FE0F get the space too rather than being
# padded to two code points.
EMOJI: Dict[str, str] = {
    'audio-headset': '\U0001f3a7 ',
    'phone': '\U0001f4f1 ',
    'pda': '\U0001f4f1 ',
    'input-keyboard': '\u2328\ufe0f ',
    'input-mouse': '\U0001f5b1\ufe0f ',
    'input-gaming': '\U0001f3ae ',
    'input-tablet': '\U0001f590\ufe0f ',
    'multimedia-player': '\U0001f4fb ',
    'printer': '\U0001f5a8\ufe0f ',
    'scanner': '\U0001f5a8\ufe0f ',
}

MARKUP_FONT = 'Font Awesome 6 Free'

# Font Awesome symbol name and code point per icon class.
SYMBOLS: Dict[str, Tuple[str, str]] = {
    'audio-headset': ('headphones', '\uf025'),
    'phone': ('mobile-screen-button', '\uf3cd'),
    'pda': ('mobile-screen-button', '\uf3cd'),
    'input-keyboard': ('keyboard', '\uf11c'),
    'input-mouse': ('computer-mouse', '\uf8cc'),
    'input-gaming': ('gamepad', '\uf11b'),
    'input-tablet': ('tablet-screen-button', '\uf3fa'),
    'multimedia-player': ('music', '\uf001'),
    'printer': ('print', '\uf02f'),
    'scanner': ('fax', '\uf1ac'),
}


def _span(code_point: str) -> str:
    return f'<span font_family="{MARKUP_FONT}" weight="heavy">{code_point}</span> '


MARKUP: Dict[str, str] = {
    icon_class: _span(code_point) for icon_class, (_, code_point) in SYMBOLS.items()
}


@dataclass(frozen=True, order=True)
class Icon:
    """A freedesktop icon class as reported by BlueZ, e.g. `input-mouse`."""

    name: str

    @classmethod
    def parse(cls, text: str) -> 'Icon':
        # Any string is a valid icon class; unknown ones just have no glyph.
        return cls(text)

    def __str__(self) -> str:
        return self.name

    def emoji(self) -> Optional[str]:
        return EMOJI.get(self.name)

    def markup(self) -> Optional[str]:
        return MARKUP.get(self.name)

    def glyph(self, markup: bool = False) -> str:
        """Glyph for this icon class in the requested encoding, or ''."""
        found = self.markup() if markup else self.emoji()
        return found or ''
