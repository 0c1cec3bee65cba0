from __future__ import annotations

import enum

import msgspec

from .keycodes import KeyCode


class KeyboardDisconnect(msgspec.Struct, frozen=True):
    pass


class KeyPress(enum.IntEnum):
    RELEASED = 0
    PRESSED = 1
    REPEATED = 2


class KeyEvent(msgspec.Struct, frozen=True):
    key: KeyCode
    press: KeyPress

    @classmethod
    def pressed(cls, key: KeyCode):
        return cls(key=key, press=KeyPress.PRESSED)

    @classmethod
    def released(cls, key: KeyCode):
        return cls(key=key, press=KeyPress.RELEASED)


class ModifierAnnotation(msgspec.Struct, frozen=True):
    alt: bool = False
    ctrl: bool = False
    meta: bool = False
    shift: bool = False
    capslock: bool = False

    @property
    def is_system(self):
        # capslock never counts
        return self.alt or self.ctrl or self.meta


class AnnotatedKeyEvent(msgspec.Struct, frozen=True):
    key: KeyCode
    press: KeyPress
    annotation: ModifierAnnotation
    is_modifier: bool = False
