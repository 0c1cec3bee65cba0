# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Keyboard layouts: which physical key produces which syllabics keystroke.

A keymap assigns each key a role string, resolved against the syllabary so the
keystrokes carry the exact characters they compose and emit:

    vowel:a           a vowel key
    final:p           eastern final; composes as the consonant's a-syllable
    western:p         western final (atomic)
    common:h          common final (atomic)
    alternate:l       alternate final (atomic)
    symbol:full_stop  punctuation from the table (atomic)
    ghost:zero_width_joiner
    text:<chars>      literal text such as a space (atomic)
    wdot:left         w-dot; also wdot:right
    length            long vowel dot
    flush             the flush key
"""
from __future__ import annotations

import logging
import types
import typing

import msgspec

from ..commontypes import (
    WDOT_CODEPOINTS,
    AlternateConsonant,
    CommonConsonant,
    Consonant,
    OjitypeError,
    Vowel,
    WDotSide,
)
from ..table.definitions import (
    AlternateFinal,
    CommonFinal,
    EasternFinal,
    Ghost,
    Punctuation,
    Syllable,
    WesternFinal,
)
from .keystrokes import AtomicKey, EasternFinalKey, FlushKey, LengthKey, SystemKey, VowelKey, WDotKey

if typing.TYPE_CHECKING:
    import collections.abc

    from ..device.hwtypes import AnnotatedKeyEvent
    from ..device.keycodes import KeyCode
    from ..table.syllabary import Syllabary
    from .keystrokes import AnyKeystroke

logger = logging.getLogger(__name__)

WDOT_SIDES = {"left": WDotSide.LEFT, "right": WDotSide.RIGHT}


class LayoutError(OjitypeError):
    pass


def resolve_role(role: str, syllabary: Syllabary) -> AnyKeystroke:
    kind, _, arg = role.partition(":")
    try:
        match kind:
            case "vowel":
                vowel = Vowel(arg)
                return VowelKey(vowel=vowel, compose=syllabary.character_for(Syllable(vowel=vowel)))
            case "final":
                consonant = Consonant(arg)
                return EasternFinalKey(
                    consonant=consonant,
                    compose=syllabary.character_for(Syllable(consonant=consonant, vowel=Vowel.A)),
                    symbol=syllabary.character_for(EasternFinal(consonant=consonant)),
                )
            case "western":
                return AtomicKey(symbol=syllabary.character_for(WesternFinal(consonant=Consonant(arg))))
            case "common":
                return AtomicKey(symbol=syllabary.character_for(CommonFinal(consonant=CommonConsonant(arg))))
            case "alternate":
                return AtomicKey(symbol=syllabary.character_for(AlternateFinal(consonant=AlternateConsonant(arg))))
            case "symbol":
                return AtomicKey(symbol=syllabary.character_for(Punctuation(name=arg)))
            case "ghost":
                return AtomicKey(symbol=syllabary.character_for(Ghost(name=arg)))
            case "text" if arg:
                return AtomicKey(symbol=arg)
            case "wdot":
                side = WDOT_SIDES[arg]
                return WDotKey(
                    side=side,
                    compose=chr(WDOT_CODEPOINTS[side]),
                    symbol=syllabary.character_for(CommonFinal(consonant=CommonConsonant.W)),
                )
            case "length" if not arg:
                return LengthKey()
            case "flush" if not arg:
                return FlushKey()
    except (KeyError, ValueError) as exc:
        raise LayoutError(f"Cannot resolve keymap role {role!r}") from exc
    raise LayoutError(f"Unknown keymap role {role!r}")


class Layout:
    def __init__(self, keys: collections.abc.Mapping[KeyCode, AnyKeystroke]):
        self.keys = types.MappingProxyType(dict(keys))

    @classmethod
    def from_keymaps(cls, keymaps: collections.abc.Mapping[KeyCode, str], syllabary: Syllabary) -> Layout:
        layout = cls({key: resolve_role(role, syllabary) for key, role in keymaps.items()})
        logger.debug("Resolved layout with %d keys", len(layout.keys))
        return layout

    def classify(self, event: AnnotatedKeyEvent) -> typing.Optional[AnyKeystroke]:
        "Classify a key press, or return None for a bare modifier key."
        if event.is_modifier:
            return None
        if event.annotation.is_system:
            return SystemKey()
        keystroke = self.keys.get(event.key)
        if keystroke is None:
            return SystemKey()
        if event.annotation.shift:
            return msgspec.structs.replace(keystroke, shift=True)
        return keystroke
