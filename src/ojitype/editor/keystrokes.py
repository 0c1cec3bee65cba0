from __future__ import annotations

import typing

import msgspec

from ..commontypes import VOWEL_LENGTH_CODEPOINT, Consonant, Vowel, WDotSide


class Keystroke(msgspec.Struct, frozen=True, tag=True, kw_only=True):
    shift: bool = False


class SystemKey(Keystroke, frozen=True):
    pass


class FlushKey(Keystroke, frozen=True):
    pass


class AtomicKey(Keystroke, frozen=True):
    symbol: str


class EasternFinalKey(Keystroke, frozen=True):
    consonant: Consonant
    # the consonant's bare-a syllable stands in for it inside composition keys
    compose: str
    symbol: str


class WDotKey(Keystroke, frozen=True):
    side: WDotSide
    compose: str
    # both sides flush to the same W final
    symbol: str


class LengthKey(Keystroke, frozen=True):
    compose: str = chr(VOWEL_LENGTH_CODEPOINT)


class VowelKey(Keystroke, frozen=True):
    vowel: Vowel
    compose: str


AnyKeystroke = typing.Union[SystemKey, FlushKey, AtomicKey, EasternFinalKey, WDotKey, LengthKey, VowelKey]
Composable = typing.Union[EasternFinalKey, WDotKey, LengthKey]
