# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
"""Parsing of the syllabics character data table.

Each non-blank line of the table is a record: four hex digits giving a codepoint,
a space, and a definition. The definition shapes are tried in order and the first
match wins:

    1400 * hyphen       punctuation or other visible symbol
    200B ~ zwsp         ghost (invisible) character
    1449 p              eastern final
    144A 'p             western final
    1424 w              common final (w or h)
    1429 "y             alternate final (y, l or r)
    1446 pw+a           syllable: [consonant][w|u][+]vowel

For syllables, ``w`` is a w-dot on the left, ``u`` a w-dot on the right and ``+``
a long vowel dot. The capital ``S`` consonant is sh.
"""
from __future__ import annotations

import re
import typing

import msgspec

from ..commontypes import (
    AlternateConsonant,
    CommonConsonant,
    Consonant,
    OjitypeError,
    Vowel,
    VowelLength,
    WDotSide,
)

if typing.TYPE_CHECKING:
    import collections.abc


class TableError(OjitypeError):
    pass


class DefinitionParseError(TableError):
    def __init__(self, line: str, lineno: typing.Optional[int] = None):
        self.line = line
        self.lineno = lineno
        where = "" if lineno is None else f" on line {lineno}"
        super().__init__(f"Can't parse record{where}: {line!r}")


class IllegalSyllableError(TableError):
    def __init__(self, line: str, lineno: typing.Optional[int] = None):
        self.line = line
        self.lineno = lineno
        super().__init__(f"Syllable {line.strip()!r} is invalid; vowel e cannot be long")


class Definition(msgspec.Struct, frozen=True, tag=True):
    pass


class Punctuation(Definition, frozen=True):
    name: str

    @property
    def notation(self):
        return f"* {self.name}"


class Ghost(Definition, frozen=True):
    name: str

    @property
    def notation(self):
        return f"~ {self.name}"


class EasternFinal(Definition, frozen=True):
    consonant: Consonant

    @property
    def notation(self):
        return self.consonant.value


class WesternFinal(Definition, frozen=True):
    consonant: Consonant

    @property
    def notation(self):
        return "'" + self.consonant.value


class CommonFinal(Definition, frozen=True):
    consonant: CommonConsonant

    @property
    def notation(self):
        return self.consonant.value


class AlternateFinal(Definition, frozen=True):
    consonant: AlternateConsonant

    @property
    def notation(self):
        return '"' + self.consonant.value


class Syllable(Definition, frozen=True):
    vowel: Vowel
    consonant: typing.Optional[Consonant] = None
    wdot: WDotSide = WDotSide.NONE
    length: VowelLength = VowelLength.NORMAL

    def __post_init__(self):
        if self.vowel is Vowel.E and self.length is VowelLength.LONG:
            raise ValueError("vowel e cannot be long")

    @property
    def notation(self):
        parts = [self.consonant.value if self.consonant is not None else ""]
        if self.wdot is not WDotSide.NONE:
            parts.append(self.wdot.value)
        if self.length is VowelLength.LONG:
            parts.append(self.length.value)
        parts.append(self.vowel.value)
        return "".join(parts)

    @property
    def is_bare_vowel(self):
        return self.consonant is None and self.wdot is WDotSide.NONE and self.length is VowelLength.NORMAL


CharacterDefinition = typing.Union[
    Punctuation, Ghost, EasternFinal, WesternFinal, CommonFinal, AlternateFinal, Syllable
]


class Record(msgspec.Struct, frozen=True):
    codepoint: int
    definition: CharacterDefinition

    @property
    def character(self):
        return chr(self.codepoint)


CONSONANTS = "".join(c.value for c in Consonant)
_CP = r"([0-9a-fA-F]{4})"

PUNCTUATION_MATCHER = re.compile(_CP + r" \* ([A-Za-z_]+)\s*")
GHOST_MATCHER = re.compile(_CP + r" ~ ([A-Za-z_]+)\s*")
EASTERN_MATCHER = re.compile(_CP + rf" ([{CONSONANTS}])\s*")
WESTERN_MATCHER = re.compile(_CP + rf" '([{CONSONANTS}])\s*")
COMMON_MATCHER = re.compile(_CP + r" ([wh])\s*")
ALTERNATE_MATCHER = re.compile(_CP + r' "([ylr])\s*')
SYLLABLE_MATCHER = re.compile(_CP + rf" ([{CONSONANTS}])?([wu])?(\+)?([aeio])?\s*")


def is_blank(line: str) -> bool:
    return not line.strip()


def parse_line(line: str, lineno: typing.Optional[int] = None) -> typing.Optional[Record]:
    line = line.rstrip("\r\n")
    if is_blank(line):
        return None
    if m := PUNCTUATION_MATCHER.fullmatch(line):
        return Record(codepoint=int(m[1], 16), definition=Punctuation(name=m[2]))
    if m := GHOST_MATCHER.fullmatch(line):
        return Record(codepoint=int(m[1], 16), definition=Ghost(name=m[2]))
    if m := EASTERN_MATCHER.fullmatch(line):
        return Record(codepoint=int(m[1], 16), definition=EasternFinal(consonant=Consonant(m[2])))
    if m := WESTERN_MATCHER.fullmatch(line):
        return Record(codepoint=int(m[1], 16), definition=WesternFinal(consonant=Consonant(m[2])))
    if m := COMMON_MATCHER.fullmatch(line):
        return Record(codepoint=int(m[1], 16), definition=CommonFinal(consonant=CommonConsonant(m[2])))
    if m := ALTERNATE_MATCHER.fullmatch(line):
        return Record(codepoint=int(m[1], 16), definition=AlternateFinal(consonant=AlternateConsonant(m[2])))
    if m := SYLLABLE_MATCHER.fullmatch(line):
        codepoint, consonant, wdot, vlen, vowel = m.groups()
        if vowel is None:
            # consonant or dots with nothing to attach them to
            raise DefinitionParseError(line, lineno)
        if vowel == Vowel.E.value and vlen is not None:
            raise IllegalSyllableError(line, lineno)
        return Record(
            codepoint=int(codepoint, 16),
            definition=Syllable(
                vowel=Vowel(vowel),
                consonant=Consonant(consonant) if consonant is not None else None,
                wdot=WDotSide(wdot) if wdot is not None else WDotSide.NONE,
                length=VowelLength.LONG if vlen is not None else VowelLength.NORMAL,
            ),
        )
    raise DefinitionParseError(line, lineno)


def parse_table(lines: collections.abc.Iterable[str]) -> collections.abc.Iterator[Record]:
    for lineno, line in enumerate(lines, start=1):
        record = parse_line(line, lineno)
        if record is not None:
            yield record
