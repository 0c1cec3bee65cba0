# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import importlib.resources
import itertools
import logging
import types
import typing

from ..commontypes import AlternateConsonant, CommonConsonant, Consonant, Vowel, VowelLength, WDotSide
from .definitions import (
    AlternateFinal,
    CommonFinal,
    EasternFinal,
    Record,
    Syllable,
    TableError,
    WesternFinal,
    parse_table,
)

if typing.TYPE_CHECKING:
    import collections.abc
    import pathlib

    from .definitions import CharacterDefinition

logger = logging.getLogger(__name__)


class DuplicateCodepointError(TableError):
    def __init__(self, codepoint: int):
        self.codepoint = codepoint
        super().__init__(f"Codepoint {codepoint:04X} redefined")


class DuplicateDefinitionError(TableError):
    def __init__(self, definition: CharacterDefinition):
        self.definition = definition
        super().__init__(f"Definition {type(definition).__name__} {definition.notation!r} used twice")


class MissingFinalError(TableError):
    def __init__(self, definition: CharacterDefinition):
        self.definition = definition
        super().__init__(f"Missing {type(definition).__name__} {definition.notation!r}")


class MissingSyllableError(TableError):
    def __init__(self, syllable: Syllable):
        self.definition = syllable
        super().__init__(f"Missing syllable {syllable.notation!r}")


class SealedSyllabaryError(TableError):
    pass


# Unicode does not encode every theoretically possible syllable. These are the
# combinations the table is allowed to leave out.
MISSING_SYLLABLES = frozenset(
    Syllable(consonant=Consonant.R, wdot=WDotSide.RIGHT, length=length, vowel=vowel)
    for length, vowel in (
        (VowelLength.NORMAL, Vowel.A),
        (VowelLength.NORMAL, Vowel.I),
        (VowelLength.NORMAL, Vowel.O),
        (VowelLength.LONG, Vowel.I),
        (VowelLength.LONG, Vowel.O),
    )
)

INITIALS: tuple[typing.Optional[Consonant], ...] = (None, *Consonant)


def syllable_matrix() -> collections.abc.Iterator[Syllable]:
    "Every legal initial, w-dot, length and vowel combination, in chart order."
    for initial, wdot, length, vowel in itertools.product(INITIALS, WDotSide, VowelLength, Vowel):
        if vowel is Vowel.E and length is VowelLength.LONG:
            continue
        yield Syllable(consonant=initial, wdot=wdot, length=length, vowel=vowel)


def required_finals() -> collections.abc.Iterator[CharacterDefinition]:
    for consonant in Consonant:
        yield WesternFinal(consonant=consonant)
        yield EasternFinal(consonant=consonant)
    for common in CommonConsonant:
        yield CommonFinal(consonant=common)
    for alternate in AlternateConsonant:
        yield AlternateFinal(consonant=alternate)


class Syllabary:
    """The two indices built from the character data table.

    Records go in through :meth:`add`; once :meth:`validate` succeeds the syllabary
    is sealed and the indices are only exposed through read-only views.
    """

    def __init__(self):
        self._by_codepoint: dict[int, CharacterDefinition] = {}
        self._by_definition: dict[CharacterDefinition, int] = {}
        self.sealed = False

    def add(self, record: Record):
        if self.sealed:
            raise SealedSyllabaryError("Cannot add records to a validated syllabary")
        # both checks come before either index is touched
        if record.codepoint in self._by_codepoint:
            raise DuplicateCodepointError(record.codepoint)
        if record.definition in self._by_definition:
            raise DuplicateDefinitionError(record.definition)
        self._by_codepoint[record.codepoint] = record.definition
        self._by_definition[record.definition] = record.codepoint

    def extend(self, records: collections.abc.Iterable[Record]):
        for record in records:
            self.add(record)

    def validate(self):
        for final in required_finals():
            if final not in self._by_definition:
                raise MissingFinalError(final)
        for syllable in syllable_matrix():
            if syllable in MISSING_SYLLABLES:
                continue
            if syllable not in self._by_definition:
                raise MissingSyllableError(syllable)
        self.sealed = True
        logger.debug("Validated syllabary with %d records", len(self))

    @classmethod
    def from_lines(cls, lines: collections.abc.Iterable[str]) -> Syllabary:
        syllabary = cls()
        syllabary.extend(parse_table(lines))
        syllabary.validate()
        return syllabary

    @classmethod
    def load(cls, src: pathlib.Path) -> Syllabary:
        # non-ASCII bytes survive decoding so the parser can report the line
        with src.open(encoding="ascii", errors="surrogateescape") as infile:
            return cls.from_lines(infile)

    @classmethod
    def default(cls) -> Syllabary:
        chartable = importlib.resources.files("ojitype.data").joinpath("chartable.txt")
        with chartable.open(encoding="ascii", errors="surrogateescape") as infile:
            return cls.from_lines(infile)

    @property
    def by_codepoint(self) -> collections.abc.Mapping[int, CharacterDefinition]:
        return types.MappingProxyType(self._by_codepoint)

    @property
    def by_definition(self) -> collections.abc.Mapping[CharacterDefinition, int]:
        return types.MappingProxyType(self._by_definition)

    def codepoint_for(self, definition: CharacterDefinition) -> int:
        return self._by_definition[definition]

    def character_for(self, definition: CharacterDefinition) -> str:
        return chr(self._by_definition[definition])

    def definition_for(self, codepoint: int) -> CharacterDefinition:
        return self._by_codepoint[codepoint]

    def records(self) -> collections.abc.Iterator[Record]:
        for codepoint in sorted(self._by_codepoint):
            yield Record(codepoint=codepoint, definition=self._by_codepoint[codepoint])

    def of_kind(self, kind: type[CharacterDefinition]) -> list[Record]:
        return [record for record in self.records() if isinstance(record.definition, kind)]

    def __contains__(self, definition: CharacterDefinition):
        return definition in self._by_definition

    def __len__(self):
        return len(self._by_codepoint)
