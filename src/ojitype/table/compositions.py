# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import logging
import typing

import msgspec
import pygtrie

from ..commontypes import VOWEL_LENGTH_CODEPOINT, WDOT_CODEPOINTS, Vowel, VowelLength, WDotSide
from .definitions import Syllable, TableError
from .syllabary import MISSING_SYLLABLES, syllable_matrix

if typing.TYPE_CHECKING:
    import collections.abc
    import pathlib

    from .syllabary import Syllabary

logger = logging.getLogger(__name__)

CompositionKey = tuple[str, ...]


class DuplicateCompositionError(TableError):
    def __init__(self, key: CompositionKey):
        self.key = key
        codepoints = " ".join(f"{ord(c):04X}" for c in key)
        super().__init__(f"Composition key {codepoints} produced twice")


class MalformedCompositionError(TableError):
    pass


def canonical_key(constituents: collections.abc.Iterable[str]) -> CompositionKey:
    "Order constituent characters by ascending codepoint, not by typing order."
    return tuple(sorted(constituents, key=ord))


def composition_constituents(syllabary: Syllabary, syllable: Syllable) -> list[int]:
    constituents = []
    if syllable.consonant is not None:
        constituents.append(syllabary.codepoint_for(Syllable(consonant=syllable.consonant, vowel=Vowel.A)))
    if syllable.wdot is not WDotSide.NONE:
        constituents.append(WDOT_CODEPOINTS[syllable.wdot])
    if syllable.length is VowelLength.LONG:
        constituents.append(VOWEL_LENGTH_CODEPOINT)
    constituents.append(syllabary.codepoint_for(Syllable(vowel=syllable.vowel)))
    return constituents


def composition_key(syllabary: Syllabary, syllable: Syllable) -> CompositionKey:
    return canonical_key(chr(cp) for cp in composition_constituents(syllabary, syllable))


class CompositionTable:
    """Read-only mapping from composition keys to the composed character.

    Keys are tuples of constituent characters in ascending codepoint order. Besides
    the multi-entity compositions, each bare vowel maps to itself.
    """

    def __init__(self, sequences: pygtrie.Trie):
        self._sequences = sequences

    def lookup(self, constituents: collections.abc.Iterable[str]) -> typing.Optional[str]:
        return self._sequences.get(canonical_key(constituents))

    def __getitem__(self, key: CompositionKey) -> str:
        return self._sequences[key]

    def __contains__(self, key: CompositionKey):
        return self._sequences.has_key(key)

    def __len__(self):
        return len(self._sequences)

    def items(self) -> collections.abc.Iterator[tuple[CompositionKey, str]]:
        yield from self._sequences.iteritems()

    def unstructure(self) -> dict[str, str]:
        return {"".join(key): value for key, value in self._sequences.iteritems()}

    def dumps(self) -> bytes:
        return msgspec.json.encode(self.unstructure())

    def save(self, dest: pathlib.Path):
        dest.write_bytes(self.dumps() + b"\n")

    @classmethod
    def loads(cls, data: typing.Union[bytes, str]) -> CompositionTable:
        raw = msgspec.json.decode(data, type=dict[str, str])
        sequences = pygtrie.Trie()
        for joined, value in raw.items():
            key = tuple(joined)
            if not key or key != canonical_key(key):
                raise MalformedCompositionError(f"Composition key {joined!r} is not in codepoint order")
            if len(value) != 1:
                raise MalformedCompositionError(f"Composition {joined!r} must map to a single character")
            sequences[key] = value
        return cls(sequences)

    @classmethod
    def load(cls, src: pathlib.Path) -> CompositionTable:
        return cls.loads(src.read_bytes())


def build_composition_table(syllabary: Syllabary) -> CompositionTable:
    sequences = pygtrie.Trie()
    for record in syllabary.of_kind(Syllable):
        if record.definition.is_bare_vowel:
            sequences[(record.character,)] = record.character
    for syllable in syllable_matrix():
        if syllable in MISSING_SYLLABLES:
            continue
        key = composition_key(syllabary, syllable)
        if len(key) < 2:
            continue
        if sequences.has_key(key):
            raise DuplicateCompositionError(key)
        sequences[key] = syllabary.character_for(syllable)
    logger.debug("Built composition table with %d entries", len(sequences))
    return CompositionTable(sequences)
